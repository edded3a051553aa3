# Shared fixtures: deterministic clock, item/roadmap builders, in-memory and SQLite stores
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from roadmap_studio.db.base import Base
from roadmap_studio.schemas.roadmap import Roadmap, RoadmapItem
from roadmap_studio.services.blob_store import InMemoryBlobStore
from roadmap_studio.services.persistence import PersistenceWriter, RoadmapRepository
from roadmap_studio.services.roadmap_store import RoadmapStore


def utc(year: int, month: int, day: int, hour: int = 0) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


class FakeClock:
    """Monotonic clock advancing one second per call."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture(autouse=True)
def reset_package_logger():
    """setup_json_logging() disables propagation; restore it so caplog keeps working."""
    yield
    pkg_logger = logging.getLogger("roadmap_studio")
    pkg_logger.handlers = []
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_item() -> Callable[..., RoadmapItem]:
    counter = {"n": 0}

    def _make(start: datetime, end: datetime, category: str = "Dev", **kwargs) -> RoadmapItem:
        counter["n"] += 1
        kwargs.setdefault("id", f"item-{counter['n']}")
        kwargs.setdefault("title", f"Item {counter['n']}")
        return RoadmapItem(start_date=start, end_date=end, category=category, **kwargs)

    return _make


@pytest.fixture
def make_roadmap() -> Callable[..., Roadmap]:
    def _make(items: List[RoadmapItem] | None = None, categories: List[str] | None = None, **kwargs) -> Roadmap:
        kwargs.setdefault("id", "rm-1")
        kwargs.setdefault("title", "Platform")
        kwargs.setdefault("created_at", utc(2025, 1, 1))
        kwargs.setdefault("updated_at", utc(2025, 1, 1))
        return Roadmap(
            items=items or [],
            categories=categories if categories is not None else ["Dev", "QA"],
            **kwargs,
        )

    return _make


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(utc(2025, 6, 1))


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def repository(blob_store) -> RoadmapRepository:
    return RoadmapRepository(blob_store, key="roadmaps")


@pytest.fixture
def store(repository, clock) -> RoadmapStore:
    """Store with synchronous persistence so writes are visible immediately."""
    return RoadmapStore(
        repository=repository,
        writer=PersistenceWriter(repository, run_async=False),
        clock=clock,
    )


@pytest.fixture
def sqlite_session_factory():
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    finally:
        engine.dispose()
