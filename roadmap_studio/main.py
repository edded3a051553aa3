# roadmap_studio/main.py

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from roadmap_studio.config import setup_json_logging, settings
from roadmap_studio.api.routes.roadmaps import router as roadmaps_router
from roadmap_studio.services.roadmap_store import RoadmapStore


def build_default_store() -> RoadmapStore:
    """Store backed by the SQL blob table at settings.DATABASE_URL, restored from disk."""
    from roadmap_studio.db.base import Base
    from roadmap_studio.db.session import SessionLocal, engine
    from roadmap_studio.services.blob_store import SqlBlobStore
    from roadmap_studio.services.persistence import RoadmapRepository

    Base.metadata.create_all(bind=engine)
    repository = RoadmapRepository(SqlBlobStore(SessionLocal))
    return RoadmapStore.from_repository(repository)


def create_app(store: Optional[RoadmapStore] = None) -> FastAPI:
    setup_json_logging(log_level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # drain pending persistence writes
        app.state.store.close()

    app = FastAPI(
        title="ROADMAP STUDIO - Timeline API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else build_default_store()

    app.include_router(roadmaps_router)

    @app.get("/health")
    def health():
        return {"ok": True, "version": app.state.store.version}

    return app
