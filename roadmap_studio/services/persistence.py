# roadmap_studio/services/persistence.py
"""
Serialization and persistence of the roadmap collection.

The whole collection is stored as one JSON array under a single blob key.
Date fields are written as ISO-8601 strings and parsed back into datetime
values on load.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from roadmap_studio.config import settings
from roadmap_studio.errors import RoadmapStateDecodeError
from roadmap_studio.schemas.roadmap import Roadmap
from roadmap_studio.services.blob_store import BlobStore

logger = logging.getLogger(__name__)

_ROADMAP_LIST = TypeAdapter(List[Roadmap])


def serialize_roadmaps(roadmaps: Sequence[Roadmap]) -> str:
    """Serialize a roadmap collection to JSON text (camelCase field names)."""
    return _ROADMAP_LIST.dump_json(list(roadmaps), by_alias=True).decode("utf-8")


def deserialize_roadmaps(text: str) -> List[Roadmap]:
    """
    Parse JSON text produced by serialize_roadmaps.

    Raises:
        RoadmapStateDecodeError: if the text is not valid JSON or does not
            describe a list of roadmaps
    """
    try:
        return _ROADMAP_LIST.validate_json(text)
    except ValidationError as e:
        raise RoadmapStateDecodeError(
            f"Invalid roadmap collection ({e.error_count()} errors): {e.errors()[0]['msg']}"
        ) from e


class RoadmapRepository:
    """Loads and saves the roadmap collection through a blob store."""

    def __init__(self, blob_store: BlobStore, key: Optional[str] = None) -> None:
        self.blob_store = blob_store
        self.key = key or settings.STORAGE_KEY

    def load(self) -> List[Roadmap]:
        """Return the persisted collection; unreadable state is discarded and [] returned."""
        raw = self.blob_store.get(self.key)
        if raw is None:
            logger.info("persistence.load.empty", extra={"key": self.key})
            return []

        try:
            roadmaps = deserialize_roadmaps(raw)
        except RoadmapStateDecodeError as e:
            logger.warning(
                "persistence.load.discarded",
                extra={"key": self.key, "reason": str(e), "bytes": len(raw)},
            )
            return []

        logger.info("persistence.load.done", extra={"key": self.key, "count": len(roadmaps)})
        return roadmaps

    def save(self, roadmaps: Sequence[Roadmap]) -> None:
        text = serialize_roadmaps(roadmaps)
        self.blob_store.set(self.key, text)
        logger.debug("persistence.save.done", extra={"key": self.key, "count": len(roadmaps)})


class PersistenceWriter:
    """
    Fire-and-forget writer for repository saves.

    With run_async=True saves go to a single worker thread in submission
    order, so the latest mutation always lands last. Failures are logged
    with their traceback; they never propagate into the caller's mutation.
    """

    def __init__(self, repository: RoadmapRepository, run_async: Optional[bool] = None) -> None:
        self.repository = repository
        self.run_async = settings.PERSIST_ASYNC if run_async is None else run_async
        self._executor: Optional[ThreadPoolExecutor] = None
        self._pending: List[Future] = []
        self._lock = threading.Lock()

    def submit(self, roadmaps: Sequence[Roadmap]) -> None:
        snapshot = tuple(roadmaps)
        if not self.run_async:
            self._write(snapshot)
            return

        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="roadmap-persist")
            future = self._executor.submit(self._write, snapshot)
            self._pending = [f for f in self._pending if not f.done()]
            self._pending.append(future)

    def _write(self, roadmaps: Sequence[Roadmap]) -> None:
        try:
            self.repository.save(roadmaps)
        except Exception:
            logger.exception("persistence.save.failed", extra={"key": self.repository.key})

    def flush(self, timeout: Optional[float] = None) -> None:
        """Block until every submitted write has finished."""
        with self._lock:
            pending = list(self._pending)
            self._pending = []
        for future in pending:
            future.result(timeout=timeout)

    def close(self) -> None:
        self.flush()
        with self._lock:
            if self._executor is not None:
                self._executor.shutdown(wait=True)
                self._executor = None


__all__ = [
    "serialize_roadmaps",
    "deserialize_roadmaps",
    "RoadmapRepository",
    "PersistenceWriter",
]
