# roadmap_studio/services/blob_store.py
"""
Key-value blob stores used as the persistence transport for roadmap state.

The repository only needs get/set of a text value by key; anything that
satisfies BlobStore can be plugged in.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional, Protocol

from sqlalchemy.orm import Session

from roadmap_studio.db.models.kv_blob import KeyValueBlob

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    """Protocol that all blob stores must satisfy."""

    def get(self, key: str) -> Optional[str]:  # pragma: no cover - interface only
        ...

    def set(self, key: str, value: str) -> None:  # pragma: no cover - interface only
        ...


class InMemoryBlobStore:
    """Process-local blob store (tests, ephemeral sessions)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value


class SqlBlobStore:
    """Blob store backed by the kv_blobs table.

    Opens a short-lived session per call so it is safe to use from the
    persistence worker thread.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            row = db.get(KeyValueBlob, key)
            return row.value if row is not None else None  # type: ignore[return-value]
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            row = db.get(KeyValueBlob, key)
            if row is None:
                db.add(KeyValueBlob(key=key, value=value))
            else:
                setattr(row, "value", value)
            db.commit()
            logger.debug("blob_store.set", extra={"key": key, "bytes": len(value)})
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


__all__ = ["BlobStore", "InMemoryBlobStore", "SqlBlobStore"]
