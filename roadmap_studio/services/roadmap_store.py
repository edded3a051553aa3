# roadmap_studio/services/roadmap_store.py
"""
Roadmap state store.

Owns the roadmap collection and the current-roadmap selection. Every
mutation builds new Roadmap values, bumps the version counter, notifies
subscribers with the new StoreState, and hands the collection to the
persistence writer (fire-and-forget).
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from roadmap_studio.errors import (
    NoCurrentRoadmapError,
    RoadmapNotFoundError,
    RoadmapPreconditionError,
    UnknownCategoryError,
)
from roadmap_studio.schemas.layout import DragRequest
from roadmap_studio.schemas.roadmap import Roadmap, RoadmapItem
from roadmap_studio.services.persistence import PersistenceWriter, RoadmapRepository
from roadmap_studio.services.timeline.date_range import compute_timeline_window
from roadmap_studio.services.timeline.drag import resolve_drag_request


logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StoreState:
    """Immutable snapshot of the store after a mutation."""
    roadmaps: Tuple[Roadmap, ...]
    current_roadmap_id: Optional[str]
    version: int

    @property
    def current_roadmap(self) -> Optional[Roadmap]:
        if self.current_roadmap_id is None:
            return None
        for r in self.roadmaps:
            if r.id == self.current_roadmap_id:
                return r
        return None


Listener = Callable[[StoreState], None]


class RoadmapStore:
    """
    Single-writer store for roadmaps.

    The current roadmap is tracked by id and always read from the collection,
    so the "current" view cannot drift from the collection entry.

    Mutations are serialized by a re-entrant lock held from the read of the
    current state through the commit, so callers on several threads (the
    HTTP threadpool) never overwrite each other's changes. Listeners run
    while the lock is held.
    """

    def __init__(
        self,
        repository: Optional[RoadmapRepository] = None,
        writer: Optional[PersistenceWriter] = None,
        clock: Callable[[], datetime] = _now,
    ) -> None:
        self.repository = repository
        if writer is None and repository is not None:
            writer = PersistenceWriter(repository)
        self.writer = writer
        self._clock = clock

        self._roadmaps: List[Roadmap] = []
        self._current_id: Optional[str] = None
        self._version = 0
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    @classmethod
    def from_repository(cls, repository: RoadmapRepository, **kwargs) -> "RoadmapStore":
        store = cls(repository=repository, **kwargs)
        store.restore()
        return store

    @property
    def lock(self) -> threading.RLock:
        """Hold across a read-modify-write that spans several store calls."""
        return self._lock

    # ----------------------------
    # Queries
    # ----------------------------
    @property
    def version(self) -> int:
        return self._version

    @property
    def state(self) -> StoreState:
        with self._lock:
            return StoreState(
                roadmaps=tuple(self._roadmaps),
                current_roadmap_id=self._current_id,
                version=self._version,
            )

    def list_roadmaps(self) -> List[Roadmap]:
        return list(self._roadmaps)

    def get_roadmap(self, roadmap_id: str) -> Optional[Roadmap]:
        for r in self._roadmaps:
            if r.id == roadmap_id:
                return r
        return None

    def get_current_roadmap(self) -> Optional[Roadmap]:
        with self._lock:
            if self._current_id is None:
                return None
            return self.get_roadmap(self._current_id)

    # ----------------------------
    # Subscriptions
    # ----------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with the new StoreState after every change."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ----------------------------
    # Roadmap mutations
    # ----------------------------
    def set_current_roadmap(self, roadmap_id: Optional[str]) -> StoreState:
        with self._lock:
            if roadmap_id is not None and self.get_roadmap(roadmap_id) is None:
                raise RoadmapNotFoundError(roadmap_id)
            return self._commit(self._roadmaps, roadmap_id, persist=False)

    def add_roadmap(self, roadmap: Roadmap) -> StoreState:
        """Append a roadmap and make it current. The caller supplies a unique id."""
        with self._lock:
            logger.info("store.roadmap.added", extra={"roadmap_id": roadmap.id})
            return self._commit([*self._roadmaps, roadmap], roadmap.id)

    def update_roadmap(self, roadmap: Roadmap) -> StoreState:
        """
        Replace the roadmap with the same id, stamping updated_at = now.

        Raises:
            RoadmapNotFoundError: if no roadmap has that id
        """
        with self._lock:
            if self.get_roadmap(roadmap.id) is None:
                raise RoadmapNotFoundError(roadmap.id)

            stamped = roadmap.model_copy(update={"updated_at": self._clock()})
            roadmaps = [stamped if r.id == roadmap.id else r for r in self._roadmaps]
            logger.debug("store.roadmap.updated", extra={"roadmap_id": roadmap.id})
            return self._commit(roadmaps, self._current_id)

    def delete_roadmap(self, roadmap_id: str) -> StoreState:
        """Remove a roadmap; clears the current selection if it pointed at it."""
        with self._lock:
            if self.get_roadmap(roadmap_id) is None:
                logger.debug("store.roadmap.delete_missing", extra={"roadmap_id": roadmap_id})
                return self.state

            roadmaps = [r for r in self._roadmaps if r.id != roadmap_id]
            current = None if self._current_id == roadmap_id else self._current_id
            logger.info("store.roadmap.deleted", extra={"roadmap_id": roadmap_id})
            return self._commit(roadmaps, current)

    # ----------------------------
    # Item mutations (current roadmap only)
    # ----------------------------
    def add_roadmap_item(self, item: RoadmapItem) -> StoreState:
        with self._lock:
            current = self._require_current("add_roadmap_item")
            if current.get_item(item.id) is not None:
                raise RoadmapPreconditionError(f"Item id {item.id!r} already exists in roadmap {current.id!r}")

            logger.info("store.item.added", extra={"roadmap_id": current.id, "item_id": item.id})
            return self.update_roadmap(current.model_copy(update={"items": [*current.items, item]}))

    def update_roadmap_item(self, item: RoadmapItem) -> StoreState:
        """Replace the item with the same id; an unknown id changes nothing."""
        with self._lock:
            current = self._require_current("update_roadmap_item")
            if current.get_item(item.id) is None:
                logger.info("store.item.update_missing", extra={"roadmap_id": current.id, "item_id": item.id})
                return self.state

            items = [item if it.id == item.id else it for it in current.items]
            return self.update_roadmap(current.model_copy(update={"items": items}))

    def delete_roadmap_item(self, item_id: str) -> StoreState:
        with self._lock:
            current = self._require_current("delete_roadmap_item")
            if current.get_item(item_id) is None:
                logger.info("store.item.delete_missing", extra={"roadmap_id": current.id, "item_id": item_id})
                return self.state

            items = [it for it in current.items if it.id != item_id]
            logger.info("store.item.deleted", extra={"roadmap_id": current.id, "item_id": item_id})
            return self.update_roadmap(current.model_copy(update={"items": items}))

    def apply_drag(self, request: DragRequest) -> StoreState:
        """Reposition an item of the current roadmap from a pointer drop."""
        with self._lock:
            current = self._require_current("apply_drag")
            if request.target_category is not None and request.target_category not in current.categories:
                raise UnknownCategoryError(request.target_category, current.categories)

            window = compute_timeline_window(current)
            moved = resolve_drag_request(current, request, window)
            return self.update_roadmap_item(moved)

    # ----------------------------
    # Category mutations
    # ----------------------------
    def add_category(self, category: str, roadmap_id: Optional[str] = None) -> StoreState:
        """Append a category; blank or already-present names are ignored."""
        with self._lock:
            roadmap = self._resolve_target(roadmap_id, "add_category")
            name = category.strip()
            if not name or name in roadmap.categories:
                logger.info("store.category.add_skipped", extra={"roadmap_id": roadmap.id, "category": name})
                return self.state

            logger.info("store.category.added", extra={"roadmap_id": roadmap.id, "category": name})
            return self.update_roadmap(roadmap.model_copy(update={"categories": [*roadmap.categories, name]}))

    def remove_category(self, category: str, roadmap_id: Optional[str] = None) -> StoreState:
        """
        Remove a category and move its items to the new first category
        ("" when no categories remain).

        A name that is neither listed nor carried by any item changes nothing.
        Orphaned items (category not listed) are still reassigned.
        """
        with self._lock:
            roadmap = self._resolve_target(roadmap_id, "remove_category")
            moved = sum(1 for it in roadmap.items if it.category == category)
            if category not in roadmap.categories and not moved:
                logger.info("store.category.remove_skipped", extra={"roadmap_id": roadmap.id, "category": category})
                return self.state

            categories = [c for c in roadmap.categories if c != category]
            fallback = categories[0] if categories else ""
            items = [
                it.model_copy(update={"category": fallback}) if it.category == category else it
                for it in roadmap.items
            ]
            logger.info(
                "store.category.removed",
                extra={"roadmap_id": roadmap.id, "category": category, "count": moved},
            )
            return self.update_roadmap(roadmap.model_copy(update={"categories": categories, "items": items}))

    # ----------------------------
    # Persistence
    # ----------------------------
    def restore(self) -> StoreState:
        """Reload the collection from the repository; the current selection is cleared."""
        if self.repository is None:
            raise RoadmapPreconditionError("restore() requires a repository")

        with self._lock:
            roadmaps = self.repository.load()
            logger.info("store.restored", extra={"count": len(roadmaps)})
            return self._commit(roadmaps, None, persist=False)

    def flush(self) -> None:
        if self.writer is not None:
            self.writer.flush()

    def close(self) -> None:
        if self.writer is not None:
            self.writer.close()

    # ----------------------------
    # Internals
    # ----------------------------
    def _require_current(self, operation: str) -> Roadmap:
        current = self.get_current_roadmap()
        if current is None:
            raise NoCurrentRoadmapError(operation)
        return current

    def _resolve_target(self, roadmap_id: Optional[str], operation: str) -> Roadmap:
        if roadmap_id is None:
            return self._require_current(operation)
        roadmap = self.get_roadmap(roadmap_id)
        if roadmap is None:
            raise RoadmapNotFoundError(roadmap_id)
        return roadmap

    def _commit(self, roadmaps: List[Roadmap], current_id: Optional[str], persist: bool = True) -> StoreState:
        # caller holds self._lock
        self._roadmaps = list(roadmaps)
        self._current_id = current_id
        self._version += 1
        state = self.state

        if persist and self.writer is not None:
            self.writer.submit(state.roadmaps)

        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("store.listener_failed", extra={"version": state.version})
        return state


__all__ = ["StoreState", "RoadmapStore"]
