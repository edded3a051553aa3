# roadmap_studio/errors.py
"""
Exception types raised by the roadmap store and timeline services.

Precondition errors subclass ValueError so callers that only guard against
bad input keep working; the API layer maps them to HTTP status codes.
"""
from __future__ import annotations


class RoadmapError(Exception):
    """Base class for all roadmap_studio errors."""


class RoadmapPreconditionError(RoadmapError, ValueError):
    """Raised when an operation is requested in a state that does not allow it."""


class NoCurrentRoadmapError(RoadmapPreconditionError):
    """Raised when an item operation needs a current roadmap and none is selected."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} requires a current roadmap, but none is selected")
        self.operation = operation


class RoadmapNotFoundError(RoadmapPreconditionError):
    def __init__(self, roadmap_id: str) -> None:
        super().__init__(f"Roadmap not found: {roadmap_id!r}")
        self.roadmap_id = roadmap_id


class ItemNotFoundError(RoadmapPreconditionError):
    def __init__(self, item_id: str, roadmap_id: str | None = None) -> None:
        where = f" in roadmap {roadmap_id!r}" if roadmap_id else ""
        super().__init__(f"Roadmap item not found: {item_id!r}{where}")
        self.item_id = item_id
        self.roadmap_id = roadmap_id


class UnknownCategoryError(RoadmapPreconditionError):
    def __init__(self, category: str, categories: list[str]) -> None:
        super().__init__(
            f"Category {category!r} is not defined on this roadmap. "
            f"Known categories: {', '.join(categories) or '(none)'}"
        )
        self.category = category
        self.categories = list(categories)


class RoadmapStateDecodeError(RoadmapError):
    """Raised when a serialized roadmap collection cannot be parsed."""


__all__ = [
    "RoadmapError",
    "RoadmapPreconditionError",
    "NoCurrentRoadmapError",
    "RoadmapNotFoundError",
    "ItemNotFoundError",
    "UnknownCategoryError",
    "RoadmapStateDecodeError",
]
