# roadmap_studio/services/timeline/drag.py
"""
Drag repositioning: turn a drop position back into item dates.

The item's duration is preserved exactly; only its position (and optionally
its category) changes. Resulting dates are not clamped to the window, so an
item dropped near the right edge can extend the window on the next pass.
"""
from __future__ import annotations

import logging
from typing import Optional

from roadmap_studio.errors import ItemNotFoundError
from roadmap_studio.schemas.layout import DragRequest, TimelineWindow
from roadmap_studio.schemas.roadmap import Roadmap, RoadmapItem
from roadmap_studio.utils.numbers import clamp

logger = logging.getLogger(__name__)


def drop_fraction_from_pointer(pointer_x: float, container_left: float, container_width: float) -> float:
    """Horizontal pointer position -> fraction of the container width in [0, 1]."""
    if container_width <= 0:
        return 0.0
    return clamp((pointer_x - container_left) / container_width, 0.0, 1.0)


def compute_drag_target(
    item: RoadmapItem,
    drop_fraction: float,
    window: TimelineWindow,
    new_category: Optional[str] = None,
) -> RoadmapItem:
    """
    Compute the repositioned item for a drop at `drop_fraction` of the window.

    Args:
        item: Dragged item (not modified)
        drop_fraction: Drop position as a fraction of the timeline width; clamped to [0, 1]
        window: Timeline window the drop happened in
        new_category: Target swimlane, or None to keep the item's category

    Returns:
        New RoadmapItem with shifted start/end dates
    """
    fraction = clamp(drop_fraction, 0.0, 1.0)
    new_start = window.start + window.duration * fraction
    update = {
        "start_date": new_start,
        "end_date": new_start + item.duration,
    }
    if new_category is not None:
        update["category"] = new_category
    return item.model_copy(update=update)


def resolve_drag_request(roadmap: Roadmap, request: DragRequest, window: TimelineWindow) -> RoadmapItem:
    """Look up the dragged item on `roadmap` and compute its new placement."""
    item = roadmap.get_item(request.item_id)
    if item is None:
        raise ItemNotFoundError(request.item_id, roadmap.id)

    moved = compute_drag_target(item, request.drop_fraction, window, request.target_category)
    logger.debug(
        "layout.drag.resolved",
        extra={"roadmap_id": roadmap.id, "item_id": item.id, "category": moved.category},
    )
    return moved


__all__ = ["drop_fraction_from_pointer", "compute_drag_target", "resolve_drag_request"]
