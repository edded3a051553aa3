# roadmap_studio/services/timeline/layout.py
"""
Full-roadmap layout assembly.

Combines window resolution, per-category row packing and geometry mapping
into one RoadmapLayout. Pure: callers that need caching can memoize on the
roadmap's (id, updated_at).
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from roadmap_studio.config import settings
from roadmap_studio.schemas.layout import (
    LaneLayout,
    MonthLabel,
    PlacedItem,
    RoadmapLayout,
    TimelineWindow,
)
from roadmap_studio.schemas.roadmap import Roadmap
from roadmap_studio.services.timeline.date_range import compute_timeline_window
from roadmap_studio.services.timeline.geometry import compute_lane_height, geometry_for_assignment
from roadmap_studio.services.timeline.row_packing import pack_category, row_count
from roadmap_studio.utils.periods import iter_month_steps, month_label

logger = logging.getLogger(__name__)


def get_category_color(category: str, index: int) -> str:
    """Palette color by category index; a negative index falls back to a character-sum hash."""
    colors = settings.CATEGORY_COLORS
    if index >= 0:
        return colors[index % len(colors)]

    h = 0
    for ch in category:
        h = (h + ord(ch)) % len(colors)
    return colors[h]


def month_labels(window: TimelineWindow) -> List[MonthLabel]:
    return [MonthLabel(date=dt, label=month_label(dt)) for dt in iter_month_steps(window.start, window.end)]


def compute_roadmap_layout(roadmap: Roadmap, now: Optional[datetime] = None) -> RoadmapLayout:
    """
    Lay out every category swimlane of a roadmap.

    Only categories that currently hold items get a lane; lane order and
    color index follow the roadmap's category order among those lanes.
    Items whose category is not in the category list are not rendered.
    """
    window = compute_timeline_window(roadmap, now=now)

    lanes: List[LaneLayout] = []
    populated = [c for c in roadmap.categories if roadmap.items_in_category(c)]
    for index, category in enumerate(populated):
        assignments = pack_category(roadmap, category)
        placed = [
            PlacedItem(
                item=a.item,
                row=a.row,
                geometry=geometry_for_assignment(a, window),
            )
            for a in assignments
        ]
        lanes.append(
            LaneLayout(
                category=category,
                color=get_category_color(category, index),
                height=compute_lane_height(assignments),
                row_count=row_count(assignments),
                items=placed,
            )
        )

    orphaned = sum(1 for item in roadmap.items if item.category not in roadmap.categories)
    if orphaned:
        logger.info("layout.items.unrendered", extra={"roadmap_id": roadmap.id, "count": orphaned})

    return RoadmapLayout(
        roadmap_id=roadmap.id,
        window=window,
        months=month_labels(window),
        lanes=lanes,
    )


__all__ = ["get_category_color", "month_labels", "compute_roadmap_layout"]
