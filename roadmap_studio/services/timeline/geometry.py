# roadmap_studio/services/timeline/geometry.py
"""
Coordinate mapping from (item, row, window) to renderable geometry.

Horizontal values are percentages of the window; the vertical offset is in
pixels. Degenerate inputs (zero-length window, zero or negative item
duration) produce clamped values and never raise.
"""
from __future__ import annotations

from typing import Optional, Sequence

from roadmap_studio.config import settings
from roadmap_studio.schemas.layout import ItemGeometry, RowAssignment, TimelineWindow
from roadmap_studio.schemas.roadmap import RoadmapItem
from roadmap_studio.utils.numbers import clamp, safe_ratio


def compute_item_geometry(
    item: RoadmapItem,
    row: int,
    window: TimelineWindow,
    row_height: Optional[float] = None,
    row_gap: Optional[float] = None,
) -> ItemGeometry:
    """Return {left, width, top} for one item.

    left is clamped to [0, 100]; width is clamped to [0, 100 - left] so the
    bar never extends past the right edge of the window.
    """
    height = settings.TIMELINE_ROW_HEIGHT_PX if row_height is None else row_height
    gap = settings.TIMELINE_ROW_GAP_PX if row_gap is None else row_gap

    offset_pct = safe_ratio(item.start_date - window.start, window.duration) * 100
    duration_pct = safe_ratio(item.end_date - item.start_date, window.duration) * 100

    left = clamp(offset_pct, 0.0, 100.0)
    width = clamp(duration_pct, 0.0, 100.0 - left)

    return ItemGeometry(left=left, width=width, top=row * (height + gap))


def geometry_for_assignment(assignment: RowAssignment, window: TimelineWindow) -> ItemGeometry:
    return compute_item_geometry(assignment.item, assignment.row, window)


def compute_lane_height(assignments: Sequence[RowAssignment]) -> int:
    """Swimlane height in px: one LANE_ROW_PX slot per row, never below LANE_MIN_HEIGHT_PX."""
    max_row = max((a.row for a in assignments), default=-1)
    return max(settings.LANE_MIN_HEIGHT_PX, (max_row + 1) * settings.LANE_ROW_PX)


__all__ = ["compute_item_geometry", "geometry_for_assignment", "compute_lane_height"]
