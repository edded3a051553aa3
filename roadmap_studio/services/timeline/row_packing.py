# roadmap_studio/services/timeline/row_packing.py
"""
Row packing for a single category swimlane.

Greedy first-fit: items are visited in start-date order (stable for equal
starts) and each one goes to the lowest row whose last item has already
ended. This is deterministic but not guaranteed to use the minimum number
of rows.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Sequence

from roadmap_studio.errors import UnknownCategoryError
from roadmap_studio.schemas.layout import RowAssignment
from roadmap_studio.schemas.roadmap import Roadmap, RoadmapItem

logger = logging.getLogger(__name__)


def intervals_overlap(a: RoadmapItem, b: RoadmapItem) -> bool:
    """Inclusive overlap test on [start_date, end_date]."""
    return a.start_date <= b.end_date and b.start_date <= a.end_date


def effective_end(item: RoadmapItem) -> datetime:
    """End date used for layout; an inverted item is treated as zero-length at its start."""
    return max(item.start_date, item.end_date)


def assign_item_rows(items: Sequence[RoadmapItem]) -> List[RowAssignment]:
    """
    Assign each item a row so that items sharing a row never overlap in time.

    Args:
        items: Items of one category, in any order (not modified)

    Returns:
        RowAssignments in start-date order. Empty input -> empty list.
    """
    if not items:
        return []

    # sorted() is stable: equal start dates keep their input order
    ordered = sorted(items, key=lambda it: it.start_date)

    row_ends: List[datetime] = []
    assignments: List[RowAssignment] = []

    for item in ordered:
        row = len(row_ends)
        for idx, cursor in enumerate(row_ends):
            if cursor <= item.start_date:
                row = idx
                break

        if row == len(row_ends):
            row_ends.append(effective_end(item))
        else:
            row_ends[row] = effective_end(item)

        assignments.append(RowAssignment(item=item, row=row))

    return assignments


def pack_category(roadmap: Roadmap, category: str) -> List[RowAssignment]:
    """
    Row-pack the items of one category of a roadmap.

    Raises:
        UnknownCategoryError: if `category` is not in the roadmap's category list
    """
    if category not in roadmap.categories:
        raise UnknownCategoryError(category, roadmap.categories)

    assignments = assign_item_rows(roadmap.items_in_category(category))
    logger.debug(
        "layout.rows.packed",
        extra={
            "roadmap_id": roadmap.id,
            "category": category,
            "count": len(assignments),
        },
    )
    return assignments


# Read-side name used by UI collaborators
compute_row_layout = pack_category


def row_count(assignments: Sequence[RowAssignment]) -> int:
    return max((a.row for a in assignments), default=-1) + 1


__all__ = [
    "intervals_overlap",
    "effective_end",
    "assign_item_rows",
    "pack_category",
    "compute_row_layout",
    "row_count",
]
