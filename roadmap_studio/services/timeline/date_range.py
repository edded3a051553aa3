# roadmap_studio/services/timeline/date_range.py
"""
Timeline window resolution.

The window spans every date carried by the roadmap's items. Both start and
end dates are considered so that an item whose end precedes its start still
falls inside the window.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from roadmap_studio.config import settings
from roadmap_studio.schemas.layout import TimelineWindow
from roadmap_studio.schemas.roadmap import Roadmap
from roadmap_studio.utils.periods import add_months


def _now() -> datetime:
    return datetime.now(timezone.utc)


def compute_timeline_window(roadmap: Roadmap, now: Optional[datetime] = None) -> TimelineWindow:
    """
    Compute the visible {start, end} span for a roadmap.

    Args:
        roadmap: Roadmap to inspect (not modified)
        now: Reference time for an empty roadmap (defaults to current UTC time)

    Returns:
        TimelineWindow from the earliest to the latest item date, or
        [now, now + DEFAULT_WINDOW_MONTHS months] when there are no items.
    """
    if not roadmap.items:
        start = now or _now()
        return TimelineWindow(start=start, end=add_months(start, settings.DEFAULT_WINDOW_MONTHS))

    dates = [d for item in roadmap.items for d in (item.start_date, item.end_date)]
    return TimelineWindow(start=min(dates), end=max(dates))


__all__ = ["compute_timeline_window"]
