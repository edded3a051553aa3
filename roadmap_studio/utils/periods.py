# roadmap_studio/utils/periods.py
"""
Calendar-month utilities for timeline windows and month header labels.
"""
from __future__ import annotations

import calendar
from datetime import datetime
from typing import Iterator


def add_months(dt: datetime, months: int) -> datetime:
    """
    Shift a datetime by a number of calendar months, keeping the time of day.

    The day is clamped to the last day of the target month
    (Jan 31 + 1 month -> Feb 28/29).

    Args:
        dt: Starting timestamp (naive or aware; tzinfo is preserved)
        months: Number of months to add (may be negative)

    Returns:
        Shifted datetime
    """
    month_index = dt.month - 1 + months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return dt.replace(year=year, month=month, day=min(dt.day, last_day))


def iter_month_steps(start: datetime, end: datetime) -> Iterator[datetime]:
    """
    Yield start, start + 1 month, start + 2 months, ... while <= end.

    Each step is computed from `start` (not from the previous step) so a
    start on the 31st does not drift to the 28th after February. Iteration
    stops at datetime.MAXYEAR.
    """
    step = 0
    current = start
    while current <= end:
        yield current
        step += 1
        try:
            current = add_months(start, step)
        except (ValueError, OverflowError):
            return


def month_label(dt: datetime) -> str:
    """Short month/year label, e.g. 'Jan 2025'."""
    return f"{calendar.month_abbr[dt.month]} {dt.year}"


__all__ = ["add_months", "iter_month_steps", "month_label"]
