# roadmap_studio/utils/numbers.py

from __future__ import annotations

from datetime import timedelta
from typing import Optional


def safe_ratio(numerator: timedelta, denominator: timedelta) -> float:
    """Divide two timedeltas; a non-positive denominator yields 0.0 instead of raising."""
    if denominator <= timedelta(0):
        return 0.0
    return numerator / denominator


def clamp(value: Optional[float], min_value: float, max_value: float) -> float:
    """Clamp a possibly None float into [min_value, max_value]. None -> min_value."""
    if value is None:
        return min_value
    return max(min_value, min(max_value, value))


__all__ = ["safe_ratio", "clamp"]
