# roadmap_studio/schemas/layout.py
"""
Derived, ephemeral layout values produced by the timeline services.
None of these are persisted; they are recomputed on every layout pass.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from roadmap_studio.schemas.roadmap import RoadmapItem, _as_aware

_LAYOUT_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class TimelineWindow(BaseModel):
    """Visible date span used to normalize item positions to percentages."""
    model_config = _LAYOUT_CONFIG

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        return _as_aware(v)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


class RowAssignment(BaseModel):
    """An item paired with its row inside one category's swimlane."""
    model_config = _LAYOUT_CONFIG

    item: RoadmapItem
    row: int = Field(..., ge=0)


class ItemGeometry(BaseModel):
    """Horizontal position/width in percent of the window, vertical offset in px."""
    model_config = _LAYOUT_CONFIG

    left: float
    width: float
    top: float

    def as_style(self) -> Dict[str, str]:
        return {
            "left": f"{self.left:g}%",
            "width": f"{self.width:g}%",
            "top": f"{self.top:g}px",
        }


class PlacedItem(BaseModel):
    model_config = _LAYOUT_CONFIG

    item: RoadmapItem
    row: int
    geometry: ItemGeometry


class LaneLayout(BaseModel):
    """One category swimlane: its color, pixel height and placed items."""
    model_config = _LAYOUT_CONFIG

    category: str
    color: str
    height: int
    row_count: int
    items: List[PlacedItem] = Field(default_factory=list)


class MonthLabel(BaseModel):
    model_config = _LAYOUT_CONFIG

    date: datetime
    label: str


class RoadmapLayout(BaseModel):
    model_config = _LAYOUT_CONFIG

    roadmap_id: str
    window: TimelineWindow
    months: List[MonthLabel] = Field(default_factory=list)
    lanes: List[LaneLayout] = Field(default_factory=list)


class DragRequest(BaseModel):
    """A single pointer drop: which item, where (0..1 of the width), which lane."""
    model_config = _LAYOUT_CONFIG

    item_id: str = Field(..., min_length=1)
    drop_fraction: float = Field(..., ge=0.0, le=1.0)
    target_category: Optional[str] = None


__all__ = [
    "TimelineWindow",
    "RowAssignment",
    "ItemGeometry",
    "PlacedItem",
    "LaneLayout",
    "MonthLabel",
    "RoadmapLayout",
    "DragRequest",
]
