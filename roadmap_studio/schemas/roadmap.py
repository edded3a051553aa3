# roadmap_studio/schemas/roadmap.py
"""
Canonical roadmap domain models.

Values are frozen: the store hands them out and callers submit new values
(built with model_copy) instead of mutating in place. Serialized field names
are camelCase to keep the persisted layout stable.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


_MODEL_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


def _as_aware(value: datetime) -> datetime:
    # Naive timestamps are interpreted as UTC so all comparisons stay valid.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class RoadmapItem(BaseModel):
    model_config = _MODEL_CONFIG

    id: str = Field(..., min_length=1)
    title: str = ""
    description: str = ""
    start_date: datetime
    end_date: datetime  # not required to be >= start_date
    category: str = ""
    progress: int = Field(0, ge=0, le=100)
    color: Optional[str] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        return _as_aware(v)

    @property
    def duration(self) -> timedelta:
        """Signed duration; negative when end_date precedes start_date."""
        return self.end_date - self.start_date


class Roadmap(BaseModel):
    model_config = _MODEL_CONFIG

    id: str = Field(..., min_length=1)
    title: str = "Untitled Roadmap"
    description: str = ""
    items: List[RoadmapItem] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        return _as_aware(v)

    @field_validator("categories")
    @classmethod
    def unique_categories(cls, v: List[str]) -> List[str]:
        if len(set(v)) != len(v):
            raise ValueError("categories must be unique")
        return v

    def get_item(self, item_id: str) -> Optional[RoadmapItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def items_in_category(self, category: str) -> List[RoadmapItem]:
        return [item for item in self.items if item.category == category]


class RoadmapTemplate(BaseModel):
    """Starting point for a new roadmap (name, description and category set)."""
    model_config = _MODEL_CONFIG

    id: str
    name: str
    description: str = ""
    categories: List[str] = Field(default_factory=list)


__all__ = ["RoadmapItem", "Roadmap", "RoadmapTemplate"]
