# roadmap_studio/api/schemas/roadmaps.py

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Request bodies accept camelCase or snake_case keys; responses are camelCase.
_API_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoadmapCreateRequest(BaseModel):
    model_config = _API_CONFIG

    title: str = Field("Untitled Roadmap", min_length=1)
    description: str = ""
    # None -> default category set; [] -> blank template
    categories: Optional[List[str]] = None


class CurrentRoadmapRequest(BaseModel):
    model_config = _API_CONFIG

    roadmap_id: Optional[str] = None


class RoadmapItemPayload(BaseModel):
    model_config = _API_CONFIG

    title: str = Field(..., min_length=1)
    description: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    category: Optional[str] = None
    progress: int = Field(0, ge=0, le=100)
    color: Optional[str] = None


class DragPayload(BaseModel):
    model_config = _API_CONFIG

    drop_fraction: float = Field(..., ge=0.0, le=1.0)
    target_category: Optional[str] = None


class CategoryRequest(BaseModel):
    model_config = _API_CONFIG

    name: str = Field(..., min_length=1)


class MutationResponse(BaseModel):
    model_config = _API_CONFIG

    version: int
    current_roadmap_id: Optional[str] = None
    roadmap_count: int
