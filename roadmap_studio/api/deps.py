from __future__ import annotations

from fastapi import HTTPException, Request

from roadmap_studio.errors import (
    ItemNotFoundError,
    RoadmapNotFoundError,
    RoadmapPreconditionError,
    UnknownCategoryError,
)
from roadmap_studio.services.roadmap_store import RoadmapStore


def get_store(request: Request) -> RoadmapStore:
    """The process-wide store created by create_app()."""
    return request.app.state.store


def to_http_error(e: RoadmapPreconditionError) -> HTTPException:
    """
    Map store precondition failures to HTTP errors.
    Missing roadmap/item/category -> 404, everything else -> 409.
    """
    if isinstance(e, (RoadmapNotFoundError, ItemNotFoundError, UnknownCategoryError)):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=409, detail=str(e))
