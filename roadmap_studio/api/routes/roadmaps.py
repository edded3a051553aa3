# roadmap_studio/api/routes/roadmaps.py

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from roadmap_studio.api.deps import get_store, to_http_error
from roadmap_studio.api.schemas.roadmaps import (
    CategoryRequest,
    CurrentRoadmapRequest,
    DragPayload,
    MutationResponse,
    RoadmapCreateRequest,
    RoadmapItemPayload,
)
from roadmap_studio.errors import (
    ItemNotFoundError,
    RoadmapNotFoundError,
    RoadmapPreconditionError,
    UnknownCategoryError,
)
from roadmap_studio.schemas.layout import DragRequest, RoadmapLayout
from roadmap_studio.schemas.roadmap import Roadmap, RoadmapItem
from roadmap_studio.services.roadmap_factory import (
    create_empty_roadmap,
    create_roadmap_from_template,
    new_roadmap_item,
)
from roadmap_studio.services.roadmap_store import RoadmapStore, StoreState
from roadmap_studio.services.timeline.layout import compute_roadmap_layout


router = APIRouter(prefix="/roadmaps", tags=["roadmaps"])


def _summary(state: StoreState) -> MutationResponse:
    return MutationResponse(
        version=state.version,
        current_roadmap_id=state.current_roadmap_id,
        roadmap_count=len(state.roadmaps),
    )


def _current_or_409(state: StoreState) -> Roadmap:
    current = state.current_roadmap
    if current is None:
        raise HTTPException(status_code=409, detail="No current roadmap")
    return current


@router.get("", response_model=List[Roadmap])
def list_roadmaps(store: RoadmapStore = Depends(get_store)) -> List[Roadmap]:
    return store.list_roadmaps()


@router.post("", response_model=Roadmap, status_code=201)
def create_roadmap(req: RoadmapCreateRequest, store: RoadmapStore = Depends(get_store)) -> Roadmap:
    """
    Create a roadmap (default categories, or the given template categories)
    and make it current.
    """
    if req.categories is None:
        roadmap = create_empty_roadmap(req.title).model_copy(update={"description": req.description})
    else:
        roadmap = create_roadmap_from_template(req.title, req.description, req.categories)
    store.add_roadmap(roadmap)
    return roadmap


# ----------------------------
# Current roadmap + items
# ----------------------------
@router.get("/current", response_model=Roadmap)
def get_current(store: RoadmapStore = Depends(get_store)) -> Roadmap:
    current = store.get_current_roadmap()
    if current is None:
        raise HTTPException(status_code=404, detail="No current roadmap")
    return current


@router.put("/current", response_model=MutationResponse)
def select_current(req: CurrentRoadmapRequest, store: RoadmapStore = Depends(get_store)) -> MutationResponse:
    try:
        return _summary(store.set_current_roadmap(req.roadmap_id))
    except RoadmapPreconditionError as e:
        raise to_http_error(e) from e


@router.post("/current/items", response_model=RoadmapItem, status_code=201)
def add_item(req: RoadmapItemPayload, store: RoadmapStore = Depends(get_store)) -> RoadmapItem:
    current = store.get_current_roadmap()
    categories = current.categories if current else []
    item = new_roadmap_item(
        req.title,
        categories,
        description=req.description,
        start_date=req.start_date,
        end_date=req.end_date,
        category=req.category,
        progress=req.progress,
    ).model_copy(update={"color": req.color})
    try:
        store.add_roadmap_item(item)
    except RoadmapPreconditionError as e:
        raise to_http_error(e) from e
    return item


@router.put("/current/items/{item_id}", response_model=RoadmapItem)
def update_item(item_id: str, req: RoadmapItemPayload, store: RoadmapStore = Depends(get_store)) -> RoadmapItem:
    update = req.model_dump(exclude_unset=True)
    # null dates/category mean "keep"; color may be cleared explicitly
    for key in ("start_date", "end_date", "category"):
        if update.get(key, "") is None:
            del update[key]

    try:
        with store.lock:
            current = _current_or_409(store.state)
            existing = current.get_item(item_id)
            if existing is None:
                raise ItemNotFoundError(item_id, current.id)
            item = RoadmapItem.model_validate({**existing.model_dump(), **update})
            state = store.update_roadmap_item(item)
    except RoadmapPreconditionError as e:
        raise to_http_error(e) from e
    return _current_or_409(state).get_item(item_id) or item


@router.delete("/current/items/{item_id}", response_model=MutationResponse)
def delete_item(item_id: str, store: RoadmapStore = Depends(get_store)) -> MutationResponse:
    try:
        with store.lock:
            current = _current_or_409(store.state)
            if current.get_item(item_id) is None:
                raise ItemNotFoundError(item_id, current.id)
            return _summary(store.delete_roadmap_item(item_id))
    except RoadmapPreconditionError as e:
        raise to_http_error(e) from e


@router.post("/current/items/{item_id}/drag", response_model=RoadmapItem)
def drag_item(item_id: str, req: DragPayload, store: RoadmapStore = Depends(get_store)) -> RoadmapItem:
    """Apply a pointer drop (fraction of the timeline width) to an item."""
    request = DragRequest(item_id=item_id, drop_fraction=req.drop_fraction, target_category=req.target_category)
    try:
        state = store.apply_drag(request)
    except RoadmapPreconditionError as e:
        raise to_http_error(e) from e

    moved = _current_or_409(state).get_item(item_id)
    if moved is None:
        raise HTTPException(status_code=404, detail=f"Roadmap item not found: {item_id!r}")
    return moved


# ----------------------------
# Roadmaps by id
# ----------------------------
@router.get("/{roadmap_id}", response_model=Roadmap)
def get_roadmap(roadmap_id: str, store: RoadmapStore = Depends(get_store)) -> Roadmap:
    roadmap = store.get_roadmap(roadmap_id)
    if roadmap is None:
        raise HTTPException(status_code=404, detail=f"Roadmap not found: {roadmap_id!r}")
    return roadmap


@router.put("/{roadmap_id}", response_model=Roadmap)
def replace_roadmap(roadmap_id: str, roadmap: Roadmap, store: RoadmapStore = Depends(get_store)) -> Roadmap:
    if roadmap.id != roadmap_id:
        raise HTTPException(status_code=400, detail="Path id and body id differ")
    try:
        store.update_roadmap(roadmap)
    except RoadmapPreconditionError as e:
        raise to_http_error(e) from e
    updated = store.get_roadmap(roadmap_id)
    if updated is None:
        raise HTTPException(status_code=404, detail=f"Roadmap not found: {roadmap_id!r}")
    return updated


@router.delete("/{roadmap_id}", response_model=MutationResponse)
def delete_roadmap(roadmap_id: str, store: RoadmapStore = Depends(get_store)) -> MutationResponse:
    if store.get_roadmap(roadmap_id) is None:
        raise to_http_error(RoadmapNotFoundError(roadmap_id))
    return _summary(store.delete_roadmap(roadmap_id))


@router.post("/{roadmap_id}/categories", response_model=Roadmap)
def add_category(roadmap_id: str, req: CategoryRequest, store: RoadmapStore = Depends(get_store)) -> Roadmap:
    try:
        store.add_category(req.name, roadmap_id=roadmap_id)
    except RoadmapPreconditionError as e:
        raise to_http_error(e) from e
    return get_roadmap(roadmap_id, store)


@router.delete("/{roadmap_id}/categories/{category}", response_model=Roadmap)
def remove_category(roadmap_id: str, category: str, store: RoadmapStore = Depends(get_store)) -> Roadmap:
    try:
        with store.lock:
            roadmap = store.get_roadmap(roadmap_id)
            if roadmap is None:
                raise RoadmapNotFoundError(roadmap_id)
            if category not in roadmap.categories:
                raise UnknownCategoryError(category, roadmap.categories)
            store.remove_category(category, roadmap_id=roadmap_id)
    except RoadmapPreconditionError as e:
        raise to_http_error(e) from e
    return get_roadmap(roadmap_id, store)


@router.get("/{roadmap_id}/layout", response_model=RoadmapLayout)
def get_layout(roadmap_id: str, store: RoadmapStore = Depends(get_store)) -> RoadmapLayout:
    return compute_roadmap_layout(get_roadmap(roadmap_id, store))
