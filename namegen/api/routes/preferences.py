from __future__ import annotations

from fastapi import APIRouter, Depends

from namegen.api.deps import get_categories, get_store
from namegen.models.schemas import CategoriesResponse, CategoryInfo
from namegen.services import history
from namegen.services.state_store import StateStore

router = APIRouter(prefix="/api", tags=["preferences"])


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories():
    """List the industries a generation can target."""
    return CategoriesResponse(categories=[CategoryInfo(**c) for c in get_categories()])


@router.post("/settings/dark-mode")
async def toggle_dark_mode(store: StateStore = Depends(get_store)):
    async with store.lock:
        state = history.toggle_dark_mode(store.load())
        store.save(state)
    return {"dark_mode": state.dark_mode}
