"""Favorites and recent-search endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from pydantic import BaseModel

if TYPE_CHECKING:
    from supplement_finder.containers import AppContainer

router = APIRouter(tags=["lists"])


class RecentSearchCreate(BaseModel):
    """Payload for recording a search."""

    query: str


def _render(items: list[str]) -> dict[str, object]:
    return {"items": items, "count": len(items)}


@router.get("/favorites")
async def list_favorites(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return _render(container.favorites.items)


@router.put("/favorites/{supplement_id}")
async def add_favorite(supplement_id: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return _render(container.favorites.add(supplement_id))


@router.delete("/favorites/{supplement_id}")
async def remove_favorite(supplement_id: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return _render(container.favorites.remove(supplement_id))


@router.post("/favorites/{supplement_id}/toggle")
async def toggle_favorite(supplement_id: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return _render(container.favorites.toggle(supplement_id))


@router.delete("/favorites")
async def clear_favorites(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return _render(container.favorites.clear())


@router.get("/recent-searches")
async def list_recent_searches(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return _render(container.recent_searches.items)


@router.post("/recent-searches")
async def add_recent_search(
    payload: RecentSearchCreate, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return _render(container.recent_searches.add(payload.query))


@router.delete("/recent-searches/{query}")
async def remove_recent_search(query: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return _render(container.recent_searches.remove(query))


@router.delete("/recent-searches")
async def clear_recent_searches(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return _render(container.recent_searches.clear())
