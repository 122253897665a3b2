"""Search and detail endpoints backed by the coordinators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

if TYPE_CHECKING:
    from supplement_finder.containers import AppContainer

router = APIRouter(prefix="/supplements", tags=["supplements"])


@router.get("/search")
async def search(request: Request, q: str = "", page: int = 1) -> dict[str, object]:
    """Run a search for the query/page and return the resulting state."""
    container: AppContainer = request.app.state.container
    if q.strip():
        container.recent_searches.add(q)
    await container.search_coordinator.update(q, page)
    return container.search_coordinator.snapshot()


@router.post("/search/retry")
async def retry_search(request: Request) -> dict[str, object]:
    """Repeat the last search."""
    container: AppContainer = request.app.state.container
    await container.search_coordinator.retry()
    return container.search_coordinator.snapshot()


@router.post("/detail/retry")
async def retry_detail(request: Request) -> dict[str, object]:
    """Repeat the last detail lookup."""
    container: AppContainer = request.app.state.container
    await container.detail_coordinator.retry()
    return detail_payload(container)


@router.get("/{barcode}")
async def detail(barcode: str, request: Request) -> dict[str, object]:
    """Look up one supplement by barcode."""
    container: AppContainer = request.app.state.container
    await container.detail_coordinator.update(barcode)
    return detail_payload(container)


def detail_payload(container: AppContainer) -> dict[str, object]:
    """Render the detail state, flagging whether the item is a favorite."""
    snapshot = container.detail_coordinator.snapshot()
    item = container.detail_coordinator.item
    snapshot["is_favorite"] = item is not None and item.id in container.favorites
    return snapshot
