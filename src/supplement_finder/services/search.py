"""Search coordinator: drives supplement searches for a view."""

import logging
from dataclasses import asdict, dataclass, field

from supplement_finder.adapters.open_food_facts_client import SupplementsApi
from supplement_finder.domain.remote import RemoteSearchResponse
from supplement_finder.domain.supplements import SupplementSearchResults
from supplement_finder.services.lifecycle import (
    FetchState,
    RequestLifecycle,
    describe_error,
)
from supplement_finder.services.mapper import map_search_response

_ERROR_PREFIX = "Failed to search supplements"

_logger = logging.getLogger(__name__)


@dataclass
class SearchCoordinator:
    """Tracks the lifecycle of the search for the current query and page.

    Calling ``update`` again before an earlier call settles does not cancel the
    earlier request. With ``discard_stale`` enabled only the latest dispatch
    may change the visible state; otherwise the last response to arrive wins.
    """

    api: SupplementsApi
    page_size: int = 24
    discard_stale: bool = True
    debug: bool = False
    query: str = field(default="", init=False)
    page: int = field(default=1, init=False)
    lifecycle: RequestLifecycle[SupplementSearchResults] = field(init=False)

    def __post_init__(self) -> None:
        self.lifecycle = RequestLifecycle(discard_stale=self.discard_stale)

    @property
    def state(self) -> FetchState:
        return self.lifecycle.state

    @property
    def data(self) -> SupplementSearchResults | None:
        return self.lifecycle.data

    @property
    def loading(self) -> bool:
        return self.lifecycle.loading

    @property
    def error(self) -> str | None:
        return self.lifecycle.error

    def snapshot(self) -> dict[str, object]:
        """Render the current search state as plain data for a view."""
        data = self.data
        rendered: dict[str, object] | None = None
        if data is not None:
            rendered = asdict(data)
            rendered["total_pages"] = data.total_pages
        return {
            "status": self.lifecycle.status,
            "query": self.query,
            "page": self.page,
            "data": rendered,
            "loading": self.loading,
            "error": self.error,
        }

    async def update(self, query: str, page: int = 1) -> FetchState:
        """Switch to a new query/page and fetch it unless the query is blank."""
        self.query = query
        self.page = page
        if not query.strip():
            self.lifecycle.clear()
            return self.state
        return await self._fetch(query, page)

    async def retry(self) -> FetchState:
        """Fetch the last query/page again."""
        if not self.query.strip():
            return self.state
        return await self._fetch(self.query, self.page)

    async def _fetch(self, query: str, page: int) -> FetchState:
        request_id = self.lifecycle.start()
        if self.debug:
            _logger.info(
                "Supplement search dispatched: query=%s page=%s request=%s",
                query,
                page,
                request_id,
            )
        try:
            payload = await self.api.search_supplements(
                query, page=page, page_size=self.page_size
            )
            results = map_search_response(RemoteSearchResponse.model_validate(payload))
        except Exception as exc:
            _logger.warning(
                "Supplement search failed: query=%s page=%s error=%s", query, page, exc
            )
            applied = self.lifecycle.fail(
                request_id, describe_error(exc, _ERROR_PREFIX, _ERROR_PREFIX)
            )
        else:
            applied = self.lifecycle.succeed(request_id, results)
            if self.debug:
                _logger.info(
                    "Supplement search settled: query=%s page=%s results=%s",
                    query,
                    page,
                    len(results.supplements),
                )
        if not applied and self.debug:
            _logger.info("Discarded stale search response: request=%s", request_id)
        return self.state
