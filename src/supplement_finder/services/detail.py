"""Detail coordinator: drives single-supplement lookups for a view."""

import logging
from dataclasses import asdict, dataclass, field

from supplement_finder.adapters.open_food_facts_client import SupplementsApi
from supplement_finder.domain.remote import RemoteProductResponse
from supplement_finder.domain.supplements import Supplement
from supplement_finder.services.lifecycle import (
    FetchState,
    RequestLifecycle,
    describe_error,
)
from supplement_finder.services.mapper import map_product

_ERROR_PREFIX = "Failed to load supplement details"

_logger = logging.getLogger(__name__)


class SupplementNotFoundError(Exception):
    """Raised when the catalogue answers without a product payload."""

    def __init__(self, identifier: str) -> None:
        super().__init__("Supplement not found")
        self.identifier = identifier


@dataclass
class DetailCoordinator:
    """Tracks the lifecycle of the lookup for the current identifier."""

    api: SupplementsApi
    discard_stale: bool = True
    debug: bool = False
    identifier: str | None = field(default=None, init=False)
    lifecycle: RequestLifecycle[Supplement] = field(init=False)

    def __post_init__(self) -> None:
        self.lifecycle = RequestLifecycle(discard_stale=self.discard_stale)

    @property
    def state(self) -> FetchState:
        return self.lifecycle.state

    @property
    def item(self) -> Supplement | None:
        return self.lifecycle.data

    @property
    def loading(self) -> bool:
        return self.lifecycle.loading

    @property
    def error(self) -> str | None:
        return self.lifecycle.error

    def snapshot(self) -> dict[str, object]:
        """Render the current lookup state as plain data for a view."""
        item = self.item
        return {
            "status": self.lifecycle.status,
            "id": self.identifier,
            "item": asdict(item) if item is not None else None,
            "loading": self.loading,
            "error": self.error,
        }

    async def update(self, identifier: str | None) -> FetchState:
        """Switch to a new identifier and fetch it unless it is absent."""
        self.identifier = identifier
        if not identifier:
            self.lifecycle.clear()
            return self.state
        return await self._fetch(identifier)

    async def retry(self) -> FetchState:
        """Fetch the current identifier again."""
        if not self.identifier:
            return self.state
        return await self._fetch(self.identifier)

    async def _fetch(self, identifier: str) -> FetchState:
        request_id = self.lifecycle.start()
        try:
            supplement = await self._load(identifier)
        except Exception as exc:
            _logger.warning("Supplement lookup failed: id=%s error=%s", identifier, exc)
            applied = self.lifecycle.fail(
                request_id, describe_error(exc, _ERROR_PREFIX, _ERROR_PREFIX)
            )
        else:
            applied = self.lifecycle.succeed(request_id, supplement)
        if not applied and self.debug:
            _logger.info("Discarded stale detail response: request=%s", request_id)
        return self.state

    async def _load(self, identifier: str) -> Supplement:
        payload = await self.api.get_supplement_by_id(identifier)
        response = RemoteProductResponse.model_validate(payload)
        if response.product is None:
            raise SupplementNotFoundError(identifier)
        return map_product(response.product)
