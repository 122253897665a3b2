"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from supplement_finder.adapters.open_food_facts_client import SupplementsApi
from supplement_finder.config import Settings
from supplement_finder.containers import AppContainer
from supplement_finder.services.collections import (
    favorites_collection,
    recent_searches_collection,
)
from supplement_finder.services.detail import DetailCoordinator
from supplement_finder.services.search import SearchCoordinator
from supplement_finder.services.storage import InMemoryStorage


def product_payload(code: str, name: str | None = None, **extra: object) -> dict:
    """Build a raw Open Food Facts product record."""
    payload: dict[str, object] = {"code": code, **extra}
    if name is not None:
        payload["product_name"] = name
    return payload


@dataclass
class FakeSupplementsApi(SupplementsApi):
    """Fake catalogue returning canned payloads and recording calls."""

    search_payloads: dict[str, object] = field(default_factory=dict)
    product_payloads: dict[str, object] = field(default_factory=dict)
    error: Exception | None = None
    search_calls: list[tuple[str, int, int]] = field(default_factory=list)
    product_calls: list[str] = field(default_factory=list)

    async def search_supplements(
        self, query: str, page: int = 1, page_size: int = 24
    ) -> object:
        self.search_calls.append((query, page, page_size))
        if self.error is not None:
            raise self.error
        if query in self.search_payloads:
            return self.search_payloads[query]
        return {
            "count": 1,
            "page": page,
            "page_size": page_size,
            "products": [product_payload(f"{query}-1", f"{query} product")],
        }

    async def get_supplement_by_id(self, barcode: str) -> object:
        self.product_calls.append(barcode)
        if self.error is not None:
            raise self.error
        if barcode in self.product_payloads:
            return self.product_payloads[barcode]
        return {"status": 1, "product": product_payload(barcode, f"Product {barcode}")}


@dataclass
class GatedSupplementsApi(FakeSupplementsApi):
    """Fake catalogue whose responses wait until released by the test."""

    gates: dict[str, asyncio.Event] = field(default_factory=dict)

    def release(self, key: str) -> None:
        self._gate(key).set()

    def _gate(self, key: str) -> asyncio.Event:
        return self.gates.setdefault(key, asyncio.Event())

    async def search_supplements(
        self, query: str, page: int = 1, page_size: int = 24
    ) -> object:
        await self._gate(query).wait()
        return await super().search_supplements(query, page, page_size)

    async def get_supplement_by_id(self, barcode: str) -> object:
        await self._gate(barcode).wait()
        return await super().get_supplement_by_id(barcode)


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory", search_page_size=24)


@pytest.fixture
def supplements_api() -> FakeSupplementsApi:
    return FakeSupplementsApi()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def container(
    settings: Settings,
    supplements_api: FakeSupplementsApi,
    storage: InMemoryStorage,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        supplements_api=supplements_api,
        storage=storage,
        search_coordinator=SearchCoordinator(
            api=supplements_api, page_size=settings.search_page_size
        ),
        detail_coordinator=DetailCoordinator(api=supplements_api),
        favorites=favorites_collection(storage),
        recent_searches=recent_searches_collection(storage),
        close_resources=close_resources,
    )
