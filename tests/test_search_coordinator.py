"""Tests for the search coordinator."""

import asyncio

from supplement_finder.adapters.http_client import HttpError, TransportError
from supplement_finder.services.lifecycle import Error, Idle, Success
from supplement_finder.services.search import SearchCoordinator
from tests.conftest import FakeSupplementsApi, GatedSupplementsApi


def test_search_success_maps_results(supplements_api: FakeSupplementsApi) -> None:
    supplements_api.search_payloads["zinc"] = {
        "count": 2,
        "page": 1,
        "page_size": 24,
        "products": [
            {"code": "1", "product_name": "Zinc 25mg", "categories": "Vegan"},
            {"code": "2"},
        ],
    }
    coordinator = SearchCoordinator(api=supplements_api, page_size=24)

    state = asyncio.run(coordinator.update("zinc"))

    assert isinstance(state, Success)
    assert coordinator.loading is False
    assert coordinator.error is None
    assert coordinator.data is not None
    assert [item.name for item in coordinator.data.supplements] == [
        "Zinc 25mg",
        "Unknown Product",
    ]
    assert coordinator.data.supplements[0].dietary_tags.vegetarian is True
    assert supplements_api.search_calls == [("zinc", 1, 24)]


def test_blank_query_goes_idle_without_request(
    supplements_api: FakeSupplementsApi,
) -> None:
    coordinator = SearchCoordinator(api=supplements_api)
    asyncio.run(coordinator.update("protein", page=2))
    assert coordinator.data is not None

    state = asyncio.run(coordinator.update("   "))

    assert isinstance(state, Idle)
    assert coordinator.data is None
    assert coordinator.error is None
    assert coordinator.loading is False
    assert len(supplements_api.search_calls) == 1


def test_blank_query_from_error_state_goes_idle(
    supplements_api: FakeSupplementsApi,
) -> None:
    supplements_api.error = RuntimeError("down")
    coordinator = SearchCoordinator(api=supplements_api)
    asyncio.run(coordinator.update("protein"))
    assert coordinator.error == "down"

    asyncio.run(coordinator.update(""))

    assert isinstance(coordinator.state, Idle)
    assert coordinator.error is None
    assert len(supplements_api.search_calls) == 1


def test_http_error_becomes_prefixed_message(
    supplements_api: FakeSupplementsApi,
) -> None:
    supplements_api.error = HttpError("HTTP error! 404: Not Found", 404, "Not Found")
    coordinator = SearchCoordinator(api=supplements_api)

    state = asyncio.run(coordinator.update("protein"))

    assert isinstance(state, Error)
    assert coordinator.data is None
    assert coordinator.error is not None
    assert "Not Found" in coordinator.error
    assert coordinator.error.startswith("Failed to search supplements: ")


def test_transport_error_message(supplements_api: FakeSupplementsApi) -> None:
    supplements_api.error = TransportError("connection reset")
    coordinator = SearchCoordinator(api=supplements_api)

    asyncio.run(coordinator.update("protein"))

    assert coordinator.error == "Failed to search supplements: connection reset"


def test_other_errors_are_used_verbatim(supplements_api: FakeSupplementsApi) -> None:
    supplements_api.error = RuntimeError("quota exceeded")
    coordinator = SearchCoordinator(api=supplements_api)

    asyncio.run(coordinator.update("protein"))

    assert coordinator.error == "quota exceeded"


def test_unexpected_payload_shape_becomes_error(
    supplements_api: FakeSupplementsApi,
) -> None:
    supplements_api.search_payloads["protein"] = ["not", "an", "object"]
    coordinator = SearchCoordinator(api=supplements_api)

    state = asyncio.run(coordinator.update("protein"))

    assert isinstance(state, Error)
    assert coordinator.data is None
    assert coordinator.error == "Failed to search supplements"


def test_odd_product_fields_do_not_fail_the_page(
    supplements_api: FakeSupplementsApi,
) -> None:
    supplements_api.search_payloads["whey"] = {
        "count": 3,
        "page": 1,
        "page_size": 24,
        "products": [
            {"code": "1", "product_name": False, "brands": ["Acme"]},
            {
                "code": 2,
                "product_name": "Whey Isolate",
                "allergens_tags": ["en:milk", None],
                "additives_tags": "en:e322",
                "nutriments": "n/a",
            },
            "not a product",
        ],
    }
    coordinator = SearchCoordinator(api=supplements_api)

    state = asyncio.run(coordinator.update("whey"))

    assert isinstance(state, Success)
    assert coordinator.data is not None
    first, second = coordinator.data.supplements
    assert first.name == "Unknown Product"
    assert first.brand is None
    assert second.id == "2"
    assert second.name == "Whey Isolate"
    assert second.allergens == ["en:milk"]
    assert second.additives == []
    assert coordinator.data.count == 3


def test_snapshot_renders_view_state(supplements_api: FakeSupplementsApi) -> None:
    coordinator = SearchCoordinator(api=supplements_api, page_size=24)
    assert coordinator.snapshot() == {
        "status": "idle",
        "query": "",
        "page": 1,
        "data": None,
        "loading": False,
        "error": None,
    }

    asyncio.run(coordinator.update("iron", page=2))
    snapshot = coordinator.snapshot()

    assert snapshot["status"] == "success"
    assert snapshot["query"] == "iron"
    assert snapshot["page"] == 2
    data = snapshot["data"]
    assert isinstance(data, dict)
    assert data["total_pages"] == 1
    assert data["supplements"][0]["name"] == "iron product"

    supplements_api.error = RuntimeError("offline")
    asyncio.run(coordinator.retry())

    assert coordinator.snapshot()["status"] == "error"
    assert coordinator.snapshot()["error"] == "offline"
    assert coordinator.snapshot()["data"] is None


def test_retry_reissues_last_query(supplements_api: FakeSupplementsApi) -> None:
    supplements_api.error = RuntimeError("flaky")
    coordinator = SearchCoordinator(api=supplements_api, page_size=10)
    asyncio.run(coordinator.update("omega 3", page=3))
    assert coordinator.error == "flaky"

    supplements_api.error = None
    state = asyncio.run(coordinator.retry())

    assert isinstance(state, Success)
    assert supplements_api.search_calls == [("omega 3", 3, 10), ("omega 3", 3, 10)]


def test_retry_without_query_does_nothing(
    supplements_api: FakeSupplementsApi,
) -> None:
    coordinator = SearchCoordinator(api=supplements_api)

    state = asyncio.run(coordinator.retry())

    assert isinstance(state, Idle)
    assert supplements_api.search_calls == []


def _race(coordinator: SearchCoordinator, api: GatedSupplementsApi) -> None:
    async def scenario() -> None:
        older = asyncio.create_task(coordinator.update("protein"))
        await asyncio.sleep(0)
        newer = asyncio.create_task(coordinator.update("creatine"))
        await asyncio.sleep(0)
        assert coordinator.loading is True
        api.release("creatine")
        await newer
        api.release("protein")
        await older

    asyncio.run(scenario())


def test_stale_response_is_discarded() -> None:
    api = GatedSupplementsApi()
    coordinator = SearchCoordinator(api=api)

    _race(coordinator, api)

    assert coordinator.data is not None
    assert coordinator.data.supplements[0].name == "creatine product"


def test_stale_response_wins_when_not_discarding() -> None:
    api = GatedSupplementsApi()
    coordinator = SearchCoordinator(api=api, discard_stale=False)

    _race(coordinator, api)

    assert coordinator.data is not None
    assert coordinator.data.supplements[0].name == "protein product"
