"""Open Food Facts endpoints used for supplement lookups."""

from dataclasses import dataclass
from typing import Protocol

from supplement_finder.adapters.http_client import HttpClient

DEFAULT_BASE_URL = "https://world.openfoodfacts.org"

_SUPPLEMENT_CATEGORY_FILTER = {
    "tagtype_0": "categories",
    "tag_contains_0": "contains",
    "tag_0": "supplements",
}


class SupplementsApi(Protocol):
    """Interface for the remote supplement catalogue."""

    async def search_supplements(
        self, query: str, page: int = 1, page_size: int = 24
    ) -> object:
        """Search supplements and return raw API data."""

    async def get_supplement_by_id(self, barcode: str) -> object:
        """Fetch a single product by barcode and return raw API data."""


@dataclass
class OpenFoodFactsSupplementsApi(SupplementsApi):
    """Supplement catalogue backed by the Open Food Facts API."""

    http_client: HttpClient
    base_url: str = DEFAULT_BASE_URL

    async def search_supplements(
        self, query: str, page: int = 1, page_size: int = 24
    ) -> object:
        """Search products restricted to the supplements category."""
        params: dict[str, object] = {
            "search_terms": query,
            "page": page,
            "page_size": page_size,
            "json": 1,
            **_SUPPLEMENT_CATEGORY_FILTER,
        }
        return await self.http_client.get(
            f"{self.base_url}/cgi/search.pl", params=params
        )

    async def get_supplement_by_id(self, barcode: str) -> object:
        """Fetch product details; the barcode is the product id."""
        return await self.http_client.get(
            f"{self.base_url}/api/v2/product/{barcode}.json"
        )
