"""Supplement domain models."""

import math
from dataclasses import dataclass

UNKNOWN_PRODUCT_NAME = "Unknown Product"


@dataclass(frozen=True)
class NutritionalInfo:
    """Nutrient values per 100 g or 100 ml; vitamins and minerals in mg."""

    energy_kcal: float | None
    proteins: float | None
    carbohydrates: float | None
    sugars: float | None
    fat: float | None
    saturated_fat: float | None
    fiber: float | None
    sodium: float | None
    salt: float | None
    vitamins: dict[str, float] | None = None
    minerals: dict[str, float] | None = None


@dataclass(frozen=True)
class DietaryTags:
    """Dietary attributes inferred from product text."""

    vegan: bool
    vegetarian: bool
    gluten_free: bool
    organic: bool


@dataclass(frozen=True)
class Supplement:
    """Normalized representation of one catalogue product."""

    id: str
    name: str
    brand: str | None
    description: str | None
    ingredients: list[str]
    categories: list[str]
    image_url: str | None
    nutritional_info: NutritionalInfo
    allergens: list[str]
    additives: list[str]
    dietary_tags: DietaryTags
    serving_size: str | None


@dataclass(frozen=True)
class SupplementSearchResults:
    """One page of search results."""

    supplements: list[Supplement]
    count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Number of pages needed to show every result."""
        if self.page_size <= 0:
            return 0
        return math.ceil(self.count / self.page_size)
