"""Pydantic models for Open Food Facts payloads."""

import logging
import math

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

_logger = logging.getLogger(__name__)


def _number_or_none(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


class RemoteNutriments(BaseModel):
    """Nutrient values per 100 g; unknown keys are kept as extras."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    energy_kcal_100g: float | None = Field(default=None, alias="energy-kcal_100g")
    proteins_100g: float | None = None
    carbohydrates_100g: float | None = None
    sugars_100g: float | None = None
    fat_100g: float | None = None
    saturated_fat_100g: float | None = Field(
        default=None, alias="saturated-fat_100g"
    )
    fiber_100g: float | None = None
    sodium_100g: float | None = None
    salt_100g: float | None = None

    @field_validator(
        "energy_kcal_100g",
        "proteins_100g",
        "carbohydrates_100g",
        "sugars_100g",
        "fat_100g",
        "saturated_fat_100g",
        "fiber_100g",
        "sodium_100g",
        "salt_100g",
        mode="before",
    )
    @classmethod
    def _lenient_number(cls, value: object) -> float | None:
        return _number_or_none(value)

    def extra_numbers(self) -> dict[str, float]:
        """Return the additional nutrient keys that carry numeric values."""
        numbers: dict[str, float] = {}
        for key, value in (self.model_extra or {}).items():
            number = _number_or_none(value)
            if number is not None:
                numbers[key] = number
        return numbers


def _text_or_none(value: object) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return None


class RemoteProduct(BaseModel):
    """Open Food Facts product record.

    Every field may be missing or carry an unexpected type. Such values are
    read as absent rather than rejected, so one odd record never spoils a page.
    """

    model_config = ConfigDict(extra="ignore")

    code: str = ""
    product_name: str | None = None
    brands: str | None = None
    generic_name: str | None = None
    ingredients_text: str | None = None
    categories: str | None = None
    image_url: str | None = None
    serving_size: str | None = None
    nutriments: RemoteNutriments | None = None
    allergens_tags: list[str] | None = None
    additives_tags: list[str] | None = None

    @field_validator("code", mode="before")
    @classmethod
    def _lenient_code(cls, value: object) -> str:
        return _text_or_none(value) or ""

    @field_validator(
        "product_name",
        "brands",
        "generic_name",
        "ingredients_text",
        "categories",
        "image_url",
        "serving_size",
        mode="before",
    )
    @classmethod
    def _lenient_text(cls, value: object) -> str | None:
        return _text_or_none(value)

    @field_validator("nutriments", mode="before")
    @classmethod
    def _lenient_nutriments(cls, value: object) -> object:
        return value if isinstance(value, dict | RemoteNutriments) else None

    @field_validator("allergens_tags", "additives_tags", mode="before")
    @classmethod
    def _lenient_tags(cls, value: object) -> list[str] | None:
        if not isinstance(value, list):
            return None
        return [tag for tag in value if isinstance(tag, str)]


class RemoteSearchResponse(BaseModel):
    """Search endpoint payload; unreadable product entries are skipped."""

    count: int = 0
    page: int = 1
    page_size: int = 0
    products: list[RemoteProduct] = Field(default_factory=list)

    @field_validator("products", mode="before")
    @classmethod
    def _skip_unreadable_products(cls, value: object) -> list[RemoteProduct]:
        if not isinstance(value, list):
            return []
        products: list[RemoteProduct] = []
        for index, entry in enumerate(value):
            try:
                products.append(RemoteProduct.model_validate(entry))
            except ValidationError as exc:
                _logger.warning(
                    "Skipping unreadable product at index %s: %s",
                    index,
                    exc.errors(include_url=False),
                )
        return products


class RemoteProductResponse(BaseModel):
    """Product endpoint payload."""

    status: int = 0
    product: RemoteProduct | None = None

    @field_validator("product", mode="before")
    @classmethod
    def _lenient_product(cls, value: object) -> object:
        return value if isinstance(value, dict | RemoteProduct) else None
