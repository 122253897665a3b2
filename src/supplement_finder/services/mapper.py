"""Conversion of Open Food Facts payloads into supplement domain models."""

from supplement_finder.domain.remote import (
    RemoteNutriments,
    RemoteProduct,
    RemoteSearchResponse,
)
from supplement_finder.domain.supplements import (
    UNKNOWN_PRODUCT_NAME,
    DietaryTags,
    NutritionalInfo,
    Supplement,
    SupplementSearchResults,
)

_NUTRIENT_SUFFIX = "_100g"
_GRAMS_TO_MG = 1000.0

_VITAMIN_KEYS = frozenset(
    {
        "vitamin-a",
        "vitamin-b1",
        "vitamin-b2",
        "vitamin-b6",
        "vitamin-b9",
        "vitamin-b12",
        "vitamin-c",
        "vitamin-d",
        "vitamin-e",
        "vitamin-k",
        "vitamin-pp",
        "biotin",
        "pantothenic-acid",
        "folates",
    }
)
_MINERAL_KEYS = frozenset(
    {
        "calcium",
        "chloride",
        "chromium",
        "copper",
        "fluoride",
        "iodine",
        "iron",
        "magnesium",
        "manganese",
        "molybdenum",
        "phosphorus",
        "potassium",
        "selenium",
        "zinc",
    }
)


def split_list(text: str | None) -> list[str]:
    """Split comma-joined text into trimmed, non-empty entries."""
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


def derive_dietary_tags(product: RemoteProduct) -> DietaryTags:
    """Guess dietary tags from category keywords."""
    categories = (product.categories or "").lower()
    vegan = "vegan" in categories or "plant-based" in categories
    return DietaryTags(
        vegan=vegan,
        vegetarian=vegan or "vegetarian" in categories,
        gluten_free="gluten-free" in categories or "gluten free" in categories,
        organic="organic" in categories,
    )


def map_nutritional_info(nutriments: RemoteNutriments | None) -> NutritionalInfo:
    """Map per-100g nutriments; missing values become None."""
    if nutriments is None:
        return NutritionalInfo(
            energy_kcal=None,
            proteins=None,
            carbohydrates=None,
            sugars=None,
            fat=None,
            saturated_fat=None,
            fiber=None,
            sodium=None,
            salt=None,
        )

    vitamins, minerals = _micronutrients(nutriments.extra_numbers())
    return NutritionalInfo(
        energy_kcal=nutriments.energy_kcal_100g,
        proteins=nutriments.proteins_100g,
        carbohydrates=nutriments.carbohydrates_100g,
        sugars=nutriments.sugars_100g,
        fat=nutriments.fat_100g,
        saturated_fat=nutriments.saturated_fat_100g,
        fiber=nutriments.fiber_100g,
        sodium=nutriments.sodium_100g,
        salt=nutriments.salt_100g,
        vitamins=vitamins,
        minerals=minerals,
    )


def map_product(product: RemoteProduct) -> Supplement:
    """Build a Supplement from a raw product record."""
    return Supplement(
        id=product.code,
        name=product.product_name or UNKNOWN_PRODUCT_NAME,
        brand=product.brands or None,
        description=product.generic_name or None,
        ingredients=split_list(product.ingredients_text),
        categories=split_list(product.categories),
        image_url=product.image_url or None,
        nutritional_info=map_nutritional_info(product.nutriments),
        allergens=list(product.allergens_tags or []),
        additives=list(product.additives_tags or []),
        dietary_tags=derive_dietary_tags(product),
        serving_size=product.serving_size or None,
    )


def map_search_response(response: RemoteSearchResponse) -> SupplementSearchResults:
    """Map a search payload, keeping the paging fields as reported."""
    return SupplementSearchResults(
        supplements=[map_product(product) for product in response.products],
        count=response.count,
        page=response.page,
        page_size=response.page_size,
    )


def _micronutrients(
    values: dict[str, float],
) -> tuple[dict[str, float] | None, dict[str, float] | None]:
    """Collect vitamin and mineral amounts in milligrams."""
    vitamins: dict[str, float] = {}
    minerals: dict[str, float] = {}
    for key, amount in values.items():
        if not key.endswith(_NUTRIENT_SUFFIX):
            continue
        name = key[: -len(_NUTRIENT_SUFFIX)]
        if name in _VITAMIN_KEYS:
            vitamins[name] = amount * _GRAMS_TO_MG
        elif name in _MINERAL_KEYS:
            minerals[name] = amount * _GRAMS_TO_MG
    return vitamins or None, minerals or None
