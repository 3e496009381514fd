"""Nutrient mapping from provider payloads to FoodSearchResult.

Each provider names its nutrients differently:
- USDA reports a ``foodNutrients`` list of ``{nutrientName, value}`` rows
  that are matched by substring.
- Edamam reports a ``nutrients`` map keyed by fixed codes.

Missing nutrients default to zero; entries that are not JSON objects are
skipped instead of failing the whole response.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from src.data_layer.models import (
    FoodSearchResult,
    NutrientValues,
    ServingSize,
    slugify_label,
)


logger = logging.getLogger(__name__)


# Edamam nutrient code -> NutrientValues field
EDAMAM_NUTRIENT_CODES: Dict[str, str] = {
    "ENERC_KCAL": "calories",
    "PROCNT": "protein",
    "CHOCDF": "carbs",
    "FAT": "fat",
    "FIBTG": "fiber",
    "SUGAR": "sugar",
}

EDAMAM_MAX_HINTS = 20

DEFAULT_SERVING = ServingSize(label="100g", quantity=100.0)


def _as_number(value: Any) -> float:
    """Coerce a payload value to a non-negative float (bad values -> 0)."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number or number < 0:  # NaN or negative
        return 0.0
    return number


def _usda_field_for(nutrient_name: str) -> Optional[str]:
    """Match a USDA nutrient name to a NutrientValues field.

    The checks run in a fixed order, so "Carbohydrate, by difference" is
    carbs and "Fatty acids, total saturated" is ignored.
    """
    name = nutrient_name.lower()
    if "energy" in name:
        return "calories"
    if "protein" in name:
        return "protein"
    if "carbohydrate" in name or "carb" in name:
        return "carbs"
    if "fat" in name and "saturated" not in name:
        return "fat"
    if "fiber" in name:
        return "fiber"
    if "sugar" in name:
        return "sugar"
    return None


def extract_usda_nutrients(food_nutrients: Iterable[Any]) -> NutrientValues:
    """Collapse USDA ``foodNutrients`` rows into NutrientValues.

    Later rows overwrite earlier ones for the same field. Energy rows
    reported in kJ are skipped so the kcal figure is kept.
    """
    values: Dict[str, float] = {}
    for row in food_nutrients or []:
        if not isinstance(row, dict):
            continue
        name = row.get("nutrientName") or (row.get("nutrient") or {}).get("name") or ""
        field_name = _usda_field_for(str(name))
        if field_name is None:
            continue
        unit = str(row.get("unitName") or (row.get("nutrient") or {}).get("unitName") or "")
        if field_name == "calories" and unit.lower() == "kj":
            continue
        value = row.get("value", row.get("amount"))
        values[field_name] = _as_number(value)
    return NutrientValues(**values)


def map_usda_food(food: Dict[str, Any]) -> FoodSearchResult:
    """Translate one USDA food (search hit or details payload).

    Args:
        food: USDA food JSON object

    Returns:
        FoodSearchResult with per-100g nutrients
    """
    label = food.get("description") or "Unknown Food"
    fdc_id = food.get("fdcId")
    food_id = str(fdc_id) if fdc_id not in (None, "") else slugify_label(food.get("description"))

    serving_size = _as_number(food.get("servingSize")) or 100.0
    serving_unit = food.get("servingSizeUnit") or "g"
    serving_size_text = f"{serving_size:g}"

    return FoodSearchResult(
        food_id=food_id,
        label=label,
        brand=food.get("brandOwner") or food.get("brandName") or None,
        nutrients=extract_usda_nutrients(food.get("foodNutrients") or []),
        serving_sizes=[
            ServingSize(DEFAULT_SERVING.label, DEFAULT_SERVING.quantity),
            ServingSize(
                label=f"1 serving ({serving_size_text}{serving_unit})",
                quantity=serving_size,
            ),
        ],
    )


def map_usda_foods(foods: Iterable[Any]) -> List[FoodSearchResult]:
    """Translate a USDA ``foods`` array, skipping malformed entries."""
    if not isinstance(foods, list):
        return []
    results = []
    for food in foods:
        if not isinstance(food, dict):
            logger.debug("Skipping malformed USDA food entry: %r", food)
            continue
        results.append(map_usda_food(food))
    return results


def map_edamam_hint(hint: Dict[str, Any]) -> Optional[FoodSearchResult]:
    """Translate one Edamam parser hint (None when it carries no food)."""
    food = hint.get("food")
    if not isinstance(food, dict):
        return None

    label = food.get("label") or "Unknown Food"
    nutrients = food.get("nutrients") or {}
    if not isinstance(nutrients, dict):
        nutrients = {}

    serving_quantity = 100.0
    serving_sizes = food.get("servingSizes")
    if isinstance(serving_sizes, list) and serving_sizes and isinstance(serving_sizes[0], dict):
        serving_quantity = _as_number(serving_sizes[0].get("quantity")) or 100.0

    return FoodSearchResult(
        food_id=str(food.get("foodId") or slugify_label(label)),
        label=label,
        brand=food.get("brand") or None,
        nutrients=NutrientValues(**{
            field_name: _as_number(nutrients.get(code))
            for code, field_name in EDAMAM_NUTRIENT_CODES.items()
        }),
        serving_sizes=[
            ServingSize(DEFAULT_SERVING.label, DEFAULT_SERVING.quantity),
            ServingSize(label="1 serving", quantity=serving_quantity),
        ],
    )


def map_edamam_hints(hints: Iterable[Any]) -> List[FoodSearchResult]:
    """Translate the first EDAMAM_MAX_HINTS parser hints."""
    if not isinstance(hints, list):
        return []
    results = []
    for hint in hints[:EDAMAM_MAX_HINTS]:
        if not isinstance(hint, dict):
            continue
        mapped = map_edamam_hint(hint)
        if mapped is not None:
            results.append(mapped)
    return results
