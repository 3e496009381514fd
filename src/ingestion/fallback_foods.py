"""Static nutrition facts for a handful of common foods.

Used when a provider has no credentials, is rate limited, or fails, and as
the last stage of the lookup chain. Values are per the listed serving basis
(per 100g unless the serving says otherwise).
"""

import copy
from typing import Dict, List, Optional

from src.data_layer.models import FoodSearchResult, NutrientValues, ServingSize


# Ordered: the first key that matches a query wins.
FALLBACK_FOODS: Dict[str, FoodSearchResult] = {
    "chicken breast": FoodSearchResult(
        food_id="chicken-breast",
        label="Chicken Breast",
        nutrients=NutrientValues(calories=165, protein=31, carbs=0, fat=3.6, fiber=0, sugar=0),
        serving_sizes=[ServingSize("100g", 100)],
    ),
    "rice": FoodSearchResult(
        food_id="rice",
        label="White Rice, Cooked",
        nutrients=NutrientValues(calories=130, protein=2.7, carbs=28, fat=0.3, fiber=0.4, sugar=0),
        serving_sizes=[ServingSize("100g", 100)],
    ),
    "banana": FoodSearchResult(
        food_id="banana",
        label="Banana",
        nutrients=NutrientValues(calories=89, protein=1.1, carbs=23, fat=0.3, fiber=2.6, sugar=12),
        serving_sizes=[ServingSize("1 medium", 118)],
    ),
    "egg": FoodSearchResult(
        food_id="egg",
        label="Egg, Whole",
        nutrients=NutrientValues(calories=155, protein=13, carbs=1.1, fat=11, fiber=0, sugar=0.7),
        serving_sizes=[ServingSize("1 large", 50)],
    ),
    "oatmeal": FoodSearchResult(
        food_id="oatmeal",
        label="Oatmeal, Cooked",
        nutrients=NutrientValues(calories=68, protein=2.4, carbs=12, fat=1.4, fiber=1.7, sugar=0.5),
        serving_sizes=[ServingSize("100g", 100)],
    ),
}


class FallbackTable:
    """Bidirectional substring lookup over a fixed vocabulary.

    A key matches when the query contains it ("grilled chicken breast")
    or it contains the query ("chicken").
    """

    def __init__(self, foods: Optional[Dict[str, FoodSearchResult]] = None):
        self._foods = FALLBACK_FOODS if foods is None else foods

    def match(self, query: str) -> List[FoodSearchResult]:
        """Return at most one entry matching query.

        Args:
            query: Free-text search (case-insensitive)

        Returns:
            List holding a copy of the first matching entry, or []
        """
        needle = (query or "").strip().lower()
        if not needle:
            return []

        for key, food in self._foods.items():
            if key in needle or needle in key:
                return [copy.deepcopy(food)]
        return []

    def keys(self) -> List[str]:
        return list(self._foods)
