"""Multi-provider nutrition service.

Tries providers in a fixed priority order and stops at the first non-empty
answer. When every provider comes back empty, the static fallback table is
consulted directly. Nothing raised by a provider escapes this class: the
worst case is an empty result list.
"""

import logging
from typing import List, Optional, Sequence

from src.data_layer.models import (
    FoodSearchResult,
    LookupSource,
    NutrientValues,
    SearchOutcome,
)
from src.ingestion.fallback_foods import FallbackTable
from src.nutrition.calculator import calculate_nutrition_for_quantity
from src.providers.nutrition_provider import NutritionProvider


logger = logging.getLogger(__name__)


class MultiProviderNutritionService:
    """Ordered chain of nutrition providers.

    Adding a provider is a matter of passing it in ``providers``; the
    search loop does not know how many there are.

    Usage::

        service = build_nutrition_service(settings)
        outcome = service.search("banana")
        outcome.results, outcome.source, outcome.provider
    """

    def __init__(
        self,
        providers: Sequence[NutritionProvider],
        fallback_table: Optional[FallbackTable] = None,
    ) -> None:
        self.providers: List[NutritionProvider] = list(providers)
        self.fallback_table = fallback_table or FallbackTable()

    def search(self, query: str) -> SearchOutcome:
        """Find foods for query, reporting which stage answered.

        Args:
            query: Free-text food name

        Returns:
            SearchOutcome; results is [] when nothing matched anywhere
        """
        for provider in self.providers:
            try:
                found = provider.search(query)
            except Exception:
                logger.exception("Provider %s raised while searching '%s'", provider.name, query)
                continue

            if found.results:
                logger.info(
                    "Search '%s' answered by %s (%s, %d results)",
                    query, provider.name, found.source.value, len(found.results),
                )
                return SearchOutcome(
                    results=found.results,
                    source=found.source,
                    provider=provider.name,
                )
            logger.info("%s returned no results for '%s', trying next provider", provider.name, query)

        fallback = self.fallback_table.match(query)
        if fallback:
            logger.warning("Search '%s' degraded to the static fallback table", query)
            return SearchOutcome(results=fallback, source=LookupSource.FALLBACK_TABLE)

        logger.info("No results for '%s' from any source", query)
        return SearchOutcome(results=[], source=LookupSource.NONE)

    def search_food(self, query: str) -> List[FoodSearchResult]:
        """Find foods for query (always a list, never raises)."""
        return self.search(query).results

    def get_food_details(self, food_id: str) -> Optional[FoodSearchResult]:
        """First non-None details lookup across providers."""
        for provider in self.providers:
            try:
                food = provider.get_food_details(food_id)
            except Exception:
                logger.exception("Provider %s raised while fetching %s", provider.name, food_id)
                continue
            if food is not None:
                return food
        return None

    def calculate_nutrition(
        self, food_id: str, quantity: float, unit: str
    ) -> Optional[NutrientValues]:
        """Nutrients for a quantity of a food.

        Returns:
            Scaled NutrientValues, or None if the food cannot be resolved

        Raises:
            InvalidQuantityError: If quantity is negative or not a number
        """
        food = self.get_food_details(food_id)
        if food is None:
            return None
        return calculate_nutrition_for_quantity(food, quantity, unit)
