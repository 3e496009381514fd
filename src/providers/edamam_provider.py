"""Edamam Food Database provider (secondary)."""

from typing import List, Optional

from src.data_layer.models import FoodSearchResult
from src.ingestion.edamam_client import EdamamClient
from src.ingestion.fallback_foods import FallbackTable
from src.ingestion.food_cache import FoodCache
from src.ingestion.nutrient_mapper import map_edamam_hints
from src.ingestion.rate_limiter import RateLimiter
from src.providers.nutrition_provider import NutritionProvider


class EdamamNutritionProvider(NutritionProvider):
    """Provider backed by the Edamam food parser.

    Only search is supported. :meth:`get_food_details` is inherited and
    always returns None: details need Edamam's separate nutrients endpoint,
    which is not wired up.
    """

    def __init__(
        self,
        client: Optional[EdamamClient],
        cache: FoodCache,
        rate_limiter: RateLimiter,
        fallback_table: Optional[FallbackTable] = None,
    ) -> None:
        super().__init__(cache, rate_limiter, fallback_table)
        self.client = client

    @property
    def name(self) -> str:
        return "edamam"

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    def _fetch_search(self, query: str) -> List[FoodSearchResult]:
        return map_edamam_hints(self.client.parse(query))
