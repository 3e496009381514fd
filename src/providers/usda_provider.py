"""USDA FoodData Central provider (primary)."""

import logging
from typing import List, Optional

from src.data_layer.models import FoodSearchResult
from src.ingestion.errors import ProviderRequestError
from src.ingestion.fallback_foods import FallbackTable
from src.ingestion.food_cache import FoodCache, food_key
from src.ingestion.nutrient_mapper import map_usda_food, map_usda_foods
from src.ingestion.rate_limiter import RateLimiter
from src.ingestion.usda_client import USDAClient
from src.providers.nutrition_provider import MAPPING_ERRORS, NutritionProvider


logger = logging.getLogger(__name__)


class USDANutritionProvider(NutritionProvider):
    """Provider backed by the USDA FoodData Central API.

    Pass ``client=None`` when no API key is configured; searches then answer
    from the fallback table and details lookups return None.

    Usage::

        provider = USDANutritionProvider(
            client=USDAClient(api_key="key"),
            cache=FoodCache(),
            rate_limiter=RateLimiter(),
        )
        provider.search_food("chicken breast")
    """

    def __init__(
        self,
        client: Optional[USDAClient],
        cache: FoodCache,
        rate_limiter: RateLimiter,
        fallback_table: Optional[FallbackTable] = None,
    ) -> None:
        super().__init__(cache, rate_limiter, fallback_table)
        self.client = client
        if client is None:
            logger.warning("USDA API key not configured. Nutrition search will be limited.")

    @property
    def name(self) -> str:
        return "usda"

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    def _fetch_search(self, query: str) -> List[FoodSearchResult]:
        return map_usda_foods(self.client.search_foods(query))

    def get_food_details(self, food_id: str) -> Optional[FoodSearchResult]:
        """Fetch one food by FDC ID.

        Returns:
            FoodSearchResult, or None when unconfigured, rate limited, not
            found or the request fails
        """
        if not self.is_configured or not food_id:
            return None

        key = food_key(self.name, food_id)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        if not self.rate_limiter.check_rate_limit():
            logger.warning("Rate limit exceeded, skipping USDA details for %s", food_id)
            return None

        try:
            payload = self.client.get_food(food_id)
            result = map_usda_food(payload)
        except ProviderRequestError as e:
            logger.error("Error getting USDA food details for %s: %s", food_id, e)
            return None
        except MAPPING_ERRORS as e:
            logger.error("Unexpected USDA details payload for %s: %s", food_id, e)
            return None

        self.cache.set(key, result)
        return result
