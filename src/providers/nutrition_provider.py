"""Abstract base class for food database providers.

A provider wraps one external food database and always answers in the
common FoodSearchResult shape. The lookup steps shared by every provider
live here:

    credentials? ──no──► static fallback matches
         │
    cache hit? ──yes──► cached results
         │
    rate limit ok? ──no──► static fallback matches
         │
    network call ──error──► static fallback matches
         │
    map + cache + return

Subclasses only implement the network call (:meth:`_fetch_search`).
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from src.data_layer.models import (
    FoodSearchResult,
    LookupSource,
    NutrientValues,
    ProviderSearch,
)
from src.ingestion.errors import ProviderRequestError
from src.ingestion.fallback_foods import FallbackTable
from src.ingestion.food_cache import FoodCache, search_key
from src.ingestion.rate_limiter import RateLimiter


logger = logging.getLogger(__name__)

# Malformed payloads surface as one of these while mapping
MAPPING_ERRORS = (TypeError, AttributeError, KeyError, ValueError)


class NutritionProvider(ABC):
    """Abstraction for one food database.

    Args:
        cache: Shared FoodCache (one per service)
        rate_limiter: Shared RateLimiter (one per service)
        fallback_table: Static matches used when the network is unavailable
    """

    def __init__(
        self,
        cache: FoodCache,
        rate_limiter: RateLimiter,
        fallback_table: Optional[FallbackTable] = None,
    ) -> None:
        self.cache = cache
        self.rate_limiter = rate_limiter
        self.fallback_table = fallback_table or FallbackTable()

    @property
    @abstractmethod
    def name(self) -> str:
        """Short provider name, also used as the cache key prefix."""
        ...

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when credentials for the network API are present."""
        ...

    @abstractmethod
    def _fetch_search(self, query: str) -> List[FoodSearchResult]:
        """Call the remote API and map its response.

        Raises:
            ProviderRequestError: On any HTTP-level failure
        """
        ...

    def search(self, query: str) -> ProviderSearch:
        """Search for foods and report which stage answered.

        Never raises for network, configuration or rate-limit problems;
        those all degrade to the fallback table.
        """
        if not self.is_configured:
            logger.debug("%s not configured, using fallback foods for '%s'", self.name, query)
            return self._fallback(query)

        key = search_key(self.name, query)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Using cached %s search: %s", self.name, query)
            return ProviderSearch(results=cached, source=LookupSource.CACHE)

        if not self.rate_limiter.check_rate_limit():
            logger.warning("Rate limit exceeded, %s using fallback for '%s'", self.name, query)
            return self._fallback(query)

        try:
            results = self._fetch_search(query)
        except ProviderRequestError as e:
            logger.error("%s search failed for '%s': %s", self.name, query, e)
            return self._fallback(query)
        except MAPPING_ERRORS as e:
            logger.error("%s returned an unexpected payload for '%s': %s", self.name, query, e)
            return self._fallback(query)

        self.cache.set(key, results)
        return ProviderSearch(results=results, source=LookupSource.NETWORK)

    def search_food(self, query: str) -> List[FoodSearchResult]:
        """Search for foods matching query (always returns a list)."""
        return self.search(query).results

    def get_food_details(self, food_id: str) -> Optional[FoodSearchResult]:
        """Single-item lookup; None when unsupported or not found."""
        return None

    def calculate_nutrition(
        self, food_id: str, quantity: float, unit: str
    ) -> Optional[NutrientValues]:
        """Placeholder: scaling is done by the multi-provider service."""
        return None

    def fallback_results(self, query: str) -> List[FoodSearchResult]:
        """Static matches for query from this provider's fallback table."""
        return self.fallback_table.match(query)

    def _fallback(self, query: str) -> ProviderSearch:
        return ProviderSearch(results=self.fallback_results(query), source=LookupSource.FALLBACK)
