"""Ingestion layer: provider HTTP clients, mapping, caching and limits."""

from src.ingestion.errors import (
    ProviderErrorCode,
    ProviderRequestError,
)

from src.ingestion.usda_client import USDAClient
from src.ingestion.edamam_client import EdamamClient

from src.ingestion.nutrient_mapper import (
    EDAMAM_NUTRIENT_CODES,
    extract_usda_nutrients,
    map_usda_food,
    map_usda_foods,
    map_edamam_hint,
    map_edamam_hints,
)

from src.ingestion.food_cache import (
    FoodCache,
    search_key,
    food_key,
)

from src.ingestion.rate_limiter import RateLimiter

from src.ingestion.fallback_foods import (
    FALLBACK_FOODS,
    FallbackTable,
)

__all__ = [
    # Error types
    "ProviderErrorCode",
    "ProviderRequestError",
    # HTTP clients
    "USDAClient",
    "EdamamClient",
    # Nutrient mapping
    "EDAMAM_NUTRIENT_CODES",
    "extract_usda_nutrients",
    "map_usda_food",
    "map_usda_foods",
    "map_edamam_hint",
    "map_edamam_hints",
    # Caching
    "FoodCache",
    "search_key",
    "food_key",
    # Rate limiting
    "RateLimiter",
    # Static fallback
    "FALLBACK_FOODS",
    "FallbackTable",
]
