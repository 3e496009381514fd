"""Wiring of the default provider chain from settings."""

import logging
from typing import Callable, Optional

import requests

from src.data_layer.settings import ServiceSettings
from src.ingestion.edamam_client import EdamamClient
from src.ingestion.fallback_foods import FallbackTable
from src.ingestion.food_cache import FoodCache
from src.ingestion.rate_limiter import RateLimiter
from src.ingestion.usda_client import USDAClient
from src.providers.edamam_provider import EdamamNutritionProvider
from src.providers.multi_provider import MultiProviderNutritionService
from src.providers.usda_provider import USDANutritionProvider


logger = logging.getLogger(__name__)


def build_nutrition_service(
    settings: ServiceSettings,
    session: Optional[requests.Session] = None,
    clock: Optional[Callable[[], float]] = None,
) -> MultiProviderNutritionService:
    """Build USDA → Edamam → fallback table with shared cache and limiter.

    Args:
        settings: Loaded ServiceSettings
        session: Optional requests session shared by both clients
        clock: Optional time source for cache and limiter (tests)

    Returns:
        Ready MultiProviderNutritionService
    """
    clock_kwargs = {"clock": clock} if clock is not None else {}
    cache = FoodCache(ttl_seconds=settings.cache_ttl_seconds, **clock_kwargs)
    rate_limiter = RateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
        **clock_kwargs,
    )
    fallback_table = FallbackTable()

    usda_client = None
    if settings.usda_configured:
        usda_client = USDAClient(
            api_key=settings.usda_api_key,
            base_url=settings.usda_base_url,
            timeout=settings.request_timeout_seconds,
            session=session,
        )
        logger.info("USDA API key configured")

    edamam_client = None
    if settings.edamam_configured:
        edamam_client = EdamamClient(
            app_id=settings.edamam_app_id,
            app_key=settings.edamam_api_key,
            base_url=settings.edamam_base_url,
            timeout=settings.request_timeout_seconds,
            session=session,
        )
        logger.info("Edamam credentials configured")

    providers = [
        USDANutritionProvider(usda_client, cache, rate_limiter, fallback_table),
        EdamamNutritionProvider(edamam_client, cache, rate_limiter, fallback_table),
    ]
    return MultiProviderNutritionService(providers, fallback_table)
