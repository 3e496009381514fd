"""Food database providers and the multi-provider lookup chain.

This package decouples callers (API server, CLI) from concrete data
sources: they only see MultiProviderNutritionService.
"""

from src.providers.nutrition_provider import NutritionProvider
from src.providers.usda_provider import USDANutritionProvider
from src.providers.edamam_provider import EdamamNutritionProvider
from src.providers.multi_provider import MultiProviderNutritionService
from src.providers.factory import build_nutrition_service

__all__ = [
    "NutritionProvider",
    "USDANutritionProvider",
    "EdamamNutritionProvider",
    "MultiProviderNutritionService",
    "build_nutrition_service",
]
