"""Quantity scaling for provider nutrient values.

Provider nutrients are per 100g, so scaling is a linear proportion:
ratio = grams / 100, applied to every nutrient.
"""
import math
from typing import Dict

from src.data_layer.models import FoodSearchResult, NutrientValues
from src.data_layer.exceptions import InvalidQuantityError


BASE_GRAMS = 100.0

UNIT_TO_GRAMS: Dict[str, float] = {
    "g": 1.0,
    "gram": 1.0,
    "grams": 1.0,
    "oz": 28.35,
    "ounce": 28.35,
    "ounces": 28.35,
    "lb": 453.6,
    "pound": 453.6,
    "pounds": 453.6,
    # 1ml water ≈ 1g; close enough for drinks
    "ml": 1.0,
    "milliliter": 1.0,
    "milliliters": 1.0,
    "kg": 1000.0,
    "kilogram": 1000.0,
    "kilograms": 1000.0,
}


def convert_to_grams(quantity: float, unit: str) -> float:
    """Convert a quantity to grams.

    Unknown units are treated as grams.

    Args:
        quantity: Amount in the given unit
        unit: Unit name, case-insensitive (e.g. "oz", "Grams")

    Returns:
        Weight in grams

    Raises:
        InvalidQuantityError: If quantity is not a finite, non-negative number
    """
    try:
        value = float(quantity)
    except (TypeError, ValueError):
        raise InvalidQuantityError(quantity, "quantity must be a number")
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise InvalidQuantityError(quantity, "quantity must be a finite, non-negative number")

    factor = UNIT_TO_GRAMS.get((unit or "g").strip().lower(), 1.0)
    return value * factor


def calculate_nutrition_for_quantity(
    food: FoodSearchResult, quantity: float, unit: str
) -> NutrientValues:
    """Scale a food's per-100g nutrients to the given quantity.

    Calories are rounded to whole numbers, everything else to one decimal.

    Args:
        food: Resolved food with per-100g nutrients
        quantity: Amount eaten
        unit: Unit of quantity

    Returns:
        NutrientValues for the eaten amount
    """
    ratio = convert_to_grams(quantity, unit) / BASE_GRAMS
    scaled = food.nutrients.scaled(ratio)

    return NutrientValues(
        calories=float(round(scaled.calories)),
        protein=round(scaled.protein, 1),
        carbs=round(scaled.carbs, 1),
        fat=round(scaled.fat, 1),
        fiber=round(scaled.fiber, 1),
        sugar=round(scaled.sugar, 1),
    )
