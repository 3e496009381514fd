"""Daily nutrition goals from body metrics."""
from typing import Dict, Mapping, Tuple

from src.data_layer.models import NutritionGoals, RemainingNutrition, UserMetrics


DEFAULT_BMR = 2000.0
MINIMUM_CALORIES = 1200
WEIGHT_LOSS_DEFICIT = 500
MUSCLE_GAIN_SURPLUS = 400

ACTIVITY_MULTIPLIERS: Dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very-active": 1.9,
}

# goal -> (protein, carbs, fats) share of calories
MACRO_SPLITS: Dict[str, Tuple[float, float, float]] = {
    "weight-loss": (0.35, 0.35, 0.30),
    "muscle-gain": (0.30, 0.45, 0.25),
    "maintenance": (0.30, 0.40, 0.30),
}

CALORIES_PER_GRAM = {"protein": 4, "carbs": 4, "fats": 9}


def calculate_bmr(metrics: UserMetrics) -> float:
    """Basal metabolic rate (Mifflin-St Jeor).

    Falls back to DEFAULT_BMR when any of weight, height, age or gender is
    missing.
    """
    if not (metrics.weight_kg and metrics.height_cm and metrics.age and metrics.gender):
        return DEFAULT_BMR

    base = 10 * metrics.weight_kg + 6.25 * metrics.height_cm - 5 * metrics.age
    if metrics.gender.lower() == "male":
        return base + 5
    return base - 161


def calculate_tdee(bmr: float, activity_level: str) -> int:
    """Total daily energy expenditure for an activity level."""
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level, ACTIVITY_MULTIPLIERS["moderate"])
    return round(bmr * multiplier)


def calculate_macros(calories: float, goal: str) -> Dict[str, int]:
    """Split calories into protein/carbs/fats grams."""
    protein_share, carbs_share, fats_share = MACRO_SPLITS.get(goal, MACRO_SPLITS["maintenance"])
    return {
        "protein_g": round(calories * protein_share / CALORIES_PER_GRAM["protein"]),
        "carbs_g": round(calories * carbs_share / CALORIES_PER_GRAM["carbs"]),
        "fats_g": round(calories * fats_share / CALORIES_PER_GRAM["fats"]),
    }


def calculate_nutrition_goals(metrics: UserMetrics) -> NutritionGoals:
    """Derive daily targets, adjusted for the user's goal.

    Weight loss subtracts WEIGHT_LOSS_DEFICIT (never below
    MINIMUM_CALORIES); muscle gain adds MUSCLE_GAIN_SURPLUS.
    """
    tdee = calculate_tdee(calculate_bmr(metrics), metrics.activity_level)

    if metrics.goal == "weight-loss":
        tdee = max(tdee - WEIGHT_LOSS_DEFICIT, MINIMUM_CALORIES)
    elif metrics.goal == "muscle-gain":
        tdee = tdee + MUSCLE_GAIN_SURPLUS

    macros = calculate_macros(tdee, metrics.goal)
    return NutritionGoals(calories=round(tdee), **macros)


def calculate_remaining(
    goals: NutritionGoals, consumed: Mapping[str, float]
) -> RemainingNutrition:
    """What is left for the day and how much of each target is used.

    Args:
        goals: Daily targets
        consumed: Totals so far, keyed calories/protein_g/carbs_g/fats_g
            (missing keys count as zero)

    Returns:
        RemainingNutrition with values floored at zero and percentages
        (0 when a target is zero)
    """
    targets = goals.to_dict()
    remaining = {}
    percentages = {}
    for key, target in targets.items():
        eaten = float(consumed.get(key, 0.0) or 0.0)
        remaining[key] = max(0.0, target - eaten)
        percentages[key] = (eaten / target) * 100 if target > 0 else 0.0

    return RemainingNutrition(percentages=percentages, **remaining)
