"""Formatters for lookup results (JSON and Markdown)."""

import json
from typing import Any, Dict, Optional

from src.data_layer.models import (
    FoodSearchResult,
    NutrientValues,
    NutritionGoals,
    RemainingNutrition,
    SearchOutcome,
)


def _format_number(value: float) -> str:
    """Drop a trailing .0 (165.0 -> "165", 3.6 -> "3.6")."""
    if value == int(value):
        return str(int(value))
    return f"{value:.1f}".rstrip("0").rstrip(".")


def format_nutrients_line(nutrients: NutrientValues) -> str:
    """One-line summary like "165 kcal · P 31g · C 0g · F 3.6g"."""
    return (
        f"{_format_number(nutrients.calories)} kcal · "
        f"P {_format_number(nutrients.protein)}g · "
        f"C {_format_number(nutrients.carbs)}g · "
        f"F {_format_number(nutrients.fat)}g · "
        f"fiber {_format_number(nutrients.fiber)}g · "
        f"sugar {_format_number(nutrients.sugar)}g"
    )


def format_food_markdown(food: FoodSearchResult) -> str:
    """Format a food as a Markdown list item with its servings."""
    title = f"**{food.label}**"
    if food.brand:
        title += f" ({food.brand})"
    lines = [
        f"- {title} `{food.food_id}`",
        f"  - {format_nutrients_line(food.nutrients)}",
    ]
    if food.serving_sizes:
        servings = ", ".join(
            f"{s.label} = {_format_number(s.quantity)}g" for s in food.serving_sizes
        )
        lines.append(f"  - Servings: {servings}")
    return "\n".join(lines)


def format_search_markdown(query: str, outcome: SearchOutcome) -> str:
    """Format a search outcome as a Markdown report.

    Args:
        query: The searched text
        outcome: Orchestrator result

    Returns:
        Markdown string
    """
    source = outcome.source.value
    if outcome.provider:
        source = f"{outcome.provider} ({source})"

    lines = [f"# Results for \"{query}\"", "", f"_Source: {source}_", ""]
    if not outcome.results:
        lines.append("No foods found.")
    else:
        lines.extend(format_food_markdown(food) for food in outcome.results)
    return "\n".join(lines)


def format_search_json(outcome: SearchOutcome) -> Dict[str, Any]:
    """Search payload shared by the CLI and the HTTP API."""
    return {
        "foods": [food.to_dict() for food in outcome.results],
        "count": len(outcome.results),
        "source": outcome.source.value,
        "provider": outcome.provider,
    }


def format_goals_markdown(goals: NutritionGoals) -> str:
    lines = [
        "# Daily Goals",
        "",
        f"**Calories:** {goals.calories} kcal",
        f"**Protein:** {goals.protein_g}g",
        f"**Carbs:** {goals.carbs_g}g",
        f"**Fats:** {goals.fats_g}g",
    ]
    return "\n".join(lines)


def format_remaining_markdown(remaining: RemainingNutrition) -> str:
    """Format remaining daily intake with the share already consumed."""
    rows = [
        ("Calories", remaining.calories, " kcal", "calories"),
        ("Protein", remaining.protein_g, "g", "protein_g"),
        ("Carbs", remaining.carbs_g, "g", "carbs_g"),
        ("Fats", remaining.fats_g, "g", "fats_g"),
    ]
    lines = ["# Remaining Today", ""]
    for title, value, unit, key in rows:
        used = remaining.percentages.get(key, 0.0)
        lines.append(f"**{title}:** {_format_number(value)}{unit} left ({used:.0f}% used)")
    return "\n".join(lines)


def to_json_string(payload: Any, indent: Optional[int] = 2) -> str:
    """Serialize a formatter payload (dicts/lists of plain values)."""
    return json.dumps(payload, indent=indent)
