"""Output formatting for food lookups."""

from src.output.formatters import (
    format_food_markdown,
    format_goals_markdown,
    format_nutrients_line,
    format_remaining_markdown,
    format_search_json,
    format_search_markdown,
    to_json_string,
)

__all__ = [
    "format_food_markdown",
    "format_goals_markdown",
    "format_nutrients_line",
    "format_remaining_markdown",
    "format_search_json",
    "format_search_markdown",
    "to_json_string",
]
