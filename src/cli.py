#!/usr/bin/env python3
"""Command-line interface for food search and nutrition calculations."""

import argparse
import sys
from typing import List, Optional

from src.data_layer.exceptions import ConfigurationError, InvalidQuantityError
from src.data_layer.models import UserMetrics
from src.data_layer.settings import DEFAULT_SETTINGS_PATH, SettingsLoader, configure_logging
from src.nutrition.goals import calculate_nutrition_goals, calculate_remaining
from src.output.formatters import (
    format_food_markdown,
    format_goals_markdown,
    format_nutrients_line,
    format_remaining_markdown,
    format_search_json,
    format_search_markdown,
    to_json_string,
)
from src.providers.factory import build_nutrition_service
from src.providers.multi_provider import MultiProviderNutritionService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Look up foods across USDA, Edamam and a built-in table"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_SETTINGS_PATH,
        help=f"Path to settings YAML file (default: {DEFAULT_SETTINGS_PATH})"
    )
    parser.add_argument(
        "--output",
        type=str,
        choices=["markdown", "json"],
        default="markdown",
        help="Output format: markdown (default) or json"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output to stderr"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Search foods by name")
    search.add_argument("query", nargs="+", help="Food name, e.g. chicken breast")

    details = commands.add_parser("details", help="Show one food by ID")
    details.add_argument("food_id")

    calculate = commands.add_parser("calculate", help="Nutrients for a quantity of a food")
    calculate.add_argument("food_id")
    calculate.add_argument("quantity", type=float)
    calculate.add_argument("unit", nargs="?", default="g")

    goals = commands.add_parser("goals", help="Daily calorie and macro targets")
    _add_metrics_arguments(goals)

    remaining = commands.add_parser(
        "remaining", help="What is left of today's targets after eating"
    )
    _add_metrics_arguments(remaining)
    remaining.add_argument("--consumed-calories", type=float, default=0.0)
    remaining.add_argument("--consumed-protein-g", type=float, default=0.0)
    remaining.add_argument("--consumed-carbs-g", type=float, default=0.0)
    remaining.add_argument("--consumed-fats-g", type=float, default=0.0)

    return parser


def _add_metrics_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--activity-level",
        choices=["sedentary", "light", "moderate", "active", "very-active"],
        default="moderate",
    )
    parser.add_argument(
        "--goal",
        choices=["weight-loss", "muscle-gain", "maintenance"],
        default="maintenance",
    )
    parser.add_argument("--age", type=int)
    parser.add_argument("--gender", choices=["male", "female"])
    parser.add_argument("--height-cm", type=float)
    parser.add_argument("--weight-kg", type=float)


def _metrics_from_args(args: argparse.Namespace) -> UserMetrics:
    return UserMetrics(
        activity_level=args.activity_level,
        goal=args.goal,
        age=args.age,
        gender=args.gender,
        height_cm=args.height_cm,
        weight_kg=args.weight_kg,
    )


def run_command(args: argparse.Namespace, service: MultiProviderNutritionService) -> int:
    """Execute a parsed command and print its output.

    Returns:
        Process exit code (0 ok, 1 not found, 2 bad input)
    """
    as_json = args.output == "json"

    if args.command == "search":
        query = " ".join(args.query).strip()
        if not query:
            print("Error: search query is required", file=sys.stderr)
            return 2
        outcome = service.search(query)
        if as_json:
            print(to_json_string(format_search_json(outcome)))
        else:
            print(format_search_markdown(query, outcome))
        return 0

    if args.command == "details":
        food = service.get_food_details(args.food_id)
        if food is None:
            print(f"Error: food '{args.food_id}' not found", file=sys.stderr)
            return 1
        print(to_json_string(food.to_dict()) if as_json else format_food_markdown(food))
        return 0

    if args.command == "calculate":
        try:
            nutrients = service.calculate_nutrition(args.food_id, args.quantity, args.unit)
        except InvalidQuantityError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        if nutrients is None:
            print(f"Error: food '{args.food_id}' not found", file=sys.stderr)
            return 1
        if as_json:
            print(to_json_string(nutrients.to_dict()))
        else:
            print(f"{args.quantity:g} {args.unit} of {args.food_id}: {format_nutrients_line(nutrients)}")
        return 0

    if args.command == "goals":
        goals = calculate_nutrition_goals(_metrics_from_args(args))
        print(to_json_string(goals.to_dict()) if as_json else format_goals_markdown(goals))
        return 0

    if args.command == "remaining":
        consumed = {
            "calories": args.consumed_calories,
            "protein_g": args.consumed_protein_g,
            "carbs_g": args.consumed_carbs_g,
            "fats_g": args.consumed_fats_g,
        }
        if any(value < 0 for value in consumed.values()):
            print("Error: consumed amounts must be non-negative", file=sys.stderr)
            return 2
        goals = calculate_nutrition_goals(_metrics_from_args(args))
        remaining = calculate_remaining(goals, consumed)
        print(to_json_string(remaining.to_dict()) if as_json else format_remaining_markdown(remaining))
        return 0

    print(f"Error: unknown command {args.command}", file=sys.stderr)
    return 2


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = SettingsLoader(args.config).load()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging("DEBUG" if args.verbose else settings.log_level)
    service = build_nutrition_service(settings)
    return run_command(args, service)


if __name__ == "__main__":
    sys.exit(main())
