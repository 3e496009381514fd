"""Tests for lookup data models."""

import pytest

from src.data_layer.models import (
    FoodSearchResult,
    LookupSource,
    NutrientValues,
    SearchOutcome,
    ServingSize,
    slugify_label,
)


class TestSlugifyLabel:
    """Tests for deterministic food ID synthesis."""

    def test_lowercases_and_hyphenates(self):
        assert slugify_label("Chicken Breast") == "chicken-breast"

    def test_collapses_whitespace_runs(self):
        assert slugify_label("  Greek   Yogurt\tPlain ") == "greek-yogurt-plain"

    def test_blank_label_gets_placeholder(self):
        assert slugify_label("") == "unknown-food"
        assert slugify_label(None) == "unknown-food"

    def test_same_label_same_id(self):
        assert slugify_label("Oat Milk") == slugify_label("oat milk")


class TestNutrientValues:
    """Tests for the NutrientValues dataclass."""

    def test_defaults_are_zero(self):
        values = NutrientValues()
        assert values.to_dict() == {
            "calories": 0.0,
            "protein": 0.0,
            "carbs": 0.0,
            "fat": 0.0,
            "fiber": 0.0,
            "sugar": 0.0,
        }

    def test_scaled_multiplies_every_field(self):
        values = NutrientValues(calories=100, protein=10, carbs=20, fat=5, fiber=2, sugar=1)
        doubled = values.scaled(2)
        assert doubled.calories == 200
        assert doubled.protein == 20
        assert doubled.sugar == 2
        # Original untouched
        assert values.calories == 100

    def test_from_dict_replaces_missing_and_null_with_zero(self):
        values = NutrientValues.from_dict({"calories": 50, "fiber": None})
        assert values.calories == 50.0
        assert values.fiber == 0.0
        assert values.sugar == 0.0


class TestFoodSearchResult:
    """Tests for the common food shape."""

    def test_empty_food_id_is_synthesized_from_label(self):
        food = FoodSearchResult(food_id="", label="Brown Rice")
        assert food.food_id == "brown-rice"

    def test_to_dict_uses_wire_names(self):
        food = FoodSearchResult(
            food_id="123",
            label="Greek Yogurt",
            brand="Fage",
            nutrients=NutrientValues(calories=97, protein=9),
            serving_sizes=[ServingSize("100g", 100)],
        )
        d = food.to_dict()
        assert d["foodId"] == "123"
        assert d["brand"] == "Fage"
        assert d["nutrients"]["calories"] == 97
        assert d["servingSizes"] == [{"label": "100g", "quantity": 100}]

    def test_to_dict_omits_missing_brand(self):
        food = FoodSearchResult(food_id="banana", label="Banana")
        assert "brand" not in food.to_dict()

    def test_from_dict_reverses_to_dict(self):
        original = FoodSearchResult(
            food_id="egg",
            label="Egg, Whole",
            nutrients=NutrientValues(calories=155, protein=13),
            serving_sizes=[ServingSize("1 large", 50)],
        )
        assert FoodSearchResult.from_dict(original.to_dict()) == original


class TestSearchOutcome:
    """Tests for orchestrator diagnostics."""

    @pytest.mark.parametrize("source,degraded", [
        (LookupSource.NETWORK, False),
        (LookupSource.CACHE, False),
        (LookupSource.FALLBACK, True),
        (LookupSource.FALLBACK_TABLE, True),
        (LookupSource.NONE, True),
    ])
    def test_degraded_flag(self, source, degraded):
        assert SearchOutcome(results=[], source=source).degraded is degraded
