"""Tests for the multi-provider lookup chain."""

import pytest
from unittest.mock import Mock

from src.data_layer.exceptions import InvalidQuantityError
from src.data_layer.models import (
    FoodSearchResult,
    LookupSource,
    NutrientValues,
    ProviderSearch,
    ServingSize,
)
from src.data_layer.settings import ServiceSettings
from src.providers.factory import build_nutrition_service
from src.providers.multi_provider import MultiProviderNutritionService
from src.providers.nutrition_provider import NutritionProvider


def make_provider(name, results=None, source=LookupSource.NETWORK, details=None):
    """Provider mock answering every search with ``results``."""
    provider = Mock(spec=NutritionProvider)
    provider.name = name
    provider.search.return_value = ProviderSearch(results=results or [], source=source)
    provider.get_food_details.return_value = details
    return provider


@pytest.fixture
def greek_yogurt():
    return FoodSearchResult(
        food_id="555",
        label="Greek Yogurt",
        brand="Fage",
        nutrients=NutrientValues(calories=97, protein=9, carbs=3.98, fat=5),
        serving_sizes=[ServingSize("100g", 100)],
    )


class TestSearch:
    """Tests for provider ordering and degradation."""

    def test_primary_results_pass_through_unchanged(self, greek_yogurt):
        primary = make_provider("usda", [greek_yogurt])
        secondary = make_provider("edamam")
        service = MultiProviderNutritionService([primary, secondary])

        outcome = service.search("greek yogurt")

        assert outcome.results == [greek_yogurt]
        assert outcome.source == LookupSource.NETWORK
        assert outcome.provider == "usda"
        secondary.search.assert_not_called()

    def test_secondary_used_when_primary_empty(self, greek_yogurt):
        primary = make_provider("usda")
        secondary = make_provider("edamam", [greek_yogurt], source=LookupSource.CACHE)
        service = MultiProviderNutritionService([primary, secondary])

        outcome = service.search("greek yogurt")

        assert outcome.provider == "edamam"
        assert outcome.source == LookupSource.CACHE

    def test_fallback_table_when_all_providers_empty(self):
        service = MultiProviderNutritionService([make_provider("usda"), make_provider("edamam")])

        outcome = service.search("grilled chicken breast")

        assert [f.food_id for f in outcome.results] == ["chicken-breast"]
        assert outcome.source == LookupSource.FALLBACK_TABLE
        assert outcome.provider is None
        assert outcome.degraded is True

    def test_nothing_found(self):
        service = MultiProviderNutritionService([make_provider("usda"), make_provider("edamam")])

        outcome = service.search("quinoa")

        assert outcome.results == []
        assert outcome.source == LookupSource.NONE

    def test_raising_provider_is_skipped(self, greek_yogurt):
        broken = make_provider("usda")
        broken.search.side_effect = RuntimeError("bug")
        service = MultiProviderNutritionService([broken, make_provider("edamam", [greek_yogurt])])

        assert service.search_food("yogurt") == [greek_yogurt]

    def test_every_provider_raising_still_returns_list(self):
        broken = make_provider("usda")
        broken.search.side_effect = RuntimeError("bug")

        results = MultiProviderNutritionService([broken]).search_food("banana")

        assert isinstance(results, list)
        assert results[0].food_id == "banana"

    def test_no_providers(self):
        service = MultiProviderNutritionService([])
        assert service.search("rice").source == LookupSource.FALLBACK_TABLE


class TestDetailsAndNutrition:
    """Tests for single-item lookups and scaling."""

    def test_first_non_none_details(self, greek_yogurt):
        first = make_provider("usda")
        second = make_provider("edamam", details=greek_yogurt)
        service = MultiProviderNutritionService([first, second])

        assert service.get_food_details("555") is greek_yogurt
        first.get_food_details.assert_called_once_with("555")

    def test_details_not_found(self):
        service = MultiProviderNutritionService([make_provider("usda")])
        assert service.get_food_details("nope") is None

    def test_details_exception_skipped(self, greek_yogurt):
        broken = make_provider("usda")
        broken.get_food_details.side_effect = RuntimeError("bug")
        service = MultiProviderNutritionService([broken, make_provider("edamam", details=greek_yogurt)])

        assert service.get_food_details("555") is greek_yogurt

    def test_calculate_nutrition(self, greek_yogurt):
        service = MultiProviderNutritionService([make_provider("usda", details=greek_yogurt)])

        nutrients = service.calculate_nutrition("555", 200, "g")

        assert nutrients.calories == 194
        assert nutrients.protein == 18.0
        assert nutrients.carbs == 8.0

    def test_calculate_nutrition_unknown_food(self):
        service = MultiProviderNutritionService([make_provider("usda")])
        assert service.calculate_nutrition("nope", 100, "g") is None

    def test_calculate_nutrition_negative_quantity(self, greek_yogurt):
        service = MultiProviderNutritionService([make_provider("usda", details=greek_yogurt)])

        with pytest.raises(InvalidQuantityError):
            service.calculate_nutrition("555", -1, "g")


class TestBuildNutritionService:
    """Tests for default chain wiring."""

    def test_no_credentials_banana(self):
        """Without credentials the first adapter answers from its static table."""
        service = build_nutrition_service(ServiceSettings())

        outcome = service.search("banana")

        assert len(outcome.results) == 1
        assert outcome.results[0].to_dict() == {
            "foodId": "banana",
            "label": "Banana",
            "nutrients": {
                "calories": 89,
                "protein": 1.1,
                "carbs": 23,
                "fat": 0.3,
                "fiber": 2.6,
                "sugar": 12,
            },
            "servingSizes": [{"label": "1 medium", "quantity": 118}],
        }
        assert outcome.source == LookupSource.FALLBACK
        assert outcome.provider == "usda"

    def test_whitespace_key_degrades_instead_of_failing(self):
        service = build_nutrition_service(ServiceSettings(usda_api_key="  ", edamam_api_key=" "))

        usda, edamam = service.providers
        assert usda.client is None
        assert edamam.client is None
        assert service.search_food("banana")[0].food_id == "banana"

    def test_provider_order(self):
        service = build_nutrition_service(ServiceSettings())
        assert [p.name for p in service.providers] == ["usda", "edamam"]

    def test_shared_cache_and_limiter(self):
        service = build_nutrition_service(ServiceSettings(usda_api_key="KEY"))
        usda, edamam = service.providers
        assert usda.cache is edamam.cache
        assert usda.rate_limiter is edamam.rate_limiter

    def test_configured_clients(self):
        session = Mock()
        settings = ServiceSettings(
            usda_api_key="KEY",
            edamam_app_id="APP",
            edamam_api_key="SECRET",
            request_timeout_seconds=3,
        )

        usda, edamam = build_nutrition_service(settings, session=session).providers

        assert usda.client.api_key == "KEY"
        assert usda.client.timeout == 3
        assert usda.client.session is session
        assert edamam.client.app_id == "APP"

    def test_repeated_query_one_network_call(self, clock, response_factory, usda_chicken_payload):
        session = Mock()
        session.get.return_value = response_factory(200, usda_chicken_payload)
        service = build_nutrition_service(
            ServiceSettings(usda_api_key="KEY"), session=session, clock=clock
        )

        first = service.search("chicken breast")
        second = service.search("chicken breast")

        assert first.source == LookupSource.NETWORK
        assert second.source == LookupSource.CACHE
        assert first.results == second.results
        assert session.get.call_count == 1

    def test_rate_limit_from_settings(self, clock, response_factory, usda_chicken_payload):
        session = Mock()
        session.get.return_value = response_factory(200, usda_chicken_payload)
        settings = ServiceSettings(usda_api_key="KEY", rate_limit_max_requests=1)
        service = build_nutrition_service(settings, session=session, clock=clock)

        service.search("chicken breast")
        outcome = service.search("banana")

        assert outcome.source == LookupSource.FALLBACK
        assert outcome.results[0].food_id == "banana"
        assert session.get.call_count == 1
