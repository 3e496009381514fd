"""Shared fixtures for lookup-chain tests."""

import pytest
from unittest.mock import Mock


class FakeClock:
    """Manually advanced time source for cache and limiter tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_response(status_code: int = 200, payload=None, json_error: Exception = None) -> Mock:
    """Build a requests-like response mock."""
    response = Mock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload if payload is not None else {}
    return response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def usda_chicken_payload():
    """USDA search response with one Foundation food."""
    return {
        "totalHits": 1,
        "foods": [
            {
                "fdcId": 171077,
                "description": "Chicken, breast, meat only, cooked, roasted",
                "dataType": "Foundation",
                "servingSize": 85,
                "servingSizeUnit": "g",
                "foodNutrients": [
                    {"nutrientName": "Protein", "value": 31.0, "unitName": "G"},
                    {"nutrientName": "Total lipid (fat)", "value": 3.57, "unitName": "G"},
                    {"nutrientName": "Fatty acids, total saturated", "value": 1.01, "unitName": "G"},
                    {"nutrientName": "Carbohydrate, by difference", "value": 0.0, "unitName": "G"},
                    {"nutrientName": "Energy", "value": 165, "unitName": "KCAL"},
                ],
            }
        ],
    }


@pytest.fixture
def edamam_banana_payload():
    """Edamam parser response with one hint."""
    return {
        "text": "banana",
        "hints": [
            {
                "food": {
                    "foodId": "food_bjsfxtcaidvmhaa3afrbna43q3hu",
                    "label": "Banana",
                    "nutrients": {
                        "ENERC_KCAL": 89,
                        "PROCNT": 1.09,
                        "FAT": 0.33,
                        "CHOCDF": 22.84,
                        "FIBTG": 2.6,
                    },
                    "servingSizes": [{"label": "Whole", "quantity": 118}],
                }
            }
        ],
    }
