"""Data models for the nutrition lookup service."""
import re
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional


UNKNOWN_FOOD_ID = "unknown-food"


def slugify_label(label: Optional[str]) -> str:
    """Build a stable food ID from a human-readable label.

    Args:
        label: Food label as reported by a provider (may be empty)

    Returns:
        Lowercase label with whitespace runs replaced by "-"
    """
    slug = re.sub(r"\s+", "-", (label or "").strip().lower())
    return slug or UNKNOWN_FOOD_ID


@dataclass
class NutrientValues:
    """Nutrient amounts per provider serving basis (usually per 100g)."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0

    def scaled(self, ratio: float) -> "NutrientValues":
        """Return a copy with every nutrient multiplied by ratio."""
        return NutrientValues(
            **{f.name: getattr(self, f.name) * ratio for f in fields(self)}
        )

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "NutrientValues":
        data = data or {}
        return cls(**{f.name: float(data.get(f.name) or 0.0) for f in fields(cls)})


@dataclass
class ServingSize:
    """A selectable portion (quantity is in grams)."""

    label: str
    quantity: float

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "quantity": self.quantity}


@dataclass
class FoodSearchResult:
    """Common food shape produced by every provider.

    Attributes:
        food_id: Stable identifier (native provider ID or slugified label)
        label: Human-readable food name
        nutrients: Nutrient amounts, zero when the provider omits them
        serving_sizes: Ordered selectable portions
        brand: Optional brand or brand owner
    """

    food_id: str
    label: str
    nutrients: NutrientValues = field(default_factory=NutrientValues)
    serving_sizes: List[ServingSize] = field(default_factory=list)
    brand: Optional[str] = None

    def __post_init__(self):
        if not self.food_id:
            self.food_id = slugify_label(self.label)

    def to_dict(self) -> Dict[str, Any]:
        """Render the camelCase wire shape used by API clients."""
        data: Dict[str, Any] = {
            "foodId": self.food_id,
            "label": self.label,
        }
        if self.brand is not None:
            data["brand"] = self.brand
        data["nutrients"] = self.nutrients.to_dict()
        data["servingSizes"] = [s.to_dict() for s in self.serving_sizes]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FoodSearchResult":
        return cls(
            food_id=str(data.get("foodId") or ""),
            label=data.get("label", ""),
            brand=data.get("brand"),
            nutrients=NutrientValues.from_dict(data.get("nutrients")),
            serving_sizes=[
                ServingSize(label=s["label"], quantity=float(s["quantity"]))
                for s in data.get("servingSizes", [])
            ],
        )


class LookupSource(Enum):
    """Stage of the lookup chain that produced a result."""

    CACHE = "cache"
    NETWORK = "network"
    FALLBACK = "fallback"  # an adapter's own static matches
    FALLBACK_TABLE = "fallback_table"  # the orchestrator's last resort
    NONE = "none"


@dataclass
class ProviderSearch:
    """Results of one adapter search plus where they came from."""

    results: List[FoodSearchResult]
    source: LookupSource


@dataclass
class SearchOutcome:
    """Orchestrator answer for a query.

    provider is None when the answer came from the fallback table or when
    nothing matched at all.
    """

    results: List[FoodSearchResult]
    source: LookupSource
    provider: Optional[str] = None

    @property
    def degraded(self) -> bool:
        """True when no live or cached provider data backs the answer."""
        return self.source in (
            LookupSource.FALLBACK,
            LookupSource.FALLBACK_TABLE,
            LookupSource.NONE,
        )


@dataclass
class UserMetrics:
    """Body metrics and preferences used to derive nutrition goals."""

    activity_level: str = "moderate"  # sedentary, light, moderate, active, very-active
    goal: str = "maintenance"  # weight-loss, muscle-gain, maintenance
    age: Optional[int] = None
    gender: Optional[str] = None  # male, female
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None


@dataclass
class NutritionGoals:
    """Daily calorie and macro targets."""

    calories: int
    protein_g: int
    carbs_g: int
    fats_g: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "calories": self.calories,
            "protein_g": self.protein_g,
            "carbs_g": self.carbs_g,
            "fats_g": self.fats_g,
        }


@dataclass
class RemainingNutrition:
    """What is left of the daily goals and how much has been consumed (%)."""

    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float
    percentages: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "calories": self.calories,
            "protein_g": self.protein_g,
            "carbs_g": self.carbs_g,
            "fats_g": self.fats_g,
            "percentages": dict(self.percentages),
        }
