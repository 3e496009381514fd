"""FastAPI server for food search and nutrition calculations."""

import logging
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from src.data_layer.exceptions import InvalidQuantityError
from src.data_layer.models import NutritionGoals, UserMetrics
from src.data_layer.settings import SettingsLoader, configure_logging
from src.nutrition.goals import calculate_nutrition_goals, calculate_remaining
from src.output.formatters import format_search_json
from src.providers.factory import build_nutrition_service
from src.providers.multi_provider import MultiProviderNutritionService


logger = logging.getLogger(__name__)


class GoalsRequest(BaseModel):
    activity_level: str = "moderate"
    goal: str = "maintenance"
    age: Optional[int] = Field(default=None, gt=0)
    gender: Optional[str] = None
    height_cm: Optional[float] = Field(default=None, gt=0)
    weight_kg: Optional[float] = Field(default=None, gt=0)


class GoalsTargets(BaseModel):
    calories: int = Field(ge=0)
    protein_g: int = Field(ge=0)
    carbs_g: int = Field(ge=0)
    fats_g: int = Field(ge=0)


class ConsumedTotals(BaseModel):
    calories: float = Field(default=0.0, ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
    fats_g: float = Field(default=0.0, ge=0)


class RemainingRequest(BaseModel):
    goals: GoalsTargets
    consumed: ConsumedTotals = Field(default_factory=ConsumedTotals)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": {"message": message}},
    )


def create_app(service: Optional[MultiProviderNutritionService] = None) -> FastAPI:
    """Build the API app.

    Args:
        service: Lookup chain to serve; built from settings when omitted

    Returns:
        FastAPI application
    """
    if service is None:
        settings = SettingsLoader().load()
        configure_logging(settings.log_level)
        service = build_nutrition_service(settings)

    logger.info("Serving providers: %s", ", ".join(p.name for p in service.providers))

    app = FastAPI(title="Nutrition Lookup API")
    app.state.nutrition_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Local development
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/food/search")
    def search_food(query: str = Query(default="")) -> Any:
        query = query.strip()
        if not query:
            return _error(400, "Search query is required")

        outcome = service.search(query)
        return {"success": True, "data": format_search_json(outcome)}

    @app.get("/api/food/{food_id}")
    def get_food(food_id: str) -> Any:
        food = service.get_food_details(food_id)
        if food is None:
            return _error(404, f"Food '{food_id}' not found")
        return {"success": True, "data": food.to_dict()}

    @app.get("/api/food/{food_id}/nutrition")
    def get_food_nutrition(
        food_id: str,
        quantity: float = Query(default=100.0),
        unit: str = Query(default="g"),
    ) -> Any:
        try:
            nutrients = service.calculate_nutrition(food_id, quantity, unit)
        except InvalidQuantityError as exc:
            return _error(400, str(exc))
        if nutrients is None:
            return _error(404, f"Food '{food_id}' not found")
        return {
            "success": True,
            "data": {
                "foodId": food_id,
                "quantity": quantity,
                "unit": unit,
                "nutrients": nutrients.to_dict(),
            },
        }

    @app.post("/api/goals")
    def calculate_goals(request: GoalsRequest) -> Dict[str, Any]:
        goals = calculate_nutrition_goals(UserMetrics(**request.model_dump()))
        return {"success": True, "data": goals.to_dict()}

    @app.post("/api/goals/remaining")
    def calculate_goals_remaining(request: RemainingRequest) -> Dict[str, Any]:
        goals = NutritionGoals(**request.goals.model_dump())
        remaining = calculate_remaining(goals, request.consumed.model_dump())
        return {"success": True, "data": remaining.to_dict()}

    return app


if __name__ == "__main__":
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
