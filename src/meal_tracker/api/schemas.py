"""Pydantic models for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from meal_tracker.domain.meals import DailyTotals, MealEntry
from meal_tracker.domain.nutrition import FoodCandidate


class NutrientsPayload(BaseModel):
    """Macro values for a food or meal."""

    calories: float
    protein: float
    carbs: float
    fats: float


class FoodCandidatePayload(BaseModel):
    """Food search result."""

    model_config = ConfigDict(populate_by_name=True)

    fdc_id: int | str = Field(alias="fdcId")
    name: str
    brand_owner: str = Field(alias="brandOwner")
    serving_size: float = Field(alias="servingSize")
    serving_size_unit: str = Field(alias="servingSizeUnit")
    nutrients: NutrientsPayload

    @classmethod
    def from_domain(cls, candidate: FoodCandidate) -> "FoodCandidatePayload":
        return cls(
            fdc_id=candidate.fdc_id,
            name=candidate.name,
            brand_owner=candidate.brand_owner,
            serving_size=candidate.serving_size,
            serving_size_unit=candidate.serving_size_unit,
            nutrients=NutrientsPayload(**candidate.nutrients.to_dict()),
        )


class MealCreate(BaseModel):
    """Body of a meal creation request."""

    name: str
    calories: float
    protein: float
    carbs: float
    fats: float


class MealPayload(BaseModel):
    """Logged meal."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | str
    name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_domain(cls, entry: MealEntry) -> "MealPayload":
        return cls(
            id=entry.id,
            name=entry.name,
            calories=entry.calories,
            protein=entry.protein,
            carbs=entry.carbs,
            fats=entry.fats,
            created_at=entry.created_at,
        )


class DailyTotalsPayload(BaseModel):
    """Aggregated macros over all meals."""

    calories: int
    protein: float
    carbs: float
    fats: float

    @classmethod
    def from_domain(cls, totals: DailyTotals) -> "DailyTotalsPayload":
        return cls(
            calories=totals.calories,
            protein=totals.protein,
            carbs=totals.carbs,
            fats=totals.fats,
        )
