"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime

from meal_tracker.domain.nutrition import FoodCandidate, NutrientSet


@dataclass
class MealDraft:
    """Editable meal that has not been logged yet."""

    name: str = ""
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fats: float = 0
    multiplier: float = 1
    candidate: FoodCandidate | None = None
    base_nutrients: NutrientSet | None = None


@dataclass(frozen=True)
class MealEntry:
    """A logged meal as stored by the ledger."""

    id: int | str
    name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    created_at: datetime


@dataclass(frozen=True)
class DailyTotals:
    """Summed macros over the loaded meals."""

    calories: int
    protein: float
    carbs: float
    fats: float
