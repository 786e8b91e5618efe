"""Meal ledger service."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from meal_tracker.domain.meals import DailyTotals, MealEntry
from meal_tracker.domain.nutrition import NutrientSet
from meal_tracker.errors import PersistenceFailureError
from meal_tracker.services.scaling import round_calories, round_grams

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for logged meals."""

    def insert_meal(self, name: str, macros: NutrientSet) -> MealEntry:
        """Store a meal and return it with its id and creation time."""

    def list_meals(self) -> list[MealEntry]:
        """Return all meals, most recent first."""


@dataclass
class MealLedgerService:
    """Append-and-read log of meals."""

    repository: MealRepository

    def append(  # noqa: PLR0913
        self,
        name: str,
        calories: float,
        protein: float,
        carbs: float,
        fats: float,
    ) -> MealEntry:
        """Persist a meal exactly as given and return the stored record."""
        macros = NutrientSet(calories=calories, protein=protein, carbs=carbs, fats=fats)
        try:
            entry = self.repository.insert_meal(name, macros)
        except Exception as exc:
            _logger.exception("Failed to create meal", extra={"meal_name": name})
            raise PersistenceFailureError("Error creating meal") from exc
        _logger.info("Meal logged: id=%s calories=%s", entry.id, entry.calories)
        return entry

    def list_all(self) -> list[MealEntry]:
        """Return every logged meal ordered by creation time, newest first."""
        try:
            meals = self.repository.list_meals()
        except Exception as exc:
            _logger.exception("Failed to fetch meals")
            raise PersistenceFailureError("Error fetching meals") from exc
        return sorted(meals, key=lambda meal: meal.created_at, reverse=True)

    def daily_totals(self) -> DailyTotals:
        """Aggregate all logged meals."""
        return aggregate(self.list_all())


def aggregate(entries: Iterable[MealEntry]) -> DailyTotals:
    """Sum macros across meals, rounding the sums rather than each meal."""
    calories = protein = carbs = fats = 0.0
    for entry in entries:
        calories += entry.calories
        protein += entry.protein
        carbs += entry.carbs
        fats += entry.fats
    return DailyTotals(
        calories=round_calories(calories),
        protein=round_grams(protein),
        carbs=round_grams(carbs),
        fats=round_grams(fats),
    )
