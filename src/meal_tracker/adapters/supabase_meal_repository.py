"""Supabase repository for logged meals."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from meal_tracker.domain.meals import MealEntry
from meal_tracker.domain.nutrition import NutrientSet
from meal_tracker.services.meals import MealRepository

_COLUMNS = "id, name, calories, protein, carbs, fats, created_at"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for the meals table."""

    client: Client
    table_name: str = "meals"

    def insert_meal(self, name: str, macros: NutrientSet) -> MealEntry:
        """Insert a meal row and return the stored record."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "name": name,
                    "calories": macros.calories,
                    "protein": macros.protein,
                    "carbs": macros.carbs,
                    "fats": macros.fats,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_row(response.data[0])

    def list_meals(self) -> list[MealEntry]:
        """Return all meals ordered by creation time, newest first."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> MealEntry:
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else datetime.now(tz=UTC)
    )
    return MealEntry(
        id=row["id"],
        name=str(row.get("name", "")),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fats=float(row.get("fats") or 0.0),
        created_at=created_at,
    )
