"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from meal_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from meal_tracker.domain.nutrition import NutrientSet


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": []}
    )
    last_payload: object | None = None
    last_columns: str | None = None
    last_order: tuple[str, bool] | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, columns: str) -> "FakeTable":
        self._action = "select"
        self.last_columns = columns
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_insert_meal_returns_stored_row() -> None:
    client = FakeSupabaseClient()
    meals_table = client.table("meals")
    meals_table.queue(
        "insert",
        [
            {
                "id": 7,
                "name": "2x Oats",
                "calories": 300,
                "protein": 10,
                "carbs": 54,
                "fats": 5,
                "created_at": "2024-05-01T08:30:00.123456+00:00",
            }
        ],
    )
    repository = SupabaseMealRepository(client)

    entry = repository.insert_meal(
        "2x Oats", NutrientSet(calories=300, protein=10, carbs=54, fats=5)
    )

    assert meals_table.last_payload == {
        "name": "2x Oats",
        "calories": 300,
        "protein": 10,
        "carbs": 54,
        "fats": 5,
    }
    assert entry.id == 7
    assert entry.created_at == datetime(2024, 5, 1, 8, 30, 0, 123456, tzinfo=UTC)


def test_insert_meal_without_returned_row_raises() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseMealRepository(client)

    with pytest.raises(RuntimeError):
        repository.insert_meal(
            "Oats", NutrientSet(calories=150, protein=5, carbs=27, fats=2.5)
        )


def test_list_meals_orders_by_creation_desc() -> None:
    client = FakeSupabaseClient()
    meals_table = client.table("meals")
    meals_table.queue(
        "select",
        [
            {
                "id": 2,
                "name": "Lunch",
                "calories": 600,
                "protein": 35,
                "carbs": 60,
                "fats": 20,
                "created_at": "2024-05-01T12:00:00+00:00",
            },
            {
                "id": 1,
                "name": "Breakfast",
                "calories": 300,
                "protein": None,
                "carbs": 40,
                "fats": 8,
                "created_at": "2024-05-01T08:00:00+00:00",
            },
        ],
    )
    repository = SupabaseMealRepository(client)

    meals = repository.list_meals()

    assert meals_table.last_order == ("created_at", True)
    assert "created_at" in (meals_table.last_columns or "")
    assert [meal.name for meal in meals] == ["Lunch", "Breakfast"]
    assert meals[1].protein == 0.0
