"""Shared test fixtures."""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import httpx
import pytest

from meal_tracker.adapters.fdc_client import FdcClient
from meal_tracker.config import Settings
from meal_tracker.containers import AppContainer
from meal_tracker.domain.meals import MealEntry
from meal_tracker.domain.nutrition import NutrientSet
from meal_tracker.services.food_lookup import FoodLookupService
from meal_tracker.services.meals import MealLedgerService, MealRepository

CHICKEN_BREAST = {
    "fdcId": 171477,
    "description": "Chicken breast, roasted",
    "dataType": "SR Legacy",
    "foodNutrients": [
        {"nutrientId": 1008, "nutrientName": "Energy", "value": 165},
        {"nutrientId": 1003, "nutrientName": "Protein", "value": 31},
        {"nutrientId": 1005, "nutrientName": "Carbohydrate", "value": 0},
        {"nutrientId": 1004, "nutrientName": "Total lipid (fat)", "value": 3.6},
    ],
}


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client returning canned payloads per query."""

    payloads: dict[str, dict[str, object]] = field(default_factory=dict)
    default_payload: dict[str, object] = field(
        default_factory=lambda: {"foods": [CHICKEN_BREAST]}
    )
    gates: dict[str, asyncio.Event] = field(default_factory=dict)
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def search_foods(
        self, query: str, data_types: Sequence[str], page_size: int
    ) -> dict[str, object]:
        self.calls.append(
            {"query": query, "data_types": tuple(data_types), "page_size": page_size}
        )
        gate = self.gates.get(query)
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        return self.payloads.get(query, self.default_payload)


def http_status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://api.test/foods/search")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(
        f"status {status_code}", request=request, response=response
    )


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: list[MealEntry] = field(default_factory=list)
    clock: datetime = field(
        default_factory=lambda: datetime(2024, 5, 1, 8, 0, tzinfo=UTC)
    )

    def insert_meal(self, name: str, macros: NutrientSet) -> MealEntry:
        self.clock += timedelta(minutes=1)
        entry = MealEntry(
            id=len(self.meals) + 1,
            name=name,
            calories=macros.calories,
            protein=macros.protein,
            carbs=macros.carbs,
            fats=macros.fats,
            created_at=self.clock,
        )
        self.meals.append(entry)
        return entry

    def list_meals(self) -> list[MealEntry]:
        return sorted(self.meals, key=lambda meal: meal.created_at, reverse=True)


@dataclass
class FailingMealRepository(MealRepository):
    """Repository whose store is unreachable."""

    fail_insert: bool = True
    fail_list: bool = True
    inner: InMemoryMealRepository = field(default_factory=InMemoryMealRepository)

    def insert_meal(self, name: str, macros: NutrientSet) -> MealEntry:
        if self.fail_insert:
            raise ConnectionError("store unavailable")
        return self.inner.insert_meal(name, macros)

    def list_meals(self) -> list[MealEntry]:
        if self.fail_list:
            raise ConnectionError("store unavailable")
        return self.inner.list_meals()


def make_entry(
    calories: float,
    protein: float = 0,
    carbs: float = 0,
    fats: float = 0,
    name: str = "Meal",
    minute: int = 0,
) -> MealEntry:
    return MealEntry(
        id=minute,
        name=name,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fats=fats,
        created_at=datetime(2024, 5, 1, 12, minute, tzinfo=UTC),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        usda_api_key="usda-key",
        usda_api_endpoint="https://api.test/fdc/v1",
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def container(
    settings: Settings,
    fdc_client: FakeFdcClient,
    meal_repository: InMemoryMealRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        food_lookup_service=FoodLookupService(fdc_client=fdc_client),
        meal_ledger_service=MealLedgerService(meal_repository),
        close_resources=close_resources,
    )
