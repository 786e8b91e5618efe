"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_tracker.adapters.fdc_client import HttpxFdcClient
from meal_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from meal_tracker.config import Settings
from meal_tracker.services.food_lookup import FoodLookupService
from meal_tracker.services.meals import MealLedgerService
from meal_tracker.services.planner import PlannerSession


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_lookup_service: FoodLookupService
    meal_ledger_service: MealLedgerService
    close_resources: Callable[[], Awaitable[None]]

    def new_planner_session(self) -> PlannerSession:
        """Start a fresh planner form backed by the shared services."""
        return PlannerSession(
            lookup=self.food_lookup_service, ledger=self.meal_ledger_service
        )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.usda_api_key,
        base_url=resolved_settings.usda_api_endpoint,
        timeout=resolved_settings.fdc_timeout_seconds,
    )
    food_lookup_service = FoodLookupService(fdc_client=fdc_client)
    meal_ledger_service = MealLedgerService(SupabaseMealRepository(supabase_client))

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        food_lookup_service=food_lookup_service,
        meal_ledger_service=meal_ledger_service,
        close_resources=close_resources,
    )
