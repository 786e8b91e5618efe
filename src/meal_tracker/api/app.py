"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse

from meal_tracker.api.planner_page import PLANNER_PAGE_HTML
from meal_tracker.api.schemas import (
    DailyTotalsPayload,
    FoodCandidatePayload,
    MealCreate,
    MealPayload,
)
from meal_tracker.app_logging import configure_logging
from meal_tracker.containers import AppContainer
from meal_tracker.errors import MealTrackerError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(MealTrackerError)
    async def handle_meal_tracker_error(
        request: Request, exc: MealTrackerError
    ) -> JSONResponse:
        if exc.http_status < 500:  # noqa: PLR2004
            logger.warning(
                "Rejected request %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
            )
        else:
            logger.error(
                "Request failed %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
            )
        return JSONResponse(status_code=exc.http_status, content=exc.to_dict())

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def planner_page() -> HTMLResponse:
        """Meal planner page that consumes the API below."""
        return HTMLResponse(PLANNER_PAGE_HTML)

    @app.get("/food-search", response_model=list[FoodCandidatePayload])
    async def food_search(
        request: Request, query: str | None = None
    ) -> list[FoodCandidatePayload]:
        """Search the nutrition database for foods matching the query."""
        state_container: AppContainer = request.app.state.container
        candidates = await state_container.food_lookup_service.search(query)
        return [FoodCandidatePayload.from_domain(food) for food in candidates]

    @app.get("/meals", response_model=list[MealPayload])
    def list_meals(request: Request) -> list[MealPayload]:
        """Return all logged meals, newest first."""
        state_container: AppContainer = request.app.state.container
        meals = state_container.meal_ledger_service.list_all()
        return [MealPayload.from_domain(meal) for meal in meals]

    @app.post("/meals", response_model=MealPayload)
    def create_meal(body: MealCreate, request: Request) -> MealPayload:
        """Log a meal and return the stored record."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.meal_ledger_service.append(
            name=body.name,
            calories=body.calories,
            protein=body.protein,
            carbs=body.carbs,
            fats=body.fats,
        )
        return MealPayload.from_domain(entry)

    @app.get("/meals/totals", response_model=DailyTotalsPayload)
    def meal_totals(request: Request) -> DailyTotalsPayload:
        """Return macro totals over all logged meals."""
        state_container: AppContainer = request.app.state.container
        totals = state_container.meal_ledger_service.daily_totals()
        return DailyTotalsPayload.from_domain(totals)

    return app
