"""Food search backed by USDA FDC."""

import logging
from dataclasses import dataclass

import httpx

from meal_tracker.adapters.fdc_client import FdcClient
from meal_tracker.domain.nutrition import (
    DATASET_TYPES,
    DEFAULT_BRAND,
    DEFAULT_SERVING_SIZE,
    DEFAULT_SERVING_UNIT,
    NUTRIENT_IDS,
    SEARCH_PAGE_SIZE,
    FoodCandidate,
    NutrientSet,
)
from meal_tracker.errors import InvalidRequestError, LookupFailureError

# Callers hold back searches until the query is at least this long.
MIN_QUERY_LENGTH = 2

_logger = logging.getLogger(__name__)


@dataclass
class FoodLookupService:
    """Translates a free-text query into food candidates."""

    fdc_client: FdcClient
    data_types: tuple[str, ...] = DATASET_TYPES
    page_size: int = SEARCH_PAGE_SIZE

    async def search(self, query: str | None) -> list[FoodCandidate]:
        """Search FDC and return normalized candidates.

        Raises InvalidRequestError for a missing query and LookupFailureError
        when the upstream call or the payload transform fails.
        """
        if query is None or not query.strip():
            raise InvalidRequestError("Query parameter is required")

        try:
            payload = await self.fdc_client.search_foods(
                query, data_types=self.data_types, page_size=self.page_size
            )
        except httpx.HTTPStatusError as exc:
            _logger.warning(
                "FDC search failed: query=%s status=%s",
                query,
                exc.response.status_code,
            )
            raise LookupFailureError() from exc
        except httpx.HTTPError as exc:
            _logger.warning("FDC search failed: query=%s error=%s", query, exc)
            raise LookupFailureError() from exc
        except ValueError as exc:
            _logger.warning("FDC search returned a non-JSON body: query=%s", query)
            raise LookupFailureError() from exc

        try:
            candidates = [to_candidate(food) for food in payload["foods"]]
        except Exception as exc:
            _logger.exception("Failed to transform FDC search payload")
            raise LookupFailureError() from exc

        _logger.info("Food search: query=%s results=%s", query, len(candidates))
        return candidates


def to_candidate(food: dict[str, object]) -> FoodCandidate:
    """Map one raw FDC food record to a candidate."""
    return FoodCandidate(
        fdc_id=food["fdcId"],
        name=str(food.get("description", "")),
        brand_owner=food.get("brandOwner") or DEFAULT_BRAND,
        serving_size=float(food.get("servingSize") or DEFAULT_SERVING_SIZE),
        serving_size_unit=food.get("servingSizeUnit") or DEFAULT_SERVING_UNIT,
        nutrients=extract_nutrients(food.get("foodNutrients") or []),
    )


def extract_nutrients(food_nutrients: list[dict[str, object]]) -> NutrientSet:
    """Pick calories, protein, carbs and fats out of an FDC nutrient list."""
    values = {field: 0.0 for field in NUTRIENT_IDS}
    found: set[str] = set()
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient.get("nutrientId") or nutrient_info.get("id")
        for field, wanted_id in NUTRIENT_IDS.items():
            if field in found or nutrient_id != wanted_id:
                continue
            found.add(field)
            amount = nutrient.get("value", nutrient.get("amount"))
            if amount is not None:
                values[field] = float(amount)

    return NutrientSet(**values)
