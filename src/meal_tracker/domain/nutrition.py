"""Nutrition domain models."""

from dataclasses import dataclass

# FoodData Central nutrient ids, keyed by NutrientSet field.
NUTRIENT_IDS: dict[str, int] = {
    "calories": 1008,
    "protein": 1003,
    "carbs": 1005,
    "fats": 1004,
}

DATASET_TYPES: tuple[str, ...] = (
    "SR Legacy",
    "Survey (FNDDS)",
    "Foundation",
    "Branded",
)

SEARCH_PAGE_SIZE = 10

DEFAULT_BRAND = "Generic"
DEFAULT_SERVING_SIZE = 100.0
DEFAULT_SERVING_UNIT = "g"


@dataclass(frozen=True)
class NutrientSet:
    """Calories plus the three gram-based macronutrients."""

    calories: float
    protein: float
    carbs: float
    fats: float

    @classmethod
    def zero(cls) -> "NutrientSet":
        return cls(calories=0, protein=0, carbs=0, fats=0)

    def to_dict(self) -> dict[str, float]:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fats": self.fats,
        }


@dataclass(frozen=True)
class FoodCandidate:
    """A single food search result with per-serving macros."""

    fdc_id: int | str
    name: str
    brand_owner: str
    serving_size: float
    serving_size_unit: str
    nutrients: NutrientSet
