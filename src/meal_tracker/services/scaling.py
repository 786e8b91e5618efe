"""Quantity scaling for selected foods."""

import math
from dataclasses import replace

from meal_tracker.domain.meals import MealDraft
from meal_tracker.domain.nutrition import FoodCandidate, NutrientSet


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up, e.g. 2.5 -> 3 and 0.25 -> 0.3 at one digit."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_calories(value: float) -> int:
    return int(round_half_up(value))


def round_grams(value: float) -> float:
    return round_half_up(value, 1)


def scale(base: NutrientSet, multiplier: float) -> NutrientSet:
    """Scale per-serving nutrients by a quantity multiplier.

    The multiplier is not validated; zero and negative values are computed
    as-is.
    """
    return NutrientSet(
        calories=round_calories(base.calories * multiplier),
        protein=round_half_up(base.protein * multiplier * 10) / 10,
        carbs=round_half_up(base.carbs * multiplier * 10) / 10,
        fats=round_half_up(base.fats * multiplier * 10) / 10,
    )


def draft_name(candidate: FoodCandidate) -> str:
    """Return "<name> (<serving size><unit>)" for a candidate."""
    return (
        f"{candidate.name} "
        f"({format_number(candidate.serving_size)}{candidate.serving_size_unit})"
    )


def apply_to_draft(candidate: FoodCandidate, multiplier: float = 1) -> MealDraft:
    """Build a draft from a freshly selected candidate."""
    scaled = scale(candidate.nutrients, multiplier)
    return MealDraft(
        name=draft_name(candidate),
        calories=scaled.calories,
        protein=scaled.protein,
        carbs=scaled.carbs,
        fats=scaled.fats,
        multiplier=multiplier,
        candidate=candidate,
        base_nutrients=candidate.nutrients,
    )


def rescale_draft(draft: MealDraft, multiplier: float) -> MealDraft:
    """Recompute the macro fields for a new multiplier, keeping the name."""
    if draft.base_nutrients is None:
        return replace(draft, multiplier=multiplier)
    scaled = scale(draft.base_nutrients, multiplier)
    return replace(
        draft,
        calories=scaled.calories,
        protein=scaled.protein,
        carbs=scaled.carbs,
        fats=scaled.fats,
        multiplier=multiplier,
    )


def submission_name(name: str, multiplier: float) -> str:
    """Prefix the meal name with the quantity when it is above one."""
    if multiplier > 1:
        return f"{format_number(multiplier)}x {name}"
    return name


def format_number(value: float) -> str:
    """Format 2.0 as "2" and 1.5 as "1.5"."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
