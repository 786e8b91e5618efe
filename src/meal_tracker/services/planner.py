"""State container for the search, select and log flow.

This is the reference model of the page in ``api/planner_page.py``: the page
script follows the same transitions, rounding, quantity prefix and search
sequence numbers, and tests check both against each other.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import StrEnum

from meal_tracker.domain.meals import DailyTotals, MealDraft, MealEntry
from meal_tracker.domain.nutrition import FoodCandidate
from meal_tracker.errors import (
    InvalidRequestError,
    LookupFailureError,
    PersistenceFailureError,
)
from meal_tracker.services.food_lookup import MIN_QUERY_LENGTH, FoodLookupService
from meal_tracker.services.meals import MealLedgerService, aggregate
from meal_tracker.services.scaling import (
    apply_to_draft,
    rescale_draft,
    submission_name,
)

SEARCH_FAILED_MESSAGE = "Search failed"
SAVE_FAILED_MESSAGE = "Failed to save meal"
LOAD_FAILED_MESSAGE = "Failed to load meals"

_DRAFT_FIELDS = {"name", "calories", "protein", "carbs", "fats"}

_logger = logging.getLogger(__name__)


class PlannerState(StrEnum):
    IDLE = "idle"
    SEARCHING = "searching"
    RESULTS_SHOWN = "results_shown"
    CANDIDATE_SELECTED = "candidate_selected"
    SUBMITTING = "submitting"


@dataclass
class PlannerSession:
    """Form state for one planner page.

    Every transition goes through a method here so that quantity changes and
    draft recomputation stay in one place. Searches carry a sequence number;
    a response that arrives after a newer search was dispatched is dropped.
    """

    lookup: FoodLookupService
    ledger: MealLedgerService
    state: PlannerState = PlannerState.IDLE
    query: str = ""
    results: list[FoodCandidate] = field(default_factory=list)
    draft: MealDraft = field(default_factory=MealDraft)
    meals: list[MealEntry] = field(default_factory=list)
    totals: DailyTotals = field(default_factory=lambda: aggregate([]))
    error: str | None = None
    _search_seq: int = field(default=0, init=False, repr=False)

    @property
    def quantity(self) -> float:
        return self.draft.multiplier

    async def search(self, query: str) -> list[FoodCandidate]:
        """Dispatch a search for the query and return the visible results."""
        self.query = query
        self.error = None
        self._search_seq += 1
        seq = self._search_seq
        if len(query.strip()) < MIN_QUERY_LENGTH:
            self.results = []
            self.state = self._resting_state()
            return self.results

        self.state = PlannerState.SEARCHING
        try:
            results = await self.lookup.search(query)
        except (InvalidRequestError, LookupFailureError):
            if seq != self._search_seq:
                return self.results
            self.results = []
            self.error = SEARCH_FAILED_MESSAGE
            self.state = self._resting_state()
            return self.results

        if seq != self._search_seq:
            _logger.debug("Dropping stale search response: query=%s", query)
            return self.results
        self.results = results
        self.state = PlannerState.RESULTS_SHOWN
        return self.results

    def select(self, candidate: FoodCandidate) -> MealDraft:
        """Turn a search result into the draft and clear the search."""
        self._search_seq += 1
        self.query = ""
        self.results = []
        self.error = None
        self.draft = apply_to_draft(candidate, multiplier=1)
        self.state = PlannerState.CANDIDATE_SELECTED
        return self.draft

    def set_quantity(self, multiplier: float) -> MealDraft:
        """Rescale the draft macros; the name is left alone."""
        self.draft = rescale_draft(self.draft, multiplier)
        return self.draft

    def edit_draft(self, **fields: object) -> MealDraft:
        """Apply manual edits to the draft name or macros."""
        unknown = set(fields) - _DRAFT_FIELDS
        if unknown:
            raise InvalidRequestError(f"Unknown draft fields: {sorted(unknown)}")
        self.draft = replace(self.draft, **fields)
        return self.draft

    def submit(self) -> MealEntry:
        """Log the draft, then reload the meal list.

        On a storage failure the draft is kept so it can be resubmitted.
        """
        if self.state is PlannerState.SUBMITTING:
            raise InvalidRequestError("A meal is already being saved")
        if not self.draft.name.strip():
            raise InvalidRequestError("Meal name is required")

        previous_state = self.state
        self.state = PlannerState.SUBMITTING
        self.error = None
        try:
            entry = self.ledger.append(
                name=submission_name(self.draft.name, self.draft.multiplier),
                calories=self.draft.calories,
                protein=self.draft.protein,
                carbs=self.draft.carbs,
                fats=self.draft.fats,
            )
        except PersistenceFailureError:
            self.error = SAVE_FAILED_MESSAGE
            self.state = previous_state
            raise

        self.draft = MealDraft()
        self.state = PlannerState.IDLE
        self.refresh()
        return entry

    def refresh(self) -> list[MealEntry]:
        """Reload meals and totals from the ledger."""
        try:
            self.meals = self.ledger.list_all()
        except PersistenceFailureError:
            self.error = LOAD_FAILED_MESSAGE
            return self.meals
        self.totals = aggregate(self.meals)
        return self.meals

    def _resting_state(self) -> PlannerState:
        if self.draft.candidate is not None:
            return PlannerState.CANDIDATE_SELECTED
        return PlannerState.IDLE
