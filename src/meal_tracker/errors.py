"""Error taxonomy shared by services and the HTTP layer."""


class MealTrackerError(Exception):
    """Base error carrying a user-facing message and an HTTP status."""

    http_status = 500
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Return the JSON error body."""
        return {"error": self.message}


class InvalidRequestError(MealTrackerError):
    """A required input is missing or unusable."""

    http_status = 400
    default_message = "Invalid request"


class LookupFailureError(MealTrackerError):
    """The nutrition search is unavailable or returned something unusable."""

    default_message = "Failed to search foods"


class PersistenceFailureError(MealTrackerError):
    """The meal store could not complete a read or write."""

    default_message = "Storage unavailable"
