"""Domain error types."""


class FitnessTrackerError(Exception):
    """Base class for domain errors."""


class MissingInputError(FitnessTrackerError, ValueError):
    """A required biometric field is absent or not numeric."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(f"Missing or invalid fields: {', '.join(fields)}")


class UnitConversionError(FitnessTrackerError, ValueError):
    """Units belong to different dimensions."""


class InvalidEntryError(FitnessTrackerError, ValueError):
    """A logged entry failed validation."""


class NotFoundError(FitnessTrackerError, LookupError):
    """A requested record does not exist."""


class ConcurrentSessionConflict(FitnessTrackerError):
    """The user already has an active workout session."""


class SessionNotActiveError(FitnessTrackerError):
    """The workout session has already been finished."""


class SupersededError(FitnessTrackerError):
    """A newer load for the same view replaced this one."""
