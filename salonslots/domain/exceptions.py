"""
Domain-specific exception hierarchy for the scheduling engine.
"""


class SchedulingError(Exception):
    """Base class for all application-level errors."""


class CallerError(SchedulingError, ValueError):
    """Raised for malformed input before any evaluation runs."""


class InvalidInterval(CallerError):
    """Raised when an interval is empty, reversed or crosses midnight."""


class InvalidTimeFormat(CallerError):
    """Raised when a clock string is not a valid HH:MM value."""


class InvalidDuration(CallerError):
    """Raised when a duration or step is not a positive number of minutes."""


class CollaboratorError(SchedulingError):
    """Raised when schedule data cannot be fetched or parsed."""


class PermissionDeniedError(SchedulingError):
    """Raised when the permission gate refuses an appointment action."""
