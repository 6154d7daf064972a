"""
Domain-specific exception hierarchy for the availability checker.
"""


class AvailabilityError(Exception):
    """Base class for all application-level errors."""


class InvalidDuration(AvailabilityError, ValueError):
    """Raised when a session duration is not a positive whole number of hours."""


class InvalidWindow(AvailabilityError, ValueError):
    """Raised when a business-hours window opens after it closes."""


class RetrievalError(AvailabilityError):
    """Raised when business hours or bookings cannot be read from the record store."""
