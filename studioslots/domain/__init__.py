"""
Domain layer - Pure business logic without external dependencies.
"""

from .conflict_filter import ConflictFilter, OverlapPolicy
from .exceptions import AvailabilityError, InvalidDuration, InvalidWindow, RetrievalError
from .models import (
    BLOCKING_STATUSES,
    AvailabilityResult,
    AvailabilityStatus,
    BookingStatus,
    BusinessHours,
    CandidateSlot,
    ExistingBooking,
    day_of_week_for,
)
from .slot_generator import generate_slots, validate_duration

__all__ = [
    "BLOCKING_STATUSES",
    "AvailabilityError",
    "AvailabilityResult",
    "AvailabilityStatus",
    "BookingStatus",
    "BusinessHours",
    "CandidateSlot",
    "ConflictFilter",
    "ExistingBooking",
    "InvalidDuration",
    "InvalidWindow",
    "OverlapPolicy",
    "RetrievalError",
    "day_of_week_for",
    "generate_slots",
    "validate_duration",
]
