"""
Domain models for business hours, bookings and candidate slots.
"""

from dataclasses import dataclass, field, replace
from datetime import date, time
from enum import Enum
from typing import List, Tuple


class BookingStatus(str, Enum):
    """Lifecycle states of a stored booking."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Only these statuses hold on to their time on the calendar
BLOCKING_STATUSES: Tuple[BookingStatus, ...] = (
    BookingStatus.PENDING,
    BookingStatus.CONFIRMED,
)

DEFAULT_DURATION_HOURS = 2


def day_of_week_for(day: date) -> int:
    """
    Return the weekday number used by the record store.

    The store counts from Sunday: 0=Sunday, 1=Monday, ..., 6=Saturday.
    """
    return day.isoweekday() % 7


@dataclass(frozen=True)
class BusinessHours:
    """
    Opening hours configured for one day of the week, in whole hours.

    Invariant: day_of_week is between 0 (Sunday) and 6 (Saturday), both
    hours are between 0 and 24. An end_hour of 24 closes at midnight.
    """
    day_of_week: int
    start_hour: int
    end_hour: int
    is_active: bool = True

    def __post_init__(self):
        if not 0 <= self.day_of_week <= 6:
            raise ValueError(f"day_of_week must be between 0 and 6, got {self.day_of_week}")
        for hour in (self.start_hour, self.end_hour):
            if not 0 <= hour <= 24:
                raise ValueError(f"Hour must be between 0 and 24, got {hour}")

    @property
    def opening_label(self) -> str:
        return f"{self.start_hour:02d}:00"

    @property
    def closing_label(self) -> str:
        return f"{self.end_hour:02d}:00"


@dataclass(frozen=True)
class ExistingBooking:
    """
    A booking already stored for the requested date.
    """
    session_time: time
    duration_hours: int = DEFAULT_DURATION_HOURS
    status: BookingStatus = BookingStatus.PENDING

    @property
    def start_hour(self) -> int:
        return self.session_time.hour

    @property
    def end_hour(self) -> int:
        """First hour after the booking has finished."""
        return self.start_hour + self.duration_hours

    def blocks_slots(self) -> bool:
        """Check whether this booking still occupies its time."""
        return self.status in BLOCKING_STATUSES


@dataclass(frozen=True)
class CandidateSlot:
    """
    An hour-aligned session start time offered to the client.
    """
    time: time
    available: bool = True

    @property
    def hour(self) -> int:
        return self.time.hour

    @property
    def label(self) -> str:
        """Format the slot the way the booking form shows it (HH:MM)."""
        return self.time.strftime("%H:%M")

    def mark_unavailable(self) -> "CandidateSlot":
        """Return a copy of this slot flagged as taken."""
        return replace(self, available=False)


class AvailabilityStatus(str, Enum):
    """Outcome of a single availability check."""
    OK = "ok"
    NOT_CONFIGURED = "not_configured"
    INVALID_INPUT = "invalid_input"
    FAILED = "failed"


@dataclass(frozen=True)
class AvailabilityResult:
    """
    Tagged result of resolving the slots for a date and duration.

    Only OK results carry slots. The other states keep "nothing configured
    for this day", "bad input" and "could not read the store" apart so the
    caller can show the right message.
    """
    status: AvailabilityStatus
    slots: List[CandidateSlot] = field(default_factory=list)
    reason: str | None = None

    @classmethod
    def ok(cls, slots: List[CandidateSlot]) -> "AvailabilityResult":
        return cls(status=AvailabilityStatus.OK, slots=list(slots))

    @classmethod
    def not_configured(cls) -> "AvailabilityResult":
        return cls(status=AvailabilityStatus.NOT_CONFIGURED)

    @classmethod
    def invalid(cls, reason: str) -> "AvailabilityResult":
        return cls(status=AvailabilityStatus.INVALID_INPUT, reason=reason)

    @classmethod
    def failed(cls, reason: str) -> "AvailabilityResult":
        return cls(status=AvailabilityStatus.FAILED, reason=reason)

    @property
    def validation_failed(self) -> bool:
        return self.status is AvailabilityStatus.INVALID_INPUT

    @property
    def retrieval_failed(self) -> bool:
        return self.status is AvailabilityStatus.FAILED

    @property
    def available_slots(self) -> List[CandidateSlot]:
        """Slots the client can still pick."""
        return [slot for slot in self.slots if slot.available]

    @property
    def is_fully_booked(self) -> bool:
        """True when the day has slots but every one of them is taken."""
        return (
            self.status is AvailabilityStatus.OK
            and bool(self.slots)
            and not self.available_slots
        )
