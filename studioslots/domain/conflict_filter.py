"""
Marks candidate slots that collide with bookings already on the calendar.
"""

from enum import Enum
from typing import Iterable, List, Sequence

from .models import CandidateSlot, ExistingBooking


class OverlapPolicy(str, Enum):
    """
    How a candidate slot is compared against an existing booking.

    START_WITHIN_BOOKING only asks whether the slot's start hour falls inside
    the booking, so a long session running into a later booking is still
    offered. This is what the booking form has always done.

    INTERVAL compares the full half-open ranges [start, start + duration).
    """
    START_WITHIN_BOOKING = "start_within_booking"
    INTERVAL = "interval"


class ConflictFilter:
    """
    Flags candidate slots as unavailable when they clash with a booking.

    Only bookings whose status still blocks the calendar (pending, confirmed)
    are considered, whatever the record store returned. The order of the
    bookings does not matter.
    """

    def __init__(self, policy: OverlapPolicy = OverlapPolicy.START_WITHIN_BOOKING):
        self.policy = OverlapPolicy(policy)

    def apply(
        self,
        candidates: Sequence[CandidateSlot],
        bookings: Iterable[ExistingBooking],
        duration_hours: int | None = None
    ) -> List[CandidateSlot]:
        """
        Return a new slot list with clashing slots marked unavailable.

        Args:
            candidates: Slots produced by the slot generator
            bookings: Bookings stored for the same date
            duration_hours: Length of the requested session (required for INTERVAL)

        Returns:
            List of CandidateSlot objects in the same order as candidates

        Raises:
            ValueError: If the INTERVAL policy is used without a duration
        """
        if self.policy is OverlapPolicy.INTERVAL and duration_hours is None:
            raise ValueError("duration_hours is required for the interval overlap policy")

        blocking = [booking for booking in bookings if booking.blocks_slots()]

        result: List[CandidateSlot] = []
        for slot in candidates:
            if slot.available and any(
                self._conflicts(slot, booking, duration_hours) for booking in blocking
            ):
                slot = slot.mark_unavailable()
            result.append(slot)

        return result

    def _conflicts(
        self,
        slot: CandidateSlot,
        booking: ExistingBooking,
        duration_hours: int | None
    ) -> bool:
        if self.policy is OverlapPolicy.INTERVAL:
            return slot.hour < booking.end_hour and slot.hour + duration_hours > booking.start_hour

        return booking.start_hour <= slot.hour < booking.end_hour
