"""
Application service resolving the free session slots for a date.

The resolver reads business hours and bookings through a record store
adapter and delegates the slot arithmetic to the domain layer. The record
store dependency is expressed as a protocol so the Supabase adapter, the mock
store and test stubs are interchangeable.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Protocol, Sequence

from ..domain.conflict_filter import ConflictFilter
from ..domain.exceptions import InvalidDuration, InvalidWindow, RetrievalError
from ..domain.models import (
    BLOCKING_STATUSES,
    AvailabilityResult,
    BookingStatus,
    BusinessHours,
    ExistingBooking,
    day_of_week_for,
)
from ..domain.slot_generator import generate_slots, validate_duration

logger = logging.getLogger(__name__)


class RecordStoreProtocol(Protocol):
    """Protocol describing the read queries the resolver needs."""

    async def get_business_hours(self, day_of_week: int) -> BusinessHours | None:
        """Return the business hours configured for a weekday (0=Sunday), if any."""

    async def get_bookings(
        self,
        session_date: date,
        status_in: Sequence[BookingStatus],
    ) -> List[ExistingBooking]:
        """Return the bookings stored for a date whose status is in status_in."""


class AvailabilityResolver:
    """
    Orchestrates record retrieval and slot calculation for one date.

    The resolver holds no per-request state; every call to ``resolve`` reads
    fresh records and builds a new slot list.
    """

    def __init__(
        self,
        record_store: RecordStoreProtocol,
        conflict_filter: ConflictFilter | None = None,
    ) -> None:
        self._record_store = record_store
        self._conflict_filter = conflict_filter or ConflictFilter()

    async def resolve(self, target_date: date, duration_hours: int) -> AvailabilityResult:
        """
        Compute the annotated slot list for a date and session duration.

        Args:
            target_date: Requested session date
            duration_hours: Requested session length in whole hours

        Returns:
            AvailabilityResult tagged OK, NOT_CONFIGURED, INVALID_INPUT or FAILED
        """
        try:
            validate_duration(duration_hours)
        except InvalidDuration as exc:
            return AvailabilityResult.invalid(str(exc))

        day_of_week = day_of_week_for(target_date)

        try:
            hours = await self._record_store.get_business_hours(day_of_week)
        except RetrievalError as exc:
            logger.error("Could not read business hours for %s: %s", target_date, exc)
            return AvailabilityResult.failed(str(exc))

        if hours is None or not hours.is_active:
            logger.debug("No active business hours for weekday %d", day_of_week)
            return AvailabilityResult.not_configured()

        try:
            candidates = generate_slots(hours.start_hour, hours.end_hour, duration_hours)
        except (InvalidDuration, InvalidWindow) as exc:
            logger.warning("Business hours for weekday %d are unusable: %s", day_of_week, exc)
            return AvailabilityResult.invalid(str(exc))

        try:
            bookings = await self._record_store.get_bookings(
                session_date=target_date,
                status_in=BLOCKING_STATUSES,
            )
        except RetrievalError as exc:
            logger.error("Could not read bookings for %s: %s", target_date, exc)
            return AvailabilityResult.failed(str(exc))

        slots = self._conflict_filter.apply(
            candidates,
            bookings,
            duration_hours=duration_hours,
        )

        logger.debug(
            "Resolved %d slot(s) for %s (%dh), %d booking(s) on the calendar",
            len(slots),
            target_date,
            duration_hours,
            len(bookings),
        )
        return AvailabilityResult.ok(slots)
