"""
Shared test doubles.
"""

from datetime import date
from typing import Dict, List, Optional, Sequence

import pytest

from studioslots.domain.exceptions import RetrievalError
from studioslots.domain.models import BookingStatus, BusinessHours, ExistingBooking


class StubRecordStore:
    """Minimal stub matching RecordStoreProtocol."""

    def __init__(
        self,
        hours: Optional[Dict[int, BusinessHours]] = None,
        bookings: Optional[List[ExistingBooking]] = None,
        fail_on: Optional[str] = None,
    ):
        self._hours = hours or {}
        self._bookings = bookings or []
        self._fail_on = fail_on
        self.calls: List[tuple] = []

    async def get_business_hours(self, day_of_week: int) -> Optional[BusinessHours]:
        self.calls.append(("get_business_hours", day_of_week))
        if self._fail_on == "hours":
            raise RetrievalError("connection reset")
        return self._hours.get(day_of_week)

    async def get_bookings(
        self, session_date: date, status_in: Sequence[BookingStatus]
    ) -> List[ExistingBooking]:
        self.calls.append(("get_bookings", session_date, tuple(status_in)))
        if self._fail_on == "bookings":
            raise RetrievalError("connection reset")
        # Behaves like the hosted store: filters by status
        return [booking for booking in self._bookings if booking.status in status_in]


@pytest.fixture
def weekday_hours() -> Dict[int, BusinessHours]:
    """Monday to Friday 09:00-18:00, Sunday configured but inactive."""
    hours = {
        day: BusinessHours(day_of_week=day, start_hour=9, end_hour=18)
        for day in range(1, 6)
    }
    hours[0] = BusinessHours(day_of_week=0, start_hour=10, end_hour=14, is_active=False)
    return hours
