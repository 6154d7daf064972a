"""
Tests for the stale-response guard around the resolver.
"""

import asyncio
from datetime import time

import pendulum

from conftest import StubRecordStore
from studioslots.domain.models import AvailabilityStatus, BookingStatus, ExistingBooking
from studioslots.services.availability_lookup import AvailabilityLookup
from studioslots.services.availability_resolver import AvailabilityResolver

MONDAY = pendulum.date(2024, 11, 25)
TUESDAY = pendulum.date(2024, 11, 26)


class GatedRecordStore(StubRecordStore):
    """Holds back the bookings of one date until the gate opens."""

    def __init__(self, slow_date, gate, **kwargs):
        super().__init__(**kwargs)
        self._slow_date = slow_date
        self._gate = gate

    async def get_bookings(self, session_date, status_in):
        if session_date == self._slow_date:
            await self._gate.wait()
        return await super().get_bookings(session_date, status_in)


def test_refresh_publishes_latest_result(weekday_hours):
    lookup = AvailabilityLookup(AvailabilityResolver(StubRecordStore(hours=weekday_hours)))

    result = asyncio.run(lookup.refresh(MONDAY, 2))

    assert result is not None
    assert result.status is AvailabilityStatus.OK
    assert lookup.latest is result
    assert lookup.latest_sequence == 1


def test_slow_response_for_old_date_is_discarded(weekday_hours):
    """A stale answer arriving after a newer one must not replace it."""

    async def scenario():
        gate = asyncio.Event()
        store = GatedRecordStore(
            slow_date=MONDAY,
            gate=gate,
            hours=weekday_hours,
            bookings=[ExistingBooking(session_time=time(9), status=BookingStatus.CONFIRMED)],
        )
        lookup = AvailabilityLookup(AvailabilityResolver(store))

        stale_task = asyncio.create_task(lookup.refresh(MONDAY, 2))
        await asyncio.sleep(0)

        fresh = await lookup.refresh(TUESDAY, 3)

        gate.set()
        stale = await stale_task
        return lookup, fresh, stale

    lookup, fresh, stale = asyncio.run(scenario())

    assert stale is None
    assert fresh is not None
    assert lookup.latest is fresh
    assert [slot.label for slot in lookup.latest.slots] == ["09:00", "12:00", "15:00"]
    assert lookup.latest_sequence == 2


def test_reset_clears_result_and_drops_in_flight_requests(weekday_hours):

    async def scenario():
        gate = asyncio.Event()
        store = GatedRecordStore(slow_date=MONDAY, gate=gate, hours=weekday_hours)
        lookup = AvailabilityLookup(AvailabilityResolver(store))

        task = asyncio.create_task(lookup.refresh(MONDAY, 2))
        await asyncio.sleep(0)
        lookup.reset()
        gate.set()
        return lookup, await task

    lookup, result = asyncio.run(scenario())

    assert result is None
    assert lookup.latest is None
