"""
Tests for domain models.
"""

from datetime import time

import pendulum
import pytest

from studioslots.domain.models import (
    AvailabilityResult,
    AvailabilityStatus,
    BookingStatus,
    BusinessHours,
    CandidateSlot,
    ExistingBooking,
    day_of_week_for,
)


class TestDayOfWeek:
    """Tests for the Sunday-based weekday numbering."""

    def test_weekdays_count_from_sunday(self):
        """Sunday is 0, Monday is 1 and Saturday is 6."""
        assert day_of_week_for(pendulum.date(2024, 11, 24)) == 0  # Sunday
        assert day_of_week_for(pendulum.date(2024, 11, 25)) == 1  # Monday
        assert day_of_week_for(pendulum.date(2024, 11, 30)) == 6  # Saturday


class TestBusinessHours:
    """Tests for BusinessHours model."""

    def test_labels(self):
        hours = BusinessHours(day_of_week=1, start_hour=9, end_hour=18)

        assert hours.opening_label == "09:00"
        assert hours.closing_label == "18:00"
        assert hours.is_active

    def test_closing_at_midnight(self):
        """An end hour of 24 closes at midnight."""
        hours = BusinessHours(day_of_week=5, start_hour=18, end_hour=24)

        assert hours.closing_label == "24:00"

    @pytest.mark.parametrize("start_hour, end_hour", [(-1, 18), (9, 25)])
    def test_hours_out_of_range(self, start_hour, end_hour):
        with pytest.raises(ValueError, match="between 0 and 24"):
            BusinessHours(day_of_week=1, start_hour=start_hour, end_hour=end_hour)

    @pytest.mark.parametrize("day", [-1, 7])
    def test_invalid_day_of_week_raises_error(self, day):
        """Test that weekdays outside 0-6 are rejected."""
        with pytest.raises(ValueError, match="day_of_week must be between 0 and 6"):
            BusinessHours(day_of_week=day, start_hour=9, end_hour=18)


class TestExistingBooking:
    """Tests for ExistingBooking model."""

    def test_defaults(self):
        """A booking without details is a pending two hour session."""
        booking = ExistingBooking(session_time=time(13))

        assert booking.duration_hours == 2
        assert booking.status is BookingStatus.PENDING
        assert booking.start_hour == 13
        assert booking.end_hour == 15

    def test_only_pending_and_confirmed_block(self):
        """Completed and cancelled bookings free their time."""
        blocking = {
            status: ExistingBooking(session_time=time(9), status=status).blocks_slots()
            for status in BookingStatus
        }

        assert blocking == {
            BookingStatus.PENDING: True,
            BookingStatus.CONFIRMED: True,
            BookingStatus.COMPLETED: False,
            BookingStatus.CANCELLED: False,
        }


class TestCandidateSlot:
    """Tests for CandidateSlot model."""

    def test_label_and_hour(self):
        slot = CandidateSlot(time=time(9))

        assert slot.label == "09:00"
        assert slot.hour == 9
        assert slot.available

    def test_mark_unavailable_returns_copy(self):
        """Marking a slot taken leaves the original untouched."""
        slot = CandidateSlot(time=time(11))

        taken = slot.mark_unavailable()

        assert not taken.available
        assert taken.time == slot.time
        assert slot.available


class TestAvailabilityResult:
    """Tests for the tagged availability result."""

    def test_ok_result_exposes_available_slots(self):
        slots = [
            CandidateSlot(time=time(9), available=False),
            CandidateSlot(time=time(11)),
        ]

        result = AvailabilityResult.ok(slots)

        assert result.status is AvailabilityStatus.OK
        assert result.available_slots == [slots[1]]
        assert not result.is_fully_booked
        assert not result.validation_failed
        assert not result.retrieval_failed

    def test_fully_booked(self):
        result = AvailabilityResult.ok([CandidateSlot(time=time(9), available=False)])

        assert result.is_fully_booked

    def test_empty_states_are_distinguishable(self):
        """Closed, invalid and failed lookups all carry no slots but differ in status."""
        closed = AvailabilityResult.not_configured()
        invalid = AvailabilityResult.invalid("bad duration")
        failed = AvailabilityResult.failed("timeout")

        assert closed.slots == invalid.slots == failed.slots == []
        assert not closed.validation_failed and not closed.retrieval_failed
        assert invalid.validation_failed and invalid.reason == "bad duration"
        assert failed.retrieval_failed and failed.reason == "timeout"
        assert not closed.is_fully_booked
