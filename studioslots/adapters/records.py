"""
Conversion of record store rows into domain models.

Rows come back from the store as plain dictionaries, e.g.

    {"day_of_week": 1, "start_time": "09:00:00", "end_time": "24:00:00", "is_active": true}
    {"session_time": "13:00:00", "duration_hours": 2, "status": "confirmed"}
"""

from datetime import time
from typing import Any, Mapping

from ..domain.models import (
    DEFAULT_DURATION_HOURS,
    BookingStatus,
    BusinessHours,
    ExistingBooking,
)


def parse_time(value: Any) -> time:
    """
    Parse a wall-clock time column ("HH:MM" or "HH:MM:SS").

    Raises:
        ValueError: If the value is not a valid time string
    """
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected a time string, got {value!r}")
    return time.fromisoformat(value.strip())


def parse_hour(value: Any) -> int:
    """
    Read the whole hour of a business-hours time column.

    Postgres ``time`` columns allow "24:00:00" for the end of the day, which
    datetime.time cannot hold, so only the hour component is kept. Minutes and
    seconds are checked but otherwise ignored.

    Example:
        "09:30:00" -> 9, "24:00:00" -> 24

    Raises:
        ValueError: If the value is not a valid time string
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected a time string, got {value!r}")

    parts = value.strip().split(":")
    if not 2 <= len(parts) <= 3 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid time string: {value!r}")

    hour, *rest = (int(part) for part in parts)
    if not 0 <= hour <= 24 or any(not 0 <= part <= 59 for part in rest):
        raise ValueError(f"Invalid time string: {value!r}")
    if hour == 24 and any(rest):
        raise ValueError(f"Time past the end of the day: {value!r}")

    return hour


def _require_mapping(row: Any, table: str) -> Mapping[str, Any]:
    if not isinstance(row, Mapping):
        raise ValueError(f"Expected a {table} row object, got {row!r}")
    return row


def _strict_int(value: Any, column: str) -> int:
    # bool is an int subclass, but True is not a number of hours
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Column {column} must be an integer, got {value!r}")
    return value


def business_hours_from_row(row: Mapping[str, Any]) -> BusinessHours:
    """
    Build BusinessHours from an ``available_slots`` row.

    A null is_active is read as active, matching the column default.

    Raises:
        ValueError: If the row is not an object or a column is missing or malformed
    """
    row = _require_mapping(row, "business hours")

    try:
        day_of_week = _strict_int(row["day_of_week"], "day_of_week")
        start_hour = parse_hour(row["start_time"])
        end_hour = parse_hour(row["end_time"])
    except KeyError as exc:
        raise ValueError(f"Business hours row is missing column {exc}") from exc

    is_active = row.get("is_active")
    if is_active is not None and not isinstance(is_active, bool):
        raise ValueError(f"Column is_active must be a boolean, got {is_active!r}")

    return BusinessHours(
        day_of_week=day_of_week,
        start_hour=start_hour,
        end_hour=end_hour,
        is_active=True if is_active is None else is_active,
    )


def booking_from_row(row: Mapping[str, Any]) -> ExistingBooking:
    """
    Build an ExistingBooking from a ``bookings`` row.

    Missing durations default to two hours and missing statuses to pending.

    Raises:
        ValueError: If the row is not an object or a column is missing or malformed
    """
    row = _require_mapping(row, "booking")

    try:
        session_time = parse_time(row["session_time"])
    except KeyError as exc:
        raise ValueError(f"Booking row is missing column {exc}") from exc

    duration = row.get("duration_hours")
    if duration is None:
        duration_hours = DEFAULT_DURATION_HOURS
    else:
        duration_hours = _strict_int(duration, "duration_hours") or DEFAULT_DURATION_HOURS
    if duration_hours < 0:
        raise ValueError(f"Booking duration must not be negative, got {duration_hours}")

    status = row.get("status") or BookingStatus.PENDING.value
    if not isinstance(status, str):
        raise ValueError(f"Column status must be a string, got {status!r}")

    return ExistingBooking(
        session_time=session_time,
        duration_hours=duration_hours,
        status=BookingStatus(status.lower()),
    )
