"""
Candidate slot generation for a business-hours window.

Pure domain logic: no I/O, no clock, same input always yields the same
ordered output.
"""

from datetime import time
from typing import List

from .exceptions import InvalidDuration, InvalidWindow
from .models import CandidateSlot


def validate_duration(duration_hours: int) -> int:
    """
    Ensure a session duration is a positive whole number of hours.

    Raises:
        InvalidDuration: If the duration is not a positive integer
    """
    # bool is an int subclass, but True is not a duration
    if isinstance(duration_hours, bool) or not isinstance(duration_hours, int):
        raise InvalidDuration(
            f"Duration must be a whole number of hours, got {duration_hours!r}"
        )
    if duration_hours <= 0:
        raise InvalidDuration(f"Duration must be greater than zero, got {duration_hours}")
    return duration_hours


def generate_slots(start_hour: int, end_hour: int, duration_hours: int) -> List[CandidateSlot]:
    """
    Generate every session start that fits completely inside the window.

    Slots start at start_hour and are spaced duration_hours apart; a slot at
    hour h is emitted while h <= end_hour - duration_hours. All slots are
    returned available and in ascending order.

    Example:
    Window: 09 - 18, duration 2
    Result: [09:00, 11:00, 13:00, 15:00]

    Args:
        start_hour: Opening hour (inclusive)
        end_hour: Closing hour, the latest moment a session may end
        duration_hours: Length of the requested session

    Returns:
        List of CandidateSlot objects, empty if the session is longer than the window

    Raises:
        InvalidDuration: If duration_hours is not a positive integer
        InvalidWindow: If the window is inverted or outside 0-24
    """
    validate_duration(duration_hours)

    for hour in (start_hour, end_hour):
        if not 0 <= hour <= 24:
            raise InvalidWindow(f"Hour must be between 0 and 24, got {hour}")

    if start_hour > end_hour:
        raise InvalidWindow(
            f"Start hour {start_hour} must not be after end hour {end_hour}"
        )

    return [
        CandidateSlot(time=time(hour=hour))
        for hour in range(start_hour, end_hour - duration_hours + 1, duration_hours)
    ]
