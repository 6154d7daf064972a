"""
Mock record store for running without the hosted database.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from ..domain.exceptions import RetrievalError
from ..domain.models import BookingStatus, BusinessHours, ExistingBooking
from .records import booking_from_row, business_hours_from_row

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path(__file__).parent / "mock_studio_data.json"


class MockRecordStore:
    """
    Record store that serves rows from mock_studio_data.json.

    The file holds the same rows the hosted tables would return:

        {
            "business_hours": [{"day_of_week": 1, "start_time": "09:00:00", ...}],
            "bookings": [{"session_date": "2025-03-03", "session_time": "13:00:00", ...}]
        }

    Rows can also be handed in directly, which is what the tests do.
    """

    def __init__(
        self,
        data_file: Path | None = None,
        records: Mapping[str, List[Dict[str, Any]]] | None = None
    ):
        """
        Initialize the mock store.

        Args:
            data_file: JSON file to read (defaults to the bundled sample data)
            records: In-memory rows; takes precedence over data_file
        """
        self.data_file = data_file or DEFAULT_DATA_FILE
        self._records = records

    def _load_records(self) -> Mapping[str, List[Dict[str, Any]]]:
        """Load rows from memory or from the JSON file."""
        if self._records is not None:
            return self._records

        if not self.data_file.exists():
            logger.warning("Mock data file %s not found, serving no records", self.data_file)
            return {}

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise RetrievalError(f"Could not read mock data from {self.data_file}: {e}") from e

        if not isinstance(data, dict):
            raise RetrievalError(f"Mock data in {self.data_file} must be a JSON object")

        return data

    def _table(self, name: str) -> List[Dict[str, Any]]:
        """
        Return the rows of one table.

        Raises:
            RetrievalError: If the table is not a list of row objects
        """
        rows = self._load_records().get(name, [])

        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise RetrievalError(f"Mock table '{name}' must be a list of row objects")

        return rows

    async def get_business_hours(self, day_of_week: int) -> BusinessHours | None:
        """Return the first active business hours row for the weekday."""
        for row in self._table("business_hours"):
            try:
                hours = business_hours_from_row(row)
            except ValueError as e:
                logger.warning("Skipping malformed business hours row %r: %s", row, e)
                continue

            if hours.day_of_week == day_of_week and hours.is_active:
                return hours

        return None

    async def get_bookings(
        self,
        session_date: date,
        status_in: Sequence[BookingStatus]
    ) -> List[ExistingBooking]:
        """Return the bookings on session_date whose status is in status_in."""
        wanted = {BookingStatus(status) for status in status_in}
        day = session_date.isoformat()

        bookings: List[ExistingBooking] = []
        for row in self._table("bookings"):
            if row.get("session_date") != day:
                continue

            try:
                booking = booking_from_row(row)
            except ValueError as e:
                logger.warning("Skipping malformed booking row %r: %s", row, e)
                continue

            if booking.status in wanted:
                bookings.append(booking)

        return bookings

