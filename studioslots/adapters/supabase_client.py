"""
Supabase (PostgREST) record store for business hours and bookings.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Sequence

import requests

from ..domain.exceptions import RetrievalError
from ..domain.models import BookingStatus, BusinessHours, ExistingBooking
from .records import booking_from_row, business_hours_from_row

logger = logging.getLogger(__name__)


class SupabaseRecordStore:
    """
    Read-only client for the studio's hosted database.

    Queries the ``available_slots`` and ``bookings`` tables through the
    PostgREST endpoint Supabase exposes under /rest/v1. Filtering by equality
    and membership happens server side; rows come back in no guaranteed order.
    """

    BUSINESS_HOURS_TABLE = "available_slots"
    BOOKINGS_TABLE = "bookings"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        session: requests.Session | None = None
    ):
        """
        Initialize the record store.

        Args:
            base_url: Project URL, e.g. https://<project>.supabase.co
            api_key: Anonymous (public) API key of the project
            timeout: Seconds to wait for each HTTP request
            session: Optional requests session (a new one is created if omitted)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json"
        }

    async def get_business_hours(self, day_of_week: int) -> BusinessHours | None:
        """
        Fetch the active business hours for a weekday.

        Args:
            day_of_week: 0=Sunday ... 6=Saturday

        Returns:
            BusinessHours, or None if the studio is closed that day

        Raises:
            RetrievalError: If the request fails
        """
        rows = await asyncio.to_thread(
            self._select,
            self.BUSINESS_HOURS_TABLE,
            {
                "select": "day_of_week,start_time,end_time,is_active",
                "day_of_week": f"eq.{day_of_week}",
                "is_active": "eq.true",
            }
        )

        hours: List[BusinessHours] = []
        for row in rows:
            try:
                hours.append(business_hours_from_row(row))
            except ValueError as e:
                logger.warning("Skipping malformed business hours row %r: %s", row, e)

        if not hours:
            return None

        if len(hours) > 1:
            logger.warning(
                "Found %d active business hours rows for weekday %d, using the first",
                len(hours),
                day_of_week
            )

        return hours[0]

    async def get_bookings(
        self,
        session_date: date,
        status_in: Sequence[BookingStatus]
    ) -> List[ExistingBooking]:
        """
        Fetch the bookings for a date restricted to the given statuses.

        Args:
            session_date: Date of the sessions
            status_in: Statuses to include

        Returns:
            List of ExistingBooking objects

        Raises:
            RetrievalError: If the request fails
        """
        statuses = ",".join(BookingStatus(status).value for status in status_in)

        rows = await asyncio.to_thread(
            self._select,
            self.BOOKINGS_TABLE,
            {
                "select": "session_time,duration_hours,status",
                "session_date": f"eq.{session_date.isoformat()}",
                "status": f"in.({statuses})",
            }
        )

        bookings: List[ExistingBooking] = []
        for row in rows:
            try:
                bookings.append(booking_from_row(row))
            except ValueError as e:
                logger.warning("Skipping malformed booking row %r: %s", row, e)

        return bookings

    def _select(self, table: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        """
        Run a GET against a PostgREST table endpoint.

        Raises:
            RetrievalError: On transport errors, HTTP errors or undecodable bodies
        """
        url = f"{self.base_url}/rest/v1/{table}"
        logger.debug("GET %s %s", url, params)

        try:
            response = self.session.get(
                url,
                headers=self.headers,
                params=params,
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.RequestException as e:
            raise RetrievalError(f"Failed to read '{table}' from Supabase: {e}") from e
        except ValueError as e:
            raise RetrievalError(f"Supabase returned invalid JSON for '{table}': {e}") from e

        if not isinstance(data, list):
            raise RetrievalError(f"Unexpected response for '{table}': expected a list of rows")

        return data
