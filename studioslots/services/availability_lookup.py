"""
Booking form session state around the stateless resolver.
"""

from __future__ import annotations

import logging
from datetime import date

from ..domain.models import AvailabilityResult
from .availability_resolver import AvailabilityResolver

logger = logging.getLogger(__name__)


class AvailabilityLookup:
    """
    Keeps the most recent availability result for one booking form.

    Every refresh is tagged with a sequence number. A response is published
    only if no newer refresh was started while it was in flight, so a slow
    answer for an old date can never overwrite the slots of the current one.
    """

    def __init__(self, resolver: AvailabilityResolver) -> None:
        self._resolver = resolver
        self._sequence = 0
        self.latest: AvailabilityResult | None = None

    @property
    def latest_sequence(self) -> int:
        """Sequence number of the newest refresh issued."""
        return self._sequence

    async def refresh(self, target_date: date, duration_hours: int) -> AvailabilityResult | None:
        """
        Resolve availability for the current form input.

        Returns:
            The published result, or None if a newer refresh superseded this one
        """
        self._sequence += 1
        sequence = self._sequence

        result = await self._resolver.resolve(target_date, duration_hours)

        if sequence != self._sequence:
            logger.debug(
                "Discarding stale availability for %s (request %d, latest %d)",
                target_date,
                sequence,
                self._sequence,
            )
            return None

        self.latest = result
        return result

    def reset(self) -> None:
        """Forget the published result and invalidate requests still in flight."""
        self._sequence += 1
        self.latest = None
