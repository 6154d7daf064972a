"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability_lookup import AvailabilityLookup
from .availability_resolver import AvailabilityResolver, RecordStoreProtocol

__all__ = ["AvailabilityLookup", "AvailabilityResolver", "RecordStoreProtocol"]
