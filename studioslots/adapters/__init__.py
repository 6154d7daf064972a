"""
Adapters layer - External integrations (Supabase record store).
"""

from .mock_record_store import MockRecordStore
from .supabase_client import SupabaseRecordStore

__all__ = ["MockRecordStore", "SupabaseRecordStore"]
