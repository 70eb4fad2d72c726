"""
Adapters layer - Salon data access (Supabase REST API and mock data).
"""

from .mock_salon_client import MockSalonClient
from .supabase_client import SupabaseClient

__all__ = ["MockSalonClient", "SupabaseClient"]
