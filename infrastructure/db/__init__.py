"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the store interfaces
defined in application.ports.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseProgramStore

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate the store with injected client
    program_store = SupabaseProgramStore(client)
"""

from infrastructure.db.program_store import SupabaseProgramStore

__all__ = [
    # Program persistence
    "SupabaseProgramStore",
]
