"""
Infrastructure Layer for the workout program editor.

This package contains concrete implementations of the store interfaces:
- db/: Supabase database implementations
"""

# Re-export database stores for convenient access
from infrastructure.db import SupabaseProgramStore

__all__ = [
    "SupabaseProgramStore",
]
