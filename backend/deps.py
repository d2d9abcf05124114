"""
Dependency providers for the workout program editor.

Returns interface types (Protocols) rather than concrete implementations so
callers (a tool-calling layer, a request handler, tests) can swap in fakes.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Store and use case providers create new instances per call

Usage:
    from backend.deps import get_apply_modification_use_case

    use_case = get_apply_modification_use_case()
    result = use_case.execute(program_id, "update_setgroup", target, changes)
"""

import logging
from functools import lru_cache
from typing import Optional

from supabase import Client, create_client

from application.exceptions import PersistenceError
from application.ports import ProgramStore
from application.use_cases import ApplyModificationUseCase
from backend.settings import get_settings
from infrastructure import SupabaseProgramStore

logger = logging.getLogger(__name__)


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = get_settings()

    if not settings.is_database_configured:
        logger.warning("Supabase credentials not configured. Program storage is disabled.")
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


# =============================================================================
# Store Providers
# =============================================================================


def get_program_store(client: Optional[Client] = None) -> ProgramStore:
    """
    Get ProgramStore implementation.

    Args:
        client: Supabase client; the cached client is used when omitted

    Returns:
        ProgramStore: Store for program persistence

    Raises:
        PersistenceError: If Supabase is not configured
    """
    client = client or get_supabase_client()
    if client is None:
        raise PersistenceError("Database not available. Supabase credentials not configured.")
    return SupabaseProgramStore(client, table=get_settings().programs_table)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_apply_modification_use_case(
    program_store: Optional[ProgramStore] = None,
) -> ApplyModificationUseCase:
    """
    Get ApplyModificationUseCase with its store injected.

    Args:
        program_store: Store to use; the Supabase store is built when omitted

    Returns:
        ApplyModificationUseCase: Diff-based modification workflow
    """
    return ApplyModificationUseCase(program_store=program_store or get_program_store())
