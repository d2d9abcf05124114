"""
Supabase implementation of ProgramStore.

Programs live in a single table (``workout_programs`` by default) whose
``weeks`` column holds the nested week/day/exercise document as JSON. Only
``weeks`` and ``updated_at`` are ever written by this store.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from supabase import Client

from application.exceptions import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_PROGRAMS_TABLE = "workout_programs"


class SupabaseProgramStore:
    """
    Supabase implementation of ProgramStore protocol.

    The client is injected via constructor for testability. Client errors
    are re-raised as ``PersistenceError``.
    """

    def __init__(self, client: Client, table: str = DEFAULT_PROGRAMS_TABLE):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            table: Name of the programs table
        """
        self._client = client
        self._table = table

    def fetch_program_by_id(self, program_id: str) -> Optional[Dict[str, Any]]:
        """Get a program row by ID, or None if it does not exist."""
        try:
            result = (
                self._client.table(self._table)
                .select("*")
                .eq("id", program_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch program {program_id}: {e}")
            raise PersistenceError(f"Failed to fetch program {program_id}: {e}") from e

        if result.data:
            return result.data[0]
        return None

    def persist_weeks(
        self,
        program_id: str,
        weeks: List[Dict[str, Any]],
    ) -> Optional[Dict[str, Any]]:
        """Replace the ``weeks`` column of one program, leaving other columns untouched."""
        update_data: Dict[str, Any] = {
            "weeks": weeks,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            result = (
                self._client.table(self._table)
                .update(update_data)
                .eq("id", program_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to persist weeks for program {program_id}: {e}")
            raise PersistenceError(f"Failed to persist weeks for program {program_id}: {e}") from e

        if result.data and len(result.data) > 0:
            logger.info(f"Program {program_id} weeks updated ({len(weeks)} week(s))")
            return result.data[0]
        return None
