"""
Program Store Interface (Port).

This module defines the abstract interface for reading a stored workout
program and writing back its week sequence. Implementations may use
Supabase, in-memory storage, or other backends.
"""
from typing import Protocol, Optional, List, Dict, Any


class ProgramStore(Protocol):
    """
    Abstract interface for workout program persistence.

    Only the ``weeks`` sub-structure is ever written, so implementations
    must leave every other column (name, status, owner, goals) untouched.
    """

    def fetch_program_by_id(self, program_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a single program document by ID.

        Args:
            program_id: Program UUID

        Returns:
            Program record (camelCase or snake_case keys) or None if not found

        Raises:
            PersistenceError: If the store cannot be queried
        """
        ...

    def persist_weeks(
        self,
        program_id: str,
        weeks: List[Dict[str, Any]],
    ) -> Optional[Dict[str, Any]]:
        """
        Replace the week sequence of a stored program.

        Args:
            program_id: Program UUID
            weeks: Serialized weeks (camelCase JSON documents)

        Returns:
            Updated program record, or None if no program has this ID

        Raises:
            PersistenceError: If the update fails
        """
        ...
