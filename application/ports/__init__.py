"""
Repository Interfaces (Ports) for the workout program editor.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, external services). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import ProgramStore

    class ProgramEditor:
        def __init__(self, program_store: ProgramStore):
            self.program_store = program_store

        def load(self, program_id):
            return self.program_store.fetch_program_by_id(program_id)
"""

# Program persistence
from application.ports.program_store import ProgramStore

__all__ = [
    "ProgramStore",
]
