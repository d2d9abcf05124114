"""
Application Layer for the workout program editor.

This package contains:
- ports/: Abstract store interfaces (what the domain needs)
- use_cases/: Workflows that combine the editing engine with persistence
- exceptions: Infrastructure-level errors that propagate to callers
"""
