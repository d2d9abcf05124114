"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.
Domain failures are reported as results; these are the infrastructure-level
failures that propagate to the caller.
"""


class PersistenceError(Exception):
    """Error reading or writing a stored program.

    Raised by program store implementations when the backing database
    cannot be reached or rejects a query. The original exception is
    chained as ``__cause__``.
    """

    pass
