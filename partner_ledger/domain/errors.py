"""Domain exceptions raised by services and use cases."""


class LedgerError(Exception):
    """Base class for ledger failures scoped to a single user action."""


class LedgerValidationError(LedgerError, ValueError):
    """Raised before any write when an input breaks a business rule."""


class RecordNotFoundError(LedgerError, LookupError):
    """Raised when a referenced row does not exist."""


class LedgerOperationError(LedgerError, RuntimeError):
    """Raised when a backend write fails.

    The message is suitable for display; the original exception is chained
    as ``__cause__``.
    """


__all__ = [
    "LedgerError",
    "LedgerValidationError",
    "RecordNotFoundError",
    "LedgerOperationError",
]
