"""Typed failures raised by ledger operations.

Every failure carries a stable ``kind`` string that callers can map to their
own framing (HTTP status codes, CLI exit messages) plus a readable message.
"""


class LedgerError(Exception):
    """Base class for all ledger failures."""

    kind = "ledger"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Malformed or out-of-range input."""

    kind = "validation"


class NotFoundError(LedgerError):
    """Entity absent or not owned by the requesting user."""

    kind = "not_found"


class InsufficientFundsError(LedgerError):
    """Amount exceeds the relevant balance."""

    kind = "insufficient_funds"


class AllocationConflictError(LedgerError):
    """Withdrawal would encroach on savings earmarked for goals."""

    kind = "allocation_conflict"


class ConflictError(LedgerError):
    """Operation already applied for the current period."""

    kind = "conflict"


class StoreError(LedgerError):
    """Underlying datastore failure."""

    kind = "store"


__all__ = [
    "LedgerError",
    "ValidationError",
    "NotFoundError",
    "InsufficientFundsError",
    "AllocationConflictError",
    "ConflictError",
    "StoreError",
]
