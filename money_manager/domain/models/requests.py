"""Input models for ledger mutations.

Values are already deserialized by the caller but not yet validated; the
use cases run them through ``money_manager.domain.services.validation``.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class TransactionDraft:
    """Full set of journal entry fields for create and replace."""

    amount: Decimal | str | int
    kind: str
    category: str
    date: date | str
    description: str = ""


@dataclass(frozen=True)
class TransactionPatch:
    """Partial journal entry update; ``None`` means the field is omitted."""

    amount: Decimal | str | int | None = None
    kind: str | None = None
    category: str | None = None
    description: str | None = None
    date: date | str | None = None

    def touches_balance(self) -> bool:
        """Return True when the patch can change the balance effect."""
        return self.amount is not None or self.kind is not None


@dataclass(frozen=True)
class TransferRequest:
    """Move money between the current and savings balances."""

    amount: Decimal | str | int
    direction: str
    goal_id: int | None = None
    description: str = ""


@dataclass(frozen=True)
class SavingsGoalDraft:
    """Fields used to create or update a savings goal."""

    name: str
    target_amount: Decimal | str | int
    deadline: date | str | None = None
    description: str = ""


__all__ = [
    "TransactionDraft",
    "TransactionPatch",
    "TransferRequest",
    "SavingsGoalDraft",
]
