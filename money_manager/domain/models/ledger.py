"""Domain models for accounts, journal entries and the savings ledger."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class Account:
    """Balances held for one user.

    Attributes:
        user_id: Owning user.
        balance: Current (spendable) balance, moved only with a journal write.
        savings_balance: Total savings, equal to the savings ledger sum.
        allowance_income: Configured monthly allowance amount.
    """

    user_id: int
    balance: Decimal
    savings_balance: Decimal
    allowance_income: Decimal
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Transaction:
    """Income or expense journal entry."""

    id: int
    user_id: int
    amount: Decimal
    kind: str
    category: str
    description: str
    date: date
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class SavingsGoal:
    """Savings target with its derived funding level.

    ``current_amount`` is computed from tagged savings ledger rows on every
    read and is never persisted.
    """

    id: int
    user_id: int
    name: str
    target_amount: Decimal
    current_amount: Decimal
    deadline: date | None
    description: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class SavingsTransaction:
    """Deposit or withdrawal on the savings ledger."""

    id: int
    user_id: int
    goal_id: int | None
    amount: Decimal
    kind: str
    description: str
    date: date
    created_at: datetime | None = None


__all__ = [
    "Account",
    "Transaction",
    "SavingsGoal",
    "SavingsTransaction",
]
