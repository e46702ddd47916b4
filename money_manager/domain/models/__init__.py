"""Domain models package."""

from .ledger import Account, SavingsGoal, SavingsTransaction, Transaction
from .requests import (
    SavingsGoalDraft,
    TransactionDraft,
    TransactionPatch,
    TransferRequest,
)

__all__ = [
    "Account",
    "Transaction",
    "SavingsGoal",
    "SavingsTransaction",
    "TransactionDraft",
    "TransactionPatch",
    "TransferRequest",
    "SavingsGoalDraft",
]
