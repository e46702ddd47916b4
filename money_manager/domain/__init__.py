"""Domain package for business rules and core models."""

from .constants import STUDENT_CATEGORIES, TRANSACTION_KINDS, SAVINGS_KINDS
from .errors import (
    AllocationConflictError,
    ConflictError,
    InsufficientFundsError,
    LedgerError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from .models import (
    Account,
    SavingsGoal,
    SavingsGoalDraft,
    SavingsTransaction,
    Transaction,
    TransactionDraft,
    TransactionPatch,
    TransferRequest,
)

__all__ = [
    "STUDENT_CATEGORIES",
    "TRANSACTION_KINDS",
    "SAVINGS_KINDS",
    "LedgerError",
    "ValidationError",
    "NotFoundError",
    "InsufficientFundsError",
    "AllocationConflictError",
    "ConflictError",
    "StoreError",
    "Account",
    "Transaction",
    "SavingsGoal",
    "SavingsTransaction",
    "TransactionDraft",
    "TransactionPatch",
    "TransferRequest",
    "SavingsGoalDraft",
]
