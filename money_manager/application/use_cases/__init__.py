"""Application use cases package."""

from .accounts import (
    GetAccountUseCase,
    OpenAccountUseCase,
    UpdateAllowanceUseCase,
)
from .auto_allowance import ProcessAutoAllowanceUseCase
from .backfill_savings import (
    BackfillSavingsBalanceUseCase,
    BackfillSavingsResult,
    SavingsAdjustment,
)
from .balance_accessor import BalanceAccessor
from .ledger_invariants import (
    CheckLedgerInvariantsUseCase,
    LedgerInvariantReport,
    LedgerViolation,
)
from .savings_goals import SavingsGoalsUseCase
from .transactions import TransactionJournalUseCase
from .transfer_savings import TransferResult, TransferSavingsUseCase

__all__ = [
    "OpenAccountUseCase",
    "GetAccountUseCase",
    "UpdateAllowanceUseCase",
    "ProcessAutoAllowanceUseCase",
    "BackfillSavingsBalanceUseCase",
    "BackfillSavingsResult",
    "SavingsAdjustment",
    "BalanceAccessor",
    "CheckLedgerInvariantsUseCase",
    "LedgerInvariantReport",
    "LedgerViolation",
    "SavingsGoalsUseCase",
    "TransactionJournalUseCase",
    "TransferSavingsUseCase",
    "TransferResult",
]
