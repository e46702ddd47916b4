"""Composition root for wiring infrastructure adapters."""

from money_manager.application.ports.database import DatabaseEnginePort
from money_manager.application.ports.ledger_store import LedgerStorePort
from money_manager.application.use_cases.accounts import (
    GetAccountUseCase,
    OpenAccountUseCase,
    UpdateAllowanceUseCase,
)
from money_manager.application.use_cases.auto_allowance import (
    ProcessAutoAllowanceUseCase,
)
from money_manager.application.use_cases.backfill_savings import (
    BackfillSavingsBalanceUseCase,
)
from money_manager.application.use_cases.ledger_invariants import (
    CheckLedgerInvariantsUseCase,
)
from money_manager.application.use_cases.savings_goals import (
    SavingsGoalsUseCase,
)
from money_manager.application.use_cases.transactions import (
    TransactionJournalUseCase,
)
from money_manager.application.use_cases.transfer_savings import (
    TransferSavingsUseCase,
)
from money_manager.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from money_manager.infrastructure.ledger_store import SqlAlchemyLedgerStore
from money_manager.infrastructure.logging.logger import get_app_logger


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_store(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerStorePort:
    """Return the transactional ledger store."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerStore(resolved_db, logger=get_app_logger())


def build_transaction_journal(
    ledger_store: LedgerStorePort | None = None,
) -> TransactionJournalUseCase:
    """Return the journal engine."""
    return TransactionJournalUseCase(ledger_store or build_ledger_store())


def build_transfer_savings(
    ledger_store: LedgerStorePort | None = None,
) -> TransferSavingsUseCase:
    """Return the savings transfer engine."""
    return TransferSavingsUseCase(ledger_store or build_ledger_store())


def build_savings_goals(
    ledger_store: LedgerStorePort | None = None,
) -> SavingsGoalsUseCase:
    """Return the savings goal manager."""
    return SavingsGoalsUseCase(ledger_store or build_ledger_store())


def build_auto_allowance(
    ledger_store: LedgerStorePort | None = None,
) -> ProcessAutoAllowanceUseCase:
    """Return the allowance trigger sharing the journal's store."""
    resolved_store = ledger_store or build_ledger_store()
    return ProcessAutoAllowanceUseCase(
        resolved_store,
        journal=build_transaction_journal(resolved_store),
    )


def build_open_account(
    ledger_store: LedgerStorePort | None = None,
) -> OpenAccountUseCase:
    """Return the account provisioning use case."""
    return OpenAccountUseCase(ledger_store or build_ledger_store())


def build_get_account(
    ledger_store: LedgerStorePort | None = None,
) -> GetAccountUseCase:
    """Return the account read use case."""
    return GetAccountUseCase(ledger_store or build_ledger_store())


def build_update_allowance(
    ledger_store: LedgerStorePort | None = None,
) -> UpdateAllowanceUseCase:
    """Return the allowance configuration use case."""
    return UpdateAllowanceUseCase(ledger_store or build_ledger_store())


def build_ledger_invariants(
    ledger_store: LedgerStorePort | None = None,
) -> CheckLedgerInvariantsUseCase:
    """Return the ledger invariant checker."""
    return CheckLedgerInvariantsUseCase(ledger_store or build_ledger_store())


def build_backfill_savings(
    ledger_store: LedgerStorePort | None = None,
) -> BackfillSavingsBalanceUseCase:
    """Return the savings balance backfill job."""
    return BackfillSavingsBalanceUseCase(ledger_store or build_ledger_store())


__all__ = [
    "build_database_adapter",
    "build_ledger_store",
    "build_transaction_journal",
    "build_transfer_savings",
    "build_savings_goals",
    "build_auto_allowance",
    "build_open_account",
    "build_get_account",
    "build_update_allowance",
    "build_ledger_invariants",
    "build_backfill_savings",
]
