"""Use case crediting the configured monthly allowance once per month."""

from datetime import datetime

from money_manager.application.ports.ledger_store import LedgerStorePort
from money_manager.application.use_cases.balance_accessor import (
    BalanceAccessor,
)
from money_manager.application.use_cases.transactions import (
    TransactionJournalUseCase,
)
from money_manager.domain.constants import (
    ALLOWANCE_CATEGORY,
    ALLOWANCE_DESCRIPTION,
    INCOME,
)
from money_manager.domain.errors import ConflictError, ValidationError
from money_manager.domain.models import Transaction
from money_manager.infrastructure.logging.logger import (
    get_app_logger,
    get_audit_logger,
)


def month_window(moment: datetime) -> tuple[datetime, datetime]:
    """Return ``[first instant of the month, first instant of next month)``."""
    start = moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


class ProcessAutoAllowanceUseCase:
    """Add the monthly allowance as an income entry, at most once a month.

    The month is the calendar month of the store clock at the time of the
    call, the same clock that stamps the entry's ``created_at``. The check
    and the insert share one unit of work with the account row locked, so
    two concurrent calls cannot both credit the month.
    """

    def __init__(
        self,
        ledger_store: LedgerStorePort,
        journal: TransactionJournalUseCase,
        logger=None,
        audit_logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_store: Port opening transactional scopes on the store.
            journal: Journal engine whose create path records the entry.
            logger: Optional logger compatible with logging.Logger-like API.
            audit_logger: Optional logger receiving committed mutations.
        """
        self._ledger_store = ledger_store
        self._journal = journal
        self._logger = logger or get_app_logger()
        self._audit_logger = audit_logger or get_audit_logger()

    def execute(self, user_id: int) -> Transaction:
        """Credit this month's allowance.

        Returns:
            Transaction: The income entry created.

        Raises:
            NotFoundError: If the user has no account.
            ValidationError: If no positive allowance is configured.
            ConflictError: If the allowance was already added this month.
        """
        with self._ledger_store.unit_of_work() as session:
            account = BalanceAccessor(session).account(user_id)
            allowance = account.allowance_income
            if allowance <= 0:
                raise ValidationError("No allowance income set")

            now = session.now()
            start, end = month_window(now)
            existing = session.count_transactions_created_between(
                user_id,
                INCOME,
                ALLOWANCE_CATEGORY,
                start,
                end,
            )
            if existing:
                raise ConflictError("Allowance already added this month")

            transaction = self._journal.create_in_session(
                session,
                user_id,
                amount=allowance,
                kind=INCOME,
                category=ALLOWANCE_CATEGORY,
                description=ALLOWANCE_DESCRIPTION,
                entry_date=now.date(),
            )

        self._logger.info(
            f"Added allowance of {allowance} for user {user_id} "
            f"({start:%Y-%m})"
        )
        self._audit_logger.info(
            f"op=auto_allowance user={user_id} "
            f"transaction={transaction.id} balance_delta={allowance}"
        )
        return transaction


__all__ = ["ProcessAutoAllowanceUseCase", "month_window"]
