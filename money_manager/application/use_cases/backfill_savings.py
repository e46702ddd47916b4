"""One-time reconciliation of stored savings balances with the ledger.

Databases that predate the savings ledger can hold a ``savings_balance`` that
disagrees with the ledger rows. This job sets the stored value to the ledger
sum for every account where the two differ, in a single transaction.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from money_manager.application.ports.ledger_store import LedgerStorePort
from money_manager.application.use_cases.balance_accessor import (
    BalanceAccessor,
)
from money_manager.domain.errors import StoreError
from money_manager.infrastructure.logging.logger import (
    get_app_logger,
    get_audit_logger,
)


@dataclass(frozen=True)
class SavingsAdjustment:
    """Savings balance change applied (or proposed) for one account."""

    user_id: int
    old_savings_balance: Decimal
    new_savings_balance: Decimal


@dataclass(frozen=True)
class BackfillSavingsResult:
    """Summary of a backfill run.

    Attributes:
        checked_count: Number of accounts examined.
        adjustments: Accounts whose savings balance differs from the ledger.
        dry_run: True when nothing was written.
    """

    checked_count: int
    adjustments: list[SavingsAdjustment] = field(default_factory=list)
    dry_run: bool = False


class BackfillSavingsBalanceUseCase:
    """Align ``savings_balance`` with the savings ledger sum."""

    def __init__(
        self,
        ledger_store: LedgerStorePort,
        logger=None,
        audit_logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_store: Port opening transactional scopes on the store.
            logger: Optional logger compatible with logging.Logger-like API.
            audit_logger: Optional logger receiving committed mutations.
        """
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()
        self._audit_logger = audit_logger or get_audit_logger()

    def run(self, dry_run: bool = False) -> BackfillSavingsResult:
        """Execute the backfill.

        Args:
            dry_run: Report the adjustments without writing them.

        Returns:
            BackfillSavingsResult: Accounts checked and adjustments made.
        """
        with self._ledger_store.unit_of_work() as session:
            accessor = BalanceAccessor(session)
            user_ids = session.list_account_user_ids()
            adjustments = []
            for user_id in user_ids:
                account = accessor.account(user_id)
                ledger_total = session.savings_ledger_total(user_id)
                if ledger_total == account.savings_balance:
                    continue
                adjustments.append(
                    SavingsAdjustment(
                        user_id=user_id,
                        old_savings_balance=account.savings_balance,
                        new_savings_balance=ledger_total,
                    )
                )
                if dry_run:
                    continue
                if not session.set_balances(
                    user_id, account.balance, ledger_total
                ):
                    raise StoreError(
                        f"Account row for user {user_id} was not updated"
                    )

        mode = "Would adjust" if dry_run else "Adjusted"
        self._logger.info(
            f"{mode} {len(adjustments)} of {len(user_ids)} savings balances"
        )
        if not dry_run:
            for adjustment in adjustments:
                self._audit_logger.info(
                    f"op=backfill_savings user={adjustment.user_id} "
                    f"old={adjustment.old_savings_balance} "
                    f"new={adjustment.new_savings_balance}"
                )
        return BackfillSavingsResult(
            checked_count=len(user_ids),
            adjustments=adjustments,
            dry_run=dry_run,
        )


__all__ = [
    "BackfillSavingsBalanceUseCase",
    "BackfillSavingsResult",
    "SavingsAdjustment",
]
