"""Invariant checks comparing stored balances with journal and ledger rows."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from money_manager.application.ports.ledger_store import (
    LedgerSessionPort,
    LedgerStorePort,
)
from money_manager.application.use_cases.balance_accessor import (
    BalanceAccessor,
)
from money_manager.infrastructure.logging.logger import get_app_logger

BALANCE_MATCHES_JOURNAL = "balance_matches_journal"
SAVINGS_MATCHES_LEDGER = "savings_matches_ledger"
SAVINGS_NOT_NEGATIVE = "savings_not_negative"
ALLOCATIONS_WITHIN_SAVINGS = "allocations_within_savings"


@dataclass(frozen=True)
class LedgerViolation:
    """One failed check for one account.

    Attributes:
        user_id: Account owner.
        check: Name of the failed check.
        expected: Value the check expected.
        actual: Value found in the store.
    """

    user_id: int
    check: str
    expected: Decimal
    actual: Decimal


@dataclass(frozen=True)
class LedgerInvariantReport:
    """Result of a ledger invariant run."""

    checked_accounts: int
    violations: list[LedgerViolation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


def check_account(
    session: LedgerSessionPort,
    user_id: int,
) -> list[LedgerViolation]:
    """Run every check against one account inside an open unit of work."""
    accessor = BalanceAccessor(session)
    account = accessor.account(user_id, for_update=False)
    ledger = session.savings_ledger_total(user_id)
    # Deposits to savings leave the current balance without a journal row.
    expected_balance = session.journal_total(user_id) - ledger
    allocated = accessor.allocated_savings(user_id)

    violations = []
    if account.balance != expected_balance:
        violations.append(
            LedgerViolation(
                user_id,
                BALANCE_MATCHES_JOURNAL,
                expected_balance,
                account.balance,
            )
        )
    if account.savings_balance != ledger:
        violations.append(
            LedgerViolation(
                user_id,
                SAVINGS_MATCHES_LEDGER,
                ledger,
                account.savings_balance,
            )
        )
    if account.savings_balance < 0:
        violations.append(
            LedgerViolation(
                user_id,
                SAVINGS_NOT_NEGATIVE,
                Decimal("0.00"),
                account.savings_balance,
            )
        )
    if allocated > account.savings_balance:
        violations.append(
            LedgerViolation(
                user_id,
                ALLOCATIONS_WITHIN_SAVINGS,
                account.savings_balance,
                allocated,
            )
        )
    return violations


class CheckLedgerInvariantsUseCase:
    """Verify that account balances agree with the journal and ledger."""

    def __init__(self, ledger_store: LedgerStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            ledger_store: Port opening transactional scopes on the store.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_ids: Iterable[int] | None = None,
    ) -> LedgerInvariantReport:
        """Check the given accounts, or every account when none are given.

        Args:
            user_ids: Optional subset of accounts to check.

        Returns:
            LedgerInvariantReport: Number of accounts checked and violations.

        Raises:
            NotFoundError: If a requested user has no account.
        """
        with self._ledger_store.unit_of_work() as session:
            targets = (
                list(user_ids)
                if user_ids is not None
                else session.list_account_user_ids()
            )
            violations = []
            for user_id in targets:
                violations.extend(check_account(session, user_id))

        for violation in violations:
            self._logger.warning(
                f"Ledger check {violation.check} failed for user "
                f"{violation.user_id}: expected {violation.expected}, "
                f"found {violation.actual}"
            )
        self._logger.info(
            f"Checked {len(targets)} accounts, "
            f"found {len(violations)} violations"
        )
        return LedgerInvariantReport(
            checked_accounts=len(targets),
            violations=violations,
        )


__all__ = [
    "CheckLedgerInvariantsUseCase",
    "LedgerInvariantReport",
    "LedgerViolation",
    "check_account",
    "BALANCE_MATCHES_JOURNAL",
    "SAVINGS_MATCHES_LEDGER",
    "SAVINGS_NOT_NEGATIVE",
    "ALLOCATIONS_WITHIN_SAVINGS",
]
