"""Application port for transactional ledger storage.

A unit of work maps to exactly one database transaction: everything done
through the yielded session commits together, and any exception escaping the
``with`` block rolls every write back.
"""

from contextlib import AbstractContextManager
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol

from money_manager.domain.models import (
    Account,
    SavingsGoal,
    SavingsTransaction,
    Transaction,
)


class LedgerSessionPort(Protocol):
    """Operations available inside one unit of work."""

    def now(self) -> datetime:
        """Return the server clock used for row timestamps."""

    # Accounts

    def fetch_account(
        self,
        user_id: int,
        for_update: bool = False,
    ) -> Account | None:
        """Return the user's account, locking the row when requested."""

    def insert_account(self, user_id: int) -> Account:
        """Create a zero-balance account for the user."""

    def update_allowance(
        self,
        user_id: int,
        allowance_income: Decimal,
    ) -> Account | None:
        """Set the recurring allowance amount."""

    def apply_balance_delta(self, user_id: int, delta: Decimal) -> bool:
        """Add ``delta`` to the current balance; False when no account."""

    def set_balances(
        self,
        user_id: int,
        balance: Decimal,
        savings_balance: Decimal,
    ) -> bool:
        """Write both balances in one statement; False when no account."""

    def list_account_user_ids(self) -> list[int]:
        """Return the ids of every user holding an account."""

    # Journal

    def insert_transaction(
        self,
        user_id: int,
        amount: Decimal,
        kind: str,
        category: str,
        description: str,
        entry_date: date,
    ) -> Transaction:
        """Insert a journal entry."""

    def fetch_transaction(
        self,
        transaction_id: int,
        user_id: int,
    ) -> Transaction | None:
        """Return a journal entry owned by the user."""

    def update_transaction(
        self,
        transaction_id: int,
        user_id: int,
        amount: Decimal,
        kind: str,
        category: str,
        description: str,
        entry_date: date,
    ) -> Transaction | None:
        """Overwrite every field of a journal entry owned by the user."""

    def delete_transaction(self, transaction_id: int, user_id: int) -> bool:
        """Delete a journal entry owned by the user."""

    def list_transactions(
        self,
        user_id: int,
        category: str | None = None,
        kind: str | None = None,
        limit: int = 5,
        offset: int = 0,
    ) -> list[Transaction]:
        """Return journal entries, most recent first."""

    def count_transactions_created_between(
        self,
        user_id: int,
        kind: str,
        category: str,
        start: datetime,
        end: datetime,
    ) -> int:
        """Count entries created in ``[start, end)``."""

    def journal_total(self, user_id: int) -> Decimal:
        """Return the signed sum of the user's journal."""

    # Savings goals and ledger

    def insert_goal(
        self,
        user_id: int,
        name: str,
        target_amount: Decimal,
        deadline: date | None,
        description: str,
    ) -> SavingsGoal:
        """Create an active savings goal."""

    def update_goal(
        self,
        goal_id: int,
        user_id: int,
        name: str,
        target_amount: Decimal,
        deadline: date | None,
        description: str,
    ) -> SavingsGoal | None:
        """Update a goal owned by the user."""

    def deactivate_goal(self, goal_id: int, user_id: int) -> bool:
        """Soft delete an active goal owned by the user."""

    def fetch_goal(
        self,
        goal_id: int,
        user_id: int,
        active_only: bool = True,
    ) -> SavingsGoal | None:
        """Return a goal with its derived current amount."""

    def list_active_goals(self, user_id: int) -> list[SavingsGoal]:
        """Return active goals with derived current amounts."""

    def goal_current_amount(
        self,
        goal_id: int,
        user_id: int,
    ) -> Decimal | None:
        """Return the derived amount of an active goal, None if missing."""

    def active_allocation_total(self, user_id: int) -> Decimal:
        """Return the summed derived amounts of the user's active goals."""

    def savings_ledger_total(self, user_id: int) -> Decimal:
        """Return the signed sum of the user's savings ledger."""

    def insert_savings_transaction(
        self,
        user_id: int,
        goal_id: int | None,
        amount: Decimal,
        kind: str,
        description: str,
        entry_date: date,
    ) -> SavingsTransaction:
        """Append a savings ledger entry."""

    def list_savings_transactions(
        self,
        user_id: int,
    ) -> list[SavingsTransaction]:
        """Return the savings ledger, most recent first."""


class LedgerStorePort(Protocol):
    """Port opening transactional scopes on the ledger store."""

    def unit_of_work(self) -> AbstractContextManager[LedgerSessionPort]:
        """Open one database transaction.

        Raises:
            StoreError: If the datastore fails while the scope is open or
                while committing.
        """


__all__ = ["LedgerSessionPort", "LedgerStorePort"]
