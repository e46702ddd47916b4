"""Balance reads performed inside a caller's unit of work.

Reading through the open session (rather than a fresh connection) keeps the
values consistent with the writes that follow in the same transaction.
"""

from decimal import Decimal

from money_manager.application.ports.ledger_store import LedgerSessionPort
from money_manager.domain.errors import NotFoundError
from money_manager.domain.models import Account
from money_manager.domain.services.balances import unallocated_savings


class BalanceAccessor:
    """Compute stored and derived balances for one user."""

    def __init__(self, session: LedgerSessionPort) -> None:
        self._session = session

    def account(self, user_id: int, for_update: bool = True) -> Account:
        """Return the user's account row.

        Args:
            user_id: Authenticated user id.
            for_update: Lock the row until the unit of work ends.

        Raises:
            NotFoundError: If the user has no account.
        """
        account = self._session.fetch_account(user_id, for_update=for_update)
        if account is None:
            raise NotFoundError("Account not found")
        return account

    def current_balances(self, user_id: int) -> tuple[Decimal, Decimal]:
        """Return ``(balance, savings_balance)`` with the account row locked.

        Raises:
            NotFoundError: If the user has no account.
        """
        account = self.account(user_id)
        return account.balance, account.savings_balance

    def goal_current_amount(self, goal_id: int, user_id: int) -> Decimal:
        """Return the derived amount of an active goal owned by the user.

        An unfunded goal yields zero.

        Raises:
            NotFoundError: If the goal is absent, inactive or foreign.
        """
        amount = self._session.goal_current_amount(goal_id, user_id)
        if amount is None:
            raise NotFoundError("Savings goal not found")
        return amount

    def allocated_savings(self, user_id: int) -> Decimal:
        """Return savings earmarked for the user's active goals."""
        return self._session.active_allocation_total(user_id)

    def unallocated_savings(
        self,
        user_id: int,
        savings_balance: Decimal | None = None,
    ) -> Decimal:
        """Return savings not earmarked for any active goal.

        Args:
            user_id: Authenticated user id.
            savings_balance: Balance already read in this unit of work;
                fetched when omitted.
        """
        if savings_balance is None:
            _, savings_balance = self.current_balances(user_id)
        return unallocated_savings(
            savings_balance,
            self.allocated_savings(user_id),
        )


__all__ = ["BalanceAccessor"]
