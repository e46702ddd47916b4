"""Use case moving money between the current and savings balances.

The transfer reads both balances with the account row locked, validates the
request against them and against goal allocations, then writes the new
balances and one savings ledger row in the same transaction. A failed check
raises before any write, and the unit of work rolls back whatever is open.
"""

from dataclasses import dataclass
from decimal import Decimal

from money_manager.application.ports.ledger_store import (
    LedgerSessionPort,
    LedgerStorePort,
)
from money_manager.application.use_cases.balance_accessor import (
    BalanceAccessor,
)
from money_manager.domain.constants import (
    DEFAULT_TRANSFER_DESCRIPTIONS,
    DEPOSIT,
    TO_SAVINGS,
    TRANSFER_DIRECTIONS,
    WITHDRAWAL,
)
from money_manager.domain.errors import (
    AllocationConflictError,
    InsufficientFundsError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from money_manager.domain.models import SavingsTransaction, TransferRequest
from money_manager.domain.services.validation import (
    validate_amount,
    validate_choice,
)
from money_manager.infrastructure.logging.logger import (
    get_app_logger,
    get_audit_logger,
)


@dataclass(frozen=True)
class TransferResult:
    """Outcome of a committed transfer.

    Attributes:
        savings_transaction: Ledger row written for the transfer.
        new_balance: Current balance after the transfer.
        new_savings_balance: Savings balance after the transfer.
    """

    savings_transaction: SavingsTransaction
    new_balance: Decimal
    new_savings_balance: Decimal


class TransferSavingsUseCase:
    """Transfer between the current balance and savings."""

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

    def execute(self, user_id: int, request: TransferRequest) -> TransferResult:
        """Run the transfer.

        Args:
            user_id: Authenticated user id.
            request: Amount, direction and optional goal.

        Returns:
            TransferResult: Ledger row and the new balances.

        Raises:
            ValidationError: If the amount or direction is malformed.
            NotFoundError: If the account or the named goal is missing.
            InsufficientFundsError: If the source balance (or goal) is short.
            AllocationConflictError: If an untargeted withdrawal would dip
                into savings earmarked for goals.
        """
        amount = validate_amount(request.amount)
        direction = validate_choice(
            request.direction, TRANSFER_DIRECTIONS, "type"
        )
        goal_id = self._validate_goal_id(request.goal_id)
        description = (
            request.description or DEFAULT_TRANSFER_DESCRIPTIONS[direction]
        )

        with self._ledger_store.unit_of_work() as session:
            accessor = BalanceAccessor(session)
            balance, savings_balance = accessor.current_balances(user_id)
            if direction == TO_SAVINGS:
                self._check_deposit(session, user_id, amount, balance, goal_id)
                new_balance = balance - amount
                new_savings_balance = savings_balance + amount
                kind = DEPOSIT
            else:
                self._check_withdrawal(
                    accessor, user_id, amount, savings_balance, goal_id
                )
                new_balance = balance + amount
                new_savings_balance = savings_balance - amount
                kind = WITHDRAWAL

            if not session.set_balances(
                user_id, new_balance, new_savings_balance
            ):
                raise StoreError(
                    f"Account row for user {user_id} was not updated"
                )
            savings_transaction = session.insert_savings_transaction(
                user_id,
                goal_id,
                amount,
                kind,
                description,
                session.now().date(),
            )

        self._logger.info(
            f"Transfer {direction} of {amount} committed for user {user_id}"
        )
        self._audit_logger.info(
            f"op=transfer direction={direction} user={user_id} "
            f"goal={goal_id} amount={amount} "
            f"balance={new_balance} savings_balance={new_savings_balance}"
        )
        return TransferResult(
            savings_transaction=savings_transaction,
            new_balance=new_balance,
            new_savings_balance=new_savings_balance,
        )

    @staticmethod
    def _validate_goal_id(goal_id) -> int | None:
        if goal_id is None:
            return None
        if isinstance(goal_id, bool) or not isinstance(goal_id, int):
            raise ValidationError("goal_id must be an integer")
        return goal_id

    @staticmethod
    def _check_deposit(
        session: LedgerSessionPort,
        user_id: int,
        amount: Decimal,
        balance: Decimal,
        goal_id: int | None,
    ) -> None:
        if amount > balance:
            raise InsufficientFundsError(
                f"Insufficient current balance: {balance} available, "
                f"{amount} requested"
            )
        if goal_id is not None and session.fetch_goal(goal_id, user_id) is None:
            raise NotFoundError("Savings goal not found")

    def _check_withdrawal(
        self,
        accessor: BalanceAccessor,
        user_id: int,
        amount: Decimal,
        savings_balance: Decimal,
        goal_id: int | None,
    ) -> None:
        if amount > savings_balance:
            raise InsufficientFundsError(
                f"Insufficient savings balance: {savings_balance} available, "
                f"{amount} requested"
            )
        if goal_id is None:
            unallocated = accessor.unallocated_savings(
                user_id,
                savings_balance,
            )
            # Without allocations every saved cent is withdrawable.
            if unallocated < savings_balance and amount > unallocated:
                self._logger.warning(
                    f"Blocked untargeted withdrawal of {amount} for user "
                    f"{user_id}: {unallocated} unallocated"
                )
                raise AllocationConflictError(
                    f"Cannot withdraw {amount} from general savings. Only "
                    f"{unallocated} available in unallocated savings. Select "
                    "a specific goal to withdraw from or reduce the amount."
                )
            return
        current_amount = accessor.goal_current_amount(goal_id, user_id)
        if amount > current_amount:
            raise InsufficientFundsError(
                f"Cannot withdraw {amount} from this goal. Only "
                f"{current_amount} available in this goal."
            )


__all__ = ["TransferSavingsUseCase", "TransferResult"]
