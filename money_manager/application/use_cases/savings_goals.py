"""Use case managing savings goals and reading the savings ledger."""

from money_manager.application.ports.ledger_store import LedgerStorePort
from money_manager.application.use_cases.balance_accessor import (
    BalanceAccessor,
)
from money_manager.domain.errors import NotFoundError
from money_manager.domain.models import (
    SavingsGoal,
    SavingsGoalDraft,
    SavingsTransaction,
)
from money_manager.domain.services.validation import (
    parse_optional_date,
    validate_amount,
    validate_required_text,
)
from money_manager.infrastructure.logging.logger import get_app_logger


class SavingsGoalsUseCase:
    """Create, edit, deactivate and list savings goals.

    Goals never store a balance. Their current amount is derived from the
    savings ledger rows tagged to them, so editing or deactivating a goal
    does not touch the account balances.
    """

    def __init__(self, ledger_store: LedgerStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            ledger_store: Port opening transactional scopes on the store.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()

    def create(self, user_id: int, draft: SavingsGoalDraft) -> SavingsGoal:
        """Create an active goal with a zero current amount.

        Raises:
            ValidationError: If a field is malformed.
            NotFoundError: If the user has no account.
        """
        name, target_amount, deadline, description = self._validate(draft)
        with self._ledger_store.unit_of_work() as session:
            BalanceAccessor(session).account(user_id, for_update=False)
            goal = session.insert_goal(
                user_id,
                name,
                target_amount,
                deadline,
                description,
            )
        self._logger.info(f"Created savings goal {goal.id} for user {user_id}")
        return goal

    def update(
        self,
        goal_id: int,
        user_id: int,
        draft: SavingsGoalDraft,
    ) -> SavingsGoal:
        """Overwrite the name, target, deadline and description of a goal.

        Raises:
            ValidationError: If a field is malformed.
            NotFoundError: If the goal is absent, inactive or foreign.
        """
        name, target_amount, deadline, description = self._validate(draft)
        with self._ledger_store.unit_of_work() as session:
            goal = session.update_goal(
                goal_id,
                user_id,
                name,
                target_amount,
                deadline,
                description,
            )
        if goal is None:
            raise NotFoundError("Savings goal not found")
        self._logger.info(f"Updated savings goal {goal_id} for user {user_id}")
        return goal

    def deactivate(self, goal_id: int, user_id: int) -> None:
        """Soft-delete a goal; its ledger rows stay in place.

        Raises:
            NotFoundError: If the goal is absent, inactive or foreign.
        """
        with self._ledger_store.unit_of_work() as session:
            deactivated = session.deactivate_goal(goal_id, user_id)
        if not deactivated:
            raise NotFoundError("Savings goal not found")
        self._logger.info(
            f"Deactivated savings goal {goal_id} for user {user_id}"
        )

    def get(self, goal_id: int, user_id: int) -> SavingsGoal:
        """Return one active goal with its derived current amount.

        Raises:
            NotFoundError: If the goal is absent, inactive or foreign.
        """
        with self._ledger_store.unit_of_work() as session:
            goal = session.fetch_goal(goal_id, user_id)
        if goal is None:
            raise NotFoundError("Savings goal not found")
        return goal

    def list_goals(self, user_id: int) -> list[SavingsGoal]:
        """Return the user's active goals, newest first."""
        with self._ledger_store.unit_of_work() as session:
            return session.list_active_goals(user_id)

    def list_savings_transactions(
        self,
        user_id: int,
    ) -> list[SavingsTransaction]:
        """Return the user's savings ledger rows, most recent first."""
        with self._ledger_store.unit_of_work() as session:
            return session.list_savings_transactions(user_id)

    @staticmethod
    def _validate(draft: SavingsGoalDraft):
        name = validate_required_text(draft.name, "name")
        target_amount = validate_amount(draft.target_amount, "target_amount")
        deadline = parse_optional_date(draft.deadline, "deadline")
        return name, target_amount, deadline, draft.description or ""


__all__ = ["SavingsGoalsUseCase"]
