"""Tests for savings goal management."""

from datetime import date
from decimal import Decimal

import pytest

from money_manager.domain.errors import NotFoundError, ValidationError
from money_manager.domain.models import SavingsGoalDraft, TransferRequest

USER_ID = 1
OTHER_USER_ID = 2


def test_create_goal_starts_empty(account, goals):
    goal = goals.create(
        USER_ID,
        SavingsGoalDraft(
            name="  Laptop ",
            target_amount="899.99",
            deadline="2024-12-31",
            description="for class",
        ),
    )

    assert goal.name == "Laptop"
    assert goal.target_amount == Decimal("899.99")
    assert goal.current_amount == Decimal("0.00")
    assert goal.deadline == date(2024, 12, 31)
    assert goal.is_active is True
    assert goals.list_goals(USER_ID) == [goal]


def test_create_goal_requires_account(store, goals):
    with pytest.raises(NotFoundError, match="Account not found"):
        goals.create(USER_ID, SavingsGoalDraft(name="Bike", target_amount=100))


@pytest.mark.parametrize(
    "draft",
    [
        SavingsGoalDraft(name="", target_amount="10"),
        SavingsGoalDraft(name="Bike", target_amount="0"),
        SavingsGoalDraft(name="Bike", target_amount="10", deadline="soon"),
    ],
)
def test_create_goal_validates_fields(account, goals, draft):
    with pytest.raises(ValidationError):
        goals.create(USER_ID, draft)


def test_current_amount_is_derived_from_ledger(
    funded_account,
    goals,
    transfer,
):
    """Deposits and withdrawals tagged to a goal drive its amount."""
    goal = goals.create(
        USER_ID,
        SavingsGoalDraft(name="Trip", target_amount="50.00"),
    )
    transfer.execute(
        USER_ID,
        TransferRequest(amount="60.00", direction="to_savings", goal_id=goal.id),
    )
    transfer.execute(
        USER_ID,
        TransferRequest(
            amount="5.50", direction="from_savings", goal_id=goal.id
        ),
    )

    refreshed = goals.get(goal.id, USER_ID)
    assert refreshed.current_amount == Decimal("54.50")
    assert refreshed.current_amount > refreshed.target_amount


def test_update_goal_keeps_allocation(funded_account, goals, transfer):
    goal = goals.create(
        USER_ID,
        SavingsGoalDraft(name="Trip", target_amount="50.00"),
    )
    transfer.execute(
        USER_ID,
        TransferRequest(amount="20.00", direction="to_savings", goal_id=goal.id),
    )

    updated = goals.update(
        goal.id,
        USER_ID,
        SavingsGoalDraft(name="Summer trip", target_amount="75.00"),
    )

    assert updated.name == "Summer trip"
    assert updated.target_amount == Decimal("75.00")
    assert updated.current_amount == Decimal("20.00")


def test_deactivate_hides_goal_but_keeps_rows(
    funded_account,
    goals,
    transfer,
):
    goal = goals.create(
        USER_ID,
        SavingsGoalDraft(name="Trip", target_amount="50.00"),
    )
    transfer.execute(
        USER_ID,
        TransferRequest(amount="20.00", direction="to_savings", goal_id=goal.id),
    )

    goals.deactivate(goal.id, USER_ID)

    assert goals.list_goals(USER_ID) == []
    with pytest.raises(NotFoundError):
        goals.get(goal.id, USER_ID)
    with pytest.raises(NotFoundError):
        goals.deactivate(goal.id, USER_ID)
    with pytest.raises(NotFoundError):
        goals.update(
            goal.id,
            USER_ID,
            SavingsGoalDraft(name="Trip", target_amount="50.00"),
        )
    rows = goals.list_savings_transactions(USER_ID)
    assert [row.goal_id for row in rows] == [goal.id]


def test_goals_of_other_users_are_not_found(account, store, goals):
    with store.unit_of_work() as session:
        session.insert_account(OTHER_USER_ID)
    goal = goals.create(
        USER_ID,
        SavingsGoalDraft(name="Phone", target_amount="300.00"),
    )

    with pytest.raises(NotFoundError):
        goals.get(goal.id, OTHER_USER_ID)
    with pytest.raises(NotFoundError):
        goals.deactivate(goal.id, OTHER_USER_ID)
    assert goals.list_goals(OTHER_USER_ID) == []
