"""Tests for the savings balance backfill job."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import text

from money_manager.application.use_cases.backfill_savings import (
    BackfillSavingsBalanceUseCase,
    SavingsAdjustment,
)
from money_manager.domain.models import TransferRequest

USER_ID = 1
OTHER_USER_ID = 2


@pytest.fixture
def drifted(funded_account, store, transfer, engine):
    """User 1 has 25.00 in the ledger but 0.00 stored; user 2 is clean."""
    transfer.execute(
        USER_ID,
        TransferRequest(amount="25.00", direction="to_savings"),
    )
    with store.unit_of_work() as session:
        session.insert_account(OTHER_USER_ID)
    with engine.begin() as conn:
        conn.execute(
            text("UPDATE accounts SET savings_balance = 0 WHERE user_id = 1")
        )


@pytest.fixture
def backfill(store):
    return BackfillSavingsBalanceUseCase(
        store,
        logger=MagicMock(),
        audit_logger=MagicMock(),
    )


def test_dry_run_reports_without_writing(drifted, backfill, read_account):
    result = backfill.run(dry_run=True)

    assert result.dry_run is True
    assert result.checked_count == 2
    assert result.adjustments == [
        SavingsAdjustment(
            user_id=USER_ID,
            old_savings_balance=Decimal("0.00"),
            new_savings_balance=Decimal("25.00"),
        )
    ]
    assert read_account().savings_balance == Decimal("0.00")


def test_backfill_aligns_savings_with_ledger(drifted, backfill, read_account):
    result = backfill.run()

    account = read_account()
    assert len(result.adjustments) == 1
    assert account.savings_balance == Decimal("25.00")
    assert account.balance == Decimal("75.00")
    assert backfill.run().adjustments == []
