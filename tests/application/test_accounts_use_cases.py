"""Tests for account provisioning and allowance configuration."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from money_manager.application.use_cases.accounts import (
    GetAccountUseCase,
    OpenAccountUseCase,
    UpdateAllowanceUseCase,
)
from money_manager.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
)

USER_ID = 1


def test_open_account_starts_at_zero(store, clock):
    account = OpenAccountUseCase(store, logger=MagicMock()).execute(USER_ID)

    assert account.user_id == USER_ID
    assert account.balance == Decimal("0.00")
    assert account.savings_balance == Decimal("0.00")
    assert account.allowance_income == Decimal("0.00")
    assert account.created_at == clock()


def test_open_account_twice_conflicts(account, store):
    with pytest.raises(ConflictError):
        OpenAccountUseCase(store, logger=MagicMock()).execute(USER_ID)


def test_get_account(account, store):
    assert GetAccountUseCase(store).execute(USER_ID) == account
    with pytest.raises(NotFoundError):
        GetAccountUseCase(store).execute(99)


def test_update_allowance_accepts_zero_and_rejects_negative(account, store):
    audit_logger = MagicMock()
    use_case = UpdateAllowanceUseCase(
        store,
        logger=MagicMock(),
        audit_logger=audit_logger,
    )

    assert use_case.execute(USER_ID, "120.5").allowance_income == Decimal(
        "120.50"
    )
    assert use_case.execute(USER_ID, 0).allowance_income == Decimal("0.00")
    with pytest.raises(ValidationError):
        use_case.execute(USER_ID, "-1")
    with pytest.raises(NotFoundError):
        use_case.execute(99, "10")
    assert audit_logger.info.call_count == 2
