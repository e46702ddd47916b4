"""Concurrent callers against one account must not lose updates."""

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from unittest.mock import MagicMock

from money_manager.application.use_cases.accounts import (
    UpdateAllowanceUseCase,
)
from money_manager.application.use_cases.auto_allowance import (
    ProcessAutoAllowanceUseCase,
)
from money_manager.application.use_cases.ledger_invariants import (
    CheckLedgerInvariantsUseCase,
)
from money_manager.domain.errors import ConflictError, InsufficientFundsError
from money_manager.domain.models import TransferRequest

USER_ID = 1


def _run_together(workers: int, call, expected_errors):
    """Start ``workers`` calls at once and sort outcomes into two lists."""
    barrier = threading.Barrier(workers)

    def _attempt():
        barrier.wait()
        try:
            return call(), None
        except expected_errors as exc:
            return None, exc

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(_attempt) for _ in range(workers)]
        outcomes = [future.result() for future in futures]
    successes = [result for result, error in outcomes if error is None]
    failures = [error for result, error in outcomes if error is not None]
    return successes, failures


def test_concurrent_transfers_never_overdraw(
    funded_account,
    transfer,
    store,
    read_account,
):
    """Eight 30.00 deposits against 100.00: exactly three fit."""
    request = TransferRequest(amount="30.00", direction="to_savings")

    successes, failures = _run_together(
        8,
        lambda: transfer.execute(USER_ID, request),
        InsufficientFundsError,
    )

    account = read_account()
    assert len(successes) == 3
    assert len(failures) == 5
    assert account.balance == Decimal("10.00")
    assert account.savings_balance == Decimal("90.00")
    report = CheckLedgerInvariantsUseCase(store, logger=MagicMock()).execute()
    assert report.ok


def test_concurrent_allowance_calls_credit_once(
    account,
    store,
    journal,
    read_account,
):
    UpdateAllowanceUseCase(
        store,
        logger=MagicMock(),
        audit_logger=MagicMock(),
    ).execute(USER_ID, "250.00")
    allowance = ProcessAutoAllowanceUseCase(
        store,
        journal=journal,
        logger=MagicMock(),
        audit_logger=MagicMock(),
    )

    successes, failures = _run_together(
        6,
        lambda: allowance.execute(USER_ID),
        ConflictError,
    )

    assert len(successes) == 1
    assert len(failures) == 5
    assert read_account().balance == Decimal("250.00")
