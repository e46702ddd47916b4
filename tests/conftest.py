"""Shared fixtures for ledger tests.

Store-backed tests run against a file-based SQLite database created by the
production engine factory, so the BEGIN IMMEDIATE and foreign key hooks are
exercised too.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from money_manager.application.use_cases.savings_goals import (
    SavingsGoalsUseCase,
)
from money_manager.application.use_cases.transactions import (
    TransactionJournalUseCase,
)
from money_manager.application.use_cases.transfer_savings import (
    TransferSavingsUseCase,
)
from money_manager.domain.models import TransactionDraft
from money_manager.infrastructure import db as db_module
from money_manager.infrastructure.ledger_store import SqlAlchemyLedgerStore
from money_manager.infrastructure.logging import logger as logger_module
from money_manager.infrastructure.schema import ensure_schema

USER_ID = 1
OTHER_USER_ID = 2


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class FakeDatabasePort:
    def __init__(self, engine) -> None:
        self.engine = engine

    def get_ledger_engine(self):
        return self.engine


@pytest.fixture(autouse=True)
def _logs_in_tmp(monkeypatch, tmp_path):
    """Keep log files written by real loggers out of the project tree."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)


@pytest.fixture
def engine(tmp_path):
    engine = db_module._create_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    ensure_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 3, 15, 12, 0, 0))


@pytest.fixture
def store(engine, clock):
    return SqlAlchemyLedgerStore(
        FakeDatabasePort(engine),
        clock=clock,
        logger=MagicMock(),
    )


@pytest.fixture
def account(store):
    with store.unit_of_work() as session:
        return session.insert_account(USER_ID)


@pytest.fixture
def journal(store):
    return TransactionJournalUseCase(
        store,
        logger=MagicMock(),
        audit_logger=MagicMock(),
    )


@pytest.fixture
def transfer(store):
    return TransferSavingsUseCase(
        store,
        logger=MagicMock(),
        audit_logger=MagicMock(),
    )


@pytest.fixture
def goals(store):
    return SavingsGoalsUseCase(store, logger=MagicMock())


@pytest.fixture
def funded_account(account, journal):
    """Account holding a current balance of 100.00 from one income entry."""
    journal.create(
        USER_ID,
        TransactionDraft(
            amount=Decimal("100.00"),
            kind="income",
            category="Part-time Job",
            date="2024-03-01",
        ),
    )
    return account


@pytest.fixture
def read_account(store):
    """Return a reader fetching the stored account row in a fresh scope."""

    def _read(user_id: int = USER_ID):
        with store.unit_of_work() as session:
            return session.fetch_account(user_id)

    return _read
