"""Tests for the composition root."""

from unittest.mock import MagicMock

from money_manager.application.use_cases.auto_allowance import (
    ProcessAutoAllowanceUseCase,
)
from money_manager.application.use_cases.transfer_savings import (
    TransferSavingsUseCase,
)
from money_manager.infrastructure import container
from money_manager.infrastructure.ledger_store import SqlAlchemyLedgerStore


def test_build_ledger_store_uses_database_adapter(monkeypatch):
    dummy_adapter = object()
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())
    monkeypatch.setattr(
        container,
        "build_database_adapter",
        lambda: dummy_adapter,
    )

    store = container.build_ledger_store()

    assert isinstance(store, SqlAlchemyLedgerStore)
    assert store._db_port is dummy_adapter


def test_use_case_builders_accept_a_shared_store():
    store = MagicMock()

    transfer = container.build_transfer_savings(store)
    allowance = container.build_auto_allowance(store)

    assert isinstance(transfer, TransferSavingsUseCase)
    assert isinstance(allowance, ProcessAutoAllowanceUseCase)
    assert allowance._ledger_store is store
    assert allowance._journal._ledger_store is store
