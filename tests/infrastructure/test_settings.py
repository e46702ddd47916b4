"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

import pytest

from money_manager.infrastructure import settings as settings_module
from money_manager.infrastructure.settings import LedgerSettings


@pytest.fixture(autouse=True)
def _quiet_env(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    for name in (
        "LEDGER_ISOLATION_LEVEL",
        "LEDGER_POOL_SIZE",
        "LEDGER_MAX_OVERFLOW",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults() -> None:
    settings = LedgerSettings.from_env()

    assert settings == LedgerSettings(
        isolation_level="SERIALIZABLE",
        pool_size=5,
        max_overflow=5,
    )


def test_from_env_reads_values(monkeypatch) -> None:
    monkeypatch.setenv("LEDGER_ISOLATION_LEVEL", " read committed ")
    monkeypatch.setenv("LEDGER_POOL_SIZE", "10")
    monkeypatch.setenv("LEDGER_MAX_OVERFLOW", "0")

    settings = LedgerSettings.from_env()

    assert settings.isolation_level == "READ COMMITTED"
    assert settings.pool_size == 10
    assert settings.max_overflow == 0


def test_from_env_falls_back_on_invalid_values(monkeypatch) -> None:
    """Invalid values are logged and replaced by defaults."""
    logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: logger)
    monkeypatch.setenv("LEDGER_ISOLATION_LEVEL", "CHAOS")
    monkeypatch.setenv("LEDGER_POOL_SIZE", "many")
    monkeypatch.setenv("LEDGER_MAX_OVERFLOW", "-3")

    settings = LedgerSettings.from_env()

    assert settings == LedgerSettings()
    assert logger.warning.call_count == 3
