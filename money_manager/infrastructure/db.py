"""Database infrastructure for the money manager.

This module exposes concrete helpers to create and reuse the SQLAlchemy engine
connected to the ledger database. Server databases run every transaction at
the configured isolation level (SERIALIZABLE by default); SQLite databases
open each transaction with ``BEGIN IMMEDIATE`` so concurrent writers queue on
the database lock instead of both reading a stale balance.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import QueuePool

from money_manager.application.ports.database import DatabaseEnginePort
from money_manager.infrastructure.settings import LedgerSettings


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _configure_sqlite(engine: Engine) -> None:
    """Install pysqlite hooks for explicit transactions and foreign keys.

    Args:
        engine: Engine bound to a SQLite database.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Disable pysqlite's implicit BEGIN; transactions start in _on_begin.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def _create_engine(
    db_url: str,
    settings: LedgerSettings | None = None,
) -> Engine:
    """Create a configured SQLAlchemy engine for the ledger database.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)
        settings: Optional engine settings; read from the environment when
            omitted.

    Returns:
        Engine: A SQLAlchemy engine instance with a small connection pool,
        health checks and transaction isolation configured.
    """
    if make_url(db_url).get_backend_name() == "sqlite":
        engine = create_engine(db_url, future=True)
        _configure_sqlite(engine)
        return engine

    resolved = settings or LedgerSettings.from_env()
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=resolved.pool_size,
        max_overflow=resolved.max_overflow,
        pool_pre_ping=True,
        isolation_level=resolved.isolation_level,
        future=True,
    )


_ledger_engine: Optional[Engine] = None


def get_ledger_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the ledger database.

    Returns:
        Engine: Lazily initialized engine connected to the ledger store.
    """
    global _ledger_engine
    if _ledger_engine is None:
        db_url = _get_env_var("LEDGER_DB_URL")
        _ledger_engine = _create_engine(db_url)
    return _ledger_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so application code can depend only on the protocol.
    """

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the ledger database.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger store.
        """
        return get_ledger_engine()


__all__ = [
    "get_ledger_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
