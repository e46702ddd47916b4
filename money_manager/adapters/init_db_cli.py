"""CLI to bootstrap the ledger schema and validate the database connection.

This adapter is meant for local operations: it instantiates the concrete
database adapter from the infrastructure layer, creates any missing ledger
tables and runs a basic health check.
"""

from money_manager.infrastructure.container import build_database_adapter
from money_manager.infrastructure.logging.logger import get_app_logger
from money_manager.infrastructure.schema import ensure_schema


def main() -> None:
    """Create missing ledger tables and check the connection."""
    adapter = build_database_adapter()
    logger = get_app_logger()

    engine = adapter.get_ledger_engine()
    logger.info(f"Ledger DB: {engine.url}")

    ensure_schema(engine)
    with engine.connect() as conn:
        conn.exec_driver_sql("SELECT 1")

    logger.info("Ledger schema is in place and the connection is working.")


if __name__ == "__main__":  # pragma: no cover
    main()
