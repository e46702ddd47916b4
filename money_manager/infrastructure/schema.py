"""Bootstrap DDL for an empty ledger database.

The statements are idempotent (``IF NOT EXISTS``) and only create what is
missing; altering existing tables belongs to migrations run outside this
package. Statements are executed one at a time because SQLite drivers reject
multi-statement strings.
"""

from sqlalchemy.engine import Connection, Engine

ACCOUNTS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS accounts (
    id {id_column},
    user_id INTEGER NOT NULL UNIQUE,
    balance DECIMAL(20,2) NOT NULL DEFAULT 0.00,
    savings_balance DECIMAL(20,2) NOT NULL DEFAULT 0.00,
    allowance_income DECIMAL(20,2) NOT NULL DEFAULT 0.00,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""

TRANSACTIONS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS transactions (
    id {id_column},
    user_id INTEGER NOT NULL
        REFERENCES accounts(user_id) ON DELETE CASCADE,
    amount DECIMAL(20,2) NOT NULL CHECK (amount > 0),
    kind VARCHAR(10) NOT NULL CHECK (kind IN ('income', 'expense')),
    category VARCHAR(100) NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    date DATE NOT NULL,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""

SAVINGS_GOALS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS savings_goals (
    id {id_column},
    user_id INTEGER NOT NULL
        REFERENCES accounts(user_id) ON DELETE CASCADE,
    name VARCHAR(255) NOT NULL,
    target_amount DECIMAL(20,2) NOT NULL CHECK (target_amount > 0),
    deadline DATE,
    description TEXT NOT NULL DEFAULT '',
    is_active BOOLEAN NOT NULL DEFAULT TRUE,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""

SAVINGS_TRANSACTIONS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS savings_transactions (
    id {id_column},
    user_id INTEGER NOT NULL
        REFERENCES accounts(user_id) ON DELETE CASCADE,
    goal_id INTEGER REFERENCES savings_goals(id) ON DELETE SET NULL,
    amount DECIMAL(20,2) NOT NULL CHECK (amount > 0),
    kind VARCHAR(20) NOT NULL CHECK (kind IN ('deposit', 'withdrawal')),
    description TEXT NOT NULL DEFAULT '',
    date DATE NOT NULL,
    created_at TIMESTAMP NOT NULL
)
"""

INDEX_SQL = (
    "CREATE INDEX IF NOT EXISTS idx_transactions_user_id "
    "ON transactions(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(date)",
    "CREATE INDEX IF NOT EXISTS idx_transactions_category "
    "ON transactions(category)",
    "CREATE INDEX IF NOT EXISTS idx_savings_goals_user_id "
    "ON savings_goals(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_savings_transactions_user_id "
    "ON savings_transactions(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_savings_transactions_goal_id "
    "ON savings_transactions(goal_id)",
)

TABLE_SQL = (
    ACCOUNTS_TABLE_SQL,
    TRANSACTIONS_TABLE_SQL,
    SAVINGS_GOALS_TABLE_SQL,
    SAVINGS_TRANSACTIONS_TABLE_SQL,
)


def _id_column(dialect_name: str) -> str:
    """Return the auto-increment primary key clause for a dialect."""
    if dialect_name == "postgresql":
        return "SERIAL PRIMARY KEY"
    if dialect_name == "sqlite":
        return "INTEGER PRIMARY KEY AUTOINCREMENT"
    return "INTEGER PRIMARY KEY"


def schema_statements(dialect_name: str) -> list[str]:
    """Return the bootstrap statements for a dialect, in execution order."""
    id_column = _id_column(dialect_name)
    tables = [sql.format(id_column=id_column) for sql in TABLE_SQL]
    return tables + list(INDEX_SQL)


def _create_schema(conn: Connection) -> None:
    for statement in schema_statements(conn.dialect.name):
        conn.exec_driver_sql(statement)


def ensure_schema(engine: Engine) -> None:
    """Create the ledger tables and indexes when they do not exist.

    Args:
        engine: Engine connected to the ledger database.
    """
    with engine.begin() as conn:
        _create_schema(conn)


__all__ = ["ensure_schema", "schema_statements"]
