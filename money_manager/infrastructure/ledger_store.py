"""SQLAlchemy-backed ledger store.

Each unit of work is a single ``Engine.begin()`` transaction. Money columns
are bound and read through ``Numeric(20, 2)`` so amounts cross the driver
boundary as Decimals on PostgreSQL and as cent-precise floats on SQLite.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, Integer, Numeric, String
from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from money_manager.application.ports.database import DatabaseEnginePort
from money_manager.application.ports.ledger_store import (
    LedgerSessionPort,
    LedgerStorePort,
)
from money_manager.domain.errors import StoreError
from money_manager.domain.models import (
    Account,
    SavingsGoal,
    SavingsTransaction,
    Transaction,
)
from money_manager.infrastructure.logging.logger import get_app_logger
from money_manager.utils.decimal_utils import to_money

MONEY = Numeric(20, 2)

ACCOUNT_COLUMNS = {
    "user_id": Integer(),
    "balance": MONEY,
    "savings_balance": MONEY,
    "allowance_income": MONEY,
    "created_at": DateTime(),
    "updated_at": DateTime(),
}

TRANSACTION_COLUMNS = {
    "id": Integer(),
    "user_id": Integer(),
    "amount": MONEY,
    "kind": String(),
    "category": String(),
    "description": String(),
    "date": Date(),
    "created_at": DateTime(),
    "updated_at": DateTime(),
}

GOAL_COLUMNS = {
    "id": Integer(),
    "user_id": Integer(),
    "name": String(),
    "target_amount": MONEY,
    "current_amount": MONEY,
    "deadline": Date(),
    "description": String(),
    "is_active": Boolean(),
    "created_at": DateTime(),
    "updated_at": DateTime(),
}

SAVINGS_TRANSACTION_COLUMNS = {
    "id": Integer(),
    "user_id": Integer(),
    "goal_id": Integer(),
    "amount": MONEY,
    "kind": String(),
    "description": String(),
    "date": Date(),
    "created_at": DateTime(),
}

_PARAM_TYPES = {
    "amount": MONEY,
    "delta": MONEY,
    "balance": MONEY,
    "savings_balance": MONEY,
    "allowance_income": MONEY,
    "target_amount": MONEY,
    "entry_date": Date(),
    "deadline": Date(),
    "created_at": DateTime(),
    "updated_at": DateTime(),
    "start": DateTime(),
    "end": DateTime(),
}


def _statement(sql: str, columns: dict | None = None):
    """Build a textual statement with typed parameters and result columns.

    Args:
        sql: Raw SQL using ``:name`` placeholders.
        columns: Optional mapping of result column names to SQL types.

    Returns:
        TextClause | TextualSelect: Executable statement.
    """
    stmt = text(sql)
    typed = [
        bindparam(name, type_=type_)
        for name, type_ in _PARAM_TYPES.items()
        if f":{name}" in sql
    ]
    if typed:
        stmt = stmt.bindparams(*typed)
    if columns:
        stmt = stmt.columns(**columns)
    return stmt


SIGNED_JOURNAL_AMOUNT = (
    "CASE WHEN kind = 'income' THEN amount ELSE -amount END"
)

SIGNED_SAVINGS_AMOUNT = """
CASE
    WHEN st.kind = 'deposit' THEN st.amount
    WHEN st.kind = 'withdrawal' THEN -st.amount
    ELSE 0
END
"""

SELECT_ACCOUNT_SQL = """
SELECT user_id, balance, savings_balance, allowance_income,
       created_at, updated_at
FROM accounts
WHERE user_id = :user_id
"""

INSERT_ACCOUNT_SQL = """
INSERT INTO accounts (
    user_id, balance, savings_balance, allowance_income,
    created_at, updated_at
)
VALUES (:user_id, 0, 0, 0, :created_at, :updated_at)
RETURNING user_id, balance, savings_balance, allowance_income,
          created_at, updated_at
"""

UPDATE_ALLOWANCE_SQL = """
UPDATE accounts
SET allowance_income = :allowance_income, updated_at = :updated_at
WHERE user_id = :user_id
RETURNING user_id, balance, savings_balance, allowance_income,
          created_at, updated_at
"""

APPLY_BALANCE_DELTA_SQL = """
UPDATE accounts
SET balance = balance + :delta, updated_at = :updated_at
WHERE user_id = :user_id
"""

SET_BALANCES_SQL = """
UPDATE accounts
SET balance = :balance,
    savings_balance = :savings_balance,
    updated_at = :updated_at
WHERE user_id = :user_id
"""

SELECT_ACCOUNT_USER_IDS_SQL = "SELECT user_id FROM accounts ORDER BY user_id"

TRANSACTION_FIELDS = """
id, user_id, amount, kind, category, description, date,
created_at, updated_at
"""

INSERT_TRANSACTION_SQL = f"""
INSERT INTO transactions (
    user_id, amount, kind, category, description, date,
    created_at, updated_at
)
VALUES (
    :user_id, :amount, :kind, :category, :description, :entry_date,
    :created_at, :updated_at
)
RETURNING {TRANSACTION_FIELDS}
"""

SELECT_TRANSACTION_SQL = f"""
SELECT {TRANSACTION_FIELDS}
FROM transactions
WHERE id = :transaction_id AND user_id = :user_id
"""

UPDATE_TRANSACTION_SQL = f"""
UPDATE transactions
SET amount = :amount,
    kind = :kind,
    category = :category,
    description = :description,
    date = :entry_date,
    updated_at = :updated_at
WHERE id = :transaction_id AND user_id = :user_id
RETURNING {TRANSACTION_FIELDS}
"""

DELETE_TRANSACTION_SQL = """
DELETE FROM transactions
WHERE id = :transaction_id AND user_id = :user_id
"""

COUNT_TRANSACTIONS_CREATED_SQL = """
SELECT COUNT(*) AS entry_count
FROM transactions
WHERE user_id = :user_id
  AND kind = :kind
  AND category = :category
  AND created_at >= :start
  AND created_at < :end
"""

JOURNAL_TOTAL_SQL = f"""
SELECT COALESCE(SUM({SIGNED_JOURNAL_AMOUNT}), 0) AS total
FROM transactions
WHERE user_id = :user_id
"""

GOAL_SELECT = f"""
SELECT g.id AS id,
       g.user_id AS user_id,
       g.name AS name,
       g.target_amount AS target_amount,
       COALESCE(SUM({SIGNED_SAVINGS_AMOUNT}), 0) AS current_amount,
       g.deadline AS deadline,
       g.description AS description,
       g.is_active AS is_active,
       g.created_at AS created_at,
       g.updated_at AS updated_at
FROM savings_goals g
LEFT JOIN savings_transactions st
    ON st.goal_id = g.id AND st.user_id = g.user_id
"""

GOAL_GROUP_BY = """
GROUP BY g.id, g.user_id, g.name, g.target_amount, g.deadline,
         g.description, g.is_active, g.created_at, g.updated_at
"""

SELECT_GOAL_SQL = (
    GOAL_SELECT
    + " WHERE g.id = :goal_id AND g.user_id = :user_id"
    + GOAL_GROUP_BY
)

SELECT_ACTIVE_GOAL_SQL = (
    GOAL_SELECT
    + " WHERE g.id = :goal_id AND g.user_id = :user_id"
    + " AND g.is_active = TRUE"
    + GOAL_GROUP_BY
)

SELECT_ACTIVE_GOALS_SQL = (
    GOAL_SELECT
    + " WHERE g.user_id = :user_id AND g.is_active = TRUE"
    + GOAL_GROUP_BY
    + " ORDER BY g.created_at DESC, g.id DESC"
)

INSERT_GOAL_SQL = """
INSERT INTO savings_goals (
    user_id, name, target_amount, deadline, description, is_active,
    created_at, updated_at
)
VALUES (
    :user_id, :name, :target_amount, :deadline, :description, TRUE,
    :created_at, :updated_at
)
RETURNING id
"""

UPDATE_GOAL_SQL = """
UPDATE savings_goals
SET name = :name,
    target_amount = :target_amount,
    deadline = :deadline,
    description = :description,
    updated_at = :updated_at
WHERE id = :goal_id AND user_id = :user_id AND is_active = TRUE
"""

DEACTIVATE_GOAL_SQL = """
UPDATE savings_goals
SET is_active = FALSE, updated_at = :updated_at
WHERE id = :goal_id AND user_id = :user_id AND is_active = TRUE
"""

GOAL_CURRENT_AMOUNT_SQL = f"""
SELECT g.id AS id,
       COALESCE(SUM({SIGNED_SAVINGS_AMOUNT}), 0) AS current_amount
FROM savings_goals g
LEFT JOIN savings_transactions st
    ON st.goal_id = g.id AND st.user_id = g.user_id
WHERE g.id = :goal_id AND g.user_id = :user_id AND g.is_active = TRUE
GROUP BY g.id
"""

ACTIVE_ALLOCATION_TOTAL_SQL = f"""
SELECT COALESCE(SUM({SIGNED_SAVINGS_AMOUNT}), 0) AS total
FROM savings_goals g
JOIN savings_transactions st
    ON st.goal_id = g.id AND st.user_id = g.user_id
WHERE g.user_id = :user_id AND g.is_active = TRUE
"""

SAVINGS_LEDGER_TOTAL_SQL = f"""
SELECT COALESCE(SUM({SIGNED_SAVINGS_AMOUNT}), 0) AS total
FROM savings_transactions st
WHERE st.user_id = :user_id
"""

SAVINGS_TRANSACTION_FIELDS = """
id, user_id, goal_id, amount, kind, description, date, created_at
"""

INSERT_SAVINGS_TRANSACTION_SQL = f"""
INSERT INTO savings_transactions (
    user_id, goal_id, amount, kind, description, date, created_at
)
VALUES (
    :user_id, :goal_id, :amount, :kind, :description, :entry_date,
    :created_at
)
RETURNING {SAVINGS_TRANSACTION_FIELDS}
"""

SELECT_SAVINGS_TRANSACTIONS_SQL = f"""
SELECT {SAVINGS_TRANSACTION_FIELDS}
FROM savings_transactions
WHERE user_id = :user_id
ORDER BY date DESC, created_at DESC, id DESC
"""


class SqlAlchemyLedgerSession(LedgerSessionPort):
    """Ledger operations bound to one open SQLAlchemy connection."""

    def __init__(
        self,
        conn: Connection,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the session.

        Args:
            conn: Connection with an open transaction.
            clock: Server clock used for row timestamps.
        """
        self._conn = conn
        self._clock = clock

    def now(self) -> datetime:
        """Return the store clock reading used for row timestamps."""
        return self._clock()

    @property
    def _supports_row_locks(self) -> bool:
        return self._conn.dialect.name != "sqlite"

    # Accounts

    def fetch_account(
        self,
        user_id: int,
        for_update: bool = False,
    ) -> Account | None:
        """Return the account row for a user.

        Args:
            user_id: Account owner.
            for_update: Lock the row until the transaction ends, where the
                dialect supports ``SELECT ... FOR UPDATE``.

        Returns:
            Account | None: The account, or ``None`` when absent.
        """
        sql = SELECT_ACCOUNT_SQL
        if for_update and self._supports_row_locks:
            sql += " FOR UPDATE"
        row = self._conn.execute(
            _statement(sql, ACCOUNT_COLUMNS),
            {"user_id": user_id},
        ).first()
        return self._to_account(row) if row else None

    def insert_account(self, user_id: int) -> Account:
        """Insert a zeroed account for the user and return it."""
        now = self.now()
        row = self._conn.execute(
            _statement(INSERT_ACCOUNT_SQL, ACCOUNT_COLUMNS),
            {"user_id": user_id, "created_at": now, "updated_at": now},
        ).one()
        return self._to_account(row)

    def update_allowance(
        self,
        user_id: int,
        allowance_income: Decimal,
    ) -> Account | None:
        """Set the monthly allowance.

        Returns:
            Account | None: Updated account, or ``None`` when absent.
        """
        row = self._conn.execute(
            _statement(UPDATE_ALLOWANCE_SQL, ACCOUNT_COLUMNS),
            {
                "user_id": user_id,
                "allowance_income": allowance_income,
                "updated_at": self.now(),
            },
        ).first()
        return self._to_account(row) if row else None

    def apply_balance_delta(self, user_id: int, delta: Decimal) -> bool:
        """Add a signed delta to the current balance.

        Args:
            user_id: Account owner.
            delta: Signed amount; negative values debit the balance.

        Returns:
            bool: True when exactly one account row was updated.
        """
        result = self._conn.execute(
            _statement(APPLY_BALANCE_DELTA_SQL),
            {"user_id": user_id, "delta": delta, "updated_at": self.now()},
        )
        return result.rowcount == 1

    def set_balances(
        self,
        user_id: int,
        balance: Decimal,
        savings_balance: Decimal,
    ) -> bool:
        """Overwrite both balances of an account.

        Returns:
            bool: True when exactly one account row was updated.
        """
        result = self._conn.execute(
            _statement(SET_BALANCES_SQL),
            {
                "user_id": user_id,
                "balance": balance,
                "savings_balance": savings_balance,
                "updated_at": self.now(),
            },
        )
        return result.rowcount == 1

    def list_account_user_ids(self) -> list[int]:
        """Return the owner of every account, ordered by user id."""
        rows = self._conn.execute(text(SELECT_ACCOUNT_USER_IDS_SQL)).all()
        return [int(row.user_id) for row in rows]

    # Journal

    def insert_transaction(
        self,
        user_id: int,
        amount: Decimal,
        kind: str,
        category: str,
        description: str,
        entry_date: date,
    ) -> Transaction:
        """Insert a journal entry stamped with the store clock.

        Args:
            user_id: Entry owner.
            amount: Positive, cent-precise amount.
            kind: ``income`` or ``expense``.
            category: Entry category.
            description: Free text, may be empty.
            entry_date: Economic date of the entry.

        Returns:
            Transaction: The stored row.
        """
        now = self.now()
        row = self._conn.execute(
            _statement(INSERT_TRANSACTION_SQL, TRANSACTION_COLUMNS),
            {
                "user_id": user_id,
                "amount": amount,
                "kind": kind,
                "category": category,
                "description": description,
                "entry_date": entry_date,
                "created_at": now,
                "updated_at": now,
            },
        ).one()
        return self._to_transaction(row)

    def fetch_transaction(
        self,
        transaction_id: int,
        user_id: int,
    ) -> Transaction | None:
        """Return a journal entry owned by the user, or ``None``."""
        row = self._conn.execute(
            _statement(SELECT_TRANSACTION_SQL, TRANSACTION_COLUMNS),
            {"transaction_id": transaction_id, "user_id": user_id},
        ).first()
        return self._to_transaction(row) if row else None

    def update_transaction(
        self,
        transaction_id: int,
        user_id: int,
        amount: Decimal,
        kind: str,
        category: str,
        description: str,
        entry_date: date,
    ) -> Transaction | None:
        """Overwrite the editable fields of a journal entry.

        Returns:
            Transaction | None: Updated row, or ``None`` when the entry is
            absent or foreign.
        """
        row = self._conn.execute(
            _statement(UPDATE_TRANSACTION_SQL, TRANSACTION_COLUMNS),
            {
                "transaction_id": transaction_id,
                "user_id": user_id,
                "amount": amount,
                "kind": kind,
                "category": category,
                "description": description,
                "entry_date": entry_date,
                "updated_at": self.now(),
            },
        ).first()
        return self._to_transaction(row) if row else None

    def delete_transaction(self, transaction_id: int, user_id: int) -> bool:
        """Delete a journal entry; return True when a row was removed."""
        result = self._conn.execute(
            _statement(DELETE_TRANSACTION_SQL),
            {"transaction_id": transaction_id, "user_id": user_id},
        )
        return result.rowcount == 1

    def list_transactions(
        self,
        user_id: int,
        category: str | None = None,
        kind: str | None = None,
        limit: int = 5,
        offset: int = 0,
    ) -> list[Transaction]:
        """Return one page of the user's journal, newest first.

        Args:
            user_id: Entry owner.
            category: Optional exact category filter.
            kind: Optional kind filter.
            limit: Page size.
            offset: Rows to skip.
        """
        sql = f"SELECT {TRANSACTION_FIELDS} FROM transactions"
        sql += " WHERE user_id = :user_id"
        params: dict[str, object] = {
            "user_id": user_id,
            "limit": limit,
            "offset": offset,
        }
        if category:
            sql += " AND category = :category"
            params["category"] = category
        if kind:
            sql += " AND kind = :kind"
            params["kind"] = kind
        sql += " ORDER BY date DESC, created_at DESC, id DESC"
        sql += " LIMIT :limit OFFSET :offset"
        rows = self._conn.execute(
            _statement(sql, TRANSACTION_COLUMNS),
            params,
        ).all()
        return [self._to_transaction(row) for row in rows]

    def count_transactions_created_between(
        self,
        user_id: int,
        kind: str,
        category: str,
        start: datetime,
        end: datetime,
    ) -> int:
        """Count entries of a kind and category created in ``[start, end)``."""
        count = self._conn.execute(
            _statement(COUNT_TRANSACTIONS_CREATED_SQL),
            {
                "user_id": user_id,
                "kind": kind,
                "category": category,
                "start": start,
                "end": end,
            },
        ).scalar_one()
        return int(count)

    def journal_total(self, user_id: int) -> Decimal:
        """Return the signed sum of the user's journal."""
        total = self._conn.execute(
            _statement(JOURNAL_TOTAL_SQL, {"total": MONEY}),
            {"user_id": user_id},
        ).scalar_one()
        return to_money(total)

    # Savings goals and ledger

    def insert_goal(
        self,
        user_id: int,
        name: str,
        target_amount: Decimal,
        deadline: date | None,
        description: str,
    ) -> SavingsGoal:
        """Insert an active savings goal.

        Returns:
            SavingsGoal: The stored goal with a zero current amount.
        """
        now = self.now()
        goal_id = self._conn.execute(
            _statement(INSERT_GOAL_SQL),
            {
                "user_id": user_id,
                "name": name,
                "target_amount": target_amount,
                "deadline": deadline,
                "description": description,
                "created_at": now,
                "updated_at": now,
            },
        ).scalar_one()
        return self._require_goal(int(goal_id), user_id)

    def update_goal(
        self,
        goal_id: int,
        user_id: int,
        name: str,
        target_amount: Decimal,
        deadline: date | None,
        description: str,
    ) -> SavingsGoal | None:
        """Overwrite the editable fields of an active goal.

        Returns:
            SavingsGoal | None: Updated goal, or ``None`` when it is absent,
            inactive or foreign.
        """
        result = self._conn.execute(
            _statement(UPDATE_GOAL_SQL),
            {
                "goal_id": goal_id,
                "user_id": user_id,
                "name": name,
                "target_amount": target_amount,
                "deadline": deadline,
                "description": description,
                "updated_at": self.now(),
            },
        )
        if result.rowcount != 1:
            return None
        return self._require_goal(goal_id, user_id)

    def deactivate_goal(self, goal_id: int, user_id: int) -> bool:
        """Soft-delete an active goal; return True when a row changed."""
        result = self._conn.execute(
            _statement(DEACTIVATE_GOAL_SQL),
            {
                "goal_id": goal_id,
                "user_id": user_id,
                "updated_at": self.now(),
            },
        )
        return result.rowcount == 1

    def fetch_goal(
        self,
        goal_id: int,
        user_id: int,
        active_only: bool = True,
    ) -> SavingsGoal | None:
        """Return a goal owned by the user with its derived current amount.

        Args:
            goal_id: Goal identifier.
            user_id: Goal owner.
            active_only: Ignore deactivated goals.

        Returns:
            SavingsGoal | None: The goal, or ``None`` when not visible.
        """
        sql = SELECT_ACTIVE_GOAL_SQL if active_only else SELECT_GOAL_SQL
        row = self._conn.execute(
            _statement(sql, GOAL_COLUMNS),
            {"goal_id": goal_id, "user_id": user_id},
        ).first()
        return self._to_goal(row) if row else None

    def list_active_goals(self, user_id: int) -> list[SavingsGoal]:
        """Return the user's active goals with derived current amounts."""
        rows = self._conn.execute(
            _statement(SELECT_ACTIVE_GOALS_SQL, GOAL_COLUMNS),
            {"user_id": user_id},
        ).all()
        return [self._to_goal(row) for row in rows]

    def goal_current_amount(
        self,
        goal_id: int,
        user_id: int,
    ) -> Decimal | None:
        """Return the signed ledger sum for an active goal.

        Returns:
            Decimal | None: Zero for an unfunded goal, ``None`` when the goal
            is absent, inactive or foreign.
        """
        row = self._conn.execute(
            _statement(
                GOAL_CURRENT_AMOUNT_SQL,
                {"id": Integer(), "current_amount": MONEY},
            ),
            {"goal_id": goal_id, "user_id": user_id},
        ).first()
        if row is None:
            return None
        return to_money(row.current_amount)

    def active_allocation_total(self, user_id: int) -> Decimal:
        """Return the savings tagged to the user's active goals."""
        total = self._conn.execute(
            _statement(ACTIVE_ALLOCATION_TOTAL_SQL, {"total": MONEY}),
            {"user_id": user_id},
        ).scalar_one()
        return to_money(total)

    def savings_ledger_total(self, user_id: int) -> Decimal:
        """Return the signed sum of the user's savings ledger."""
        total = self._conn.execute(
            _statement(SAVINGS_LEDGER_TOTAL_SQL, {"total": MONEY}),
            {"user_id": user_id},
        ).scalar_one()
        return to_money(total)

    def insert_savings_transaction(
        self,
        user_id: int,
        goal_id: int | None,
        amount: Decimal,
        kind: str,
        description: str,
        entry_date: date,
    ) -> SavingsTransaction:
        """Append a savings ledger row stamped with the store clock.

        Args:
            user_id: Row owner.
            goal_id: Goal the row is allocated to, or ``None``.
            amount: Positive, cent-precise amount.
            kind: ``deposit`` or ``withdrawal``.
            description: Free text, may be empty.
            entry_date: Economic date of the transfer.

        Returns:
            SavingsTransaction: The stored row.
        """
        row = self._conn.execute(
            _statement(
                INSERT_SAVINGS_TRANSACTION_SQL,
                SAVINGS_TRANSACTION_COLUMNS,
            ),
            {
                "user_id": user_id,
                "goal_id": goal_id,
                "amount": amount,
                "kind": kind,
                "description": description,
                "entry_date": entry_date,
                "created_at": self.now(),
            },
        ).one()
        return self._to_savings_transaction(row)

    def list_savings_transactions(
        self,
        user_id: int,
    ) -> list[SavingsTransaction]:
        """Return the user's savings ledger, newest first."""
        rows = self._conn.execute(
            _statement(
                SELECT_SAVINGS_TRANSACTIONS_SQL,
                SAVINGS_TRANSACTION_COLUMNS,
            ),
            {"user_id": user_id},
        ).all()
        return [self._to_savings_transaction(row) for row in rows]

    def _require_goal(self, goal_id: int, user_id: int) -> SavingsGoal:
        goal = self.fetch_goal(goal_id, user_id, active_only=False)
        if goal is None:
            raise StoreError(f"Savings goal {goal_id} vanished after write")
        return goal

    @staticmethod
    def _to_account(row) -> Account:
        return Account(
            user_id=int(row.user_id),
            balance=to_money(row.balance),
            savings_balance=to_money(row.savings_balance),
            allowance_income=to_money(row.allowance_income),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def _to_transaction(row) -> Transaction:
        return Transaction(
            id=int(row.id),
            user_id=int(row.user_id),
            amount=to_money(row.amount),
            kind=row.kind,
            category=row.category,
            description=row.description or "",
            date=row.date,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def _to_goal(row) -> SavingsGoal:
        return SavingsGoal(
            id=int(row.id),
            user_id=int(row.user_id),
            name=row.name,
            target_amount=to_money(row.target_amount),
            current_amount=to_money(row.current_amount),
            deadline=row.deadline,
            description=row.description or "",
            is_active=bool(row.is_active),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def _to_savings_transaction(row) -> SavingsTransaction:
        return SavingsTransaction(
            id=int(row.id),
            user_id=int(row.user_id),
            goal_id=int(row.goal_id) if row.goal_id is not None else None,
            amount=to_money(row.amount),
            kind=row.kind,
            description=row.description or "",
            date=row.date,
            created_at=row.created_at,
        )


class SqlAlchemyLedgerStore(LedgerStorePort):
    """Ledger store opening one database transaction per unit of work."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        clock: Callable[[], datetime] = datetime.now,
        logger=None,
    ) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the ledger engine.
            clock: Server clock used for row timestamps.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._clock = clock
        self._logger = logger or get_app_logger()

    @contextmanager
    def unit_of_work(self) -> Iterator[SqlAlchemyLedgerSession]:
        """Open a transaction and yield a session bound to it.

        The transaction commits when the block exits normally and rolls back
        on any exception. Driver failures surface as StoreError; ledger
        errors raised by the caller propagate unchanged.

        Yields:
            SqlAlchemyLedgerSession: Session bound to the open transaction.

        Raises:
            StoreError: If the database fails inside the scope or at commit.
        """
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                yield SqlAlchemyLedgerSession(conn, clock=self._clock)
        except SQLAlchemyError as exc:
            self._logger.error(f"Ledger transaction rolled back: {exc}")
            raise StoreError(f"Ledger store failure: {exc}") from exc


__all__ = [
    "MONEY",
    "SqlAlchemyLedgerSession",
    "SqlAlchemyLedgerStore",
]
