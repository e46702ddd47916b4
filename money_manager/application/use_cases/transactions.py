"""Use case applying income/expense journal entries to the current balance.

Every mutation runs in one unit of work: the journal write and the balance
update commit together or not at all. The account row is locked before the
journal row is touched so concurrent mutations for a user serialize on it.
"""

from datetime import date
from decimal import Decimal

from money_manager.application.ports.ledger_store import (
    LedgerSessionPort,
    LedgerStorePort,
)
from money_manager.application.use_cases.balance_accessor import (
    BalanceAccessor,
)
from money_manager.domain.constants import TRANSACTION_KINDS
from money_manager.domain.errors import NotFoundError, StoreError
from money_manager.domain.models import (
    Transaction,
    TransactionDraft,
    TransactionPatch,
)
from money_manager.domain.services.balances import (
    replacement_delta,
    signed_amount,
)
from money_manager.domain.services.validation import (
    check_category,
    parse_date,
    validate_amount,
    validate_choice,
    validate_required_text,
)
from money_manager.infrastructure.logging.logger import (
    get_app_logger,
    get_audit_logger,
)

DEFAULT_PAGE_SIZE = 5


class TransactionJournalUseCase:
    """Create, replace, patch and delete journal entries."""

    def __init__(
        self,
        ledger_store: LedgerStorePort,
        logger=None,
        audit_logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_store: Port opening transactional scopes on the store.
            logger: Optional logger compatible with logging.Logger-like API.
            audit_logger: Optional logger receiving committed mutations.
        """
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()
        self._audit_logger = audit_logger or get_audit_logger()

    def create(self, user_id: int, draft: TransactionDraft) -> Transaction:
        """Record a journal entry and move the balance accordingly.

        Args:
            user_id: Authenticated user id.
            draft: Entry fields.

        Returns:
            Transaction: The stored entry.

        Raises:
            ValidationError: If a field is malformed.
            NotFoundError: If the user has no account.
        """
        amount, kind, category, description, entry_date = (
            self._validate_draft(draft)
        )
        with self._ledger_store.unit_of_work() as session:
            transaction = self.create_in_session(
                session,
                user_id,
                amount=amount,
                kind=kind,
                category=category,
                description=description,
                entry_date=entry_date,
            )
        self._audit(
            "create_transaction",
            user_id,
            transaction.id,
            signed_amount(kind, amount),
        )
        return transaction

    def create_in_session(
        self,
        session: LedgerSessionPort,
        user_id: int,
        amount: Decimal,
        kind: str,
        category: str,
        description: str,
        entry_date: date,
    ) -> Transaction:
        """Insert an already validated entry inside an open unit of work.

        Raises:
            NotFoundError: If the user has no account.
        """
        BalanceAccessor(session).account(user_id)
        transaction = session.insert_transaction(
            user_id,
            amount,
            kind,
            category,
            description,
            entry_date,
        )
        self._apply_delta(session, user_id, signed_amount(kind, amount))
        return transaction

    def replace(
        self,
        transaction_id: int,
        user_id: int,
        draft: TransactionDraft,
    ) -> Transaction:
        """Overwrite every field of an entry, swapping its balance effect.

        Raises:
            ValidationError: If a field is malformed.
            NotFoundError: If the entry is absent or owned by another user.
        """
        amount, kind, category, description, entry_date = (
            self._validate_draft(draft)
        )
        with self._ledger_store.unit_of_work() as session:
            old = self._fetch_locked(session, transaction_id, user_id)
            updated = self._update(
                session,
                old,
                amount=amount,
                kind=kind,
                category=category,
                description=description,
                entry_date=entry_date,
            )
            delta = replacement_delta(old.kind, old.amount, kind, amount)
            self._apply_delta(session, user_id, delta)
        self._audit("replace_transaction", user_id, updated.id, delta)
        return updated

    def partial_update(
        self,
        transaction_id: int,
        user_id: int,
        patch: TransactionPatch,
    ) -> Transaction:
        """Update the supplied fields of an entry.

        The balance moves only when the patch carries ``amount`` or ``kind``;
        omitted fields keep their stored values.

        Raises:
            ValidationError: If a supplied field is malformed.
            NotFoundError: If the entry is absent or owned by another user.
        """
        amount = (
            validate_amount(patch.amount) if patch.amount is not None else None
        )
        kind = (
            validate_choice(patch.kind, TRANSACTION_KINDS, "type")
            if patch.kind is not None
            else None
        )
        category = (
            validate_required_text(patch.category, "category")
            if patch.category is not None
            else None
        )
        entry_date = parse_date(patch.date) if patch.date is not None else None

        with self._ledger_store.unit_of_work() as session:
            old = self._fetch_locked(session, transaction_id, user_id)
            new_amount = amount if amount is not None else old.amount
            new_kind = kind if kind is not None else old.kind
            new_category = category if category is not None else old.category
            if category is not None or kind is not None:
                check_category(new_kind, new_category, self._logger)
            updated = self._update(
                session,
                old,
                amount=new_amount,
                kind=new_kind,
                category=new_category,
                description=(
                    patch.description
                    if patch.description is not None
                    else old.description
                ),
                entry_date=entry_date if entry_date is not None else old.date,
            )
            delta = Decimal("0.00")
            if patch.touches_balance():
                delta = replacement_delta(
                    old.kind, old.amount, new_kind, new_amount
                )
                self._apply_delta(session, user_id, delta)
        self._audit("patch_transaction", user_id, updated.id, delta)
        return updated

    def delete(self, transaction_id: int, user_id: int) -> Transaction:
        """Delete an entry and reverse its balance effect.

        Returns:
            Transaction: The entry as it was before deletion.

        Raises:
            NotFoundError: If the entry is absent or owned by another user.
        """
        with self._ledger_store.unit_of_work() as session:
            old = self._fetch_locked(session, transaction_id, user_id)
            if not session.delete_transaction(transaction_id, user_id):
                raise NotFoundError("Transaction not found")
            delta = -signed_amount(old.kind, old.amount)
            self._apply_delta(session, user_id, delta)
        self._audit("delete_transaction", user_id, old.id, delta)
        return old

    def get(self, transaction_id: int, user_id: int) -> Transaction:
        """Return one entry owned by the user.

        Raises:
            NotFoundError: If the entry is absent or owned by another user.
        """
        with self._ledger_store.unit_of_work() as session:
            transaction = session.fetch_transaction(transaction_id, user_id)
        if transaction is None:
            raise NotFoundError("Transaction not found")
        return transaction

    def list_transactions(
        self,
        user_id: int,
        category: str | None = None,
        kind: str | None = None,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[Transaction]:
        """Return the user's entries, most recent first."""
        if kind is not None:
            validate_choice(kind, TRANSACTION_KINDS, "type")
        with self._ledger_store.unit_of_work() as session:
            transactions = session.list_transactions(
                user_id,
                category=category,
                kind=kind,
                limit=max(limit, 0),
                offset=max(offset, 0),
            )
        self._logger.info(
            f"Fetched {len(transactions)} transactions for user {user_id}"
        )
        return transactions

    def _validate_draft(
        self,
        draft: TransactionDraft,
    ) -> tuple[Decimal, str, str, str, date]:
        amount = validate_amount(draft.amount)
        kind = validate_choice(draft.kind, TRANSACTION_KINDS, "type")
        category = validate_required_text(draft.category, "category")
        entry_date = parse_date(draft.date)
        check_category(kind, category, self._logger)
        return amount, kind, category, draft.description or "", entry_date

    @staticmethod
    def _fetch_locked(
        session: LedgerSessionPort,
        transaction_id: int,
        user_id: int,
    ) -> Transaction:
        BalanceAccessor(session).account(user_id)
        transaction = session.fetch_transaction(transaction_id, user_id)
        if transaction is None:
            raise NotFoundError("Transaction not found")
        return transaction

    @staticmethod
    def _update(
        session: LedgerSessionPort,
        old: Transaction,
        amount: Decimal,
        kind: str,
        category: str,
        description: str,
        entry_date: date,
    ) -> Transaction:
        updated = session.update_transaction(
            old.id,
            old.user_id,
            amount,
            kind,
            category,
            description,
            entry_date,
        )
        if updated is None:
            raise NotFoundError("Transaction not found")
        return updated

    @staticmethod
    def _apply_delta(
        session: LedgerSessionPort,
        user_id: int,
        delta: Decimal,
    ) -> None:
        if delta == 0:
            return
        if not session.apply_balance_delta(user_id, delta):
            raise StoreError(f"Account row for user {user_id} was not updated")

    def _audit(
        self,
        operation: str,
        user_id: int,
        transaction_id: int,
        delta: Decimal,
    ) -> None:
        self._audit_logger.info(
            f"op={operation} user={user_id} transaction={transaction_id} "
            f"balance_delta={delta}"
        )


__all__ = ["TransactionJournalUseCase", "DEFAULT_PAGE_SIZE"]
