"""Tests for the transaction journal engine against a SQLite store."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from money_manager.application.use_cases.transactions import (
    TransactionJournalUseCase,
)
from money_manager.domain.errors import NotFoundError, ValidationError
from money_manager.domain.models import TransactionDraft, TransactionPatch

USER_ID = 1
OTHER_USER_ID = 2


def _expense(amount: str, category: str = "Food & Dining") -> TransactionDraft:
    return TransactionDraft(
        amount=amount,
        kind="expense",
        category=category,
        date="2024-03-10",
        description="lunch",
    )


def test_create_income_and_expense_move_balance(
    account,
    journal,
    read_account,
):
    """Income adds to the balance and expenses subtract from it."""
    income = journal.create(
        USER_ID,
        TransactionDraft(
            amount="100.00",
            kind="income",
            category="Scholarship",
            date="2024-03-01",
        ),
    )
    journal.create(USER_ID, _expense("12.50"))

    assert income.amount == Decimal("100.00")
    assert income.date == date(2024, 3, 1)
    assert read_account().balance == Decimal("87.50")


def test_create_requires_an_account(store):
    journal = TransactionJournalUseCase(
        store,
        logger=MagicMock(),
        audit_logger=MagicMock(),
    )

    with pytest.raises(NotFoundError, match="Account not found"):
        journal.create(USER_ID, _expense("5.00"))


@pytest.mark.parametrize(
    "draft",
    [
        TransactionDraft(
            amount="0", kind="expense", category="Food", date="2024-03-01"
        ),
        TransactionDraft(
            amount="5.001", kind="expense", category="Food", date="2024-03-01"
        ),
        TransactionDraft(
            amount="5", kind="refund", category="Food", date="2024-03-01"
        ),
        TransactionDraft(
            amount="5", kind="expense", category="Food", date="01/03/2024"
        ),
        TransactionDraft(
            amount="5", kind="expense", category=" ", date="2024-03-01"
        ),
    ],
)
def test_create_rejects_invalid_drafts(account, journal, read_account, draft):
    """Validation failures leave the journal and balance untouched."""
    with pytest.raises(ValidationError):
        journal.create(USER_ID, draft)

    assert read_account().balance == Decimal("0.00")
    assert journal.list_transactions(USER_ID) == []


def test_unknown_category_is_accepted_with_warning(account, store):
    logger = MagicMock()
    journal = TransactionJournalUseCase(
        store,
        logger=logger,
        audit_logger=MagicMock(),
    )

    journal.create(USER_ID, _expense("3.00", category="Concert tickets"))

    logger.warning.assert_called_once()


def test_patch_amount_reverses_old_effect(
    funded_account,
    journal,
    read_account,
):
    """A 25.00 expense patched to 40.00 leaves 100 - 40, not 75 - 40."""
    expense = journal.create(USER_ID, _expense("25.00"))
    assert read_account().balance == Decimal("75.00")

    patched = journal.partial_update(
        expense.id,
        USER_ID,
        TransactionPatch(amount="40.00"),
    )

    assert patched.amount == Decimal("40.00")
    assert patched.kind == "expense"
    assert patched.description == "lunch"
    assert read_account().balance == Decimal("60.00")


def test_patch_without_amount_or_kind_keeps_balance(
    funded_account,
    journal,
    read_account,
):
    expense = journal.create(USER_ID, _expense("25.00"))

    patched = journal.partial_update(
        expense.id,
        USER_ID,
        TransactionPatch(description="dinner", date="2024-03-12"),
    )

    assert patched.description == "dinner"
    assert patched.date == date(2024, 3, 12)
    assert patched.amount == Decimal("25.00")
    assert read_account().balance == Decimal("75.00")


def test_patch_kind_flips_sign(funded_account, journal, read_account):
    expense = journal.create(USER_ID, _expense("10.00"))

    journal.partial_update(
        expense.id,
        USER_ID,
        TransactionPatch(kind="income", category="Gift Money"),
    )

    assert read_account().balance == Decimal("110.00")


def test_replace_applies_single_delta(funded_account, journal, read_account):
    expense = journal.create(USER_ID, _expense("30.00"))

    replaced = journal.replace(
        expense.id,
        USER_ID,
        TransactionDraft(
            amount="45.25",
            kind="income",
            category="Part-time Job",
            date="2024-03-11",
            description="shift",
        ),
    )

    assert replaced.id == expense.id
    assert replaced.kind == "income"
    assert replaced.category == "Part-time Job"
    assert read_account().balance == Decimal("145.25")


def test_create_then_delete_restores_balance_exactly(
    funded_account,
    journal,
    read_account,
):
    """A create/delete round trip leaves no drift."""
    before = read_account().balance
    created = journal.create(USER_ID, _expense("33.33"))

    deleted = journal.delete(created.id, USER_ID)

    assert deleted.id == created.id
    assert read_account().balance == before
    with pytest.raises(NotFoundError):
        journal.get(created.id, USER_ID)


def test_largest_amount_is_stored_without_rounding(
    account,
    journal,
    read_account,
):
    created = journal.create(
        USER_ID,
        TransactionDraft(
            amount="9999999999999.99",
            kind="income",
            category="Part-time Job",
            date="2024-03-01",
        ),
    )

    assert journal.get(created.id, USER_ID).amount == Decimal(
        "9999999999999.99"
    )
    assert read_account().balance == Decimal("9999999999999.99")


def test_foreign_transactions_look_absent(
    funded_account,
    store,
    journal,
    read_account,
):
    """Entries owned by another user are reported as not found."""
    with store.unit_of_work() as session:
        session.insert_account(OTHER_USER_ID)
    expense = journal.create(USER_ID, _expense("10.00"))

    with pytest.raises(NotFoundError, match="Transaction not found"):
        journal.get(expense.id, OTHER_USER_ID)
    with pytest.raises(NotFoundError, match="Transaction not found"):
        journal.delete(expense.id, OTHER_USER_ID)
    with pytest.raises(NotFoundError, match="Transaction not found"):
        journal.partial_update(
            expense.id,
            OTHER_USER_ID,
            TransactionPatch(amount="1.00"),
        )

    assert read_account().balance == Decimal("90.00")
    assert read_account(OTHER_USER_ID).balance == Decimal("0.00")


def test_list_filters_and_paginates(funded_account, journal, clock):
    for day in range(2, 9):
        clock.advance(minutes=1)
        journal.create(
            USER_ID,
            TransactionDraft(
                amount="1.00",
                kind="expense",
                category="Transportation",
                date=f"2024-03-0{day}",
            ),
        )

    first_page = journal.list_transactions(USER_ID)
    second_page = journal.list_transactions(USER_ID, limit=5, offset=5)
    expenses = journal.list_transactions(USER_ID, kind="expense", limit=50)
    income = journal.list_transactions(USER_ID, category="Part-time Job")

    assert len(first_page) == 5
    assert [t.date for t in first_page][0] == date(2024, 3, 8)
    assert len(second_page) == 3
    assert len(expenses) == 7
    assert [t.amount for t in income] == [Decimal("100.00")]


def test_audit_logger_receives_committed_mutations(account, store):
    audit_logger = MagicMock()
    journal = TransactionJournalUseCase(
        store,
        logger=MagicMock(),
        audit_logger=audit_logger,
    )

    journal.create(USER_ID, _expense("4.00"))

    message = audit_logger.info.call_args.args[0]
    assert "op=create_transaction" in message
    assert "balance_delta=-4.00" in message
