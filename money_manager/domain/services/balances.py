"""Balance arithmetic shared by the journal and savings engines."""

from decimal import Decimal

from money_manager.domain.constants import EXPENSE, INCOME
from money_manager.domain.errors import ValidationError


def signed_amount(kind: str, amount: Decimal) -> Decimal:
    """Return the effect of a journal entry on the current balance."""
    if kind == INCOME:
        return amount
    if kind == EXPENSE:
        return -amount
    raise ValidationError(f"Unknown transaction kind: {kind!r}")


def replacement_delta(
    old_kind: str,
    old_amount: Decimal,
    new_kind: str,
    new_amount: Decimal,
) -> Decimal:
    """Return the single delta that swaps an old entry's effect for a new one.

    Example: an expense of 25.00 patched to 40.00 yields -15.00.
    """
    return signed_amount(new_kind, new_amount) - signed_amount(
        old_kind, old_amount
    )


def unallocated_savings(
    savings_balance: Decimal,
    allocated_total: Decimal,
) -> Decimal:
    """Return savings not earmarked for any active goal."""
    return savings_balance - allocated_total


__all__ = [
    "signed_amount",
    "replacement_delta",
    "unallocated_savings",
]
