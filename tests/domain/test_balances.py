"""Tests for balance arithmetic helpers."""

from decimal import Decimal

import pytest

from money_manager.domain.errors import ValidationError
from money_manager.domain.services.balances import (
    replacement_delta,
    signed_amount,
    unallocated_savings,
)


def test_signed_amount_by_kind():
    assert signed_amount("income", Decimal("10.00")) == Decimal("10.00")
    assert signed_amount("expense", Decimal("10.00")) == Decimal("-10.00")
    with pytest.raises(ValidationError):
        signed_amount("deposit", Decimal("10.00"))


def test_replacement_delta_swaps_old_effect_for_new():
    """Patching a 25.00 expense to 40.00 moves the balance by -15.00."""
    delta = replacement_delta(
        "expense", Decimal("25.00"), "expense", Decimal("40.00")
    )

    assert delta == Decimal("-15.00")


def test_replacement_delta_handles_kind_flip():
    """Turning a 30.00 expense into income adds twice the amount."""
    delta = replacement_delta(
        "expense", Decimal("30.00"), "income", Decimal("30.00")
    )

    assert delta == Decimal("60.00")


def test_unallocated_savings():
    assert unallocated_savings(Decimal("40.00"), Decimal("40.00")) == 0
    assert unallocated_savings(Decimal("50.00"), Decimal("15.50")) == Decimal(
        "34.50"
    )
