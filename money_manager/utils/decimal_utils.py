"""Helpers for Decimal normalization."""

from decimal import Decimal

CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_money(value) -> Decimal:
    """Normalize a stored amount to a two-place Decimal.

    Only used for values read back from the store, which are already
    cent-precise; user input goes through validate_amount instead.

    Args:
        value: Raw numeric value from SQL.

    Returns:
        Decimal: Amount quantized to cents.
    """
    return coerce_decimal(value).quantize(CENT)


__all__ = ["CENT", "coerce_decimal", "to_money"]
