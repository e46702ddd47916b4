"""Domain services package."""

from .balances import (
    replacement_delta,
    signed_amount,
    unallocated_savings,
)
from .validation import (
    check_category,
    parse_date,
    parse_optional_date,
    validate_amount,
    validate_choice,
    validate_required_text,
)

__all__ = [
    "replacement_delta",
    "signed_amount",
    "unallocated_savings",
    "check_category",
    "parse_date",
    "parse_optional_date",
    "validate_amount",
    "validate_choice",
    "validate_required_text",
]
