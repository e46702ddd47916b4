"""Domain validation helpers.

Amounts are validated, never rounded: a value with more precision than a cent
is rejected rather than silently quantized.
"""

from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from money_manager.domain.constants import STUDENT_CATEGORIES
from money_manager.domain.errors import ValidationError
from money_manager.utils.decimal_utils import CENT

# Largest bound every backend stores exactly: SQLite keeps NUMERIC as a
# double, which holds 15 significant digits.
MAX_AMOUNT = Decimal("1E13")


def validate_amount(
    value,
    field: str = "amount",
    allow_zero: bool = False,
) -> Decimal:
    """Parse and check a money amount.

    Args:
        value: Decimal, int or numeric string supplied by the caller.
        field: Field name used in error messages.
        allow_zero: Accept zero (configuration values) instead of requiring
            a strictly positive amount.

    Returns:
        Decimal: The amount with exactly two decimal places.

    Raises:
        ValidationError: If the value is not a finite number, is out of
            range, or carries sub-cent precision.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be a number") from exc
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    try:
        quantized = amount.quantize(CENT)
    except InvalidOperation as exc:
        raise ValidationError(f"{field} is out of range") from exc
    if amount != quantized:
        raise ValidationError(
            f"{field} supports at most two decimal places: {value}"
        )
    if abs(quantized) >= MAX_AMOUNT:
        raise ValidationError(f"{field} is out of range")
    if allow_zero:
        if quantized < 0:
            raise ValidationError(f"{field} must be zero or greater")
    elif quantized <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return quantized


def validate_choice(value, choices: Iterable[str], field: str) -> str:
    """Ensure a value belongs to a closed set of strings.

    Raises:
        ValidationError: If the value is not one of ``choices``.
    """
    allowed = tuple(choices)
    if value not in allowed:
        raise ValidationError(
            f"{field} must be one of {', '.join(allowed)}; got {value!r}"
        )
    return value


def parse_date(value, field: str = "date") -> date:
    """Parse a calendar date from a date object or a YYYY-MM-DD string.

    Raises:
        ValidationError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValidationError(
                f"Invalid {field} format. Use YYYY-MM-DD"
            ) from exc
    raise ValidationError(f"Invalid {field} format. Use YYYY-MM-DD")


def parse_optional_date(value, field: str) -> date | None:
    """Parse an optional date; ``None`` and blank strings mean no date."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_date(value, field)


def validate_required_text(value, field: str) -> str:
    """Ensure a required text field is present and not blank.

    Raises:
        ValidationError: If the value is missing or blank.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def check_category(kind: str, category: str, logger) -> None:
    """Warn when a category is outside the recommended student taxonomy.

    Args:
        kind: Transaction kind (income or expense).
        category: Category supplied by the caller.
        logger: Logger used for warnings.
    """
    if category not in STUDENT_CATEGORIES.get(kind, ()):
        logger.warning(
            f"Category '{category}' is not a recommended {kind} category"
        )


__all__ = [
    "validate_amount",
    "validate_choice",
    "parse_date",
    "parse_optional_date",
    "validate_required_text",
    "check_category",
]
