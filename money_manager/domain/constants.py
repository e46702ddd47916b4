"""Domain constants for the student money ledger."""

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_KINDS = (INCOME, EXPENSE)

DEPOSIT = "deposit"
WITHDRAWAL = "withdrawal"
SAVINGS_KINDS = (DEPOSIT, WITHDRAWAL)

TO_SAVINGS = "to_savings"
FROM_SAVINGS = "from_savings"
TRANSFER_DIRECTIONS = (TO_SAVINGS, FROM_SAVINGS)

ALLOWANCE_CATEGORY = "Allowance"
ALLOWANCE_DESCRIPTION = "Monthly allowance - auto-added"

DEFAULT_TRANSFER_DESCRIPTIONS = {
    TO_SAVINGS: "Transfer from current balance",
    FROM_SAVINGS: "Transfer to current balance",
}

STUDENT_CATEGORIES = {
    EXPENSE: (
        "Food & Dining",
        "Transportation",
        "Books & Supplies",
        "Entertainment",
        "Clothing",
        "Health & Fitness",
        "Technology",
        "Miscellaneous",
    ),
    INCOME: (
        ALLOWANCE_CATEGORY,
        "Part-time Job",
        "Scholarship",
        "Gift Money",
        "Other Income",
    ),
}


__all__ = [
    "INCOME",
    "EXPENSE",
    "TRANSACTION_KINDS",
    "DEPOSIT",
    "WITHDRAWAL",
    "SAVINGS_KINDS",
    "TO_SAVINGS",
    "FROM_SAVINGS",
    "TRANSFER_DIRECTIONS",
    "ALLOWANCE_CATEGORY",
    "ALLOWANCE_DESCRIPTION",
    "DEFAULT_TRANSFER_DESCRIPTIONS",
    "STUDENT_CATEGORIES",
]
