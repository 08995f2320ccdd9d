"""Enumerated categories, transaction types and business types."""

from enum import Enum


class TransactionType(str, Enum):
    """Direction of a schedule entry."""

    INCOME = "income"
    EXPENSE = "expense"


# Schedule C expense lines
EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Advertising",
    "Car and truck expenses",
    "Commissions and fees",
    "Contract labor",
    "Depletion",
    "Depreciation",
    "Employee benefit programs",
    "Insurance",
    "Interest (Mortgage)",
    "Interest (Other)",
    "Legal and professional services",
    "Office expenses",
    "Pension and profit-sharing plans",
    "Rent or lease (Vehicles, machinery, equipment)",
    "Rent or lease (Other business property)",
    "Repairs and maintenance",
    "Supplies",
    "Taxes and licenses",
    "Travel",
    "Meals",
    "Utilities",
    "Wages",
    "Other expenses",
)

INCOME_CATEGORIES: tuple[str, ...] = (
    "Gross receipts or sales",
    "Returns and allowances",
    "Other income",
)

BUSINESS_TYPES: tuple[str, ...] = (
    "Sole Proprietorship",
    "LLC",
    "Partnership",
    "S Corporation",
    "C Corporation",
    "Retail",
    "Services",
    "Other",
)


def categories_for(transaction_type: TransactionType) -> tuple[str, ...]:
    """Return the category list valid for a transaction type."""
    if TransactionType(transaction_type) is TransactionType.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES


def default_category(transaction_type: TransactionType) -> str:
    """Return the first category of a transaction type."""
    return categories_for(transaction_type)[0]
