"""Validation helpers shared by the store and the services."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from schedulec.domain.categories import (
    BUSINESS_TYPES,
    TransactionType,
    categories_for,
)
from schedulec.domain.errors import ValidationError, category_type_mismatch

CENT = Decimal("0.01")

# Amounts are stored as Numeric(12, 2): at most ten integer digits
MAX_AMOUNT = Decimal("9999999999.99")


def require_text(value: Optional[str], label: str) -> str:
    """Return the stripped text, or raise if it is missing or blank."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{label} is required")
    return str(value).strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Normalize optional free text: blank becomes None."""
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


def normalize_amount(value: Any) -> Decimal:
    """Return the amount as a Decimal with exactly two fractional digits.

    Amounts with fewer digits (``12.5``) are padded; amounts that would lose
    precision (``12.505``) are rejected rather than rounded.

    Raises:
        ValidationError: If the value is not a finite number of whole cents
            within MAX_AMOUNT
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError("Amount is required")
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid amount '{value}'")
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount '{value}'")
    if abs(amount) > MAX_AMOUNT:
        raise ValidationError(f"Amount {value} exceeds the maximum of {MAX_AMOUNT}")
    quantized = amount.quantize(CENT)
    if quantized != amount:
        raise ValidationError(f"Amount {value} has more than two decimal places")
    return quantized


def validate_date(value: Any) -> date:
    """Return the value as a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError("Date is required")


def validate_transaction_type(value: Any) -> TransactionType:
    """Return the value as a TransactionType."""
    try:
        return TransactionType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in TransactionType)
        raise ValidationError(f"Invalid transaction type '{value}' (expected {allowed})")


def validate_category(category: Optional[str], transaction_type: TransactionType) -> str:
    """Check that the category belongs to the transaction type's category set."""
    category = require_text(category, "Category")
    transaction_type = validate_transaction_type(transaction_type)
    if category not in categories_for(transaction_type):
        raise ValidationError(category_type_mismatch(category, transaction_type.value))
    return category


def validate_business_type(business_type: Optional[str]) -> str:
    """Check that the business type is one of the enumerated types."""
    business_type = require_text(business_type, "Business type")
    if business_type not in BUSINESS_TYPES:
        raise ValidationError(
            f"Invalid business type '{business_type}' (expected one of: {', '.join(BUSINESS_TYPES)})"
        )
    return business_type
