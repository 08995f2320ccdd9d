"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(ValidationError):
    """Domain conflict, such as a duplicate active business name."""


class StorageError(RuntimeError):
    """The underlying durable store failed to complete an operation."""


def business_not_found(business_id: str) -> str:
    """Return message for missing business."""
    return f"Business {business_id} not found"


def schedule_not_found(schedule_id: str) -> str:
    """Return message for missing schedule entry."""
    return f"Schedule entry {schedule_id} not found"


def business_inactive(name: str) -> str:
    """Return message for a business that has been deactivated."""
    return f"Business '{name}' is inactive"


def duplicate_business_name(name: str) -> str:
    """Return message for an active business name that is already taken."""
    return f"A business named '{name}' already exists"


def category_type_mismatch(category: str, transaction_type: str) -> str:
    """Return message for a category outside the transaction type's set."""
    return f"Category '{category}' is not a valid {transaction_type} category"
