"""Domain model entities for schedulec.

These are pure data classes representing business concepts, independent of
database schema. The store hands these out; callers never touch ORM rows.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from schedulec.domain.categories import TransactionType


class DataMode(str, Enum):
    """Which physical store backs the entity store."""

    UNSET = "unset"
    STANDALONE = "standalone"
    SHARED = "shared"


@dataclass(frozen=True)
class Business:
    """Business domain entity."""

    id: str
    name: str
    business_type: str
    created_at: datetime
    created_by: str
    is_active: bool = True


@dataclass(frozen=True)
class ScheduleEntry:
    """Income or expense transaction domain entity."""

    id: str
    date: date
    amount: Decimal
    store: str
    category: str
    transaction_type: TransactionType
    business_id: str
    business_name: str
    created_at: datetime
    created_by: str
    modified_at: datetime
    modified_by: str
    notes: Optional[str] = None
    photo_url: Optional[str] = None


@dataclass(frozen=True)
class ScheduleHistoryEntry:
    """Immutable audit record for one field-level change."""

    id: str
    schedule_id: str
    field_name: str
    old_value: str
    new_value: str
    modified_by: str
    timestamp: datetime


@dataclass(frozen=True)
class FieldChange:
    """A single field whose rendered value differs between two snapshots."""

    field_name: str
    old_value: str
    new_value: str


@dataclass(frozen=True)
class HistoryRecord:
    """History rows from one edit, grouped for display."""

    timestamp: datetime
    modified_by: str
    changes: tuple[FieldChange, ...]


@dataclass(frozen=True)
class ScheduleUpdate:
    """Result of an update: the stored entry and the history it produced."""

    entry: ScheduleEntry
    history: tuple[ScheduleHistoryEntry, ...] = ()


@dataclass(frozen=True)
class ScheduleInput:
    """Form values for creating or editing a schedule entry.

    This is the plain input struct a UI builds and submits; it is validated
    when it reaches the service, never while it is being edited.
    """

    date: date
    amount: Decimal
    store: str
    category: str
    transaction_type: TransactionType = TransactionType.EXPENSE
    business_id: Optional[str] = None
    notes: Optional[str] = None
    photo_url: Optional[str] = None


@dataclass(frozen=True)
class CategoryTotal:
    """Summed amount for one category."""

    category: str
    amount: Decimal


@dataclass(frozen=True)
class BusinessSummary:
    """Income and expense totals for a business over a date range."""

    business_id: Optional[str]
    business_name: str
    income: Decimal
    expenses: Decimal
    entry_count: int
    income_by_category: tuple[CategoryTotal, ...] = field(default_factory=tuple)
    expenses_by_category: tuple[CategoryTotal, ...] = field(default_factory=tuple)

    @property
    def net(self) -> Decimal:
        """Income minus expenses."""
        return self.income - self.expenses
