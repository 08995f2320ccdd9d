"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional
from datetime import date
from decimal import Decimal

# Import entities directly; the store only depends on the domain data classes
from schedulec.domain.categories import TransactionType
from schedulec.domain.entities import (
    Business,
    ScheduleEntry,
    ScheduleHistoryEntry,
    ScheduleUpdate,
)


class Database(ABC):
    """Abstract entity store for businesses, schedule entries and their history.

    Every write validates the record invariants and raises
    ``ValidationError`` rather than coercing bad data. Operations on an id
    that does not exist raise ``NotFoundError``; driver failures raise
    ``StorageError`` with nothing written, and so do failed reads.

    Required text (business names, stores, user ids) is stored with
    surrounding whitespace stripped; blank optional text is stored as None.
    Timestamps are returned as timezone-aware UTC.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Business operations
    @abstractmethod
    def create_business(self, name: str, business_type: str, created_by: str) -> str:
        """Create a new business. Returns business ID."""
        pass

    @abstractmethod
    def get_business(self, business_id: str) -> Optional[Business]:
        """Get business by ID."""
        pass

    @abstractmethod
    def list_businesses(
        self, created_by: Optional[str] = None, include_inactive: bool = False
    ) -> list[Business]:
        """List businesses ordered by name, optionally filtered by owner."""
        pass

    @abstractmethod
    def update_business(
        self, business_id: str, name: Optional[str] = None, business_type: Optional[str] = None
    ) -> Business:
        """Update business name and/or type. Existing entries keep their stored name."""
        pass

    @abstractmethod
    def set_business_active(self, business_id: str, is_active: bool) -> Business:
        """Activate or deactivate a business."""
        pass

    # Schedule operations
    @abstractmethod
    def create_schedule(
        self,
        date: date,
        amount: Decimal,
        store: str,
        category: str,
        transaction_type: TransactionType,
        business_id: str,
        created_by: str,
        notes: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> str:
        """Create a schedule entry. Returns schedule ID."""
        pass

    @abstractmethod
    def get_schedule(self, schedule_id: str) -> Optional[ScheduleEntry]:
        """Get schedule entry by ID."""
        pass

    @abstractmethod
    def list_schedules(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        business_id: Optional[str] = None,
        transaction_type: Optional[TransactionType] = None,
        category: Optional[str] = None,
    ) -> list[ScheduleEntry]:
        """List schedule entries with optional filters, newest first.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            business_id: Optional business ID filter
            transaction_type: Optional income/expense filter
            category: Optional exact category filter
        """
        pass

    @abstractmethod
    def update_schedule(
        self, schedule_id: str, fields: Mapping[str, Any], modified_by: str
    ) -> ScheduleUpdate:
        """Apply field values to an entry and record its history atomically.

        Either every field changes and one history row per changed field is
        stored, or nothing is written. Values equal to the stored ones
        produce no write and no history.

        Args:
            schedule_id: Schedule entry to update
            fields: Attribute name to new value (date, amount, store, category,
                transaction_type, notes, photo_url, business_id)
            modified_by: Acting user ID

        Returns:
            The stored entry and the history rows produced
        """
        pass

    @abstractmethod
    def delete_schedule(self, schedule_id: str) -> None:
        """Delete a schedule entry. Its history rows are kept."""
        pass

    # History operations
    @abstractmethod
    def list_history(self, schedule_id: str) -> list[ScheduleHistoryEntry]:
        """List history rows for an entry, newest first."""
        pass
