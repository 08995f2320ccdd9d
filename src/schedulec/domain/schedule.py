"""Schedule entry domain service."""

import dataclasses
from datetime import date
from decimal import Decimal
from typing import Optional

from schedulec.database.base import Database
from schedulec.domain.categories import TransactionType, categories_for, default_category
from schedulec.domain.entities import (
    HistoryRecord,
    ScheduleEntry,
    ScheduleHistoryEntry,
    ScheduleInput,
    ScheduleUpdate,
)
from schedulec.domain.errors import NotFoundError, ValidationError, schedule_not_found
from schedulec.domain.history import group_history
from schedulec.domain.validation import validate_transaction_type


class ScheduleService:
    """Service for creating, editing and reading schedule entries."""

    def __init__(self, db: Database):
        """Initialize schedule service.

        Args:
            db: Database instance
        """
        self.db = db

    def new_input(self, user_id: Optional[str] = None) -> ScheduleInput:
        """Return a blank form with defaults filled in.

        The date is today, the type is expense with its first category, and
        the business is pre-selected when the user has exactly one.
        """
        businesses = self.db.list_businesses(created_by=user_id)
        business_id = businesses[0].id if len(businesses) == 1 else None
        return ScheduleInput(
            date=date.today(),
            amount=Decimal("0.00"),
            store="",
            category=default_category(TransactionType.EXPENSE),
            transaction_type=TransactionType.EXPENSE,
            business_id=business_id,
        )

    def change_transaction_type(
        self, form: ScheduleInput, transaction_type: TransactionType
    ) -> ScheduleInput:
        """Switch a form's transaction type, keeping the category valid.

        If the current category does not belong to the new type it is reset
        to the first category of that type.
        """
        transaction_type = validate_transaction_type(transaction_type)
        category = form.category
        if category not in categories_for(transaction_type):
            category = default_category(transaction_type)
        return dataclasses.replace(form, transaction_type=transaction_type, category=category)

    def _check_form(self, form: ScheduleInput) -> None:
        """Reject forms the user must correct before submitting."""
        if not form.business_id:
            raise ValidationError("Please select a business")
        if not form.store or not form.store.strip():
            raise ValidationError("Please enter a store or payee name")

    def add_entry(self, form: ScheduleInput, user_id: str) -> str:
        """Create a schedule entry from a submitted form.

        Args:
            form: Submitted form values
            user_id: Acting user ID

        Returns:
            Schedule ID

        Raises:
            ValidationError: If no business is selected, the store is empty,
                or any stored invariant fails
        """
        self._check_form(form)
        return self.db.create_schedule(
            date=form.date,
            amount=form.amount,
            store=form.store,
            category=form.category,
            transaction_type=form.transaction_type,
            business_id=form.business_id,
            created_by=user_id,
            notes=form.notes,
            photo_url=form.photo_url,
        )

    def update_entry(self, schedule_id: str, form: ScheduleInput, user_id: str) -> ScheduleUpdate:
        """Replace an entry's values with a submitted form.

        One history record is stored per field that changed; submitting the
        unchanged form stores none.

        Args:
            schedule_id: Schedule entry ID
            form: Submitted form values
            user_id: Acting user ID

        Returns:
            The stored entry and the history rows produced

        Raises:
            NotFoundError: If the entry does not exist
            ValidationError: If the form fails validation
        """
        self.require_entry(schedule_id)
        self._check_form(form)
        return self.db.update_schedule(
            schedule_id,
            {
                "date": form.date,
                "amount": form.amount,
                "store": form.store,
                "category": form.category,
                "transaction_type": form.transaction_type,
                "business_id": form.business_id,
                "notes": form.notes,
                "photo_url": form.photo_url,
            },
            modified_by=user_id,
        )

    def edit_input(self, schedule_id: str) -> ScheduleInput:
        """Return a form pre-filled with an entry's current values."""
        entry = self.require_entry(schedule_id)
        return ScheduleInput(
            date=entry.date,
            amount=entry.amount,
            store=entry.store,
            category=entry.category,
            transaction_type=entry.transaction_type,
            business_id=entry.business_id,
            notes=entry.notes,
            photo_url=entry.photo_url,
        )

    def get_entry(self, schedule_id: str) -> Optional[ScheduleEntry]:
        """Get schedule entry by ID.

        Args:
            schedule_id: Schedule ID

        Returns:
            ScheduleEntry or None if not found
        """
        return self.db.get_schedule(schedule_id)

    def require_entry(self, schedule_id: str) -> ScheduleEntry:
        """Get schedule entry by ID or raise NotFoundError."""
        entry = self.db.get_schedule(schedule_id)
        if entry is None:
            raise NotFoundError(schedule_not_found(schedule_id))
        return entry

    def list_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        business_id: Optional[str] = None,
        transaction_type: Optional[TransactionType] = None,
        category: Optional[str] = None,
    ) -> list[ScheduleEntry]:
        """List schedule entries, newest first."""
        return self.db.list_schedules(
            start_date=start_date,
            end_date=end_date,
            business_id=business_id,
            transaction_type=transaction_type,
            category=category,
        )

    def delete_entry(self, schedule_id: str) -> None:
        """Delete a schedule entry. Its history stays on record.

        Raises:
            NotFoundError: If the entry does not exist
        """
        self.require_entry(schedule_id)
        self.db.delete_schedule(schedule_id)

    def get_history(self, schedule_id: str) -> list[ScheduleHistoryEntry]:
        """Return raw history rows for an entry, newest first."""
        return self.db.list_history(schedule_id)

    def get_history_records(self, schedule_id: str) -> list[HistoryRecord]:
        """Return history grouped by edit, newest first."""
        return group_history(self.db.list_history(schedule_id))
