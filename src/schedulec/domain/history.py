"""Field-level change tracking for schedule entries.

The recorder compares two snapshots of an entry by their rendered string
values, so values that are conceptually equal (``Decimal("15")`` and
``Decimal("15.00")``, a date and the same date at midnight) never produce a
history row. The store calls it inside the same transaction that applies the
update.
"""

import logging
import uuid
from datetime import date, datetime, UTC
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from schedulec.domain.entities import (
    FieldChange,
    HistoryRecord,
    ScheduleEntry,
    ScheduleHistoryEntry,
)
from schedulec.domain.validation import CENT

logger = logging.getLogger(__name__)

# Fields whose edits are recorded, in display order
TRACKED_FIELDS: tuple[str, ...] = (
    "date",
    "amount",
    "store",
    "category",
    "transaction_type",
    "notes",
    "photo_url",
    "business_id",
    "business_name",
)

FIELD_LABELS: dict[str, str] = {
    "date": "Date",
    "amount": "Amount",
    "store": "Store",
    "category": "Category",
    "transaction_type": "Transaction Type",
    "notes": "Notes",
    "photo_url": "Receipt Photo",
    "business_id": "Business ID",
    "business_name": "Business",
}

DATE_FORMAT = "%Y-%m-%d"


def render_value(value: Any) -> str:
    """Render a field value as the string stored in history."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Decimal):
        return str(value.quantize(CENT))
    if isinstance(value, datetime):
        return value.date().strftime(DATE_FORMAT)
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)
    return str(value)


class HistoryRecorder:
    """Computes and builds history rows for schedule entry edits."""

    def __init__(self, fields: Sequence[str] = TRACKED_FIELDS):
        """Initialize history recorder.

        Args:
            fields: Entry attributes whose changes are recorded
        """
        self.fields = tuple(fields)

    def diff(self, before: ScheduleEntry, after: ScheduleEntry) -> list[FieldChange]:
        """Return one change per tracked field whose rendering differs.

        Args:
            before: Snapshot of the entry as currently stored
            after: Proposed snapshot of the entry

        Returns:
            List of field changes, in tracked-field order
        """
        changes = []
        for name in self.fields:
            old_value = render_value(getattr(before, name))
            new_value = render_value(getattr(after, name))
            if old_value != new_value:
                changes.append(FieldChange(field_name=name, old_value=old_value, new_value=new_value))
        return changes

    def build_entries(
        self,
        schedule_id: str,
        changes: Iterable[FieldChange],
        modified_by: str,
        timestamp: Optional[datetime] = None,
    ) -> list[ScheduleHistoryEntry]:
        """Turn field changes into history rows for one edit.

        All rows of an edit share the acting user and the edit's timestamp.
        """
        if timestamp is None:
            timestamp = datetime.now(UTC)
        entries = [
            ScheduleHistoryEntry(
                id=str(uuid.uuid4()),
                schedule_id=schedule_id,
                field_name=change.field_name,
                old_value=change.old_value,
                new_value=change.new_value,
                modified_by=modified_by,
                timestamp=timestamp,
            )
            for change in changes
        ]
        for entry in entries:
            logger.debug(
                "Recorded change to %s on %s: %r -> %r",
                entry.field_name,
                schedule_id,
                entry.old_value,
                entry.new_value,
            )
        return entries


def group_history(entries: Iterable[ScheduleHistoryEntry]) -> list[HistoryRecord]:
    """Group history rows by edit for display.

    Rows are sorted newest first and grouped by (timestamp to the second,
    modified_by); consecutive rows with the same key form one record.

    Args:
        entries: History rows for a single schedule entry

    Returns:
        List of history records, newest first
    """
    ordered = sorted(entries, key=lambda e: e.timestamp, reverse=True)

    records: list[HistoryRecord] = []
    group: list[ScheduleHistoryEntry] = []
    current_key: Optional[tuple[int, str]] = None

    for entry in ordered:
        key = (int(entry.timestamp.timestamp()), entry.modified_by)
        if group and key != current_key:
            records.append(_to_record(group))
            group = []
        current_key = key
        group.append(entry)

    if group:
        records.append(_to_record(group))
    return records


def _to_record(group: list[ScheduleHistoryEntry]) -> HistoryRecord:
    first = group[0]
    changes = tuple(
        FieldChange(field_name=e.field_name, old_value=e.old_value, new_value=e.new_value)
        for e in group
    )
    return HistoryRecord(timestamp=first.timestamp, modified_by=first.modified_by, changes=changes)
