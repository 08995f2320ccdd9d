"""Tests for field-level history tracking."""

import dataclasses
from datetime import date, datetime, timedelta, UTC
from decimal import Decimal

from schedulec.domain.categories import TransactionType
from schedulec.domain.entities import FieldChange, ScheduleEntry, ScheduleHistoryEntry
from schedulec.domain.history import (
    TRACKED_FIELDS,
    HistoryRecorder,
    group_history,
    render_value,
)

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def _entry(**overrides) -> ScheduleEntry:
    values = dict(
        id="s1",
        date=date(2024, 3, 1),
        amount=Decimal("12.50"),
        store="Staples",
        category="Supplies",
        transaction_type=TransactionType.EXPENSE,
        business_id="b1",
        business_name="Acme",
        created_at=NOW,
        created_by="user-1",
        modified_at=NOW,
        modified_by="user-1",
    )
    values.update(overrides)
    return ScheduleEntry(**values)


def _row(field_name, modified_by, timestamp, row_id=None):
    return ScheduleHistoryEntry(
        id=row_id or f"{field_name}-{timestamp.isoformat()}",
        schedule_id="s1",
        field_name=field_name,
        old_value="a",
        new_value="b",
        modified_by=modified_by,
        timestamp=timestamp,
    )


class TestRenderValue:
    """Tests for the string rendering used in history rows."""

    def test_renders_decimal_with_two_places(self):
        assert render_value(Decimal("15")) == "15.00"
        assert render_value(Decimal("12.5")) == "12.50"

    def test_renders_dates(self):
        assert render_value(date(2024, 3, 1)) == "2024-03-01"
        assert render_value(datetime(2024, 3, 1, 23, 59)) == "2024-03-01"

    def test_renders_enum_by_value(self):
        assert render_value(TransactionType.INCOME) == "income"

    def test_renders_none_as_empty(self):
        assert render_value(None) == ""


class TestHistoryRecorder:
    """Tests for diffing snapshots."""

    def test_no_changes_for_identical_snapshots(self):
        entry = _entry()
        assert HistoryRecorder().diff(entry, entry) == []

    def test_equal_values_with_different_representation_are_not_changes(self):
        before = _entry(amount=Decimal("15"))
        after = _entry(amount=Decimal("15.00"))
        assert HistoryRecorder().diff(before, after) == []

    def test_amount_change(self):
        after = _entry(amount=Decimal("15.00"))
        changes = HistoryRecorder().diff(_entry(), after)
        assert changes == [FieldChange("amount", "12.50", "15.00")]

    def test_changes_follow_tracked_field_order(self):
        after = _entry(
            notes="printer paper",
            store="Office Depot",
            date=date(2024, 3, 2),
        )
        changes = HistoryRecorder().diff(_entry(), after)
        assert [c.field_name for c in changes] == ["date", "store", "notes"]
        assert changes[2] == FieldChange("notes", "", "printer paper")

    def test_type_and_category_change_together(self):
        after = _entry(transaction_type=TransactionType.INCOME, category="Other income")
        changes = HistoryRecorder().diff(_entry(), after)
        assert {c.field_name: (c.old_value, c.new_value) for c in changes} == {
            "category": ("Supplies", "Other income"),
            "transaction_type": ("expense", "income"),
        }

    def test_custom_field_list(self):
        recorder = HistoryRecorder(fields=("amount",))
        after = _entry(amount=Decimal("1.00"), store="Elsewhere")
        assert [c.field_name for c in recorder.diff(_entry(), after)] == ["amount"]

    def test_build_entries_share_user_and_timestamp(self):
        changes = [FieldChange("amount", "12.50", "15.00"), FieldChange("store", "A", "B")]
        rows = HistoryRecorder().build_entries("s1", changes, "user-2", NOW)

        assert len(rows) == 2
        assert {row.timestamp for row in rows} == {NOW}
        assert {row.modified_by for row in rows} == {"user-2"}
        assert {row.schedule_id for row in rows} == {"s1"}
        assert len({row.id for row in rows}) == 2

    def test_tracked_fields_cover_editable_entry_fields(self):
        names = {f.name for f in dataclasses.fields(ScheduleEntry)}
        assert set(TRACKED_FIELDS) <= names
        assert "modified_at" not in TRACKED_FIELDS


class TestGroupHistory:
    """Tests for grouping history rows into edit records."""

    def test_empty(self):
        assert group_history([]) == []

    def test_groups_by_second_and_user(self):
        first = datetime(2024, 3, 1, 12, 0, 0)
        second = first + timedelta(minutes=5)
        rows = [
            _row("amount", "user-1", first),
            _row("store", "user-1", first),
            _row("notes", "user-2", second),
        ]

        records = group_history(rows)

        assert len(records) == 2
        assert records[0].modified_by == "user-2"
        assert records[0].timestamp == second
        assert [c.field_name for c in records[0].changes] == ["notes"]
        assert [c.field_name for c in records[1].changes] == ["amount", "store"]

    def test_same_second_different_users_are_separate(self):
        moment = datetime(2024, 3, 1, 12, 0, 0)
        rows = [_row("amount", "user-1", moment), _row("store", "user-2", moment)]
        assert len(group_history(rows)) == 2

    def test_sub_second_differences_are_one_edit(self):
        moment = datetime(2024, 3, 1, 12, 0, 0, 100)
        rows = [
            _row("amount", "user-1", moment),
            _row("store", "user-1", moment.replace(microsecond=900)),
        ]
        records = group_history(rows)
        assert len(records) == 1
        assert len(records[0].changes) == 2
