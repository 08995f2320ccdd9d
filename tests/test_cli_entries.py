"""Tests for add, entry, view, summary and export commands."""

from datetime import date
from decimal import Decimal

from schedulec.cli.main import cli
from schedulec.domain.categories import TransactionType
from schedulec.domain.errors import StorageError

USER = "user-1"


def _entry_id(output: str) -> str:
    for line in output.splitlines():
        if line.startswith("Created entry "):
            return line.split("Created entry ", 1)[1].strip()
    raise AssertionError(f"No entry ID in output: {output}")


class TestAdd:
    """Tests for the add command."""

    def test_add_expense(self, cli_runner, cli_args, temp_db, sample_business):
        result = cli_runner.invoke(
            cli,
            cli_args
            + [
                "add",
                "--business",
                "Acme",
                "--date",
                "2024-03-01",
                "--amount",
                "$12.50",
                "--store",
                "Staples",
                "--category",
                "supplies",
            ],
        )

        assert result.exit_code == 0
        assert "Amount: $12.50" in result.output
        entry = temp_db.get_schedule(_entry_id(result.output))
        assert entry.category == "Supplies"
        assert entry.date == date(2024, 3, 1)
        assert entry.created_by == USER

    def test_add_uses_only_business_and_today(self, cli_runner, cli_args, temp_db, sample_business):
        result = cli_runner.invoke(
            cli, cli_args + ["add", "--amount", "40", "--store", "Client", "--type", "income"]
        )

        assert result.exit_code == 0
        entry = temp_db.get_schedule(_entry_id(result.output))
        assert entry.business_id == sample_business.id
        assert entry.date == date.today()
        assert entry.transaction_type is TransactionType.INCOME
        assert entry.category == "Gross receipts or sales"
        assert entry.amount == Decimal("40.00")

    def test_add_without_business(self, cli_runner, cli_args):
        result = cli_runner.invoke(cli, cli_args + ["add", "--amount", "5", "--store", "X"])

        assert result.exit_code == 1
        assert "Please select a business" in result.output

    def test_add_wrong_category_for_type(self, cli_runner, cli_args, sample_business):
        result = cli_runner.invoke(
            cli,
            cli_args
            + ["add", "--amount", "5", "--store", "X", "--type", "income", "--category", "Supplies"],
        )

        assert result.exit_code == 1
        assert "not a valid income category" in result.output

    def test_add_invalid_amount(self, cli_runner, cli_args, sample_business):
        result = cli_runner.invoke(cli, cli_args + ["add", "--amount", "abc", "--store", "X"])

        assert result.exit_code == 1
        assert "Invalid amount format" in result.output

    def test_add_sub_cent_amount(self, cli_runner, cli_args, sample_business):
        result = cli_runner.invoke(cli, cli_args + ["add", "--amount", "1.005", "--store", "X"])

        assert result.exit_code == 1
        assert "more than two decimal places" in result.output


class TestEntryCommands:
    """Tests for entry show/edit/delete/history."""

    def test_show(self, cli_runner, cli_args, sample_entry):
        result = cli_runner.invoke(cli, cli_args + ["entry", "show", sample_entry.id])

        assert result.exit_code == 0
        assert "Store: Staples" in result.output
        assert "Amount: $12.50" in result.output

    def test_show_missing(self, cli_runner, cli_args):
        result = cli_runner.invoke(cli, cli_args + ["entry", "show", "missing"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_edit_records_history(self, cli_runner, cli_args, sample_entry):
        result = cli_runner.invoke(
            cli, cli_args + ["entry", "edit", sample_entry.id, "--amount", "15.00"]
        )

        assert result.exit_code == 0
        assert "Amount: 12.50 -> 15.00" in result.output

        history = cli_runner.invoke(cli, cli_args + ["entry", "history", sample_entry.id])
        assert history.exit_code == 0
        assert f"by {USER}" in history.output
        assert "Amount: 12.50 -> 15.00" in history.output

    def test_edit_without_changes(self, cli_runner, cli_args, sample_entry):
        result = cli_runner.invoke(
            cli, cli_args + ["entry", "edit", sample_entry.id, "--store", "Staples"]
        )

        assert result.exit_code == 0
        assert "No changes" in result.output

    def test_edit_switch_type_resets_category(self, cli_runner, cli_args, temp_db, sample_entry):
        result = cli_runner.invoke(
            cli, cli_args + ["entry", "edit", sample_entry.id, "--type", "income"]
        )

        assert result.exit_code == 0
        entry = temp_db.get_schedule(sample_entry.id)
        assert entry.transaction_type is TransactionType.INCOME
        assert entry.category == "Gross receipts or sales"

    def test_edit_clear_notes(self, cli_runner, cli_args, temp_db, sample_entry):
        temp_db.update_schedule(sample_entry.id, {"notes": "paper"}, USER)

        result = cli_runner.invoke(
            cli, cli_args + ["entry", "edit", sample_entry.id, "--notes", ""]
        )

        assert result.exit_code == 0
        assert temp_db.get_schedule(sample_entry.id).notes is None

    def test_history_empty(self, cli_runner, cli_args, sample_entry):
        result = cli_runner.invoke(cli, cli_args + ["entry", "history", sample_entry.id])

        assert result.exit_code == 0
        assert "No edits recorded." in result.output

    def test_delete_keeps_history(self, cli_runner, cli_args, temp_db, sample_entry):
        temp_db.update_schedule(sample_entry.id, {"store": "Office Depot"}, USER)

        result = cli_runner.invoke(cli, cli_args + ["entry", "delete", sample_entry.id], input="y\n")

        assert result.exit_code == 0
        assert "Deleted entry" in result.output
        assert temp_db.get_schedule(sample_entry.id) is None
        assert len(temp_db.list_history(sample_entry.id)) == 1

    def test_delete_aborted(self, cli_runner, cli_args, temp_db, sample_entry):
        result = cli_runner.invoke(cli, cli_args + ["entry", "delete", sample_entry.id], input="n\n")

        assert result.exit_code == 1
        assert temp_db.get_schedule(sample_entry.id) is not None


class TestView:
    """Tests for the view command."""

    def test_view_empty(self, cli_runner, cli_args):
        result = cli_runner.invoke(cli, cli_args + ["view"])

        assert result.exit_code == 0
        assert "No entries found." in result.output

    def test_view_lists_entries(self, cli_runner, cli_args, sample_entry):
        result = cli_runner.invoke(cli, cli_args + ["view"])

        assert result.exit_code == 0
        assert "Found 1 entry" in result.output
        assert sample_entry.id in result.output
        assert "Staples" in result.output

    def test_view_filters(self, cli_runner, cli_args, sample_entry):
        result = cli_runner.invoke(cli, cli_args + ["view", "--type", "income"])
        assert "No entries found." in result.output

        result = cli_runner.invoke(cli, cli_args + ["view", "--start-date", "2024-04-01"])
        assert "No entries found." in result.output

        result = cli_runner.invoke(cli, cli_args + ["view", "--business", "Acme", "--verbose"])
        assert f"Entry ID: {sample_entry.id}" in result.output
        assert f"Created by: {USER}" in result.output

    def test_view_reports_read_failure(self, cli_runner, cli_args, monkeypatch):
        def failing_list_schedules(self, *args, **kwargs):
            raise StorageError("Database read failed: disk I/O error")

        monkeypatch.setattr(
            "schedulec.database.sqlalchemy_db.SQLAlchemyDatabase.list_schedules",
            failing_list_schedules,
        )

        result = cli_runner.invoke(cli, cli_args + ["view"])

        assert result.exit_code == 1
        assert "Error: Database read failed" in result.output
        assert not isinstance(result.exception, StorageError)

    def test_view_period_with_dates(self, cli_runner, cli_args):
        result = cli_runner.invoke(
            cli, cli_args + ["view", "--period", "this-month", "--start-date", "2024-01-01"]
        )

        assert result.exit_code == 1
        assert "--period cannot be combined" in result.output


class TestSummary:
    """Tests for the summary command."""

    def test_summary(self, cli_runner, cli_args, temp_db, sample_entry):
        temp_db.create_schedule(
            date=date(2024, 3, 5),
            amount=Decimal("100.00"),
            store="Client",
            category="Gross receipts or sales",
            transaction_type=TransactionType.INCOME,
            business_id=sample_entry.business_id,
            created_by=USER,
        )

        result = cli_runner.invoke(
            cli,
            cli_args + ["summary", "--range", "full-year", "--year", "2024", "--categories", "--top", "3"],
        )

        assert result.exit_code == 0
        assert "Summary for 2024-01-01 to 2024-12-31" in result.output
        assert "Acme (2 entries)" in result.output
        assert "$100.00" in result.output
        assert "$87.50" in result.output
        assert "Top 3 expense categories:" in result.output

    def test_summary_no_entries(self, cli_runner, cli_args):
        result = cli_runner.invoke(cli, cli_args + ["summary", "--range", "full-year", "--year", "2020"])

        assert result.exit_code == 0
        assert "No entries found." in result.output

    def test_summary_custom_requires_dates(self, cli_runner, cli_args):
        result = cli_runner.invoke(cli, cli_args + ["summary", "--range", "custom"])

        assert result.exit_code == 1
        assert "requires --start-date and --end-date" in result.output


class TestExport:
    """Tests for the export commands."""

    def test_export_csv_stdout(self, cli_runner, cli_args, sample_entry):
        result = cli_runner.invoke(cli, cli_args + ["export", "csv"])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0].startswith("ID,Date,Transaction Type,Amount")
        assert sample_entry.id in lines[1]

    def test_export_csv_file(self, cli_runner, cli_args, sample_entry, tmp_path):
        output = tmp_path / "out.csv"

        result = cli_runner.invoke(cli, cli_args + ["export", "csv", str(output), "--no-income"])

        assert result.exit_code == 0
        assert "Exported 1 entries" in result.output
        assert output.exists()

    def test_export_requires_a_type(self, cli_runner, cli_args, sample_entry):
        result = cli_runner.invoke(
            cli, cli_args + ["export", "csv", "--no-income", "--no-expenses"]
        )

        assert result.exit_code == 1
        assert "at least one transaction type" in result.output

    def test_export_zip(self, cli_runner, cli_args, sample_entry, tmp_path):
        output = tmp_path / "export.zip"

        result = cli_runner.invoke(cli, cli_args + ["export", "zip", str(output)])

        assert result.exit_code == 0
        assert "Exported 1 entries and 0 images" in result.output
        assert output.exists()
