"""Integration tests for end-to-end workflows."""

import csv
import io

from schedulec.cli.main import cli


def _invoke(cli_runner, cli_args, *args, user=None):
    extra = ["--user", user] if user else []
    result = cli_runner.invoke(cli, cli_args + extra + list(args))
    assert result.exit_code == 0, result.output
    return result


def test_full_workflow(cli_runner, cli_args):
    """Test complete workflow: business → add → edit → history → summary → export."""
    # Step 1: Create business
    result = _invoke(cli_runner, cli_args, "business", "create", "Acme", "--type", "Retail")
    assert "Created business 'Acme'" in result.output

    # Step 2: Add an expense; the single business is selected automatically
    result = _invoke(
        cli_runner,
        cli_args,
        "add",
        "--date",
        "2024-03-01",
        "--amount",
        "12.50",
        "--store",
        "Staples",
        "--category",
        "Supplies",
    )
    entry_id = None
    for line in result.output.split("\n"):
        if line.startswith("Created entry "):
            entry_id = line.split("Created entry ", 1)[1].strip()
            break
    assert entry_id is not None

    # Step 3: Another user edits the amount
    result = _invoke(
        cli_runner, cli_args, "entry", "edit", entry_id, "--amount", "15.00", user="user-2"
    )
    assert "Amount: 12.50 -> 15.00" in result.output

    # Step 4: History shows exactly that change
    result = _invoke(cli_runner, cli_args, "entry", "history", entry_id)
    assert "by user-2" in result.output
    assert result.output.count("->") == 1

    # Step 5: Summary reflects the edited amount
    result = _invoke(cli_runner, cli_args, "summary", "--range", "full-year", "--year", "2024")
    assert "$15.00" in result.output
    assert "-$15.00" in result.output

    # Step 6: Export carries creator and last editor
    result = _invoke(cli_runner, cli_args, "export", "csv", "--business", "Acme")
    rows = list(csv.DictReader(io.StringIO(result.output)))
    assert len(rows) == 1
    assert rows[0]["Amount"] == "15.00"
    assert rows[0]["Created By"] == "user-1"
    assert rows[0]["Modified By"] == "user-2"
    assert rows[0]["Business Name"] == "Acme"
