"""Tests for CSV and archive export."""

import csv
import io
import zipfile
from datetime import date, datetime
from decimal import Decimal

import pytest

from schedulec.domain.categories import TransactionType
from schedulec.domain.errors import ValidationError
from schedulec.domain.export import (
    CSV_HEADER,
    ExportService,
    default_archive_name,
    receipt_path,
)

USER = "user-1"


@pytest.fixture
def export_service(temp_db):
    return ExportService(temp_db)


@pytest.fixture
def income_entry(temp_db, sample_business):
    schedule_id = temp_db.create_schedule(
        date=date(2024, 3, 2),
        amount=Decimal("250.00"),
        store="Client, Inc.",
        category="Gross receipts or sales",
        transaction_type=TransactionType.INCOME,
        business_id=sample_business.id,
        created_by=USER,
    )
    return temp_db.get_schedule(schedule_id)


def test_select_entries_by_type(export_service, sample_entry, income_entry):
    assert [e.id for e in export_service.select_entries()] == [income_entry.id, sample_entry.id]
    assert [e.id for e in export_service.select_entries(include_income=False)] == [
        sample_entry.id
    ]
    assert [e.id for e in export_service.select_entries(include_expenses=False)] == [
        income_entry.id
    ]


def test_select_entries_requires_a_type(export_service):
    with pytest.raises(ValidationError):
        export_service.select_entries(include_income=False, include_expenses=False)


def test_export_csv(export_service, sample_entry, income_entry):
    text = export_service.export_csv([income_entry, sample_entry])

    rows = list(csv.reader(io.StringIO(text)))
    assert rows[0] == CSV_HEADER
    assert len(rows) == 3
    assert rows[1][0] == income_entry.id
    assert rows[1][1] == "2024-03-02"
    assert rows[1][2] == "income"
    assert rows[1][3] == "250.00"
    assert rows[1][4] == "Client, Inc."
    assert rows[2][5] == "Supplies"
    assert rows[2][7] == "Acme"
    assert rows[2][9] == USER


def test_write_csv(export_service, sample_entry, tmp_path):
    output = tmp_path / "out.csv"

    count = export_service.write_csv([sample_entry], str(output))

    assert count == 1
    assert output.read_text().splitlines()[0].startswith("ID,Date,Transaction Type")


def test_receipt_path(tmp_path):
    image = tmp_path / "receipt.png"
    image.write_bytes(b"png")

    assert receipt_path(str(image)) == image
    assert receipt_path(image.as_uri()) == image
    assert receipt_path(str(tmp_path / "missing.png")) is None
    assert receipt_path("https://example.com/receipt.png") is None
    assert receipt_path(None) is None


def test_export_archive(temp_db, export_service, sample_entry, income_entry, tmp_path):
    image = tmp_path / "receipt.png"
    image.write_bytes(b"png")
    temp_db.update_schedule(sample_entry.id, {"photo_url": str(image)}, USER)
    entries = export_service.select_entries()
    output = tmp_path / "export.zip"

    stats = export_service.export_archive(
        entries, str(output), exported_at=datetime(2024, 3, 5, 9, 30)
    )

    assert stats == {"records": 2, "images": 1}
    with zipfile.ZipFile(output) as archive:
        names = set(archive.namelist())
        assert "schedule_data.csv" in names
        assert f"receipt_images/{sample_entry.id}_receipt.png" in names
        manifest = archive.read("manifest.txt").decode()
    assert "Export Date: 2024-03-05 09:30:00" in manifest
    assert "Total Records: 2" in manifest
    assert "Images Exported: 1" in manifest


def test_default_archive_name():
    assert default_archive_name(datetime(2024, 3, 5, 9, 30, 1)) == "schedule_export_20240305_093001.zip"
