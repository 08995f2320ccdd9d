"""Export of schedule entries to CSV and zip archives."""

import csv
import io
import logging
import zipfile
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Optional
from urllib.parse import unquote, urlparse

from schedulec.database.base import Database
from schedulec.domain.categories import TransactionType
from schedulec.domain.entities import ScheduleEntry
from schedulec.domain.errors import ValidationError

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "ID",
    "Date",
    "Transaction Type",
    "Amount",
    "Store",
    "Category",
    "Notes",
    "Business Name",
    "Created At",
    "Created By",
    "Modified At",
    "Modified By",
    "Photo URL",
]

CSV_FILENAME = "schedule_data.csv"
IMAGES_DIR = "receipt_images"
MANIFEST_FILENAME = "manifest.txt"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _timestamp(value: Optional[datetime]) -> str:
    return value.strftime(TIMESTAMP_FORMAT) if value is not None else ""


def receipt_path(photo_url: Optional[str]) -> Optional[Path]:
    """Resolve a receipt reference to a local file, if it points at one."""
    if not photo_url:
        return None
    parsed = urlparse(photo_url)
    if parsed.scheme == "file":
        path = Path(unquote(parsed.path))
    elif parsed.scheme == "":
        path = Path(photo_url)
    else:
        return None
    return path if path.is_file() else None


class ExportService:
    """Service for exporting schedule entries."""

    def __init__(self, db: Database):
        """Initialize export service.

        Args:
            db: Database instance
        """
        self.db = db

    def select_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        business_id: Optional[str] = None,
        include_income: bool = True,
        include_expenses: bool = True,
    ) -> list[ScheduleEntry]:
        """Select entries to export.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter
            business_id: Optional business filter
            include_income: Include income entries
            include_expenses: Include expense entries

        Returns:
            Matching entries, newest first

        Raises:
            ValidationError: If both transaction types are excluded
        """
        if not include_income and not include_expenses:
            raise ValidationError("Select at least one transaction type to export")

        transaction_type = None
        if not include_income:
            transaction_type = TransactionType.EXPENSE
        elif not include_expenses:
            transaction_type = TransactionType.INCOME

        return self.db.list_schedules(
            start_date=start_date,
            end_date=end_date,
            business_id=business_id,
            transaction_type=transaction_type,
        )

    def to_rows(self, entries: Iterable[ScheduleEntry]) -> list[list[Any]]:
        """Convert entries to CSV rows (without header)."""
        return [
            [
                entry.id,
                entry.date.isoformat(),
                entry.transaction_type.value,
                f"{entry.amount:.2f}",
                entry.store,
                entry.category,
                entry.notes or "",
                entry.business_name,
                _timestamp(entry.created_at),
                entry.created_by,
                _timestamp(entry.modified_at),
                entry.modified_by,
                entry.photo_url or "",
            ]
            for entry in entries
        ]

    def export_csv(self, entries: Iterable[ScheduleEntry]) -> str:
        """Render entries as CSV text with a header row."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        writer.writerows(self.to_rows(entries))
        return buffer.getvalue()

    def write_csv(self, entries: Iterable[ScheduleEntry], output_path: str) -> int:
        """Write entries to a CSV file.

        Returns:
            Number of entries written
        """
        entries = list(entries)
        Path(output_path).write_text(self.export_csv(entries), encoding="utf-8")
        logger.info("Exported %d entries to %s", len(entries), output_path)
        return len(entries)

    def export_archive(
        self,
        entries: Iterable[ScheduleEntry],
        output_path: str,
        exported_at: Optional[datetime] = None,
    ) -> dict[str, int]:
        """Write a zip archive with the CSV, receipt images and a manifest.

        Receipt references that do not resolve to a local file are listed in
        the CSV but not copied.

        Args:
            entries: Entries to export
            output_path: Zip file to create
            exported_at: Timestamp written to the manifest

        Returns:
            Dict with export statistics:
            - records: number of entries exported
            - images: number of receipt images copied
        """
        entries = list(entries)
        exported_at = exported_at or datetime.now()
        copied = 0

        with zipfile.ZipFile(output_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr(CSV_FILENAME, self.export_csv(entries))
            for entry in entries:
                source = receipt_path(entry.photo_url)
                if source is None:
                    continue
                suffix = source.suffix or ".jpg"
                archive.write(source, f"{IMAGES_DIR}/{entry.id}_receipt{suffix}")
                copied += 1

            manifest = (
                f"Export Date: {exported_at.strftime(TIMESTAMP_FORMAT)}\n"
                f"Total Records: {len(entries)}\n"
                f"Images Exported: {copied}\n"
                "\n"
                "This export contains:\n"
                f"- {CSV_FILENAME}: All transaction records\n"
                f"- {IMAGES_DIR}/: Directory containing all receipt images\n"
                f"- {MANIFEST_FILENAME}: This file\n"
            )
            archive.writestr(MANIFEST_FILENAME, manifest)

        logger.info("Exported %d entries and %d images to %s", len(entries), copied, output_path)
        return {"records": len(entries), "images": copied}


def default_archive_name(now: Optional[datetime] = None) -> str:
    """Return the default zip file name for a full export."""
    return f"schedule_export_{(now or datetime.now()).strftime('%Y%m%d_%H%M%S')}.zip"
