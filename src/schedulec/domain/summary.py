"""Income and expense summaries."""

import calendar
from collections import defaultdict
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from schedulec.database.base import Database
from schedulec.domain.categories import TransactionType
from schedulec.domain.entities import BusinessSummary, CategoryTotal, ScheduleEntry
from schedulec.domain.errors import ValidationError

ZERO = Decimal("0.00")


class SummaryRange(str, Enum):
    """Date range presets for summaries."""

    YEAR_TO_DATE = "year-to-date"
    FULL_YEAR = "full-year"
    QUARTER = "quarter"
    MONTH = "month"
    CUSTOM = "custom"


def calculate_date_range(
    range_type: SummaryRange,
    year: int,
    period: Optional[int] = None,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
    today: Optional[date] = None,
) -> tuple[date, date]:
    """Return the (start, end) dates of a summary range.

    Args:
        range_type: Which preset to use
        year: Selected year
        period: Quarter (1-4) for QUARTER, month (1-12) for MONTH; defaults to 1
        custom_start: Start date for CUSTOM
        custom_end: End date for CUSTOM
        today: Reference date for year-to-date and the CUSTOM fallback

    Returns:
        Tuple of inclusive start and end dates
    """
    today = today or date.today()
    range_type = SummaryRange(range_type)

    if range_type is SummaryRange.YEAR_TO_DATE:
        if year == today.year:
            return date(year, 1, 1), today
        return date(year, 1, 1), date(year, 12, 31)

    if range_type is SummaryRange.FULL_YEAR:
        return date(year, 1, 1), date(year, 12, 31)

    if range_type is SummaryRange.QUARTER:
        quarter = period or 1
        if not 1 <= quarter <= 4:
            raise ValidationError(f"Quarter must be between 1 and 4, got {quarter}")
        start_month = (quarter - 1) * 3 + 1
        end_month = start_month + 2
        return date(year, start_month, 1), _month_end(year, end_month)

    if range_type is SummaryRange.MONTH:
        month = period or 1
        if not 1 <= month <= 12:
            raise ValidationError(f"Month must be between 1 and 12, got {month}")
        return date(year, month, 1), _month_end(year, month)

    # Custom range; fall back to the current month of the selected year
    if custom_start is not None and custom_end is not None:
        if custom_start > custom_end:
            raise ValidationError("Start date must be on or before end date")
        return custom_start, custom_end
    return date(year, today.month, 1), _month_end(year, today.month)


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def totals_by_category(entries: Iterable[ScheduleEntry]) -> list[CategoryTotal]:
    """Sum amounts per category, largest first (ties by name)."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for entry in entries:
        totals[entry.category] += entry.amount
    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [CategoryTotal(category=category, amount=amount) for category, amount in ordered]


def summarize(
    entries: list[ScheduleEntry], business_id: Optional[str], business_name: str
) -> BusinessSummary:
    """Build a summary from a list of entries."""
    income_entries = [e for e in entries if e.transaction_type is TransactionType.INCOME]
    expense_entries = [e for e in entries if e.transaction_type is TransactionType.EXPENSE]
    return BusinessSummary(
        business_id=business_id,
        business_name=business_name,
        income=sum((e.amount for e in income_entries), ZERO),
        expenses=sum((e.amount for e in expense_entries), ZERO),
        entry_count=len(entries),
        income_by_category=tuple(totals_by_category(income_entries)),
        expenses_by_category=tuple(totals_by_category(expense_entries)),
    )


class SummaryService:
    """Service for building income/expense summaries."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def business_summary(
        self,
        business_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> BusinessSummary:
        """Summarize one business over a date range.

        The business name comes from the business record when it still
        exists, otherwise from the name stored on its entries.
        """
        entries = self.db.list_schedules(
            start_date=start_date, end_date=end_date, business_id=business_id
        )
        business = self.db.get_business(business_id)
        if business is not None:
            name = business.name
        elif entries:
            name = entries[0].business_name
        else:
            name = "Unknown"
        return summarize(entries, business_id, name)

    def business_summaries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[BusinessSummary]:
        """Summarize every business that has entries in the range, by name."""
        entries = self.db.list_schedules(start_date=start_date, end_date=end_date)
        grouped: dict[str, list[ScheduleEntry]] = defaultdict(list)
        for entry in entries:
            grouped[entry.business_id].append(entry)

        summaries = []
        for business_id, business_entries in grouped.items():
            business = self.db.get_business(business_id)
            name = business.name if business is not None else business_entries[0].business_name
            summaries.append(summarize(business_entries, business_id, name))
        return sorted(summaries, key=lambda s: s.business_name.lower())

    def overall_summary(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> BusinessSummary:
        """Summarize all businesses together."""
        entries = self.db.list_schedules(start_date=start_date, end_date=end_date)
        return summarize(entries, None, "All businesses")

    def top_categories(
        self,
        transaction_type: TransactionType,
        business_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 5,
    ) -> list[CategoryTotal]:
        """Return the largest categories of one transaction type."""
        entries = self.db.list_schedules(
            start_date=start_date,
            end_date=end_date,
            business_id=business_id,
            transaction_type=transaction_type,
        )
        return totals_by_category(entries)[:limit]

    def available_years(self, today: Optional[date] = None) -> list[int]:
        """Return the sorted years that have entries, or the current year if none."""
        years = sorted({entry.date.year for entry in self.db.list_schedules()})
        if not years:
            return [(today or date.today()).year]
        return years
