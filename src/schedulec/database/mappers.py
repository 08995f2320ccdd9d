"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the domain entities stay
independent of the table layout.
"""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from schedulec.domain import entities as domain
from schedulec.domain.categories import TransactionType
from schedulec.domain.validation import CENT
from schedulec.database.models import (
    Business as ORMBusiness,
    Schedule as ORMSchedule,
    ScheduleHistory as ORMScheduleHistory,
)


def _utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return a timestamp as aware UTC; naive values read back from SQLite are UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def business_to_domain(orm_business: ORMBusiness) -> domain.Business:
    """Convert SQLAlchemy Business model to domain Business entity."""
    return domain.Business(
        id=orm_business.id,
        name=orm_business.name,
        business_type=orm_business.business_type,
        created_at=_utc(orm_business.created_at),
        created_by=orm_business.created_by,
        is_active=bool(orm_business.is_active),
    )


def schedule_to_domain(orm_schedule: ORMSchedule) -> domain.ScheduleEntry:
    """Convert SQLAlchemy Schedule model to domain ScheduleEntry entity."""
    return domain.ScheduleEntry(
        id=orm_schedule.id,
        date=orm_schedule.date,
        amount=Decimal(orm_schedule.amount).quantize(CENT),
        store=orm_schedule.store,
        category=orm_schedule.category,
        transaction_type=TransactionType(orm_schedule.transaction_type),
        business_id=orm_schedule.business_id,
        business_name=orm_schedule.business_name,
        created_at=_utc(orm_schedule.created_at),
        created_by=orm_schedule.created_by,
        modified_at=_utc(orm_schedule.modified_at),
        modified_by=orm_schedule.modified_by,
        notes=orm_schedule.notes,
        photo_url=orm_schedule.photo_url,
    )


def history_to_domain(orm_history: ORMScheduleHistory) -> domain.ScheduleHistoryEntry:
    """Convert SQLAlchemy ScheduleHistory model to domain ScheduleHistoryEntry."""
    return domain.ScheduleHistoryEntry(
        id=orm_history.id,
        schedule_id=orm_history.schedule_id,
        field_name=orm_history.field_name,
        old_value=orm_history.old_value or "",
        new_value=orm_history.new_value or "",
        modified_by=orm_history.modified_by,
        timestamp=_utc(orm_history.timestamp),
    )


def history_to_orm(entry: domain.ScheduleHistoryEntry) -> ORMScheduleHistory:
    """Convert a domain ScheduleHistoryEntry into a new SQLAlchemy row."""
    return ORMScheduleHistory(
        id=entry.id,
        schedule_id=entry.schedule_id,
        field_name=entry.field_name,
        old_value=entry.old_value,
        new_value=entry.new_value,
        modified_by=entry.modified_by,
        timestamp=entry.timestamp,
    )
