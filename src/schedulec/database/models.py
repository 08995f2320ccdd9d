"""SQLAlchemy models for schedulec database."""

import uuid
from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(UTC)


class Business(Base):
    """Business model. Rows are deactivated, never deleted."""

    __tablename__ = "businesses"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    business_type = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    created_by = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    schedules = relationship("Schedule", back_populates="business")


class Schedule(Base):
    """Income or expense entry model."""

    __tablename__ = "schedules"

    id = Column(String(36), primary_key=True, default=_new_id)
    date = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    store = Column(String, nullable=False)
    category = Column(String, nullable=False)
    transaction_type = Column(String, nullable=False)
    notes = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)
    business_id = Column(String(36), ForeignKey("businesses.id"), nullable=False)
    # Denormalized copy of the business name at the time of writing
    business_name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    created_by = Column(String, nullable=False)
    modified_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    modified_by = Column(String, nullable=False)

    __table_args__ = (Index("ix_schedules_business_date", "business_id", "date"),)

    # Relationships
    business = relationship("Business", back_populates="schedules")


class ScheduleHistory(Base):
    """Append-only audit row for one field change.

    ``schedule_id`` is not a foreign key so that history outlives a deleted
    entry.
    """

    __tablename__ = "schedule_history"

    id = Column(String(36), primary_key=True, default=_new_id)
    schedule_id = Column(String(36), nullable=False, index=True)
    field_name = Column(String, nullable=False)
    old_value = Column(String, nullable=False, default="")
    new_value = Column(String, nullable=False, default="")
    modified_by = Column(String, nullable=False)
    timestamp = Column(DateTime(timezone=True), default=_now, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
