"""Shared pytest fixtures for schedulec tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from schedulec.database.factories import create_sqlite_database
from schedulec.domain.business import BusinessService
from schedulec.domain.categories import TransactionType
from schedulec.domain.schedule import ScheduleService

USER = "user-1"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def business_service(temp_db):
    """Create a BusinessService with a temporary database."""
    return BusinessService(temp_db)


@pytest.fixture
def schedule_service(temp_db):
    """Create a ScheduleService with a temporary database."""
    return ScheduleService(temp_db)


@pytest.fixture
def sample_business(business_service):
    """Create the sample retail business "Acme"."""
    business_id = business_service.add_business("Acme", USER, business_type="Retail")
    return business_service.get_business(business_id)


@pytest.fixture
def sample_entry(temp_db, sample_business):
    """Create a $12.50 Supplies expense at Staples for Acme."""
    schedule_id = temp_db.create_schedule(
        date=date(2024, 3, 1),
        amount=Decimal("12.50"),
        store="Staples",
        category="Supplies",
        transaction_type=TransactionType.EXPENSE,
        business_id=sample_business.id,
        created_by=USER,
    )
    return temp_db.get_schedule(schedule_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(temp_db, tmp_path):
    """Global CLI options pointing at the temporary database and data directory."""
    return [
        "--home",
        str(tmp_path / "home"),
        "--db-path",
        temp_db.database_path,
        "--user",
        USER,
    ]
