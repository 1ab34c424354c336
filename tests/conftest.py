"""Pytest configuration and shared fixtures.

This module provides fixtures for testing bookbound, including
temporary databases, a fixed reference date, and sample plans.
"""

import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Generator

import pytest

from bookbound.config import reset_config
from bookbound.db.sqlite import Database, reset_db
from bookbound.schedule.schemas import ReadingPlanState


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
def temp_db_path() -> Generator[Path, None, None]:
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)
    yield db_path
    # Cleanup
    if db_path.exists():
        db_path.unlink()


@pytest.fixture(scope="function")
def db(temp_db_path: Path) -> Generator[Database, None, None]:
    """Create a test database instance."""
    # Reset any global state
    reset_db()
    reset_config()

    # Set environment variable for test database
    os.environ["BOOKBOUND_DB_PATH"] = str(temp_db_path)

    database = Database(str(temp_db_path))
    database.create_tables()
    yield database

    # Cleanup
    reset_db()
    reset_config()
    if "BOOKBOUND_DB_PATH" in os.environ:
        del os.environ["BOOKBOUND_DB_PATH"]


@pytest.fixture
def memory_db() -> Database:
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    database.create_tables()
    return database


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def today() -> date:
    """A fixed reference date so projections are deterministic."""
    return date(2026, 3, 2)


@pytest.fixture
def sample_state() -> ReadingPlanState:
    """A plan for a 300 page book, nothing read yet."""
    return ReadingPlanState(
        title="The Left Hand of Darkness",
        total_pages=300,
        pages_read=0,
        target_date=date(2026, 3, 16),
        daily_pace=50,
        starts_today=False,
    )


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner
    return CliRunner()


@pytest.fixture
def cli_app():
    """Get the CLI app for testing."""
    from bookbound.cli import app
    return app
