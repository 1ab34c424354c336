"""SQLite database operations.

Handles database connection, session management, and loading/saving the
reading plan and user settings.
"""

import json
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Generator, Optional

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import get_config
from ..schedule.schemas import ReadingPlanState
from .models import Base, PlanRecord, Setting, ThemeMode

# The app keeps a single plan, stored under a fixed row id.
PLAN_ROW_ID = 1
THEME_KEY = "theme"


class Database:
    """Database connection and operations manager."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. If None, uses
                     the configured BOOKBOUND_DB_PATH.
        """
        if db_path is None:
            db_path = str(get_config().db_path)

        self.db_path = Path(db_path)
        self._is_memory = str(db_path) == ":memory:"

        if not self._is_memory:
            self._ensure_directory()

        # For in-memory databases, use StaticPool to reuse the same connection
        # This ensures all sessions share the same in-memory database
        if self._is_memory:
            self.engine = create_engine(
                "sqlite:///:memory:",
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                connect_args={"check_same_thread": False},
            )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def _ensure_directory(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(self.engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session context manager."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ========================================================================
    # Plan Operations
    # ========================================================================

    def save_plan(self, state: ReadingPlanState) -> None:
        """Save the reading plan, replacing any previous one."""
        record = state.to_record()
        with self.get_session() as session:
            row = session.get(PlanRecord, PLAN_ROW_ID)
            if row is None:
                row = PlanRecord(id=PLAN_ROW_ID, version=record["version"], payload="")
                session.add(row)
            row.version = record["version"]
            row.payload = json.dumps(record)

    def load_plan_record(self) -> Optional[dict]:
        """Get the raw saved plan record.

        Returns:
            The decoded record, or None if nothing is saved or it is unreadable
        """
        with self.get_session() as session:
            row = session.get(PlanRecord, PLAN_ROW_ID)
            if row is None:
                return None
            payload = row.payload

        try:
            record = json.loads(payload)
        except json.JSONDecodeError:
            logger.warning("Saved plan record is not valid JSON, using defaults")
            return None

        if not isinstance(record, dict):
            logger.warning("Saved plan record has unexpected type {}", type(record).__name__)
            return None
        return record

    def load_plan(self, today: date) -> ReadingPlanState:
        """Load the saved reading plan.

        Args:
            today: Reference date for defaults

        Returns:
            The saved plan, or a default plan if none is saved
        """
        record = self.load_plan_record()
        if record is None:
            return ReadingPlanState.default(today)
        return ReadingPlanState.from_record(record, today)

    def clear_plan(self) -> bool:
        """Delete the saved plan.

        Returns:
            True if a plan was deleted
        """
        with self.get_session() as session:
            row = session.get(PlanRecord, PLAN_ROW_ID)
            if row is None:
                return False
            session.delete(row)
            return True

    # ========================================================================
    # Settings Operations
    # ========================================================================

    def get_setting(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a setting value."""
        with self.get_session() as session:
            setting = session.get(Setting, key)
            return setting.value if setting else default

    def set_setting(self, key: str, value: str) -> None:
        """Set a setting value."""
        with self.get_session() as session:
            setting = session.get(Setting, key)
            if setting is None:
                session.add(Setting(key=key, value=value))
            else:
                setting.value = value

    def get_theme(self) -> ThemeMode:
        """Get the display theme, defaulting to light."""
        value = self.get_setting(THEME_KEY, ThemeMode.LIGHT.value)
        try:
            return ThemeMode(value)
        except ValueError:
            return ThemeMode.LIGHT

    def set_theme(self, theme: ThemeMode) -> None:
        """Set the display theme."""
        self.set_setting(THEME_KEY, theme.value)


# Global database instance
_db: Optional[Database] = None


def get_db(db_path: Optional[str] = None) -> Database:
    """Get or create the global database instance."""
    global _db
    if _db is None:
        _db = Database(db_path)
        _db.create_tables()
    return _db


def reset_db() -> None:
    """Reset the global database instance. Used for testing."""
    global _db
    _db = None
