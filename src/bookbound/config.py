"""Configuration management for bookbound.

Loads configuration from environment variables and provides defaults.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

# Load .env file if present
load_dotenv()

DEFAULT_ADVICE_MODEL = "gemini-3-flash-preview"
VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path

    # Advice (Gemini)
    gemini_api_key: Optional[str]
    advice_model: str
    advice_timeout: float  # seconds

    # Display
    roadmap_days: int

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get(
            "BOOKBOUND_DB_PATH",
            str(Path.home() / ".bookbound" / "bookbound.db"),
        )
        db_path = Path(db_path_str).expanduser()

        api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")

        return cls(
            db_path=db_path,
            gemini_api_key=api_key or None,
            advice_model=os.environ.get("BOOKBOUND_ADVICE_MODEL", DEFAULT_ADVICE_MODEL),
            advice_timeout=float(os.environ.get("BOOKBOUND_ADVICE_TIMEOUT", "10")),
            roadmap_days=int(os.environ.get("BOOKBOUND_ROADMAP_DAYS", "31")),
            log_level=os.environ.get("BOOKBOUND_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if str(self.db_path) != ":memory:" and not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        if self.advice_timeout <= 0:
            errors.append("BOOKBOUND_ADVICE_TIMEOUT must be positive")

        if self.roadmap_days < 1:
            errors.append("BOOKBOUND_ROADMAP_DAYS must be at least 1")

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def has_advice_config(self) -> bool:
        """Check if an advice API key is present."""
        return bool(self.gemini_api_key)


def configure_logging(level: str = "WARNING") -> None:
    """Send loguru output to stderr at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level)


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
