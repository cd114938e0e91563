"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Funds Ledger"
    APP_VERSION: str = "0.1.0"

    def __init__(self):
        self.ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

        # Database
        self.DATABASE_URL: str = os.getenv(
            "DATABASE_URL",
            "postgresql+asyncpg://localhost:5432/funds_ledger"
        )
        self.DB_ECHO: bool = _env_bool("DB_ECHO", "false")
        self.DB_POOL_PRE_PING: bool = _env_bool("DB_POOL_PRE_PING", "true")
        # Seconds a SQLite writer waits for the database lock
        self.SQLITE_BUSY_TIMEOUT: float = float(
            os.getenv("SQLITE_BUSY_TIMEOUT", "30")
        )

        # Logging
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.LOG_FILE: str | None = os.getenv("LOG_FILE") or None


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Using lru_cache means the Settings object is created once
    and reused for all subsequent calls. This avoids reading
    environment variables repeatedly.
    """
    return Settings()
