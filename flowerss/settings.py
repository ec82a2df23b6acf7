"""Centralized configuration management for the flowerss subscription core."""

from __future__ import annotations

import logging
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load a local .env file before the settings singleton is created so that every
# consumer importing :mod:`flowerss.settings` observes the same environment.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_SQLITE_DATABASE_URL = "sqlite+aiosqlite:///./data/flowerss.db"
SQLITE_ASYNC_PREFIX = "sqlite+aiosqlite://"
POSTGRES_ASYNC_PREFIX = "postgresql+psycopg://"
POSTGRES_SYNC_PREFIXES = ("postgres://", "postgresql://")
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_UPDATE_INTERVAL_MINUTES = 10


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Besides raw environment values the class exposes derived helpers, such as
    the async-driver database URL, so downstream modules never repeat the
    parsing logic.
    """

    _explicit_database_url: bool = PrivateAttr(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def __init__(self, **values: object) -> None:
        """Remember whether the database URL was supplied explicitly."""

        super().__init__(**values)
        self._explicit_database_url = bool(self.database_url)

    database_url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description=(
            "SQLAlchemy-compatible database URL. Postgres URLs in sync format"
            " (postgres:// or postgresql://) are coerced into the async psycopg"
            " driver string; sqlite+aiosqlite URLs are used as-is."
        ),
    )
    use_sqlite: bool = Field(
        default=False,
        alias="USE_SQLITE",
        description="Force the SQLite fallback regardless of DATABASE_URL.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )
    update_interval: int = Field(
        default=DEFAULT_UPDATE_INTERVAL_MINUTES,
        alias="UPDATE_INTERVAL",
        description=(
            "Feed update interval in minutes assigned to newly created"
            " subscriptions."
        ),
    )

    @field_validator("update_interval")
    @classmethod
    def _positive_interval(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("UPDATE_INTERVAL must be a positive number of minutes")
        return value

    @property
    def resolved_database_url(self) -> str:
        """Return the async-compatible database URL after applying fallbacks."""

        if self.use_sqlite or not self.database_url:
            return DEFAULT_SQLITE_DATABASE_URL

        url = self.database_url.strip()

        for prefix in POSTGRES_SYNC_PREFIXES:
            if url.startswith(prefix):
                return url.replace(prefix, POSTGRES_ASYNC_PREFIX, 1)

        if url.startswith((POSTGRES_ASYNC_PREFIX, SQLITE_ASYNC_PREFIX)):
            return url

        raise RuntimeError(
            f"Expected a PostgreSQL or sqlite+aiosqlite connection string, received: {url}"
        )

    @property
    def database_type(self) -> str:
        """Return ``sqlite`` when using SQLite otherwise ``postgresql``."""

        if self.resolved_database_url.startswith("sqlite"):
            return "sqlite"
        return "postgresql"

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if not self._explicit_database_url and not self.use_sqlite:
            warnings.append(
                "DATABASE_URL is not set - falling back to the local SQLite file "
                f"{DEFAULT_SQLITE_DATABASE_URL}"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


settings = get_settings()

__all__ = [
    "AppSettings",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_SQLITE_DATABASE_URL",
    "DEFAULT_UPDATE_INTERVAL_MINUTES",
    "POSTGRES_ASYNC_PREFIX",
    "POSTGRES_SYNC_PREFIXES",
    "SQLITE_ASYNC_PREFIX",
    "get_settings",
    "settings",
]
