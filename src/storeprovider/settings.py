"""Store provider settings.

Which backend a process runs against is an operator decision made through
the environment (or a ``.env`` file), validated once at startup.

Manifesto:
    - **Pydantic validation:** Type-checked at startup, not at first query
    - **Environment-driven:** ``STORE_DB_TYPE``, ``STORE_DB_CONN``, ...
    - **Cached:** One settings object per env file, cleared in tests

Examples:
    >>> import os
    >>> os.environ["STORE_DB_TYPE"] = "PostgreSQL"
    >>> get_settings(_force_reload=True).db_type
    'postgresql'

Tags:
    settings, configuration, pydantic, environment, storeprovider
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Database selection and logging settings.

    Fields
    ──────
    db_type      : Registered database type (mysql, percona, mariadb, postgresql, sqlite)
    db_conn      : Connection string in the backend's native syntax
    log_level    : Structlog log level
    log_format   : ``json`` for aggregation, ``console`` for development
    """

    model_config = SettingsConfigDict(
        env_prefix="STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Database ─────────────────────────────────────────────────
    db_type: str = Field(default="mysql", description="Registered database type name")
    db_conn: str = Field(default="", description="Backend-native connection string")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: Literal["json", "console"] = Field(default="json")

    @field_validator("db_type")
    @classmethod
    def _normalise_db_type(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("db_conn")
    @classmethod
    def _strip_db_conn(cls, value: str) -> str:
        return value.strip()


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, StoreSettings] = {}


def get_settings(
    *,
    env_file: Path | str | None = ".env",
    _force_reload: bool = False,
) -> StoreSettings:
    """Load, validate, and cache a :class:`StoreSettings` instance.

    Parameters
    ----------
    env_file:
        ``.env`` file to read in addition to the environment; ``None``
        reads the environment only.
    _force_reload:
        Bypass cache and reload.
    """
    cache_key = str(env_file)

    if not _force_reload and cache_key in _settings_cache:
        return _settings_cache[cache_key]

    settings = StoreSettings(_env_file=env_file)  # type: ignore[call-arg]
    _settings_cache[cache_key] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = [
    "StoreSettings",
    "get_settings",
    "clear_settings_cache",
]
