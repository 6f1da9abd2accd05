"""
Shared pytest fixtures and configuration for storeprovider tests.

This module provides:
- Auto-marking of unit/integration tests by location
- One fixture per provider plus a parametric ``provider`` fixture
- In-memory SQLite connections with the current and legacy config tables
- Settings cache cleanup for test isolation
"""

import sqlite3
import sys
from pathlib import Path
from typing import Generator

import pytest

# Ensure storeprovider package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from storeprovider.providers import (
    MySQLProvider,
    PostgreSQLProvider,
    SQLiteProvider,
    StoreProvider,
)
from storeprovider.settings import clear_settings_cache


MYSQL_CONN = "user:pass@tcp(host:3306)/documize?parseTime=true"
POSTGRES_CONN = "host=localhost port=5432 dbname=documize sslmode=disable"
SQLITE_CONN = "/var/lib/documize/documize.db"


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = item.path.relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop cached settings and STORE_* variables around every test."""
    for name in ("STORE_DB_TYPE", "STORE_DB_CONN", "STORE_LOG_LEVEL", "STORE_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Providers
# =============================================================================


@pytest.fixture
def mysql() -> MySQLProvider:
    return MySQLProvider(MYSQL_CONN)


@pytest.fixture
def mariadb() -> MySQLProvider:
    return MySQLProvider(MYSQL_CONN, variant="mariadb")


@pytest.fixture
def pg() -> PostgreSQLProvider:
    return PostgreSQLProvider(POSTGRES_CONN)


@pytest.fixture
def sqlite() -> SQLiteProvider:
    return SQLiteProvider(SQLITE_CONN)


@pytest.fixture(params=["mysql", "percona", "mariadb", "postgresql", "sqlite"])
def provider(request: pytest.FixtureRequest) -> StoreProvider:
    """Parametric fixture: run each test against every provider."""
    return {
        "mysql": MySQLProvider(MYSQL_CONN),
        "percona": MySQLProvider(MYSQL_CONN, variant="percona"),
        "mariadb": MySQLProvider(MYSQL_CONN, variant="mariadb"),
        "postgresql": PostgreSQLProvider(POSTGRES_CONN),
        "sqlite": SQLiteProvider(SQLITE_CONN),
    }[request.param]


# =============================================================================
# SQLite connections
# =============================================================================


@pytest.fixture
def memory_db() -> Generator[sqlite3.Connection, None, None]:
    """Empty in-memory SQLite database."""
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def config_db(memory_db: sqlite3.Connection) -> sqlite3.Connection:
    """In-memory SQLite database with the current config table."""
    memory_db.execute(
        "CREATE TABLE dmz_config (c_key TEXT NOT NULL PRIMARY KEY, c_config TEXT NOT NULL)"
    )
    memory_db.commit()
    return memory_db
