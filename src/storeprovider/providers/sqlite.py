"""SQLite store provider.

Connection strings are a database file path or a ``file:`` URI::

    /var/lib/documize/documize.db
    file:documize.db?mode=rwc

Requires SQLite 3.24.0+ for ``INSERT ... ON CONFLICT DO UPDATE`` and the
JSON1 functions (bundled with every CPython build of that age or newer).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from storeprovider.providers.base import json_document
from storeprovider.types import CONFIG_TABLE, META_KEY, PASSED, Check, StoreType
from storeprovider.versions import DatabaseVersion, meets_minimum

MINIMUM_VERSION = DatabaseVersion(3, 24, 0)


@dataclass(frozen=True)
class SQLiteProvider:
    """Single-file deployments and tests."""

    connection_string: str
    variant: str = ""

    @property
    def store_type(self) -> StoreType:
        return StoreType.SQLITE

    @property
    def driver_name(self) -> str:
        return "sqlite3"

    def required_parameters(self) -> dict[str, str]:
        return {}

    def example_connection_string(self) -> str:
        return (
            "database connection string format is "
            "'/var/lib/documize/documize.db' or 'file:documize.db?mode=rwc'"
        )

    def database_name(self) -> str:
        path = self.connection_string.removeprefix("file:").split("?", 1)[0]
        if not path or path == ":memory:":
            return ""
        return PurePosixPath(path).stem

    def build_connection_string(self) -> str:
        return self.connection_string

    def meta_query(self) -> str:
        return (
            "SELECT sqlite_version() AS version, 'SQLite ' || sqlite_version() AS comment, "
            "(SELECT * FROM pragma_encoding()) AS charset, '' AS collation"
        )

    def list_tables(self) -> str:
        return "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"

    def record_schema_version(self, version: int) -> str:
        doc = json_document(version)
        return (
            f"INSERT INTO {CONFIG_TABLE} (c_key,c_config) VALUES ('{META_KEY}','{doc}') "
            "ON CONFLICT (c_key) DO UPDATE SET c_config=excluded.c_config;"
        )

    def record_schema_version_legacy(self, version: int) -> str:
        return self.record_schema_version(version)

    def read_schema_version(self) -> str:
        return (
            f"SELECT json_extract(c_config,'$.database') FROM {CONFIG_TABLE} "
            f"WHERE c_key = '{META_KEY}';"
        )

    def read_schema_version_legacy(self) -> str:
        return self.read_schema_version()

    def empty_json(self) -> str:
        return "json('{}')"

    def extract_json_field(self, column: str, attribute: str) -> str:
        return f"json_extract({column},'$.{attribute}')"

    def verify_minimum_version(self, raw_version: str) -> Check:
        return meets_minimum(raw_version, MINIMUM_VERSION)

    def verify_character_encoding(self, charset: str, collation: str) -> Check:  # noqa: ARG002
        if charset.lower() not in ("utf-8", "utf8"):
            return Check(False, f"SQLite database encoding needs to be UTF-8, found {charset}")
        return PASSED


__all__ = [
    "SQLiteProvider",
    "MINIMUM_VERSION",
]
