"""PostgreSQL store provider.

Connection strings use the libpq keyword/value form::

    host=localhost port=5432 sslmode=disable user=admin password=secret dbname=documize

PostgreSQL support arrived after the v25 schema migration, so the legacy
schema-version statements alias the current ones.
"""

from __future__ import annotations

from dataclasses import dataclass

from storeprovider.providers.base import json_document
from storeprovider.types import CONFIG_TABLE, META_KEY, PASSED, Check, StoreType


@dataclass(frozen=True)
class PostgreSQLProvider:
    """Supports every PostgreSQL release with JSON operators."""

    connection_string: str
    variant: str = ""

    @property
    def store_type(self) -> StoreType:
        return StoreType.POSTGRESQL

    @property
    def driver_name(self) -> str:
        return "postgres"

    def required_parameters(self) -> dict[str, str]:
        return {}

    def example_connection_string(self) -> str:
        return (
            "database connection string format is "
            "'host=localhost port=5432 sslmode=disable user=admin password=secret dbname=documize'"
        )

    def database_name(self) -> str:
        for token in self.connection_string.split():
            key, sep, value = token.partition("=")
            if sep and key == "dbname":
                return value
        return ""

    def build_connection_string(self) -> str:
        return self.connection_string

    def meta_query(self) -> str:
        return (
            "SELECT cast(current_setting('server_version_num') AS TEXT) AS version, "
            "version() AS comment, pg_encoding_to_char(encoding) AS charset, '' AS collation "
            f"FROM pg_database WHERE datname = '{self.database_name()}'"
        )

    def list_tables(self) -> str:
        return (
            "SELECT table_name FROM information_schema.tables "
            "WHERE table_type='BASE TABLE' AND table_schema NOT IN ('pg_catalog', 'information_schema') "
            f"AND table_catalog='{self.database_name()}'"
        )

    def record_schema_version(self, version: int) -> str:
        doc = json_document(version)
        return (
            f"INSERT INTO {CONFIG_TABLE} (c_key,c_config) VALUES ('{META_KEY}','{doc}') "
            f"ON CONFLICT (c_key) DO UPDATE SET c_config='{doc}' "
            f"WHERE {CONFIG_TABLE}.c_key='{META_KEY}'"
        )

    def record_schema_version_legacy(self, version: int) -> str:
        return self.record_schema_version(version)

    def read_schema_version(self) -> str:
        return f"SELECT c_config -> 'database' FROM {CONFIG_TABLE} WHERE c_key = '{META_KEY}';"

    def read_schema_version_legacy(self) -> str:
        return self.read_schema_version()

    def empty_json(self) -> str:
        return "'{}'::json"

    def extract_json_field(self, column: str, attribute: str) -> str:
        return f"{column} -> '{attribute}'"

    def verify_minimum_version(self, raw_version: str) -> Check:  # noqa: ARG002
        # server_version_num (e.g. 120005) is not dotted; no floor to check.
        return PASSED

    def verify_character_encoding(self, charset: str, collation: str) -> Check:  # noqa: ARG002
        if charset.lower() != "utf8":
            return Check(False, f"PostgreSQL character set needs to be utf8, found {charset}")
        return PASSED


__all__ = [
    "PostgreSQLProvider",
]
