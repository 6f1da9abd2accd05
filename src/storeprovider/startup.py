"""Startup database checks.

Runs the provider's SQL through the application's connection before any
store is wired up, and turns failed provider checks into errors that
abort startup:

    1. meta query          → version, comment, charset, collation
    2. minimum version     → VersionBelowMinimumError (MalformedVersionError propagates)
    3. character encoding  → EncodingMismatchError
    4. table list          → empty database means the installer has to run
    5. schema version      → current layout first, legacy layout as fallback

Migrations themselves are sequenced elsewhere; they use
:func:`current_schema_version` and :func:`record_schema_version` from here.

Examples:
    >>> runtime = activate()
    >>> status = check_database(runtime, conn)
    >>> status.is_empty, status.schema_version
    (False, 25)

Tags:
    startup, database-check, schema-version, storeprovider
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from storeprovider.errors import (
    EncodingMismatchError,
    MalformedVersionError,
    QueryError,
    SchemaVersionError,
    VersionBelowMinimumError,
)
from storeprovider.logging import LogContext, get_logger
from storeprovider.protocols import Connection
from storeprovider.providers.base import StoreProvider
from storeprovider.runtime import Runtime

logger = get_logger(__name__)


@dataclass(frozen=True)
class DatabaseMeta:
    """Row returned by the provider's meta query."""

    version: str
    comment: str
    charset: str
    collation: str


@dataclass(frozen=True)
class DatabaseStatus:
    """Result of a successful startup check."""

    meta: DatabaseMeta
    tables: tuple[str, ...]
    schema_version: int

    @property
    def is_empty(self) -> bool:
        """No tables yet: the installer has to create the schema."""
        return not self.tables


def _execute(conn: Connection, sql: str, what: str) -> Any:
    try:
        return conn.execute(sql)
    except Exception as e:
        raise QueryError(f"Unable to {what}: {e}", cause=e) from e


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    return str(value)


def read_meta(provider: StoreProvider, conn: Connection) -> DatabaseMeta:
    """Run the meta query and return its single row."""
    row = _execute(conn, provider.meta_query(), "query database meta").fetchone()
    if row is None:
        raise QueryError("Database meta query returned no rows").with_context(
            store_type=provider.store_type.value,
            database=provider.database_name(),
        )
    version, comment, charset, collation = (_text(v) for v in row[:4])
    return DatabaseMeta(version, comment, charset, collation)


def list_tables(provider: StoreProvider, conn: Connection) -> tuple[str, ...]:
    """Names of the base tables in the active database."""
    rows = _execute(conn, provider.list_tables(), "list tables").fetchall()
    return tuple(_text(row[0]) for row in rows)


def parse_schema_version(value: Any) -> int:
    """Interpret the extracted ``database`` attribute as an integer.

    JSON extraction hands back ``"25"`` (MySQL, quoted), ``25`` or ``'25'``
    depending on the backend and driver.  A missing value means version 0.

    Raises:
        SchemaVersionError: The value is not an integer.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise SchemaVersionError(value)
    if isinstance(value, int):
        return value

    text = _text(value).strip().strip('"')
    if not text:
        return 0
    if not (text.isascii() and text.isdigit()):
        raise SchemaVersionError(value)
    return int(text)


def current_schema_version(provider: StoreProvider, conn: Connection) -> int:
    """Schema version stored in the META config row.

    Falls back to the pre-migration layout when the current query fails.

    Raises:
        QueryError: Both layouts failed; chained to the last driver error.
    """
    query = provider.read_schema_version()
    legacy = provider.read_schema_version_legacy()

    try:
        row = conn.execute(query).fetchone()
    except Exception as e:
        if legacy == query:
            raise QueryError(f"Unable to read schema version: {e}", cause=e) from e

        logger.info("schema_version_legacy_fallback", store_type=provider.store_type.value, error=str(e))
        try:
            row = conn.execute(legacy).fetchone()
        except Exception as legacy_error:
            raise QueryError(
                f"Unable to read schema version from current or legacy layout: {legacy_error}",
                cause=legacy_error,
            ) from legacy_error

    return parse_schema_version(row[0] if row else None)


def record_schema_version(
    provider: StoreProvider,
    conn: Connection,
    version: int,
    *,
    legacy: bool = False,
) -> None:
    """Upsert ``version`` into the META config row and commit.

    Raises:
        InvalidSchemaVersionError: ``version`` is negative.
        QueryError: The driver rejected the statement.
    """
    if legacy:
        sql = provider.record_schema_version_legacy(version)
    else:
        sql = provider.record_schema_version(version)

    _execute(conn, sql, "record schema version")
    conn.commit()
    logger.info(
        "schema_version_recorded",
        store_type=provider.store_type.value,
        version=version,
        legacy=legacy,
    )


def check_database(runtime: Runtime, conn: Connection) -> DatabaseStatus:
    """Verify the database server before the application starts.

    Every record logged during the check carries ``store_type``, ``variant``
    and ``database``.

    Raises:
        MalformedVersionError: Server reported an unparseable version.
        VersionBelowMinimumError: Server release below the provider's floor.
        EncodingMismatchError: Character set or collation not UTF-8.
        QueryError: A check query failed.
    """
    provider = runtime.provider

    with LogContext(
        store_type=provider.store_type.value,
        variant=provider.variant,
        database=provider.database_name(),
    ):
        meta = read_meta(provider, conn)
        logger.info(
            "database_meta",
            version=meta.version,
            comment=meta.comment,
            charset=meta.charset,
            collation=meta.collation,
        )

        try:
            version_check = provider.verify_minimum_version(meta.version)
        except MalformedVersionError as e:
            logger.error("database_version_malformed", version=meta.version, error=e.message)
            raise

        if not version_check.ok:
            logger.error(
                "database_version_unsupported", version=meta.version, required=version_check.reason
            )
            raise VersionBelowMinimumError(meta.version, version_check.reason).with_context(
                store_type=provider.store_type.value,
                variant=provider.variant,
            )

        encoding_check = provider.verify_character_encoding(meta.charset, meta.collation)
        if not encoding_check.ok:
            logger.error("database_encoding_unsupported", reason=encoding_check.reason)
            raise EncodingMismatchError(encoding_check.reason).with_context(
                store_type=provider.store_type.value,
                database=provider.database_name(),
            )

        tables = list_tables(provider, conn)
        if not tables:
            logger.info("database_empty")
            return DatabaseStatus(meta=meta, tables=(), schema_version=0)

        schema_version = current_schema_version(provider, conn)
        logger.info("database_checked", tables=len(tables), schema_version=schema_version)
        return DatabaseStatus(meta=meta, tables=tables, schema_version=schema_version)


__all__ = [
    "DatabaseMeta",
    "DatabaseStatus",
    "read_meta",
    "list_tables",
    "parse_schema_version",
    "current_schema_version",
    "record_schema_version",
    "check_database",
]
