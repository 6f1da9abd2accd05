"""Store provider contract.

Manifesto:
    Store objects (accounts, documents, users, ...) must run unchanged on
    MySQL, PostgreSQL and SQLite.  They depend only on a driver name and a
    handful of SQL fragments; everything dialect-specific is answered by
    the one provider activated at startup.

    - **One interface:** StoreProvider protocol for every dialect fact
    - **Structural:** Providers satisfy the protocol, they never inherit
    - **Pure:** Every method is a function of the connection string and
      variant given at construction; nothing logs, nothing does I/O

Architecture::

    ┌─────────────────────────────────────────────────────────────────┐
    │                    StoreProvider (Protocol)                      │
    ├─────────────────────────────────────────────────────────────────┤
    │  identity        store_type, variant, driver_name               │
    │  connection      required_parameters, build_connection_string,  │
    │                  database_name, example_connection_string       │
    │  schema version  record_schema_version[_legacy],                │
    │                  read_schema_version[_legacy]                   │
    │  introspection   meta_query, list_tables                        │
    │  JSON            empty_json, extract_json_field                 │
    │  verification    verify_minimum_version,                        │
    │                  verify_character_encoding                      │
    └─────────────────────────────────────────────────────────────────┘
          │                     │                      │
    ┌───────────────┐   ┌──────────────────┐   ┌────────────────┐
    │ MySQLProvider │   │PostgreSQLProvider│   │ SQLiteProvider │
    │ mysql/percona │   │                  │   │                │
    │ /mariadb      │   │                  │   │                │
    └───────────────┘   └──────────────────┘   └────────────────┘

Guardrails:
    ❌ DON'T: Branch on ``store_type`` inside store objects
    ✅ DO: Ask the provider for the fragment

    ❌ DON'T: Mutate a provider to switch backends
    ✅ DO: Construct a new provider (they are frozen dataclasses)

Tags:
    provider, dialect, protocol, sql, portability, storeprovider
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from storeprovider.errors import InvalidSchemaVersionError
from storeprovider.types import Check, StoreType


@runtime_checkable
class StoreProvider(Protocol):
    """SQL dialect facts for one database backend.

    Every query/statement method returns a **SQL string**; the provider
    never executes it.
    """

    @property
    def connection_string(self) -> str:
        """Connection string exactly as configured by the operator."""
        ...

    @property
    def store_type(self) -> StoreType:
        """Backend family identifier."""
        ...

    @property
    def variant(self) -> str:
        """Sub-flavor given at construction (``""`` when the family has none)."""
        ...

    @property
    def driver_name(self) -> str:
        """Name the SQL transport is initialised with."""
        ...

    # -- Connection string ---------------------------------------------------

    def required_parameters(self) -> dict[str, str]:
        """Parameters that must be present in the final connection string."""
        ...

    def example_connection_string(self) -> str:
        """Connection string format shown verbatim in configuration errors."""
        ...

    def database_name(self) -> str:
        """Database name parsed from the connection string, ``""`` if absent."""
        ...

    def build_connection_string(self) -> str:
        """Connection string with required parameters merged in.

        Parameters already supplied by the operator are kept as given.
        """
        ...

    # -- Introspection ---------------------------------------------------------

    def meta_query(self) -> str:
        """Query returning ``version, comment, charset, collation``."""
        ...

    def list_tables(self) -> str:
        """Query returning the base-table names of the active database."""
        ...

    # -- Schema version --------------------------------------------------------

    def record_schema_version(self, version: int) -> str:
        """Upsert storing ``version`` in the META config row."""
        ...

    def record_schema_version_legacy(self, version: int) -> str:
        """Upsert against the pre-migration config table layout."""
        ...

    def read_schema_version(self) -> str:
        """Query extracting the schema version from the META config row."""
        ...

    def read_schema_version_legacy(self) -> str:
        """Query extracting the schema version from the pre-migration layout."""
        ...

    # -- JSON ------------------------------------------------------------------

    def empty_json(self) -> str:
        """Empty JSON object literal, typically the 2nd argument to ``COALESCE()``."""
        ...

    def extract_json_field(self, column: str, attribute: str) -> str:
        """Selection of ``attribute`` from the JSON-valued ``column``."""
        ...

    # -- Verification ----------------------------------------------------------

    def verify_minimum_version(self, raw_version: str) -> Check:
        """Check the server release against this backend's floor.

        The failure reason is the required version as ``major.minor.patch``.

        Raises:
            MalformedVersionError: ``raw_version`` cannot be parsed.
        """
        ...

    def verify_character_encoding(self, charset: str, collation: str) -> Check:
        """Check that character set (and collation, if any) are UTF-8 based."""
        ...


def json_document(version: int) -> str:
    """The META config blob, ``{"database": "<version>"}``.

    Raises:
        InvalidSchemaVersionError: ``version`` is not a non-negative integer.
    """
    if isinstance(version, bool) or not isinstance(version, int) or version < 0:
        raise InvalidSchemaVersionError(version)
    return '{"database": "%d"}' % version


__all__ = [
    "StoreProvider",
    "json_document",
]
