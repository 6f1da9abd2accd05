"""
Connection protocol consumed by the startup checks.

Providers only produce SQL.  The startup sequence executes a handful of
those statements (meta query, table list, schema version) through whatever
DB-API connection the application already opened; this protocol is the
minimum shape it relies on.

Implementations:
    - ``sqlite3.Connection``
    - ``psycopg2`` / ``mysql.connector`` connections wrapped so that
      ``execute()`` returns the cursor

Tags:
    protocol, connection, database, storeprovider
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Cursor(Protocol):
    """Result cursor returned by :meth:`Connection.execute`."""

    def fetchone(self) -> Any:
        ...

    def fetchall(self) -> list:
        ...


@runtime_checkable
class Connection(Protocol):
    """Minimal synchronous connection interface."""

    def execute(self, sql: str, params: tuple = ()) -> Cursor:
        """Execute SQL statement with optional parameters."""
        ...

    def commit(self) -> None:
        """Commit current transaction."""
        ...


__all__ = [
    "Connection",
    "Cursor",
]
