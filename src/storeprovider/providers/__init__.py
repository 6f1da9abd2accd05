"""Store providers -- SQL dialect facts for 3 database backends.

Manifesto:
    Higher-level stores issue the same business queries whether the
    operator runs MySQL, PostgreSQL or SQLite.  They never see the
    backend: they receive one provider at startup and ask it for the
    driver name, the finalized connection string and the SQL fragments
    that differ per dialect.

Architecture::

    StoreProvider (base.py)          Protocol every provider satisfies
        |-- MySQLProvider            mysql / percona / mariadb variants
        |-- PostgreSQLProvider       libpq keyword/value connection strings
        |-- SQLiteProvider           file path or file: URI

    ProviderRegistry (registry.py)   db-type name -> provider factory

Modules
-------
base            StoreProvider protocol + META config blob helper
mysql           MySQL family provider
postgresql      PostgreSQL provider
sqlite          SQLite provider
registry        ProviderRegistry + new_provider() factory

Guardrails:
    ❌ ``provider = MySQLProvider(conn)`` in application code
    ✅ ``provider = new_provider(settings.db_type, settings.db_conn)``

Tags:
    storeprovider, providers, dialect, mysql, postgresql, sqlite

Doc-Types:
    package-overview, module-index
"""

from .base import StoreProvider
from .mysql import MySQLProvider
from .postgresql import PostgreSQLProvider
from .registry import ProviderRegistry, new_provider, provider_registry, register_provider
from .sqlite import SQLiteProvider

__all__ = [
    "StoreProvider",
    "MySQLProvider",
    "PostgreSQLProvider",
    "SQLiteProvider",
    "ProviderRegistry",
    "provider_registry",
    "new_provider",
    "register_provider",
]
