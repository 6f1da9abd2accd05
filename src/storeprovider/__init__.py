"""storeprovider -- database-dialect abstraction for document stores.

Manifesto:
    One application, several relational backends.  Stores issue the same
    business queries everywhere; what differs (driver name, connection
    parameters, JSON extraction syntax, schema-version bookkeeping,
    version and encoding requirements) is answered by the one
    ``StoreProvider`` activated at startup.

Architecture::

    types.py          StoreType enum, Check result, config-row constants
    errors.py         ProviderError hierarchy
    versions.py       Server version parsing + minimum comparison
    connstring.py     Connection-string parameter merge
    providers/        StoreProvider protocol, MySQL / PostgreSQL / SQLite, registry
    settings.py       StoreSettings (pydantic-settings, STORE_* env)
    logging.py        structlog configuration
    runtime.py        activate() → Runtime(settings, provider)
    startup.py        check_database(), schema-version read/record

Examples:
    >>> from storeprovider import new_provider
    >>> provider = new_provider("postgresql", "host=db dbname=documize")
    >>> provider.database_name()
    'documize'
    >>> provider.extract_json_field("c_config", "database")
    "c_config -> 'database'"
"""

from storeprovider.types import META_KEY, Check, StoreType
from storeprovider.errors import (
    ConfigError,
    EncodingMismatchError,
    MalformedVersionError,
    ProviderError,
    QueryError,
    UnsupportedProviderError,
    VersionBelowMinimumError,
)
from storeprovider.versions import DatabaseVersion, parse_version, try_parse_version
from storeprovider.providers import (
    MySQLProvider,
    PostgreSQLProvider,
    SQLiteProvider,
    StoreProvider,
    new_provider,
    register_provider,
)
from storeprovider.settings import StoreSettings, get_settings
from storeprovider.logging import configure_logging, get_logger
from storeprovider.runtime import Runtime, activate
from storeprovider.startup import check_database, current_schema_version, record_schema_version

__version__ = "0.1.0"

__all__ = [
    # Types
    "StoreType",
    "Check",
    "META_KEY",
    # Errors
    "ProviderError",
    "ConfigError",
    "UnsupportedProviderError",
    "VersionBelowMinimumError",
    "EncodingMismatchError",
    "MalformedVersionError",
    "QueryError",
    # Versions
    "DatabaseVersion",
    "parse_version",
    "try_parse_version",
    # Providers
    "StoreProvider",
    "MySQLProvider",
    "PostgreSQLProvider",
    "SQLiteProvider",
    "new_provider",
    "register_provider",
    # Settings / logging
    "StoreSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Runtime
    "Runtime",
    "activate",
    "check_database",
    "current_schema_version",
    "record_schema_version",
]
