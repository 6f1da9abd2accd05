"""Store provider registry and factory.

Manifesto:
    The startup sequence should never hard-code provider class names.  The
    registry maps database-type names (as configured by the operator) to
    provider factories and ``new_provider()`` builds the single provider a
    process runs with.

Features:
    - ``ProviderRegistry`` with pre-registered defaults
    - ``register()`` for additional backends
    - ``new_provider()`` factory: type name + connection string → provider

Tags:
    storeprovider, registry, factory

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable

from storeprovider.errors import UnsupportedProviderError
from storeprovider.types import StoreType

from .base import StoreProvider
from .mysql import VARIANTS, MySQLProvider
from .postgresql import PostgreSQLProvider
from .sqlite import SQLiteProvider

ProviderFactory = Callable[[str], StoreProvider]


def _mysql_variant(variant: str) -> ProviderFactory:
    def factory(connection_string: str) -> StoreProvider:
        return MySQLProvider(connection_string, variant=variant)

    return factory


class ProviderRegistry:
    """
    Registry for store provider factories.

    Pre-registered providers:
    - ``mysql`` / ``percona`` / ``mariadb`` : :class:`MySQLProvider` with that variant
    - ``postgresql`` / ``postgres`` : :class:`PostgreSQLProvider`
    - ``sqlite`` : :class:`SQLiteProvider`
    """

    def __init__(self):
        self._factories: dict[str, ProviderFactory] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        for variant in VARIANTS:
            self._factories[variant] = _mysql_variant(variant)
        self._factories[StoreType.POSTGRESQL.value] = PostgreSQLProvider
        self._factories["postgres"] = PostgreSQLProvider  # Alias
        self._factories[StoreType.SQLITE.value] = SQLiteProvider

    def register(self, name: str, factory: ProviderFactory) -> None:
        """Register a provider factory."""
        self._factories[name.lower()] = factory

    def create(self, name: str | StoreType, connection_string: str) -> StoreProvider:
        """Create a provider by database-type name."""
        key = name.value if isinstance(name, StoreType) else name.lower().strip()
        if key not in self._factories:
            raise UnsupportedProviderError(key, self.list_types())
        return self._factories[key](connection_string)

    def example_for(self, name: str | StoreType) -> str:
        """Example connection string for a database type."""
        return self.create(name, "").example_connection_string()

    def list_types(self) -> list[str]:
        """List registered database-type names."""
        return sorted(self._factories.keys())


provider_registry = ProviderRegistry()


def new_provider(db_type: str | StoreType, connection_string: str) -> StoreProvider:
    """
    Create the store provider for a configured database type.

    Usage:
        provider = new_provider("mariadb", "root:secret@tcp(db:3306)/documize")
        provider = new_provider(StoreType.POSTGRESQL, "host=db dbname=documize")
    """
    return provider_registry.create(db_type, connection_string)


def register_provider(name: str, factory: ProviderFactory) -> None:
    """Register a provider factory on the module registry."""
    provider_registry.register(name, factory)


__all__ = [
    "ProviderRegistry",
    "ProviderFactory",
    "provider_registry",
    "new_provider",
    "register_provider",
]
