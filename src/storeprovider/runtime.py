"""Provider activation.

A process runs against exactly one database backend.  ``activate()`` reads
the settings, builds the provider through the registry and returns an
immutable :class:`Runtime` that the application hands to every store it
wires up; there is no module-level provider to reach for.
"""

from __future__ import annotations

from dataclasses import dataclass

from storeprovider.errors import MissingConfigError
from storeprovider.logging import configure_logging, get_logger
from storeprovider.providers.base import StoreProvider
from storeprovider.providers.registry import ProviderRegistry, provider_registry
from storeprovider.settings import StoreSettings, get_settings

logger = get_logger(__name__)


@dataclass(frozen=True)
class Runtime:
    """Activated settings + provider, passed explicitly to consumers."""

    settings: StoreSettings
    provider: StoreProvider

    @property
    def driver_name(self) -> str:
        return self.provider.driver_name

    @property
    def connection_string(self) -> str:
        """Finalized connection string for the connector."""
        return self.provider.build_connection_string()


def activate(
    settings: StoreSettings | None = None,
    *,
    registry: ProviderRegistry | None = None,
) -> Runtime:
    """Configure logging and create the provider for the configured database.

    Raises:
        UnsupportedProviderError: ``db_type`` is not registered.
        MissingConfigError: No connection string; the message carries the
            provider's example connection string.
    """
    settings = settings or get_settings()
    registry = registry or provider_registry
    configure_logging(level=settings.log_level, json_format=settings.log_format == "json")

    provider = registry.create(settings.db_type, settings.db_conn)

    if not settings.db_conn:
        raise MissingConfigError(
            "db_conn",
            f"missing database connection string: {provider.example_connection_string()}",
        ).with_context(store_type=provider.store_type.value, variant=provider.variant)

    logger.info(
        "provider_activated",
        store_type=provider.store_type.value,
        variant=provider.variant,
        driver=provider.driver_name,
        database=provider.database_name(),
    )
    return Runtime(settings=settings, provider=provider)


__all__ = [
    "Runtime",
    "activate",
]
