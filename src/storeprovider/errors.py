"""
Structured error types for store providers.

Provides a small hierarchy of typed errors with metadata for startup
diagnostics, operator messaging and root cause analysis through error
chaining.

Store providers are pure values: almost every failure they can detect is
returned as data (a :class:`~storeprovider.providers.base.Check`) rather than
raised. The exceptions below exist for the few conditions that cannot be
expressed that way (an unparseable version string, a negative schema
version) and for the startup sequence, which turns failed checks into
errors that abort the process.

Manifesto:
    - **Typed Error Hierarchy:** Configuration, validation and database
      failures are distinct types
    - **Rich Context:** Errors carry the store type, variant and database
    - **Error Chaining:** Driver exceptions are preserved as ``cause``

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                        ProviderError                          │
        │               (category, context, cause)                      │
        ├──────────────────────────────────────────────────────────────┤
        │                                                               │
        │  ConfigError              ValidationError      DatabaseError  │
        │  (CONFIG)                 (VALIDATION)         (DATABASE)     │
        │      │                        │                    │          │
        │  MissingConfigError       MalformedVersionError  QueryError   │
        │  InvalidConfigError       SchemaVersionError                  │
        │  UnsupportedProviderError InvalidSchemaVersionError           │
        │  VersionBelowMinimumError                                     │
        │  EncodingMismatchError                                        │
        └──────────────────────────────────────────────────────────────┘

Examples:
    >>> error = MalformedVersionError("5.7")
    >>> error.version
    DatabaseVersion(major=0, minor=0, patch=0)
    >>> error.category
    <ErrorCategory.PARSE: 'PARSE'>

Guardrails:
    ❌ DON'T: Raise from a provider when a Check can describe the problem
    ✅ DO: Raise VersionBelowMinimumError / EncodingMismatchError at startup

    ❌ DON'T: Swallow the driver exception
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, error-context, storeprovider
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    CONFIG = "CONFIG"             # Missing or invalid settings, unsupported backend
    VALIDATION = "VALIDATION"     # Bad input values
    PARSE = "PARSE"               # Unparseable data returned by the backend
    DATABASE = "DATABASE"         # Query failures reported by the driver

    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Attributes:
        store_type: Backend identifier (``mysql``, ``postgresql``, ...)
        variant: Backend sub-flavor (``mariadb``, ``percona``, ...)
        database: Database name taken from the connection string
        metadata: Additional key-value pairs
    """

    store_type: str | None = None
    variant: str | None = None
    database: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["store_type", "variant", "database"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ProviderError(Exception):
    """
    Base exception for all store provider errors.

    Every ProviderError carries:
    - **category:** ErrorCategory for classification
    - **context:** ErrorContext with structured metadata
    - **cause:** Optional underlying exception for chaining

    Subclasses set ``default_category`` to give sensible defaults.

    Examples:
        >>> error = ProviderError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(store_type="mysql").context.store_type
        'mysql'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ProviderError:
        """
        Add context to this error (fluent API).

        Usage:
            raise QueryError("Failed").with_context(
                store_type="postgresql",
                database="documize",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }

        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict

        if self.cause is not None:
            result["cause"] = str(self.cause)

        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(ProviderError):
    """
    Configuration error.

    The operator has to fix settings or the database server before the
    process can start.
    """

    default_category = ErrorCategory.CONFIG


class MissingConfigError(ConfigError):
    """Required configuration is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required configuration: {key}")


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


class UnsupportedProviderError(ConfigError):
    """No provider is registered under the requested database type."""

    def __init__(self, db_type: str, supported: list[str]):
        self.db_type = db_type
        self.supported = supported
        super().__init__(
            f"Unsupported database type '{db_type}'. Supported: {', '.join(supported)}"
        )


class VersionBelowMinimumError(ConfigError):
    """Database server release is older than the provider supports."""

    def __init__(self, found: str, required: str):
        self.found = found
        self.required = required
        super().__init__(
            f"Database version {found} does not meet the minimum required version {required}"
        )


class EncodingMismatchError(ConfigError):
    """Database character set or collation is not UTF-8 based."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ProviderError):
    """Input value failed validation."""

    default_category = ErrorCategory.VALIDATION


class MalformedVersionError(ValidationError):
    """
    Raw version string is not of the form ``a.b.c``.

    ``version`` is always the all-zero triple so callers that inspect it
    never see a partially parsed value.
    """

    default_category = ErrorCategory.PARSE

    def __init__(self, raw: str, message: str | None = None):
        from storeprovider.versions import ZERO_VERSION

        self.raw = raw
        self.version = ZERO_VERSION
        super().__init__(message or f"Database version {raw!r} not of the form a.b.c")


class SchemaVersionError(ValidationError):
    """Stored schema version could not be interpreted as an integer."""

    default_category = ErrorCategory.PARSE

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Stored schema version {value!r} is not an integer")


class InvalidSchemaVersionError(ValidationError):
    """Schema version to record is not a non-negative integer."""

    def __init__(self, version: int):
        self.version = version
        super().__init__(f"Schema version must be a non-negative integer, got {version!r}")


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class DatabaseError(ProviderError):
    """Database operation failed."""

    default_category = ErrorCategory.DATABASE


class QueryError(DatabaseError):
    """Query reported an error by the driver."""


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ProviderError",
    # Config
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigError",
    "UnsupportedProviderError",
    "VersionBelowMinimumError",
    "EncodingMismatchError",
    # Validation
    "ValidationError",
    "MalformedVersionError",
    "SchemaVersionError",
    "InvalidSchemaVersionError",
    # Database
    "DatabaseError",
    "QueryError",
]
