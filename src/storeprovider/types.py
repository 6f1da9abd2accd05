"""Store types, check results and the on-disk config row layout."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class StoreType(str, Enum):
    """Supported database backend families."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"


class Check(NamedTuple):
    """
    Outcome of a provider verification.

    Unpacks as ``ok, reason``. ``reason`` is empty when ``ok`` is true,
    otherwise it is meant to be shown to the operator.
    """

    ok: bool
    reason: str = ""


PASSED = Check(True, "")

# Config row holding the schema version as {"database": "<n>"}.
META_KEY = "META"
CONFIG_TABLE = "dmz_config"

# Table layout before the v25 schema migration (MySQL only).
LEGACY_CONFIG_TABLE = "config"


__all__ = [
    "StoreType",
    "Check",
    "PASSED",
    "META_KEY",
    "CONFIG_TABLE",
    "LEGACY_CONFIG_TABLE",
]
