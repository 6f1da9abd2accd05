"""Database release version parsing and minimum-version comparison.

Servers report their release in vendor-specific shapes (``8.0.31-log``,
``10.3.22-MariaDB-1:10.3.22+maria~bionic``, ``3.45.1``).  Everything after
the first hyphen is build metadata; the remaining dotted components must
yield a numeric ``major.minor.patch`` triple.

Examples:
    >>> parse_version("8.0.31-log")
    DatabaseVersion(major=8, minor=0, patch=31)
    >>> meets_minimum("5.8.0", DatabaseVersion(5, 7, 10))
    Check(ok=True, reason='')
    >>> meets_minimum("5.7.9", DatabaseVersion(5, 7, 10))
    Check(ok=False, reason='5.7.10')

Tags:
    versions, semver, parsing, storeprovider
"""

from __future__ import annotations

from typing import NamedTuple

from storeprovider.errors import MalformedVersionError
from storeprovider.types import PASSED, Check


class DatabaseVersion(NamedTuple):
    """Numeric ``(major, minor, patch)`` release triple."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


ZERO_VERSION = DatabaseVersion(0, 0, 0)


def parse_version(raw: str) -> DatabaseVersion:
    """Parse a raw server version string into a :class:`DatabaseVersion`.

    Args:
        raw: Version string as returned by the database server.

    Returns:
        The first three dotted components as integers.

    Raises:
        MalformedVersionError: Fewer than three components, or a component
            that is not a non-negative integer. The error's ``version`` is
            the all-zero triple.
    """
    numeric = raw.split("-", 1)[0].strip()
    parts = numeric.split(".")

    if len(parts) < 3:
        raise MalformedVersionError(raw)

    for part in parts:
        if not (part.isascii() and part.isdigit()):
            raise MalformedVersionError(
                raw, f"Database version {raw!r} has non-numeric component {part!r}"
            )

    return DatabaseVersion(int(parts[0]), int(parts[1]), int(parts[2]))


def try_parse_version(raw: str) -> tuple[DatabaseVersion, MalformedVersionError | None]:
    """Parse without raising: ``(version, None)`` or ``(ZERO_VERSION, error)``."""
    try:
        return parse_version(raw), None
    except MalformedVersionError as e:
        return e.version, e


def meets_minimum(raw: str, minimum: DatabaseVersion) -> Check:
    """Compare a raw server version against a minimum release.

    A newer major line always passes regardless of minor/patch; otherwise
    components are compared in order.  The failure reason is the required
    floor formatted as ``major.minor.patch``.

    Raises:
        MalformedVersionError: ``raw`` cannot be parsed.
    """
    if parse_version(raw) >= minimum:
        return PASSED
    return Check(False, str(minimum))


__all__ = [
    "DatabaseVersion",
    "ZERO_VERSION",
    "parse_version",
    "try_parse_version",
    "meets_minimum",
]
