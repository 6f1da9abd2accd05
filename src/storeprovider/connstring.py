"""Connection-string parameter merging.

Providers that need driver parameters (character set, packet size, ...)
merge them into the operator's connection string.  The string is parsed
into a base and its ``key=value`` segments, required parameters missing
from it are appended, and the result is serialized again.

Rules:
    - The operator's value wins: a segment whose key is required is kept
      verbatim and that key is not appended a second time.
    - Segments that do not look like ``key=value`` pass through untouched.
    - Empty segments (``a=1&&b=2``, a trailing ``&``) are dropped.
    - Required parameters are appended in the mapping's iteration order.

Examples:
    >>> merge_parameters("u:p@tcp(db:3306)/documize?charset=utf8", {"charset": "utf8mb4", "parseTime": "True"})
    'u:p@tcp(db:3306)/documize?charset=utf8&parseTime=True'
    >>> merge_parameters("host=localhost dbname=documize", {})
    'host=localhost dbname=documize'
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class ConnectionString:
    """A connection string split into its base and parameter segments."""

    base: str
    parameters: tuple[str, ...] = ()
    delimiter: str = "?"
    separator: str = "&"

    @classmethod
    def parse(cls, raw: str, delimiter: str = "?", separator: str = "&") -> ConnectionString:
        base, _, query = raw.partition(delimiter)
        segments = tuple(s for s in query.split(separator) if s.strip())
        return cls(base, segments, delimiter, separator)

    def keys(self) -> Iterator[str]:
        """Trimmed key of every ``key=value`` segment."""
        for segment in self.parameters:
            key, sep, _ = segment.partition("=")
            if sep:
                yield key.strip()

    def with_defaults(self, required: Mapping[str, str]) -> ConnectionString:
        """Return a copy with every missing required parameter appended."""
        present = set(self.keys())
        added = tuple(f"{k}={v}" for k, v in required.items() if k not in present)
        return ConnectionString(
            self.base, self.parameters + added, self.delimiter, self.separator
        )

    def __str__(self) -> str:
        return self.base + self.delimiter + self.separator.join(self.parameters)


def merge_parameters(raw: str, required: Mapping[str, str]) -> str:
    """Merge ``required`` into ``raw``; ``raw`` is returned as-is when nothing is required."""
    if not required:
        return raw
    return str(ConnectionString.parse(raw).with_defaults(required))


__all__ = [
    "ConnectionString",
    "merge_parameters",
]
