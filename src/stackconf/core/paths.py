"""Dot-delimited key paths.

A KeyPath addresses either a subcomponent (``"app.db"``) or a setting
(``"data.replicas"``). Empty segments are dropped when parsing, so
``"a..b"`` and ``"a.b"`` are the same path and ``""`` is the empty path.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Union

SEPARATOR = "."


@dataclass(frozen=True)
class KeyPath:
    """Ordered sequence of non-empty string segments."""

    segments: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> KeyPath:
        """Split a dotted string into a path, dropping empty segments."""
        return cls(tuple(part for part in text.split(SEPARATOR) if part))

    @classmethod
    def coerce(cls, value: PathLike) -> KeyPath:
        """Accept a KeyPath, a dotted string or a sequence of segments."""
        if isinstance(value, KeyPath):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        return cls(tuple(str(part) for part in value if part))

    @property
    def parent(self) -> KeyPath:
        return KeyPath(self.segments[:-1])

    @property
    def leaf(self) -> str:
        if not self.segments:
            raise ValueError("The empty path has no leaf segment")
        return self.segments[len(self.segments) - 1]

    def prefix(self, length: int) -> KeyPath:
        """Return the first ``length`` segments as a new path."""
        return KeyPath(self.segments[:length])

    def child(self, segment: str) -> KeyPath:
        return KeyPath((*self.segments, segment))

    def require_non_empty(self, operation: str) -> None:
        """Raise ValueError if an operation is invoked with the empty path."""
        if not self.segments:
            raise ValueError(f"{operation} requires a non-empty path")

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    def __bool__(self) -> bool:
        return bool(self.segments)

    def __str__(self) -> str:
        return SEPARATOR.join(self.segments)


PathLike = Union[KeyPath, str, Sequence[str]]

__all__ = ["SEPARATOR", "KeyPath", "PathLike"]
