"""Nested settings trees with path-addressed access.

A SettingsTree maps string keys to values that are either a scalar (any
non-mapping value a YAML or JSON document can hold) or another SettingsTree.
Raw dicts are never stored: ``from_dict`` converts nested mappings on the way
in and ``to_dict`` converts them back on the way out.

Only ``set`` creates structure. ``has`` and ``get`` never mutate the tree,
and ``unset`` never prunes ancestors that it leaves empty.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from typing import Any, Union

from loguru import logger

from stackconf.core.paths import KeyPath, PathLike
from stackconf.exceptions import KeyNotFoundError, TypeConflictError

Scalar = Union[str, int, float, bool, list]
Value = Union[Scalar, "SettingsTree"]


class SettingsTree:
    """Arbitrarily deep mapping of string keys to scalars or nested trees."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Any] | None = None):
        self._entries: dict[str, Value] = {}
        if entries:
            for key, value in entries.items():
                self[key] = value

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SettingsTree:
        """Build a tree from plain nested mappings.

        Keys are coerced to strings. ``None`` values are dropped, since
        absence is represented by a missing key.
        """
        return cls(data)

    def to_dict(self) -> dict[str, Any]:
        """Return the tree as plain nested dicts, preserving key order."""
        return {
            key: value.to_dict() if isinstance(value, SettingsTree) else copy.deepcopy(value)
            for key, value in self._entries.items()
        }

    def copy(self) -> SettingsTree:
        """Return a deep copy sharing no nested trees with this one."""
        return SettingsTree.from_dict(self.to_dict())

    # ------------------------------------------------------------------
    # Path-addressed operations
    # ------------------------------------------------------------------

    def has(self, path: PathLike) -> bool:
        """Return True if every segment of ``path`` resolves.

        The final segment only needs to exist; its value may be a scalar or
        a nested tree.
        """
        key_path = KeyPath.coerce(path)
        if not key_path:
            return False

        level = self
        for index, segment in enumerate(key_path):
            if segment not in level._entries:
                return False
            if index < len(key_path) - 1:
                next_level = level._entries[segment]
                if not isinstance(next_level, SettingsTree):
                    return False
                level = next_level
        return True

    def get(self, path: PathLike) -> Value:
        """Return the value stored at ``path``.

        Raises:
            KeyNotFoundError: A segment is absent.
            TypeConflictError: A non-final segment resolves to a scalar.
        """
        key_path = KeyPath.coerce(path)
        key_path.require_non_empty("get")
        target = str(key_path)

        level = self._walk_existing(key_path, action="read")
        if key_path.leaf not in level._entries:
            raise KeyNotFoundError(
                f"Config key '{target}' not found",
                path=target,
                target=target,
            )
        return level._entries[key_path.leaf]

    def set(self, path: PathLike, value: Value) -> None:
        """Set ``path`` to ``value``, creating missing intermediate maps.

        The final segment is always overwritten, whatever it held before.

        Raises:
            TypeConflictError: An intermediate segment holds a scalar. The
                tree is left untouched in that case, because a conflict can
                only be met before any map has been created.
        """
        key_path = KeyPath.coerce(path)
        key_path.require_non_empty("set")
        target = str(key_path)

        # Validate the existing prefix before creating anything.
        level = self
        depth = 0
        for segment in key_path.parent:
            existing = level._entries.get(segment)
            if existing is None:
                break
            if not isinstance(existing, SettingsTree):
                current = str(key_path.prefix(depth + 1))
                raise TypeConflictError(
                    f"Config path '{current}' points to a non-map value; "
                    f"cannot set '{target}' to '{value}'",
                    path=current,
                    target=target,
                )
            level = existing
            depth += 1

        created = depth < len(key_path.parent)
        for segment in key_path.parent.segments[depth:]:
            new_level = SettingsTree()
            level._entries[segment] = new_level
            level = new_level

        if created:
            logger.info(f"Created new value for {target}")
        level[key_path.leaf] = value

    def unset(self, path: PathLike) -> None:
        """Delete the key at ``path``.

        Ancestors that become empty are kept as empty maps.

        Raises:
            KeyNotFoundError: An intermediate segment or the final key is absent.
            TypeConflictError: An intermediate segment holds a scalar.
        """
        key_path = KeyPath.coerce(path)
        key_path.require_non_empty("unset")
        target = str(key_path)

        level = self._walk_existing(key_path, action="remove config entry")
        leaf = key_path.leaf
        if leaf not in level._entries:
            raise KeyNotFoundError(
                f"Target key '{leaf}' does not exist in config; unable to remove key '{target}'",
                path=target,
                target=target,
            )
        del level._entries[leaf]
        logger.debug(f"Removed config key {target}")

    def leaves(
        self, prefix: KeyPath | None = None, include_empty_maps: bool = False
    ) -> Iterator[tuple[KeyPath, Value]]:
        """Yield ``(path, scalar)`` for every scalar leaf, depth first.

        With ``include_empty_maps`` an empty nested tree is yielded as a leaf too.
        """
        base = prefix or KeyPath()
        for key, value in self._entries.items():
            if isinstance(value, SettingsTree) and include_empty_maps and not len(value):
                yield base.child(key), SettingsTree()
            elif isinstance(value, SettingsTree):
                yield from value.leaves(base.child(key), include_empty_maps)
            else:
                yield base.child(key), value

    def _walk_existing(self, key_path: KeyPath, action: str) -> SettingsTree:
        """Descend to the parent of the final segment without creating anything."""
        target = str(key_path)
        level = self
        for index, segment in enumerate(key_path.parent):
            current = str(key_path.prefix(index + 1))
            if segment not in level._entries:
                raise KeyNotFoundError(
                    f"Config key path '{current}' not found. Unable to {action} '{target}'",
                    path=current,
                    target=target,
                )
            next_level = level._entries[segment]
            if not isinstance(next_level, SettingsTree):
                raise TypeConflictError(
                    f"Config key path '{current}' points to a non-map entry. "
                    f"Unable to {action} '{target}'",
                    path=current,
                    target=target,
                )
            level = next_level
        return level

    # ------------------------------------------------------------------
    # Mapping protocol (single level)
    # ------------------------------------------------------------------

    def __setitem__(self, key: str, value: Any) -> None:
        if value is None:
            self._entries.pop(str(key), None)
        elif isinstance(value, SettingsTree):
            self._entries[str(key)] = value
        elif isinstance(value, Mapping):
            self._entries[str(key)] = SettingsTree.from_dict(value)
        else:
            self._entries[str(key)] = value

    def __getitem__(self, key: str) -> Value:
        return self._entries[key]

    def __delitem__(self, key: str) -> None:
        del self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> Iterator[tuple[str, Value]]:
        return iter(self._entries.items())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SettingsTree):
            return self._entries == other._entries
        if isinstance(other, Mapping):
            return self.to_dict() == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"SettingsTree({self.to_dict()!r})"


__all__ = ["Scalar", "SettingsTree", "Value"]
