"""Exception hierarchy for stackconf."""

from __future__ import annotations


class StackconfError(Exception):
    """Base exception for stackconf."""


class ConfigError(StackconfError):
    """Invalid or missing tool preferences."""


class ConfigTreeError(StackconfError):
    """A path operation could not be applied to a configuration tree.

    Attributes:
        path: Dotted sub-path at which the walk stopped.
        target: Dotted full path the caller asked for.
    """

    def __init__(self, message: str, path: str = "", target: str = ""):
        super().__init__(message)
        self.path = path
        self.target = target


class PathNotFoundError(ConfigTreeError):
    """A subcomponent or intermediate settings key does not exist."""


class KeyNotFoundError(PathNotFoundError):
    """The terminal key targeted by an unset or a read is absent."""


class TypeConflictError(ConfigTreeError):
    """A path expects a nested map but finds a scalar value."""


class StorageError(StackconfError):
    """Underlying storage failure (permissions, disk, bad location)."""


class ConfigNotFoundError(StackconfError):
    """No config file exists for this location, environment and format."""

    def __init__(self, location: str, environment: str, path: str | None = None):
        where = path or location
        super().__init__(f"No '{environment}' config found at {where}")
        self.location = location
        self.environment = environment


class SerializationError(StackconfError):
    """Bytes could not be decoded, or the document has the wrong shape."""
