"""Internal API implementation for stackconf.

This module is internal (underscore prefix). Import via stackconf.__init__ only.

Each mutating operation loads the component's config for one environment,
applies the change, and writes the config back. Nothing is written if the
change fails.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from stackconf.constants import DEFAULT_COMPONENT_PATH, DEFAULT_ENVIRONMENT
from stackconf.core.node import ConfigNode
from stackconf.core.paths import KeyPath, PathLike
from stackconf.core.serialization import DEFAULT_FORMAT, SerializationFormat
from stackconf.core.settings import Value
from stackconf.exceptions import PathNotFoundError
from stackconf.storage.filesystem import FileSystemStore

if TYPE_CHECKING:
    from stackconf.protocols import ConfigLoader, ConfigStore


def load_component(
    location: str | Path = DEFAULT_COMPONENT_PATH,
    environment: str = DEFAULT_ENVIRONMENT,
    *,
    loader: ConfigLoader | None = None,
    default_format: SerializationFormat = DEFAULT_FORMAT,
) -> ConfigNode:
    """Load the config tree of the component at ``location``.

    A component without a config file for ``environment`` yields an empty
    node using ``default_format``.
    """
    node = ConfigNode(location=str(location))
    node.load(environment, loader or FileSystemStore(), default_format=default_format)
    return node


def set_config(
    assignments: Iterable[tuple[PathLike, Value]],
    *,
    location: str | Path = DEFAULT_COMPONENT_PATH,
    environment: str = DEFAULT_ENVIRONMENT,
    subcomponent: PathLike = "",
    no_new_config_keys: bool = False,
    store: ConfigStore | None = None,
    default_format: SerializationFormat = DEFAULT_FORMAT,
) -> Path:
    """Set config values on a (sub)component and write the result.

    Args:
        assignments: ``(setting path, value)`` pairs, applied in order.
        location: Component directory.
        environment: Environment to modify.
        subcomponent: Dotted subcomponent path; empty targets the component.
        no_new_config_keys: Refuse to create subcomponents or keys that do
            not already exist.
        store: Storage backend; defaults to the file system.
        default_format: Format for a component with no config yet.

    Returns:
        Path of the written config file.

    Raises:
        PathNotFoundError: ``no_new_config_keys`` is set and a subcomponent
            or key is missing.
        TypeConflictError: A setting path crosses a scalar value.
        StorageError: The config could not be read or written.
    """
    store = store or FileSystemStore()
    node = load_component(location, environment, loader=store, default_format=default_format)
    sub_path = KeyPath.coerce(subcomponent)
    pairs = [(KeyPath.coerce(key), value) for key, value in assignments]

    if no_new_config_keys:
        if not node.has_subcomponent(sub_path):
            raise PathNotFoundError(
                f"Subcomponent '{sub_path}' does not exist; "
                "refusing to create it with --no-new-config-keys",
                path=str(sub_path),
                target=str(sub_path),
            )
        for key, _ in pairs:
            if not node.has_value(sub_path, key):
                raise PathNotFoundError(
                    f"Config key '{key}' does not exist; "
                    "refusing to create it with --no-new-config-keys",
                    path=str(key),
                    target=str(key),
                )

    for key, value in pairs:
        node.set_value(sub_path, key, value)
        logger.debug(f"Set {key}={value!r} on '{sub_path or '<root>'}'")

    return node.write(environment, store)


def unset_config(
    keys: Iterable[PathLike],
    *,
    location: str | Path = DEFAULT_COMPONENT_PATH,
    environment: str = DEFAULT_ENVIRONMENT,
    subcomponent: PathLike = "",
    store: ConfigStore | None = None,
) -> Path:
    """Remove config keys from a (sub)component and write the result.

    Keys are removed in order; the first failure aborts without writing.

    Raises:
        KeyNotFoundError: A key (or one of its parents) does not exist.
        TypeConflictError: A key path crosses a scalar value.
        StorageError: The config could not be read or written.
    """
    store = store or FileSystemStore()
    node = load_component(location, environment, loader=store)
    for key in keys:
        node.unset_value(subcomponent, key)
    return node.write(environment, store)


def remove_component(
    subcomponent: PathLike,
    *,
    location: str | Path = DEFAULT_COMPONENT_PATH,
    environment: str = DEFAULT_ENVIRONMENT,
    store: ConfigStore | None = None,
) -> Path:
    """Remove a subcomponent's whole config and write the result.

    Raises:
        ValueError: ``subcomponent`` is empty.
        PathNotFoundError: The subcomponent does not exist.
        StorageError: The config could not be read or written.
    """
    store = store or FileSystemStore()
    node = load_component(location, environment, loader=store)
    node.remove_subcomponent(subcomponent)
    return node.write(environment, store)


def get_config(
    key: PathLike,
    *,
    location: str | Path = DEFAULT_COMPONENT_PATH,
    environment: str = DEFAULT_ENVIRONMENT,
    subcomponent: PathLike = "",
    loader: ConfigLoader | None = None,
) -> Value:
    """Read one config value without modifying anything.

    Raises:
        PathNotFoundError: The subcomponent does not exist.
        KeyNotFoundError: The key does not exist.
        TypeConflictError: The key path crosses a scalar value.
    """
    node = load_component(location, environment, loader=loader)
    target = node.find_subcomponent(subcomponent)
    if target is None:
        sub_path = str(KeyPath.coerce(subcomponent))
        raise PathNotFoundError(
            f"Subcomponent '{sub_path}' not found", path=sub_path, target=sub_path
        )
    return target.settings.get(key)
