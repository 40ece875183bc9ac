"""Utility functions shared by CLI commands.

Resolves flag defaults against user preferences and parses the
``key=value`` assignments accepted by ``stackconf set``.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from stackconf.config.user_config import load_user_config
from stackconf.core.paths import KeyPath
from stackconf.core.serialization import SerializationFormat, plain_value
from stackconf.core.settings import SettingsTree, Value
from stackconf.exceptions import ConfigError

__all__ = ["parse_assignment", "read_assignments_file", "resolve_defaults"]


def resolve_defaults(
    environment: str | None,
    component_path: Path | None,
) -> tuple[str, str, SerializationFormat]:
    """Fill unset flags from user preferences.

    Returns:
        ``(environment, component location, format for new files)``.

    Raises:
        ConfigError: The user preferences file is invalid.
    """
    defaults = load_user_config().defaults
    env = environment or defaults.environment
    location = str(component_path) if component_path is not None else defaults.component_path
    return env, location, SerializationFormat(defaults.format)


def parse_assignment(text: str) -> tuple[KeyPath, str]:
    """Split ``key.path=value`` at the first ``=``.

    The value may itself contain ``=`` and may be empty.

    Raises:
        ValueError: No ``=`` or an empty key.
    """
    key, sep, value = text.partition("=")
    key_path = KeyPath.parse(key)
    if not sep or not key_path:
        raise ValueError(f"Invalid assignment '{text}': expected <key.path>=<value>")
    return key_path, value


def read_assignments_file(path: Path) -> list[tuple[KeyPath, Value]]:
    """Flatten a YAML mapping into ``(key path, value)`` assignments.

    Example:
        data: {replicas: 3, extra: {}}  ->  [(data.replicas, 3), (data.extra, {})]

    Empty maps are kept as assignments of an empty map.

    Raises:
        ConfigError: File missing, unreadable, unparsable, or not a mapping.
    """
    if not path.exists():
        raise ConfigError(f"Input file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ConfigError(f"Cannot read input file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Parse error in {path}: {e}") from e

    if data is None:
        return []
    if not isinstance(data, dict):
        raise ConfigError(f"Input file must be a YAML mapping (got {type(data).__name__}): {path}")
    return list(SettingsTree.from_dict(plain_value(data)).leaves(include_empty_maps=True))
