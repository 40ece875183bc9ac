"""User preferences configuration loading.

Loads optional user preferences from ~/.config/stackconf/config.yaml
(XDG-compliant path via platformdirs). Missing file silently applies all
defaults. Invalid YAML or schema raises ConfigError.

Precedence (low -> high):
  built-in defaults < config file < env vars < CLI flags (handled in cli/)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from stackconf.constants import (
    COMPONENT_PATH_ENV,
    DEFAULT_COMPONENT_PATH,
    DEFAULT_ENVIRONMENT,
    ENVIRONMENT_ENV,
    FORMAT_ENV,
)
from stackconf.exceptions import ConfigError


class UserDefaultsConfig(BaseModel):
    """Defaults for flags the CLI leaves unset."""

    model_config = {"extra": "forbid"}

    environment: str = Field(
        default=DEFAULT_ENVIRONMENT, min_length=1, description="Environment to read and write"
    )
    format: Literal["yaml", "json"] = Field(
        default="yaml", description="Format for config files that do not exist yet"
    )
    component_path: str = Field(
        default=DEFAULT_COMPONENT_PATH, description="Component directory"
    )


class UserUIConfig(BaseModel):
    """User interface preferences."""

    model_config = {"extra": "forbid"}

    verbosity: Literal["quiet", "normal", "verbose"] = Field(default="normal")


class UserConfig(BaseModel):
    """User preferences loaded from ~/.config/stackconf/config.yaml.

    All fields are optional; missing file or missing fields fall back to
    built-in defaults.
    """

    model_config = {"extra": "forbid"}

    defaults: UserDefaultsConfig = Field(default_factory=UserDefaultsConfig)
    ui: UserUIConfig = Field(default_factory=UserUIConfig)


def get_user_config_path() -> Path:
    """Return the XDG-compliant user config path.

    Linux:   ~/.config/stackconf/config.yaml
    macOS:   ~/Library/Application Support/stackconf/config.yaml
    Windows: %APPDATA%\\stackconf\\config.yaml
    """
    from platformdirs import user_config_dir

    return Path(user_config_dir("stackconf")) / "config.yaml"


def _apply_env_overrides(config: UserConfig) -> UserConfig:
    """Apply STACKCONF_* environment variable overrides.

    Env vars sit above the config file and below CLI flags in precedence.
    """
    updates: dict[str, Any] = {}
    if val := os.environ.get(ENVIRONMENT_ENV):
        updates["environment"] = val
    if val := os.environ.get(FORMAT_ENV):
        if val.lower() not in ("yaml", "json"):
            raise ConfigError(f"{FORMAT_ENV} must be 'yaml' or 'json', got '{val}'")
        updates["format"] = val.lower()
    if val := os.environ.get(COMPONENT_PATH_ENV):
        updates["component_path"] = val

    if not updates:
        return config
    return config.model_copy(update={"defaults": config.defaults.model_copy(update=updates)})


def load_user_config(config_path: Path | None = None) -> UserConfig:
    """Load user configuration.

    Missing file: silently applies all defaults.
    Invalid YAML: raises ConfigError with parse error detail.
    Invalid schema: raises ConfigError with field path context.

    Args:
        config_path: Explicit path override (for testing). None = XDG default.

    Returns:
        UserConfig with file values merged over defaults, env vars applied on top.
    """
    path = config_path or get_user_config_path()

    if not path.exists():
        return _apply_env_overrides(UserConfig())

    try:
        data = yaml.safe_load(path.read_text()) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"User config must be a YAML mapping: {path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in user config {path}: {e}") from e

    try:
        config = UserConfig.model_validate(data)
    except ValidationError as e:
        errors = [f"  {err['loc']}: {err['msg']}" for err in e.errors()]
        raise ConfigError(f"Invalid user config {path}:\n" + "\n".join(errors)) from e

    return _apply_env_overrides(config)


__all__ = ["UserConfig", "get_user_config_path", "load_user_config"]
