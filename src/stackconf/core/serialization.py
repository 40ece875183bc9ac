"""YAML/JSON codec for component config documents.

On-disk shape (every field optional, recursively):

    namespace: my-namespace
    injectNamespace: true
    config:
      data:
        replicas: "3"
    subcomponents:
      db:
        config: {...}

Empty fields are omitted on write. Nested empty maps inside ``config`` are
kept, since they are meaningful settings. YAML output keeps key insertion
order so that a load/write round trip does not reshuffle a file.
"""

from __future__ import annotations

import json
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from stackconf.constants import CONFIG_SUBDIR, JSON_INDENT
from stackconf.exceptions import SerializationError


class SerializationFormat(str, Enum):
    """The two interchangeable on-disk encodings."""

    YAML = "yaml"
    JSON = "json"

    @property
    def extension(self) -> str:
        return self.value


# Formats tried by ConfigNode.load, in order; the first one is also the
# format given to nodes for which no file exists.
LOAD_ORDER: tuple[SerializationFormat, ...] = (SerializationFormat.YAML, SerializationFormat.JSON)
DEFAULT_FORMAT = LOAD_ORDER[0]


class ComponentDocument(BaseModel):
    """Structural schema of one component's config document."""

    model_config = {"extra": "ignore", "populate_by_name": True}

    namespace: str | None = None
    inject_namespace: bool | None = Field(default=None, alias="injectNamespace")
    settings: dict[str, Any] | None = Field(default=None, alias="config")
    subcomponents: dict[str, ComponentDocument] | None = None

    @field_validator("namespace", mode="before")
    @classmethod
    def _namespace_to_str(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("settings", mode="before")
    @classmethod
    def _plain_settings(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return plain_value(value)
        return value

    @field_validator("subcomponents", mode="before")
    @classmethod
    def _stringify_keys(cls, value: Any) -> Any:
        # YAML happily produces int or bool keys (``1: foo``, ``on: bar``)
        if isinstance(value, dict):
            return {str(key): item for key, item in value.items()}
        return value


def plain_value(value: Any) -> Any:
    """Reduce a decoded settings value to str keys and JSON-compatible scalars.

    YAML resolves unquoted timestamps (``released: 2020-01-01``) to date and
    datetime objects; they are kept as their ISO 8601 text.
    """
    if isinstance(value, dict):
        return {str(key): plain_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [plain_value(item) for item in value]
    if isinstance(value, date):
        return value.isoformat()
    return value


def config_file_path(location: str | Path, environment: str, fmt: SerializationFormat) -> Path:
    """Return ``<location>/config/<environment>.<ext>``."""
    return Path(location) / CONFIG_SUBDIR / f"{environment}.{fmt.extension}"


def decode(data: bytes, fmt: SerializationFormat) -> ComponentDocument:
    """Parse raw bytes into a validated document.

    Empty input is an empty document.

    Raises:
        SerializationError: Parse error, non-mapping root, or wrong shape.
    """
    try:
        text = data.decode("utf-8")
        if fmt is SerializationFormat.JSON:
            raw = json.loads(text) if text.strip() else None
        else:
            raw = yaml.safe_load(text)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise SerializationError(f"Parse error ({fmt.value}): {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise SerializationError(
            f"Config document must be a mapping (got {type(raw).__name__})"
        )

    try:
        return ComponentDocument.model_validate(raw)
    except ValidationError as e:
        errors = [f"  {'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise SerializationError("Invalid config document:\n" + "\n".join(errors)) from e


def encode(document: dict[str, Any], fmt: SerializationFormat) -> bytes:
    """Serialize a plain document dict (see ``ConfigNode.to_dict``)."""
    if fmt is SerializationFormat.JSON:
        text = json.dumps(document, indent=JSON_INDENT, ensure_ascii=False) + "\n"
    else:
        text = yaml.safe_dump(
            document,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )
    return text.encode("utf-8")


__all__ = [
    "DEFAULT_FORMAT",
    "LOAD_ORDER",
    "ComponentDocument",
    "SerializationFormat",
    "config_file_path",
    "decode",
    "encode",
    "plain_value",
]
