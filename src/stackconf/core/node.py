"""Component configuration nodes.

A ConfigNode holds one component's configuration for one environment: its
settings, its namespace, and its subcomponents, each of which is a ConfigNode
owned by its parent. Subcomponents are persisted inline in their parent's
file, so only the root node's ``location`` is ever used for I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

from stackconf.constants import (
    INJECT_NAMESPACE_FIELD,
    INLINE_LOCATION,
    NAMESPACE_FIELD,
    SETTINGS_FIELD,
    SUBCOMPONENTS_FIELD,
)
from stackconf.core.merge import merge_namespaces, merge_nodes
from stackconf.core.paths import KeyPath, PathLike
from stackconf.core.serialization import (
    DEFAULT_FORMAT,
    LOAD_ORDER,
    ComponentDocument,
    SerializationFormat,
    config_file_path,
    decode,
    encode,
)
from stackconf.core.settings import SettingsTree, Value
from stackconf.exceptions import ConfigNotFoundError, PathNotFoundError, SerializationError

if TYPE_CHECKING:
    from stackconf.protocols import ConfigLoader, ConfigWriter


@dataclass
class ConfigNode:
    """One component's configuration and its subcomponents."""

    location: str = INLINE_LOCATION
    format: SerializationFormat = DEFAULT_FORMAT
    namespace: str = ""
    inject_namespace: bool = False
    settings: SettingsTree = field(default_factory=SettingsTree)
    children: dict[str, ConfigNode] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Construction / conversion
    # ------------------------------------------------------------------

    @classmethod
    def from_document(
        cls,
        document: ComponentDocument,
        location: str = INLINE_LOCATION,
        fmt: SerializationFormat = DEFAULT_FORMAT,
    ) -> ConfigNode:
        """Build a node tree from a validated document."""
        node = cls(location=location, format=fmt)
        node._populate(document)
        return node

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        location: str = INLINE_LOCATION,
        fmt: SerializationFormat = DEFAULT_FORMAT,
    ) -> ConfigNode:
        """Build a node tree from a plain document dict."""
        return cls.from_document(ComponentDocument.model_validate(data), location, fmt)

    def _populate(self, document: ComponentDocument) -> None:
        self.namespace = document.namespace or ""
        self.inject_namespace = bool(document.inject_namespace)
        self.settings = SettingsTree.from_dict(document.settings or {})
        self.children = {
            name: ConfigNode.from_document(child, fmt=self.format)
            for name, child in (document.subcomponents or {}).items()
        }

    def to_dict(self) -> dict[str, Any]:
        """Return the serialized shape, omitting empty fields."""
        data: dict[str, Any] = {}
        if self.namespace:
            data[NAMESPACE_FIELD] = self.namespace
        if self.inject_namespace:
            data[INJECT_NAMESPACE_FIELD] = True
        if len(self.settings):
            data[SETTINGS_FIELD] = self.settings.to_dict()
        if self.children:
            data[SUBCOMPONENTS_FIELD] = {
                name: child.to_dict() for name, child in self.children.items()
            }
        return data

    def copy(self) -> ConfigNode:
        """Return a deep copy that shares no settings or children."""
        return ConfigNode(
            location=self.location,
            format=self.format,
            namespace=self.namespace,
            inject_namespace=self.inject_namespace,
            settings=self.settings.copy(),
            children={name: child.copy() for name, child in self.children.items()},
        )

    # ------------------------------------------------------------------
    # Subcomponents
    # ------------------------------------------------------------------

    def get_subcomponent(self, name_path: PathLike) -> ConfigNode:
        """Return the subcomponent at ``name_path``, creating missing ones.

        Every missing name along the path is inserted as an empty node, so
        this never fails. The empty path returns this node.
        """
        node = self
        for name in KeyPath.coerce(name_path):
            child = node.children.get(name)
            if child is None:
                logger.info(f"Creating new subcomponent configuration for {name}")
                child = ConfigNode(format=self.format)
                node.children[name] = child
            node = child
        return node

    def find_subcomponent(self, name_path: PathLike) -> ConfigNode | None:
        """Return the subcomponent at ``name_path`` or None. Never creates."""
        node = self
        for name in KeyPath.coerce(name_path):
            child = node.children.get(name)
            if child is None:
                return None
            node = child
        return node

    def has_subcomponent(self, name_path: PathLike) -> bool:
        return self.find_subcomponent(name_path) is not None

    def remove_subcomponent(self, name_path: PathLike) -> None:
        """Delete the subcomponent at ``name_path`` from its parent.

        Raises:
            ValueError: ``name_path`` is empty.
            PathNotFoundError: An intermediate or the final name is missing.
        """
        key_path = KeyPath.coerce(name_path)
        key_path.require_non_empty("remove_subcomponent")
        target = str(key_path)

        parent = self
        for index, name in enumerate(key_path.parent):
            if name not in parent.children:
                current = str(key_path.prefix(index + 1))
                raise PathNotFoundError(
                    f"Component configuration for '{name}' not found in config path "
                    f"'{current}'; unable to delete component configuration '{target}'",
                    path=current,
                    target=target,
                )
            parent = parent.children[name]

        last = key_path.leaf
        if last not in parent.children:
            current = str(key_path.parent)
            raise PathNotFoundError(
                f"Component configuration for '{last}' not found in config path "
                f"'{current}'; unable to delete component configuration '{target}'",
                path=current,
                target=target,
            )
        del parent.children[last]
        logger.info(f"Removed subcomponent configuration {target}")

    # ------------------------------------------------------------------
    # Settings through subcomponent paths
    # ------------------------------------------------------------------

    def set_value(self, subcomponent_path: PathLike, setting_path: PathLike, value: Value) -> None:
        """Set a setting on a subcomponent, creating the subcomponent if needed."""
        self.get_subcomponent(subcomponent_path).settings.set(setting_path, value)

    def unset_value(self, subcomponent_path: PathLike, setting_path: PathLike) -> None:
        """Remove a setting from a subcomponent.

        The subcomponent is resolved with ``get_subcomponent``, so a missing
        subcomponent is created before the setting is reported as not found.
        """
        self.get_subcomponent(subcomponent_path).settings.unset(setting_path)

    def has_value(self, subcomponent_path: PathLike, setting_path: PathLike) -> bool:
        node = self.find_subcomponent(subcomponent_path)
        return node is not None and node.settings.has(setting_path)

    # ------------------------------------------------------------------
    # Merge
    # ------------------------------------------------------------------

    def merge_namespaces(self, other: ConfigNode) -> ConfigNode:
        """Inherit namespace and inject flag from ``other`` where unset."""
        return merge_namespaces(self, other)

    def merge(self, other: ConfigNode) -> None:
        """Deep-merge ``other`` into this node; this node wins conflicts."""
        merge_nodes(self, other)
        merge_namespaces(self, other)

    def merge_config_file(self, location: str, environment: str, loader: ConfigLoader) -> None:
        """Load the config stored at ``location`` and merge it into this node."""
        other = ConfigNode(location=location)
        other.load(environment, loader)
        self.merge(other)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def config_path(self, environment: str) -> Path:
        """Path of this node's file for ``environment`` in its current format."""
        return config_file_path(self.location, environment, self.format)

    def load(
        self,
        environment: str,
        loader: ConfigLoader,
        default_format: SerializationFormat = DEFAULT_FORMAT,
    ) -> None:
        """Populate this node from the stored config for ``environment``.

        Formats are tried in ``LOAD_ORDER``. A missing or undecodable file
        moves on to the next format; when none loads the node is left as it
        was and takes ``default_format``.

        Raises:
            StorageError: The loader failed for a reason other than absence.
        """
        for fmt in LOAD_ORDER:
            try:
                data = loader.read(self.location, environment, fmt)
            except ConfigNotFoundError:
                logger.debug(f"No {fmt.value} config for '{environment}' at {self.location}")
                continue

            try:
                document = decode(data, fmt)
            except SerializationError as e:
                logger.warning(
                    f"Ignoring unreadable {fmt.value} config for '{environment}' "
                    f"at {self.location}: {e}"
                )
                continue

            self.format = fmt
            self._populate(document)
            logger.debug(f"Loaded {config_file_path(self.location, environment, fmt)}")
            return

        self.format = default_format

    def serialize(self) -> bytes:
        return encode(self.to_dict(), self.format)

    def write(self, environment: str, writer: ConfigWriter) -> Path:
        """Serialize with this node's format and hand the bytes to ``writer``.

        Raises:
            StorageError: Propagated from the writer.
        """
        return writer.write(self.location, environment, self.format, self.serialize())


__all__ = ["ConfigNode"]
