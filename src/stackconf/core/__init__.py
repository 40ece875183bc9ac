"""Component configuration tree core.

Public API:
- KeyPath: dot-delimited path value type
- SettingsTree: nested settings with path-addressed has/get/set/unset
- ConfigNode: one component's configuration and its subcomponents
- merge_settings / merge_nodes / merge_namespaces: receiver-wins deep merge
- SerializationFormat: YAML or JSON
"""

from stackconf.core.merge import merge_namespaces, merge_nodes, merge_settings
from stackconf.core.node import ConfigNode
from stackconf.core.paths import KeyPath
from stackconf.core.serialization import SerializationFormat
from stackconf.core.settings import SettingsTree

__all__ = [
    "ConfigNode",
    "KeyPath",
    "SerializationFormat",
    "SettingsTree",
    "merge_namespaces",
    "merge_nodes",
    "merge_settings",
]
