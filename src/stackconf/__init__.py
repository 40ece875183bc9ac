"""stackconf -- recursive component configuration manager.

Public API:
    ConfigNode, SettingsTree, KeyPath, SerializationFormat, FileSystemStore,
    load_component, set_config, unset_config, remove_component, get_config,
    __version__
"""

from stackconf._api import get_config, load_component, remove_component, set_config, unset_config
from stackconf.core import ConfigNode, KeyPath, SerializationFormat, SettingsTree
from stackconf.storage import FileSystemStore

__version__: str = "0.4.0"

__all__ = [
    "ConfigNode",
    "FileSystemStore",
    "KeyPath",
    "SerializationFormat",
    "SettingsTree",
    "__version__",
    "get_config",
    "load_component",
    "remove_component",
    "set_config",
    "unset_config",
]
