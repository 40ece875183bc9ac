"""Tool preferences for stackconf.

Public API:
- UserConfig: user preferences model
- load_user_config: Load user preferences from XDG config dir
- get_user_config_path: Return the XDG user config path
"""

from stackconf.config.user_config import (
    UserConfig,
    get_user_config_path,
    load_user_config,
)

__all__ = [
    "UserConfig",
    "get_user_config_path",
    "load_user_config",
]
