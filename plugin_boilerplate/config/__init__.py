"""Layered plugin configuration.

:class:`Config` merges defaults, the persisted option record, bootstrap
constants, environment variables and environment-type detection into one
tree addressed by dot paths.
"""

from .defaults import DEFAULTS, KNOWN_PATHS, OPTION_NAME, PluginSettings
from .environment import HostEnvironment
from .manager import Config
from .tree import cast_value, deep_merge, get_value, set_value

__all__ = [
    "Config",
    "HostEnvironment",
    "PluginSettings",
    "DEFAULTS",
    "KNOWN_PATHS",
    "OPTION_NAME",
    "cast_value",
    "deep_merge",
    "get_value",
    "set_value",
]
