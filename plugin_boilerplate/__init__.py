"""Configuration core of the plugin boilerplate.

Front-ends (admin handlers, the CLI, tests) should depend on the public API
exposed here rather than importing internal modules directly.
"""

from .config import Config, HostEnvironment, PluginSettings
from .core.option_store import MemoryOptionStore, YamlOptionStore
from .version import PLUGIN_NAME, PLUGIN_SLUG, get_plugin_version

__all__: list[str] = [
    "Config",
    "HostEnvironment",
    "PluginSettings",
    "MemoryOptionStore",
    "YamlOptionStore",
    "PLUGIN_NAME",
    "PLUGIN_SLUG",
    "get_plugin_version",
]
