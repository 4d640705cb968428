"""Storage, error types and debug output shared by the configuration layer."""

from .exceptions import (
    ConfigError,
    InvalidSettingValueError,
    OptionStoreError,
    UnknownSettingError,
)
from .option_store import MemoryOptionStore, OptionStore, YamlOptionStore

__all__ = [
    "ConfigError",
    "InvalidSettingValueError",
    "OptionStoreError",
    "UnknownSettingError",
    "MemoryOptionStore",
    "OptionStore",
    "YamlOptionStore",
]
