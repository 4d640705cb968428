from __future__ import annotations

"""Configuration exception classes.

Normal reads and writes on :class:`~plugin_boilerplate.config.Config` never
raise; these exceptions surface at the edges where callers ask for something
the configuration cannot represent (an unknown settings path, a rejected
form value) and inside option stores, whose failures are converted to a
``False`` result by ``Config.save``.
"""

from typing import Any, Optional

__all__ = [
    "ConfigError",
    "UnknownSettingError",
    "InvalidSettingValueError",
    "OptionStoreError",
]


class ConfigError(Exception):
    """Base exception for all configuration errors."""

    def __init__(self, message: str, key: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.key = key
        self.cause = cause

    def __str__(self) -> str:
        if self.key:
            return f"[Setting: {self.key}] {super().__str__()}"
        return super().__str__()


class UnknownSettingError(ConfigError):
    """Raised when a path or settings tab is not part of the known schema."""

    def __init__(self, key: str) -> None:
        super().__init__("Unknown setting", key)


class InvalidSettingValueError(ConfigError):
    """Raised when a submitted value fails validation for its setting."""

    def __init__(self, key: str, value: Any, reason: str) -> None:
        super().__init__(f"Invalid value {value!r}: {reason}", key)
        self.value = value
        self.reason = reason


class OptionStoreError(ConfigError):
    """Raised by option stores when the backing medium cannot be written."""
    pass
