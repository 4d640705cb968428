"""Baseline configuration values and their typed views.

``DEFAULTS`` is the tree every :class:`~plugin_boilerplate.config.Config`
starts from. The dataclasses mirror its categories so callers that prefer
attribute access over dot paths can use :meth:`Config.settings`.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Mapping, Tuple

from .tree import iter_leaf_paths

__all__ = [
    "OPTION_NAME",
    "LOG_LEVELS",
    "DEFAULTS",
    "KNOWN_PATHS",
    "default_tree",
    "DebugSettings",
    "PerformanceSettings",
    "SecuritySettings",
    "FeatureSettings",
    "DatabaseSettings",
    "PluginSettings",
]

# Option record holding the persisted tree.
OPTION_NAME = "my_plugin_boilerplate_config"

LOG_LEVELS: Tuple[str, ...] = ("error", "warning", "info", "debug")

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "debug": {
        "enabled": False,
        "log_level": "error",
        "log_to_file": True,
        "log_to_db": False,
        "max_log_files": 10,
    },
    "performance": {
        "cache_blocks": True,
        "cache_duration": 3600,  # seconds
        "minify_assets": True,
        "lazy_load": True,
    },
    "security": {
        "rate_limit": True,
        "max_requests": 100,
        "time_window": 3600,  # seconds
        "strict_validation": True,
    },
    "features": {
        "blocks_enabled": True,
        "rest_api_enabled": True,
        "cli_enabled": True,
        "admin_dashboard": True,
    },
    "database": {
        "auto_optimize": False,
        "cleanup_logs": True,
        "log_retention_days": 30,
    },
}

KNOWN_PATHS: Tuple[str, ...] = tuple(iter_leaf_paths(DEFAULTS))


def default_tree() -> Dict[str, Dict[str, Any]]:
    """Return a fresh, independently mutable copy of :data:`DEFAULTS`."""
    return deepcopy(DEFAULTS)


class _Section:
    """Mixin building a settings dataclass from a (possibly partial) mapping."""

    @classmethod
    def from_mapping(cls, data: Any):
        if not isinstance(data, Mapping):
            return cls()  # type: ignore[call-arg]
        names = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        return cls(**{k: v for k, v in data.items() if k in names})  # type: ignore[call-arg]


@dataclass
class DebugSettings(_Section):
    enabled: bool = False
    log_level: str = "error"
    log_to_file: bool = True
    log_to_db: bool = False
    max_log_files: int = 10


@dataclass
class PerformanceSettings(_Section):
    cache_blocks: bool = True
    cache_duration: int = 3600
    minify_assets: bool = True
    lazy_load: bool = True


@dataclass
class SecuritySettings(_Section):
    rate_limit: bool = True
    max_requests: int = 100
    time_window: int = 3600
    strict_validation: bool = True


@dataclass
class FeatureSettings(_Section):
    blocks_enabled: bool = True
    rest_api_enabled: bool = True
    cli_enabled: bool = True
    admin_dashboard: bool = True


@dataclass
class DatabaseSettings(_Section):
    auto_optimize: bool = False
    cleanup_logs: bool = True
    log_retention_days: int = 30


@dataclass
class PluginSettings:
    """Typed snapshot of a configuration tree.

    Keys the tree carries beyond the declared fields are ignored; missing
    keys fall back to the dataclass defaults, which match :data:`DEFAULTS`.
    """

    debug: DebugSettings = field(default_factory=DebugSettings)
    performance: PerformanceSettings = field(default_factory=PerformanceSettings)
    security: SecuritySettings = field(default_factory=SecuritySettings)
    features: FeatureSettings = field(default_factory=FeatureSettings)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)

    @classmethod
    def from_tree(cls, tree: Mapping[str, Any]) -> "PluginSettings":
        return cls(
            debug=DebugSettings.from_mapping(tree.get("debug")),
            performance=PerformanceSettings.from_mapping(tree.get("performance")),
            security=SecuritySettings.from_mapping(tree.get("security")),
            features=FeatureSettings.from_mapping(tree.get("features")),
            database=DatabaseSettings.from_mapping(tree.get("database")),
        )

    def to_tree(self) -> Dict[str, Dict[str, Any]]:
        return asdict(self)
