from __future__ import annotations

"""Layered plugin configuration.

A :class:`Config` combines the static defaults with runtime overrides and
exposes the result through dot-notation paths. Layers are applied in
increasing precedence:

1. :data:`~plugin_boilerplate.config.defaults.DEFAULTS`
2. the persisted option record (deep-merged over the defaults)
3. bootstrap constants (selected keys)
4. environment variables (selected keys, type-cast)
5. environment-type detection, which force-sets several keys

The object is constructed explicitly and handed to its consumers; it loads
lazily on first access or on an explicit :meth:`Config.init`.
"""

import logging
from copy import deepcopy
from typing import Any, Dict, List, Mapping, Optional

from plugin_boilerplate.core.exceptions import OptionStoreError
from plugin_boilerplate.core.option_store import MemoryOptionStore, OptionStore

from . import environment as env_mod
from .defaults import OPTION_NAME, PluginSettings, default_tree
from .environment import HostEnvironment
from .tree import cast_value, deep_merge, get_value, set_value

logger = logging.getLogger(__name__)

__all__ = ["Config"]


class Config:
    """Hierarchical plugin configuration backed by an option store.

    Parameters
    ----------
    store :
        Where the tree is persisted. Defaults to a fresh in-memory store.
    host :
        Host facts used for constants, environment variables and
        environment-type detection. Defaults to
        :meth:`HostEnvironment.from_environ`.
    option_name :
        Option record holding the persisted tree.
    """

    def __init__(
        self,
        store: Optional[OptionStore] = None,
        host: Optional[HostEnvironment] = None,
        option_name: str = OPTION_NAME,
    ) -> None:
        self._store: OptionStore = store if store is not None else MemoryOptionStore()
        self._host = host if host is not None else HostEnvironment.from_environ()
        self._option_name = option_name
        self._config: Dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def store(self) -> OptionStore:
        return self._store

    @property
    def host(self) -> HostEnvironment:
        return self._host

    @property
    def option_name(self) -> str:
        return self._option_name

    @property
    def initialized(self) -> bool:
        return bool(self._config)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def init(self) -> None:
        """Build the tree from every layer, discarding in-memory changes."""
        layers = self._load()
        self._setup(layers)
        logger.info("Config loaded: %s", " | ".join(layers))

    def save(self) -> bool:
        """Persist the whole tree; return whether the store holds it now.

        A write skipped because the stored tree is already identical counts
        as success. Store failures are logged and reported as False.
        """
        if not self._config:
            self.init()
        try:
            written = self._store.update_option(self._option_name, self._config)
        except OptionStoreError as exc:
            logger.error("Saving configuration failed: %s", exc)
            return False
        if written:
            logger.info("Configuration saved to option %s", self._option_name)
            return True
        return self._store.get_option(self._option_name) == self._config

    def reset(self) -> None:
        """Delete the persisted tree and rebuild from defaults and overrides."""
        try:
            self._store.delete_option(self._option_name)
        except OptionStoreError as exc:
            logger.error("Deleting persisted configuration failed: %s", exc)
        self._config = {}
        self.init()
        logger.info("Configuration reset to defaults")

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def get(self, key: str, default: Any = None) -> Any:
        if not self._config:
            self.init()
        return get_value(self._config, key, default)

    def set(self, key: str, value: Any) -> None:
        if not self._config:
            self.init()
        set_value(self._config, key, value)

    def update(self, values: Mapping[str, Any]) -> None:
        """Assign several dot paths at once."""
        for key, value in values.items():
            self.set(key, value)

    def get_config(self) -> Dict[str, Any]:
        """Return a copy of the full tree."""
        if not self._config:
            self.init()
        return deepcopy(self._config)

    def settings(self) -> PluginSettings:
        """Return a typed snapshot of the current tree."""
        if not self._config:
            self.init()
        return PluginSettings.from_tree(self._config)

    # ------------------------------------------------------------------
    # Environment classification
    # ------------------------------------------------------------------
    def is_development(self) -> bool:
        return env_mod.is_development(self._host)

    def is_production(self) -> bool:
        return env_mod.is_production(self._host)

    def is_staging(self) -> bool:
        return env_mod.is_staging(self._host)

    # ------------------------------------------------------------------
    # Internal loading logic
    # ------------------------------------------------------------------
    def _load(self) -> List[str]:
        layers = ["defaults"]
        self._config = default_tree()

        stored = self._store.get_option(self._option_name, {})
        overrides = self._sanitize_overrides(self._config, stored)
        if overrides:
            self._config = deep_merge(self._config, overrides)
            layers.append("stored")

        if self._apply_constants():
            layers.append("constants")
        if self._apply_environment():
            layers.append("env")
        return layers

    def _apply_constants(self) -> int:
        applied = 0
        constants = self._host.constants
        for name, (path, coerce) in env_mod.CONSTANT_OVERRIDES.items():
            if name not in constants:
                continue
            value = constants[name]
            if coerce is not None:
                try:
                    value = coerce(value)
                except (TypeError, ValueError):
                    logger.warning("Ignoring constant %s: cannot coerce %r", name, value)
                    continue
            set_value(self._config, path, value)
            applied += 1
        return applied

    def _apply_environment(self) -> int:
        applied = 0
        environ = self._host.environ
        for var, path in env_mod.ENV_OVERRIDES.items():
            raw = environ.get(var)
            if raw is None:
                continue
            value = cast_value(raw)
            set_value(self._config, path, value)
            logger.debug("ENV override: %s -> %s = %r", var, path, value)
            applied += 1
        return applied

    def _setup(self, layers: List[str]) -> None:
        # Each check overwrites what the previous one set; staging runs last.
        if self.is_development():
            set_value(self._config, "debug.enabled", True)
            set_value(self._config, "debug.log_level", "debug")
            set_value(self._config, "performance.minify_assets", False)
            layers.append("development")

        if self.is_production():
            set_value(self._config, "debug.enabled", False)
            set_value(self._config, "debug.log_level", "error")
            set_value(self._config, "performance.cache_blocks", True)
            set_value(self._config, "performance.minify_assets", True)
            layers.append("production")

        if self.is_staging():
            set_value(self._config, "debug.enabled", True)
            set_value(self._config, "debug.log_level", "warning")
            set_value(self._config, "performance.cache_blocks", False)
            layers.append("staging")

    @staticmethod
    def _sanitize_overrides(base: Mapping[str, Any], overrides: Any,
                            prefix: str = "") -> Dict[str, Any]:
        """Drop persisted overrides that would replace a subtree with a scalar.

        A persisted value that is not a mapping at all is discarded whole.
        Keys unknown to *base* are kept as they are.
        """
        if not isinstance(overrides, Mapping):
            if overrides not in (None, {}, []):
                logger.warning(
                    "Persisted configuration is a %s, not a mapping; ignoring it",
                    type(overrides).__name__,
                )
            return {}

        clean: Dict[str, Any] = {}
        for key, value in overrides.items():
            path = f"{prefix}{key}"
            current = base.get(key)
            if isinstance(current, Mapping):
                if not isinstance(value, Mapping):
                    logger.warning("Ignoring persisted %s: expected a mapping, got %r", path, value)
                    continue
                clean[key] = Config._sanitize_overrides(current, value, f"{path}.")
            else:
                clean[key] = value
        return clean
