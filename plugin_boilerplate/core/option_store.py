from __future__ import annotations

"""Flat key-value option stores.

The configuration tree is persisted as a single option record. Stores follow
the host CMS option semantics:

- ``get_option(name, default)`` returns a copy of the stored value.
- ``update_option(name, value)`` returns False when the stored value is
  already equal (nothing to write); genuine write failures raise
  :class:`~plugin_boilerplate.core.exceptions.OptionStoreError`.
- ``delete_option(name)`` returns False when nothing was stored.

Two implementations are provided: :class:`MemoryOptionStore` for tests and
embedding, and :class:`YamlOptionStore` which keeps every option in one YAML
mapping on disk.
"""

import logging
import os
import tempfile
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union, runtime_checkable

import yaml

from .exceptions import OptionStoreError

logger = logging.getLogger(__name__)

__all__ = ["OptionStore", "MemoryOptionStore", "YamlOptionStore"]


@runtime_checkable
class OptionStore(Protocol):
    """Protocol for persistent option storage."""

    def get_option(self, name: str, default: Any = None) -> Any:
        ...

    def update_option(self, name: str, value: Any) -> bool:
        ...

    def delete_option(self, name: str) -> bool:
        ...


class MemoryOptionStore:
    """Dict-backed store; values are deep-copied in and out."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._options: Dict[str, Any] = deepcopy(initial) if initial else {}

    def get_option(self, name: str, default: Any = None) -> Any:
        if name not in self._options:
            return default
        return deepcopy(self._options[name])

    def update_option(self, name: str, value: Any) -> bool:
        if name in self._options and self._options[name] == value:
            return False
        self._options[name] = deepcopy(value)
        return True

    def delete_option(self, name: str) -> bool:
        if name not in self._options:
            return False
        del self._options[name]
        return True

    def __contains__(self, name: object) -> bool:
        return name in self._options


class YamlOptionStore:
    """Keep all options in one YAML mapping file.

    The file is re-read on every call so several processes sharing it see
    each other's writes (last writer wins). A missing file is an empty
    store; an unparsable or non-mapping file is logged and treated as empty.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get_option(self, name: str, default: Any = None) -> Any:
        return self._read().get(name, default)

    def update_option(self, name: str, value: Any) -> bool:
        options = self._read()
        if name in options and options[name] == value:
            logger.debug("Option %s unchanged; skipping write", name)
            return False
        options[name] = deepcopy(value)
        self._write(options)
        return True

    def delete_option(self, name: str) -> bool:
        options = self._read()
        if name not in options:
            return False
        del options[name]
        self._write(options)
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _read(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = yaml.safe_load(self._path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.error("Could not read option file %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Option file %s does not hold a mapping; ignoring it", self._path)
            return {}
        return data

    def _write(self, options: Dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", dir=str(self._path.parent)
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    yaml.safe_dump(options, fh, default_flow_style=False, sort_keys=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except (OSError, yaml.YAMLError) as exc:
            raise OptionStoreError(
                f"Could not write option file {self._path}: {exc}", cause=exc
            ) from exc
