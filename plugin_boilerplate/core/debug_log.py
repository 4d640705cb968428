from __future__ import annotations

"""JSON debug dumps gated on ``debug.enabled``.

Each call to :meth:`DebugLog.log` writes one pretty-printed JSON file::

    {"date": "2024-01-01 12:00:00+00:00", "type": "dict", "data": {...}}

named ``<name>-<unix time>.json`` under the log directory. When debug is
disabled nothing is written. After each write only the newest
``debug.max_log_files`` dumps are kept.
"""

import json
import logging
import re
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Optional, Union

from plugin_boilerplate.version import PLUGIN_NAME, PLUGIN_SLUG

if TYPE_CHECKING:
    from plugin_boilerplate.config import Config

logger = logging.getLogger(__name__)

__all__ = ["DebugLog", "sanitize_file_name"]

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_file_name(name: str) -> str:
    """Reduce *name* to a safe file stem."""
    cleaned = _UNSAFE_CHARS.sub("-", name.strip()).strip(".-")
    return cleaned or "log"


class DebugLog:
    """Write debug dumps for a :class:`~plugin_boilerplate.config.Config`.

    Parameters
    ----------
    config :
        Consulted on every call for ``debug.enabled`` and
        ``debug.max_log_files``.
    log_dir :
        Target directory; defaults to ``./<slug>-logs``.
    """

    def __init__(self, config: "Config", log_dir: Optional[Union[str, Path]] = None) -> None:
        self._config = config
        self._log_dir = Path(log_dir) if log_dir is not None else Path(f"{PLUGIN_SLUG}-logs")

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    @property
    def enabled(self) -> bool:
        return bool(self._config.get("debug.enabled", False))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def log(self, name: str, data: Any) -> Optional[Path]:
        """Write *data* to a new JSON dump; return its path or None."""
        if not self.enabled:
            return None

        record = {
            "date": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S+00:00"),
            "type": type(data).__name__,
            "data": data,
        }
        try:
            payload = json.dumps(record, indent=4, default=str)
        except (TypeError, ValueError) as exc:
            logger.warning("Could not encode debug data for %s: %s", name, exc)
            return None

        try:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            path = self._next_path(sanitize_file_name(name))
            path.write_text("\n" + payload, encoding="utf-8")
        except OSError as exc:
            logger.error("Could not write debug log to %s: %s", self._log_dir, exc)
            return None

        self._prune()
        return path

    def dump(self, data: Any) -> Optional[str]:
        """Format *data* as a readable text block, or None when disabled."""
        if not self.enabled:
            return None
        try:
            body = json.dumps(data, indent=4, default=str)
        except (TypeError, ValueError):
            body = "Unable to encode data"
        return (
            f"{PLUGIN_NAME} Debug Output:\n\n"
            f"Type: {type(data).__name__}\n\n"
            f"{body}"
        )

    def files(self) -> List[Path]:
        """Existing dumps, oldest first."""
        if not self._log_dir.is_dir():
            return []
        return sorted(
            self._log_dir.glob("*.json"),
            key=lambda p: (p.stat().st_mtime, p.name),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _next_path(self, stem: str) -> Path:
        base = f"{stem}-{int(time.time())}"
        path = self._log_dir / f"{base}.json"
        counter = 1
        while path.exists():
            path = self._log_dir / f"{base}-{counter}.json"
            counter += 1
        return path

    def _prune(self) -> None:
        try:
            keep = int(self._config.get("debug.max_log_files", 10))
        except (TypeError, ValueError):
            keep = 10
        keep = max(1, keep)

        existing = self.files()
        for stale in existing[:-keep]:
            try:
                stale.unlink()
                logger.debug("Removed old debug log %s", stale)
            except OSError as exc:
                logger.warning("Could not remove old debug log %s: %s", stale, exc)
