from __future__ import annotations

"""Central logging configuration for the plugin.

Import and call :func:`setup_logging` at start-up, optionally passing the
application's :class:`~plugin_boilerplate.config.Config` so the plugin
logger follows ``debug.log_level`` and ``debug.log_to_file``.
"""

import importlib.resources as pkg_resources
import logging
import logging.config
import os
from typing import TYPE_CHECKING, Any, Dict, Optional

import yaml

if TYPE_CHECKING:
    from plugin_boilerplate.config import Config

__all__ = ["setup_logging", "LEVELS"]

PACKAGE_LOGGER = "plugin_boilerplate"

# debug.log_level -> logging level name
LEVELS: Dict[str, str] = {
    "error": "ERROR",
    "warning": "WARNING",
    "info": "INFO",
    "debug": "DEBUG",
}


def setup_logging(config: Optional["Config"] = None) -> None:
    """Configure logging from the packaged ``logging.yml``."""
    log_dir = os.environ.get("PLUGIN_BOILERPLATE_LOG_DIR", "logs")
    log_file = os.path.join(log_dir, "plugin.log")

    try:
        logging_config = _load_packaged_config()
        if not logging_config.get("version"):
            raise ValueError("logging.yml has no 'version' key")

        _apply_plugin_settings(logging_config, config, log_file)
        if "file" in logging_config.get("handlers", {}):
            os.makedirs(log_dir, exist_ok=True)

        logging.config.dictConfig(logging_config)
        logging.getLogger(PACKAGE_LOGGER).debug("===== Logging initialised from logging.yml =====")
    except (OSError, ValueError, yaml.YAMLError) as exc:
        _setup_minimal_logging()
        logging.getLogger(PACKAGE_LOGGER).error("Logging config error, using fallback: %s", exc)

    _apply_debug_overrides()


def _load_packaged_config() -> Dict[str, Any]:
    text = pkg_resources.files("plugin_boilerplate.config").joinpath("logging.yml").read_text(
        encoding="utf-8"
    )
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("logging.yml does not hold a mapping")
    return data


def _apply_plugin_settings(logging_config: Dict[str, Any], config: Optional["Config"],
                           log_file: str) -> None:
    handlers = logging_config.setdefault("handlers", {})
    if "file" in handlers:
        handlers["file"]["filename"] = log_file

    if config is None:
        return

    level = LEVELS.get(str(config.get("debug.log_level", "error")).lower(), "ERROR")
    plugin_logger = logging_config.setdefault("loggers", {}).setdefault(
        PACKAGE_LOGGER, {"handlers": ["console"], "propagate": False}
    )
    plugin_logger["level"] = level

    if not config.get("debug.log_to_file", True):
        handlers.pop("file", None)
        for entry in [*logging_config["loggers"].values(), logging_config.get("root", {})]:
            if "file" in entry.get("handlers", []):
                entry["handlers"] = [h for h in entry["handlers"] if h != "file"]


def _setup_minimal_logging() -> None:
    """Console-only logging when the packaged config is unusable."""
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "simple", "level": "INFO"},
        },
        "root": {"level": "INFO", "handlers": ["console"]},
    })


def _apply_debug_overrides() -> None:
    """Force DEBUG for loggers listed in ``PLUGIN_BOILERPLATE_DEBUG_MODULES``."""
    modules = os.environ.get("PLUGIN_BOILERPLATE_DEBUG_MODULES", "").strip()
    targets = [m.strip() for m in modules.split(",") if m.strip()]
    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        if not any(h.level <= logging.DEBUG for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
            logger.addHandler(handler)
        logger.info("Debug override active for logger '%s'", name)
