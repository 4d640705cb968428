from __future__ import annotations

"""Host environment facts and deployment classification.

:class:`HostEnvironment` gathers everything the configuration layer reads
from outside the option store: the host debug flag, the environment type,
the site URL, bootstrap constants and process environment variables. It is
built explicitly (tests) or from the process via
:meth:`HostEnvironment.from_environ`.

Constants may be supplied from a YAML file such as::

    MY_PLUGIN_BOILERPLATE_DEBUG: true
    MY_PLUGIN_BOILERPLATE_CACHE_DURATION: 600
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

import yaml

from .tree import cast_value

logger = logging.getLogger(__name__)

__all__ = [
    "ENVIRONMENT_TYPES",
    "CONSTANT_OVERRIDES",
    "ENV_OVERRIDES",
    "HostEnvironment",
    "load_constants",
    "is_development",
    "is_production",
    "is_staging",
]

# Values the host accepts for its environment type; anything else is
# reported as "production".
ENVIRONMENT_TYPES: Tuple[str, ...] = ("local", "development", "staging", "production")

DEVELOPMENT_CONSTANT = "MY_PLUGIN_BOILERPLATE_DEVELOPMENT"
STAGING_CONSTANT = "MY_PLUGIN_BOILERPLATE_STAGING"

# constant name -> (tree path, coercion)
CONSTANT_OVERRIDES: Dict[str, Tuple[str, Optional[Callable[[Any], Any]]]] = {
    "MY_PLUGIN_BOILERPLATE_DEBUG": ("debug.enabled", bool),
    "MY_PLUGIN_BOILERPLATE_LOG_LEVEL": ("debug.log_level", None),
    "MY_PLUGIN_BOILERPLATE_CACHE_BLOCKS": ("performance.cache_blocks", bool),
    "MY_PLUGIN_BOILERPLATE_CACHE_DURATION": ("performance.cache_duration", int),
    "MY_PLUGIN_BOILERPLATE_RATE_LIMIT": ("security.rate_limit", bool),
}

# environment variable -> tree path; values go through cast_value()
ENV_OVERRIDES: Dict[str, str] = {
    "MY_PLUGIN_DEBUG": "debug.enabled",
    "MY_PLUGIN_LOG_LEVEL": "debug.log_level",
    "MY_PLUGIN_CACHE_BLOCKS": "performance.cache_blocks",
    "MY_PLUGIN_RATE_LIMIT": "security.rate_limit",
}


@dataclass
class HostEnvironment:
    """Facts about the host the plugin runs in."""

    wp_debug: bool = False
    environment_type: str = "production"
    site_url: str = ""
    constants: Dict[str, Any] = field(default_factory=dict)
    environ: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_environ(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        constants_path: Optional[Union[str, Path]] = None,
    ) -> "HostEnvironment":
        """Build host facts from process variables.

        ``WP_DEBUG`` is read as a boolean, ``WP_ENVIRONMENT_TYPE`` is
        normalised to one of :data:`ENVIRONMENT_TYPES` and the site URL
        comes from ``WP_HOME`` (or ``WP_SITEURL``).
        """
        env = os.environ if environ is None else environ

        env_type = env.get("WP_ENVIRONMENT_TYPE", "production").strip().lower()
        if env_type not in ENVIRONMENT_TYPES:
            logger.warning("Unknown environment type %r; using 'production'", env_type)
            env_type = "production"

        constants = load_constants(constants_path) if constants_path else {}

        return cls(
            wp_debug=cast_value(env.get("WP_DEBUG", "")) is True,
            environment_type=env_type,
            site_url=env.get("WP_HOME") or env.get("WP_SITEURL") or "",
            constants=constants,
            environ=env,
        )


def load_constants(path: Union[str, Path]) -> Dict[str, Any]:
    """Read bootstrap constants from a YAML mapping file.

    A missing or malformed file yields no constants; the problem is logged.
    """
    path = Path(path)
    if not path.exists():
        logger.info("Constants file %s not found; no constants defined", path)
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.error("Could not parse constants file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.error("Constants file %s does not hold a mapping", path)
        return {}
    return {str(k): v for k, v in data.items()}


# ----------------------------------------------------------------------
# Classification
# ----------------------------------------------------------------------

def is_development(host: HostEnvironment) -> bool:
    """Debug on and any development marker: constant, type or local URL."""
    return host.wp_debug and (
        DEVELOPMENT_CONSTANT in host.constants
        or host.environment_type == "development"
        or "localhost" in host.site_url
        or ".local" in host.site_url
    )


def is_production(host: HostEnvironment) -> bool:
    return host.environment_type == "production" and not host.wp_debug


def is_staging(host: HostEnvironment) -> bool:
    return host.environment_type == "staging" or STAGING_CONSTANT in host.constants
