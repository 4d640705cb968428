# -*- coding: utf-8 -*-
"""Plugin identity and version detection.

Provides the plugin's display name and slug, and ``get_plugin_version()``,
which reads the installed distribution metadata and falls back to ``"dev"``
when running from a source checkout.
"""

from __future__ import annotations

from importlib import metadata
from typing import Optional

PLUGIN_NAME = "My Plugin Boilerplate"
PLUGIN_SLUG = "my-plugin-boilerplate"
DISTRIBUTION = "plugin-boilerplate-config"

_CACHED_VERSION: Optional[str] = None


def get_plugin_version() -> str:
    """Return the plugin version string (e.g. ``1.0.0``)."""
    global _CACHED_VERSION
    if _CACHED_VERSION:
        return _CACHED_VERSION

    try:
        _CACHED_VERSION = metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        _CACHED_VERSION = "dev"
    return _CACHED_VERSION
