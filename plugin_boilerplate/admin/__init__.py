"""Admin settings-tab processing on top of :class:`~plugin_boilerplate.config.Config`."""

from .sections import SECTIONS, SettingsSection, apply_form, get_section, resolve_path

__all__ = ["SECTIONS", "SettingsSection", "apply_form", "get_section", "resolve_path"]
