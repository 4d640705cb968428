from __future__ import annotations

"""Settings-tab form processing.

Each admin tab (debug, performance, security, features) posts a nested
mapping ``form[section][field]`` of raw strings. :meth:`SettingsSection.process`
turns it into dot-path updates for :class:`~plugin_boilerplate.config.Config`:

- checkboxes are True only when posted as ``"1"``; absent means False
- numbers are accepted only inside their range, otherwise left out
- selects are accepted only when the posted value is an allowed choice

Only paths present in the default tree can be produced or resolved.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from plugin_boilerplate.config import KNOWN_PATHS, Config
from plugin_boilerplate.config.defaults import LOG_LEVELS
from plugin_boilerplate.core.exceptions import InvalidSettingValueError, UnknownSettingError

logger = logging.getLogger(__name__)

__all__ = [
    "FieldSpec",
    "SettingsSection",
    "SECTIONS",
    "resolve_path",
    "get_section",
    "apply_form",
]

# Leading integer of a posted number, as the host's absint() reads it
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")

CHECKBOX = "checkbox"
NUMBER = "number"
SELECT = "select"


def resolve_path(path: str) -> str:
    """Return *path* if it names a known setting, else raise."""
    if path not in KNOWN_PATHS:
        raise UnknownSettingError(path)
    return path


@dataclass(frozen=True)
class FieldSpec:
    """One form field bound to a setting path."""

    path: str
    kind: str = CHECKBOX
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    choices: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        resolve_path(self.path)

    @property
    def name(self) -> str:
        return self.path.split(".", 1)[1]

    def validate(self, raw: Any) -> Any:
        """Convert a posted value, raising InvalidSettingValueError if rejected."""
        if self.kind == CHECKBOX:
            return str(raw) == "1"

        if self.kind == NUMBER:
            match = _LEADING_INT.match(str(raw))
            number = abs(int(match.group(1))) if match else 0
            if self.minimum is not None and number < self.minimum:
                raise InvalidSettingValueError(self.path, raw, f"below {self.minimum}")
            if self.maximum is not None and number > self.maximum:
                raise InvalidSettingValueError(self.path, raw, f"above {self.maximum}")
            return number

        if self.kind == SELECT:
            value = str(raw).strip()
            if value not in self.choices:
                raise InvalidSettingValueError(
                    self.path, raw, f"expected one of {', '.join(self.choices)}"
                )
            return value

        raise InvalidSettingValueError(self.path, raw, f"unsupported field kind {self.kind}")


@dataclass(frozen=True)
class SettingsSection:
    """An admin tab and the fields it submits."""

    name: str
    title: str
    fields: Tuple[FieldSpec, ...] = field(default_factory=tuple)

    def process(self, form: Mapping[str, Any]) -> Dict[str, Any]:
        """Map a posted form to ``{path: value}`` updates for this tab."""
        posted = form.get(self.name) if isinstance(form, Mapping) else None
        if not isinstance(posted, Mapping):
            posted = {}

        updates: Dict[str, Any] = {}
        for spec in self.fields:
            if spec.kind == CHECKBOX:
                updates[spec.path] = spec.validate(posted.get(spec.name, ""))
                continue
            if spec.name not in posted:
                continue
            try:
                updates[spec.path] = spec.validate(posted[spec.name])
            except InvalidSettingValueError as exc:
                logger.info("Rejected form value: %s", exc)
        return updates

    def errors(self, form: Mapping[str, Any]) -> List[InvalidSettingValueError]:
        """Validation failures for the non-checkbox fields present in *form*."""
        posted = form.get(self.name) if isinstance(form, Mapping) else None
        if not isinstance(posted, Mapping):
            return []
        found: List[InvalidSettingValueError] = []
        for spec in self.fields:
            if spec.kind == CHECKBOX or spec.name not in posted:
                continue
            try:
                spec.validate(posted[spec.name])
            except InvalidSettingValueError as exc:
                found.append(exc)
        return found


SECTIONS: Dict[str, SettingsSection] = {
    section.name: section
    for section in (
        SettingsSection(
            "debug",
            "Debug",
            (
                FieldSpec("debug.enabled"),
                FieldSpec("debug.log_level", SELECT, choices=LOG_LEVELS),
                FieldSpec("debug.log_to_file"),
                FieldSpec("debug.log_to_db"),
                FieldSpec("debug.max_log_files", NUMBER, 1, 100),
            ),
        ),
        SettingsSection(
            "performance",
            "Performance",
            (
                FieldSpec("performance.cache_blocks"),
                FieldSpec("performance.cache_duration", NUMBER, 60, 86400),
                FieldSpec("performance.minify_assets"),
                FieldSpec("performance.lazy_load"),
            ),
        ),
        SettingsSection(
            "security",
            "Security",
            (
                FieldSpec("security.rate_limit"),
                FieldSpec("security.max_requests", NUMBER, 10, 1000),
                FieldSpec("security.time_window", NUMBER, 60, 86400),
                FieldSpec("security.strict_validation"),
            ),
        ),
        SettingsSection(
            "features",
            "Features",
            (
                FieldSpec("features.blocks_enabled"),
                FieldSpec("features.rest_api_enabled"),
                FieldSpec("features.cli_enabled"),
                FieldSpec("features.admin_dashboard"),
            ),
        ),
    )
}


def get_section(name: str) -> SettingsSection:
    try:
        return SECTIONS[name]
    except KeyError:
        raise UnknownSettingError(name) from None


def apply_form(config: Config, tab: str, form: Mapping[str, Any]) -> bool:
    """Process *form* for *tab*, write the updates and save.

    Returns the result of :meth:`Config.save`.
    """
    section = get_section(tab)
    updates = section.process(form)
    config.update(updates)
    logger.info("Applied %d setting(s) from the %s tab", len(updates), section.title)
    return config.save()
