from __future__ import annotations

"""Pure helpers for nested configuration trees.

A configuration tree is a plain ``dict`` whose values are scalars or further
dicts. Paths use dot notation (``"debug.log_level"``). Nothing here performs
I/O or logging so the helpers can be shared by the store, the settings
sections and the CLI.
"""

import re
from copy import deepcopy
from typing import Any, Dict, List, Mapping, MutableMapping

__all__ = [
    "deep_merge",
    "get_value",
    "set_value",
    "split_path",
    "iter_leaf_paths",
    "cast_value",
]

_TRUE_STRINGS = frozenset({"true", "1", "on", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "off", "no"})

# ASCII decimal numbers with optional sign, fraction and exponent;
# surrounding whitespace is tolerated.
_NUMERIC_RE = re.compile(r"^\s*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?\s*$")


def split_path(key: str) -> List[str]:
    """Split a dot-notation path into its ordered segments."""
    return key.split(".")


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Return *base* extended by *overrides*.

    Where both sides hold a mapping for the same key the two are merged
    recursively; in every other case the override value replaces the base
    value wholesale, including a mapping replaced by a scalar and vice versa.
    Neither argument is mutated.
    """
    merged: Dict[str, Any] = deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


def get_value(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Walk *key* through *data*, returning *default* on the first miss."""
    value: Any = data
    for segment in split_path(key):
        if isinstance(value, Mapping) and segment in value:
            value = value[segment]
        else:
            return default
    return value


def set_value(data: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Assign *value* at *key*, creating intermediate mappings as needed.

    An intermediate segment holding a scalar is replaced by an empty mapping,
    so assignment always succeeds on a mapping root.
    """
    segments = split_path(key)
    current = data
    for segment in segments[:-1]:
        child = current.get(segment)
        if not isinstance(child, MutableMapping):
            child = {}
            current[segment] = child
        current = child
    current[segments[-1]] = value


def iter_leaf_paths(data: Mapping[str, Any], prefix: str = "") -> List[str]:
    """Return the dot paths of every non-mapping leaf in *data*, in order."""
    paths: List[str] = []
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping) and value:
            paths.extend(iter_leaf_paths(value, path))
        else:
            paths.append(path)
    return paths


def cast_value(value: str) -> Any:
    """Cast a raw environment string to bool, float, int or leave it as is.

    >>> cast_value("on"), cast_value("3.14"), cast_value("42"), cast_value("x")
    (True, 3.14, 42, 'x')
    """
    lowered = value.lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False

    if _NUMERIC_RE.match(value):
        if "." in value:
            return float(value)
        try:
            return int(value)
        except ValueError:
            # Exponent form without a decimal point, e.g. "1e3"
            number = float(value)
            try:
                return int(number)
            except OverflowError:
                # "1e400" overflows to infinity; keep it as a float
                return number

    return value
