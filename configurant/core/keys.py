"""Expansion of dotted keys such as ``db.host`` into nested mappings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .merge import deep_merge
from .types import ConfigDict

SEPARATOR = "."


def is_namespaced(key: str) -> bool:
    """Return True if ``key`` contains a separator after its first character."""
    return key.find(SEPARATOR) > 0


def expand_key(key: str, value: Any) -> ConfigDict:
    """Build the nested mapping described by a dotted key.

    >>> expand_key("a.b.c", 5)
    {'a': {'b': {'c': 5}}}
    """
    parts = key.split(SEPARATOR)
    nested: ConfigDict = {parts[-1]: value}
    for part in reversed(parts[:-1]):
        nested = {part: nested}
    return nested


def expand_namespaced(flat: Mapping[str, Any]) -> ConfigDict:
    """Replace every namespaced key of ``flat`` with its nested form.

    Expansions are merged onto the result in iteration order, so a nested
    value overrides a plain key of the same name. Keys without a separator
    keep their value untouched.
    """
    result: ConfigDict = {k: v for k, v in flat.items() if not is_namespaced(k)}
    for key, value in flat.items():
        if is_namespaced(key):
            result = deep_merge(result, expand_key(key, value))
    return result
