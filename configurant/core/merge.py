"""Deep merging of configuration mappings."""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Dict, Optional

from .types import ConfigDict


def deep_merge(*objects: Optional[Mapping[str, Any]]) -> ConfigDict:
    """Merge mappings left to right into a new dictionary.

    Later objects override earlier ones. When both sides of a key hold
    mappings they are merged recursively; any other value (scalars, lists,
    ``None``) replaces the earlier value wholesale.

    The inputs are never modified and the result shares no containers with
    them.

    Args:
        *objects: Mappings to merge, lowest precedence first. ``None`` entries
            are skipped.

    Returns:
        The merged configuration. No arguments yields an empty dict.
    """
    merged: ConfigDict = {}
    for obj in objects:
        if obj is None:
            continue
        _merge_into(merged, obj)
    return merged


def _merge_into(target: Dict[str, Any], incoming: Mapping[str, Any]) -> None:
    for key, value in incoming.items():
        current = target.get(key)
        if isinstance(value, Mapping):
            if not isinstance(current, dict):
                current = {}
                target[key] = current
            _merge_into(current, value)
        else:
            # last source wins
            target[key] = deepcopy(value)
