"""Recursive mapping overlay used for special-args merging."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Return *base* overlaid with *overlay*, recursing into nested mappings.

    Keys of *overlay* replace same-named keys of *base*. When both values are
    mappings they are merged recursively; any other value replaces wholesale.
    Nested mappings of the result are fresh copies, so neither argument is
    mutated nor shares a mapping with the result.
    """
    merged: dict[str, Any] = {key: _copy_mapping(value) for key, value in base.items()}
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = _copy_mapping(value)
    return merged


def _copy_mapping(value: Any) -> Any:
    if isinstance(value, Mapping):
        return deep_merge({}, value)
    return value
