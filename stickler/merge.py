"""
Shallow, ordered prop merging shared by every validator.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def merge(base: Mapping[str, Any] | None, *overlays: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Merge mappings left to right into a new dict.

    Every key present in an overlay replaces the earlier value, even when the
    overlay's value is falsy. Keys missing from an overlay are left alone.
    Nothing is merged recursively and no argument is modified.

    Usage:
        merge({"a": 1, "b": 2}, {"b": None})       # {"a": 1, "b": None}
        merge(construction_props, validation_props)
    """
    merged: dict[str, Any] = dict(base) if base else {}
    for overlay in overlays:
        if overlay:
            merged.update(overlay)
    return merged


def omit(mapping: Mapping[str, Any] | None, *keys: str) -> dict[str, Any]:
    """Copy of mapping without the given keys."""
    if not mapping:
        return {}
    return {k: v for k, v in mapping.items() if k not in keys}
