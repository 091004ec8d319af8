"""Helpers for the key/value fields attached to error records."""

from collections.abc import Mapping
from typing import Any, Optional

from diagerrors.types import Fields


def freeze_fields(fields: Optional[Mapping[str, Any]]) -> Fields:
    """
    Copy a caller-supplied mapping into a fresh dict.

    Records keep their own copy so a caller mutating its dict afterwards does
    not change an error value that has already been returned.
    """
    if fields is None:
        return {}
    if not isinstance(fields, Mapping):
        raise TypeError(f"fields must be a mapping, got {type(fields).__name__}")
    return {str(key): value for key, value in fields.items()}


def merge_fields(*layers: Optional[Mapping[str, Any]]) -> Fields:
    """Merge mappings left to right; later layers win per key."""
    merged: Fields = {}
    for layer in layers:
        merged.update(freeze_fields(layer))
    return merged


__all__ = ["freeze_fields", "merge_fields"]
