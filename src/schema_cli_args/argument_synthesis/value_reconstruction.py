"""Conversion between flat key/value maps and nested value trees."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def reconstruct(flat_values: Mapping[str, Any], separator: str = "-") -> dict[str, Any]:
    """Rebuild a nested tree by splitting every key on ``separator``.

    Keys are applied in order and later keys win. A path segment that holds a
    mapping is merged into; any other value in the way is replaced by a new
    mapping. Values are assigned as-is, including ``None`` and other falsy
    values, and the input is never mutated.

    A field name that itself contains ``separator`` cannot be told apart from a
    nested path; it is always treated as nested.
    """
    if not separator:
        raise ValueError("separator must not be empty.")
    result: dict[str, Any] = {}
    owned: set[int] = {id(result)}

    for flat_key, value in flat_values.items():
        *parents, leaf = flat_key.split(separator)
        target = result
        for segment in parents:
            existing = target.get(segment)
            if isinstance(existing, dict) and id(existing) in owned:
                target = existing
                continue
            container: dict[str, Any] = dict(existing) if isinstance(existing, Mapping) else {}
            owned.add(id(container))
            target[segment] = container
            target = container
        target[leaf] = value

    return result


def flatten_values(
    tree: Mapping[str, Any], separator: str = "-", prefix: str = ""
) -> dict[str, Any]:
    """Flatten a nested tree into flat keys joined by ``separator``.

    Empty mappings are kept as leaf values so that :func:`reconstruct` returns
    them unchanged.
    """
    flat: dict[str, Any] = {}
    for key, value in tree.items():
        flat_key = f"{prefix}{separator}{key}" if prefix else str(key)
        if isinstance(value, Mapping) and value:
            flat.update(flatten_values(value, separator, flat_key))
        else:
            flat[flat_key] = value
    return flat
