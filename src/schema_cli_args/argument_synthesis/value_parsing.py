"""Per-type conversion of raw command line tokens."""

from __future__ import annotations

import re

from schema_cli_args.schema_model.shape_nodes import BaseKind

from .value_codec import ArrayHandling, parse_json, split_comma_list

_INTEGER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")
_TRUE_TOKENS = frozenset({"true", "1"})


def parse_number(raw: str) -> int | float:
    """Return an int for integral text, otherwise a float.

    Raises:
      ValueError: If the text is not a number.
    """
    if _INTEGER_PATTERN.match(raw):
        return int(raw)
    return float(raw)


def parse_boolean(raw: str) -> bool:
    """``true`` and ``1`` (any case) are true; every other token is false."""
    return raw.strip().lower() in _TRUE_TOKENS


def parse_value(
    raw: str,
    base_type: BaseKind,
    policy: ArrayHandling | str = ArrayHandling.REPEATED,
) -> object:
    """Convert one raw token according to the field's base type."""
    if base_type is BaseKind.NUMBER:
        return parse_number(raw)
    if base_type is BaseKind.BOOLEAN:
        return parse_boolean(raw)
    if base_type is BaseKind.ARRAY:
        if ArrayHandling(policy) is ArrayHandling.JSON:
            return parse_json(raw)
        return split_comma_list(raw)
    if base_type is BaseKind.OBJECT:
        return parse_json(raw)
    return raw
