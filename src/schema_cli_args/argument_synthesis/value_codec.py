"""Single-token encodings for array and object leaves."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from schema_cli_args.schema_model.shape_nodes import BaseKind

ParseFunction = Callable[[str], object]


class ArrayHandling(str, Enum):
    """How array leaves are accepted on the command line."""

    JSON = "json"
    REPEATED = "repeated"


@dataclass(frozen=True)
class CodecDecision:
    """Parse function for one leaf plus whether its flag may be repeated."""

    uses_multi_value_repeat: bool
    parse: ParseFunction


def split_comma_list(raw: str) -> list[str]:
    """Split on commas and trim whitespace around every item."""
    return [item.strip() for item in raw.split(",")]


def parse_json(raw: str) -> object:
    """Decode a JSON token. Decoder errors propagate unchanged."""
    return json.loads(raw)


def decide_codec(
    base_type: BaseKind,
    element_is_object: bool,
    policy: ArrayHandling | str = ArrayHandling.REPEATED,
) -> CodecDecision:
    """Choose the encoding for a leaf of ``base_type`` under ``policy``.

    Plain object leaves are always one JSON value. Array leaves follow the
    policy; with ``repeated``, arrays of objects take one JSON value per
    occurrence of the flag. Every other leaf is comma-split.
    """
    resolved = ArrayHandling(policy)
    if base_type is BaseKind.OBJECT:
        return CodecDecision(uses_multi_value_repeat=False, parse=parse_json)
    if base_type is not BaseKind.ARRAY:
        return CodecDecision(uses_multi_value_repeat=False, parse=split_comma_list)
    if resolved is ArrayHandling.JSON:
        return CodecDecision(uses_multi_value_repeat=False, parse=parse_json)
    if element_is_object:
        return CodecDecision(uses_multi_value_repeat=True, parse=parse_json)
    return CodecDecision(uses_multi_value_repeat=False, parse=split_comma_list)
