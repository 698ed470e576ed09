"""Argument synthesis exports."""

from .argument_builder import build_argument, synthesize_arguments
from .argument_models import (
    ArgumentOverride,
    ArgumentOverrideError,
    ArgumentType,
    GeneratedArgument,
    SynthesisOptions,
)
from .value_codec import (
    ArrayHandling,
    CodecDecision,
    ParseFunction,
    decide_codec,
    parse_json,
    split_comma_list,
)
from .value_parsing import parse_boolean, parse_number, parse_value
from .value_reconstruction import flatten_values, reconstruct

__all__ = [
    "ArgumentOverride",
    "ArgumentOverrideError",
    "ArgumentType",
    "ArrayHandling",
    "CodecDecision",
    "GeneratedArgument",
    "ParseFunction",
    "SynthesisOptions",
    "build_argument",
    "decide_codec",
    "flatten_values",
    "parse_boolean",
    "parse_json",
    "parse_number",
    "parse_value",
    "reconstruct",
    "split_comma_list",
    "synthesize_arguments",
]
