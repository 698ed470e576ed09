"""Generated argument entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from schema_cli_args.schema_analysis.analysis_models import AnalyzeOptions
from schema_cli_args.schema_model.shape_nodes import UNSET

from .value_codec import ArrayHandling, ParseFunction


class ArgumentType(str, Enum):
    """Type tags understood by the consuming command line layer."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    CUSTOM = "custom"


class ArgumentOverrideError(Exception):
    """Raised when caller overrides do not fit the generated argument table."""


@dataclass(frozen=True)
class GeneratedArgument:  # pylint: disable=too-many-instance-attributes
    """One command line argument derived from a flattened field.

    ``required`` is either ``True`` or ``None``; it is never ``False``.
    """

    type_tag: str
    description: str | None = None
    short: str | None = None
    required: Literal[True] | None = None
    default: object = UNSET
    parse: ParseFunction | None = field(default=None, compare=False)
    multiple: bool = False
    choices: tuple[str, ...] | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not UNSET


_OVERRIDE_KEYS = frozenset({"type", "description", "short", "required", "default", "parse"})


@dataclass(frozen=True)
class ArgumentOverride:
    """Caller-supplied replacements for derived argument attributes."""

    type_tag: str | None = None
    description: str | None = None
    short: str | None = None
    required: bool | None = None
    default: object = UNSET
    parse: ParseFunction | None = field(default=None, compare=False)

    @classmethod
    def from_mapping(cls, flat_key: str, values: Mapping[str, Any]) -> ArgumentOverride:
        """Build an override from a plain mapping such as a parsed config section."""
        unknown = sorted(set(values) - _OVERRIDE_KEYS)
        if unknown:
            raise ArgumentOverrideError(
                f"Override for '{flat_key}' has unknown attributes: {', '.join(unknown)}"
            )
        parse = values.get("parse")
        if parse is not None and not callable(parse):
            raise ArgumentOverrideError(f"Override parse for '{flat_key}' must be callable.")
        return cls(
            type_tag=values.get("type"),
            description=values.get("description"),
            short=values.get("short"),
            required=values.get("required"),
            default=values.get("default", UNSET),
            parse=parse,
        )


@dataclass(frozen=True)
class SynthesisOptions(AnalyzeOptions):
    """Analysis options plus the array encoding policy.

    Collisions are fatal by default when synthesising arguments.
    """

    strict: bool = True
    array_handling: ArrayHandling = ArrayHandling.REPEATED

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "array_handling", ArrayHandling(self.array_handling))

    def analyze_options(self) -> AnalyzeOptions:
        return AnalyzeOptions(
            separator=self.separator,
            max_depth=self.max_depth,
            prefix=self.prefix,
            strict=self.strict,
        )
