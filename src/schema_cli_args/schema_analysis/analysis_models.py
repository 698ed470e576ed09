"""Schema analysis entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from schema_cli_args.flattening.field_models import FieldInfo, FlattenedField, FlattenOptions


class WarningCode(str, Enum):
    """Non-fatal analysis findings."""

    COLLISION = "collision"
    MAX_DEPTH = "max-depth"
    UNSUPPORTED_TYPE = "unsupported-type"


class ErrorCode(str, Enum):
    """Findings that make an analysis invalid."""

    INVALID_SCHEMA = "invalid-schema"
    CIRCULAR_DEPENDENCY = "circular-dependency"


@dataclass(frozen=True)
class SchemaWarning:
    code: WarningCode
    message: str
    path: str


@dataclass(frozen=True)
class SchemaIssue:
    code: ErrorCode
    message: str
    path: str


@dataclass(frozen=True)
class AnalyzeOptions(FlattenOptions):
    """Flatten options plus strict collision handling."""

    strict: bool = False


@dataclass(frozen=True)
class RequiredFieldsResult:
    is_valid: bool
    required: tuple[str, ...]
    missing: tuple[str, ...]


@dataclass(frozen=True)
class SchemaAnalysis:  # pylint: disable=too-many-instance-attributes
    """Combined flatten, collision and requiredness result for one schema."""

    fields: tuple[FieldInfo, ...]
    flattened: tuple[FlattenedField, ...]
    required: tuple[str, ...]
    has_nested: bool
    max_depth: int
    collisions: Mapping[str, tuple[str, ...]]
    is_valid: bool
    warnings: tuple[SchemaWarning, ...]
    errors: tuple[SchemaIssue, ...]
