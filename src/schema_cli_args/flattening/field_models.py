"""Flattening domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from schema_cli_args.schema_model.shape_nodes import UNSET, BaseKind, SchemaNode


@dataclass(frozen=True)
class FieldInfo:
    """Introspected view of one field with every wrapper layer stripped."""

    base_type: BaseKind
    required: bool
    default: object = UNSET
    description: str | None = None
    enum_values: tuple[str, ...] | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not UNSET


@dataclass(frozen=True)
class FlattenedField:
    """One leaf produced by a flatten pass.

    ``optional`` already includes the optionality of every ancestor shape.
    ``node`` is the unwrapped schema node the leaf was produced from.
    """

    flat_key: str
    info: FieldInfo
    depth: int
    dot_path: str
    optional: bool
    node: SchemaNode | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class FlattenOptions:
    """Options controlling flat key naming and nesting depth."""

    separator: str = "-"
    max_depth: int = 3
    prefix: str = ""

    def __post_init__(self) -> None:
        if not self.separator:
            raise ValueError("separator must not be empty.")
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ValueError("max_depth must be an integer.")
        if self.max_depth < 0:
            raise ValueError("max_depth must not be negative.")


@dataclass(frozen=True)
class FlattenContext:
    """Aggregate result of one flatten pass."""

    fields: tuple[FlattenedField, ...]
    collisions: Mapping[str, tuple[str, ...]]
    has_nested: bool
    max_depth: int
    truncated_paths: tuple[str, ...] = ()
