"""Schema description variants."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum


class BaseKind(str, Enum):
    """Closed set of base types understood by introspection."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    ENUM = "enum"


class WrapperKind(str, Enum):
    """Modifier layers that change requiredness or defaults but not the base type."""

    OPTIONAL = "optional"
    DEFAULT = "default"
    NULLABLE = "nullable"
    CATCH = "catch"


class _Unset(Enum):
    TOKEN = "unset"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.TOKEN
"""Marker for "no value supplied" where ``None`` is itself a legal value."""


@dataclass(frozen=True)
class SchemaNode:
    """Common behaviour of every schema description node."""

    description: str | None = field(default=None, kw_only=True)

    @property
    def tag(self) -> str:
        raise NotImplementedError

    def optional(self) -> Wrapper:
        return Wrapper(wrapper=WrapperKind.OPTIONAL, inner=self)

    def nullable(self) -> Wrapper:
        return Wrapper(wrapper=WrapperKind.NULLABLE, inner=self)

    def catch(self, fallback: object = None) -> Wrapper:
        return Wrapper(wrapper=WrapperKind.CATCH, inner=self, default=fallback)

    def with_default(
        self,
        value: object = UNSET,
        *,
        factory: Callable[[], object] | None = None,
    ) -> Wrapper:
        """Wrap the node with a default value or a default-producing callable."""
        if value is UNSET and factory is None:
            raise ValueError("with_default requires a value or a factory.")
        return Wrapper(
            wrapper=WrapperKind.DEFAULT,
            inner=self,
            default=value,
            default_factory=factory,
        )

    def describe(self, text: str) -> SchemaNode:
        return replace(self, description=text)


@dataclass(frozen=True)
class FieldNode(SchemaNode):
    """A primitive, enumeration, array or unstructured object field.

    ``kind`` is a free-form tag. Tags outside :class:`BaseKind` are accepted and
    treated as strings during introspection.
    """

    kind: str
    enum_values: tuple[str, ...] = ()
    element: SchemaNode | None = None

    @property
    def tag(self) -> str:
        return str(self.kind.value) if isinstance(self.kind, Enum) else self.kind


@dataclass(frozen=True, eq=False)
class Shape(SchemaNode):
    """A nested structure of named fields, in declaration order."""

    fields: Mapping[str, SchemaNode] = field(default_factory=dict)

    @property
    def tag(self) -> str:
        return BaseKind.OBJECT.value


@dataclass(frozen=True, eq=False)
class Wrapper(SchemaNode):
    """One modifier layer around an inner node."""

    wrapper: WrapperKind
    inner: SchemaNode
    default: object = UNSET
    default_factory: Callable[[], object] | None = None

    @property
    def tag(self) -> str:
        return self.wrapper.value

    def resolve_default(self) -> object:
        """Return the stored default, calling the factory when one is set.

        Exceptions raised by the factory propagate to the caller.
        """
        if self.default_factory is not None:
            return self.default_factory()
        return self.default
