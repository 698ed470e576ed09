"""Shorthand constructors for schema description nodes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .shape_nodes import BaseKind, FieldNode, SchemaNode, Shape


def string_field(description: str | None = None) -> FieldNode:
    return FieldNode(kind=BaseKind.STRING.value, description=description)


def number_field(description: str | None = None) -> FieldNode:
    return FieldNode(kind=BaseKind.NUMBER.value, description=description)


def boolean_field(description: str | None = None) -> FieldNode:
    return FieldNode(kind=BaseKind.BOOLEAN.value, description=description)


def enum_field(values: Iterable[str], description: str | None = None) -> FieldNode:
    """Build an enumeration field; values keep their declaration order."""
    return FieldNode(
        kind=BaseKind.ENUM.value,
        enum_values=tuple(str(value) for value in values),
        description=description,
    )


def array_field(element: SchemaNode, description: str | None = None) -> FieldNode:
    return FieldNode(kind=BaseKind.ARRAY.value, element=element, description=description)


def object_shape(
    fields: Mapping[str, SchemaNode] | None = None,
    description: str | None = None,
    **named_fields: SchemaNode,
) -> Shape:
    """Build a nested shape from a mapping and/or keyword fields.

    Use the mapping form for field names that are not Python identifiers,
    e.g. ``object_shape({"foo-bar": string_field()})``.
    """
    merged: dict[str, SchemaNode] = dict(fields or {})
    merged.update(named_fields)
    return Shape(fields=merged, description=description)


def custom_field(tag: str, description: str | None = None) -> FieldNode:
    """Build a field carrying a tag outside the built-in base kinds."""
    return FieldNode(kind=tag, description=description)
