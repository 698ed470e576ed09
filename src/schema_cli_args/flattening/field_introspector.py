"""Classification of unwrapped fields into base types."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from schema_cli_args.schema_model.shape_nodes import BaseKind, FieldNode, SchemaNode, Shape

from .field_models import FieldInfo
from .wrapper_unwrapper import UnwrapResult, unwrap_field

TypeHandler = Callable[[SchemaNode], BaseKind | None]
"""Maps a node with a custom tag to a base kind, or ``None`` to fall through."""


def introspect_field(
    node: SchemaNode, type_handlers: Mapping[str, TypeHandler] | None = None
) -> FieldInfo:
    """Return the :class:`FieldInfo` for one field description."""
    return introspect_unwrapped(unwrap_field(node), type_handlers)


def introspect_unwrapped(
    unwrapped: UnwrapResult, type_handlers: Mapping[str, TypeHandler] | None = None
) -> FieldInfo:
    inner = unwrapped.inner
    base_type = resolve_base_kind(inner, type_handlers)
    enum_values = None
    if base_type is BaseKind.ENUM and isinstance(inner, FieldNode):
        enum_values = tuple(inner.enum_values)
    return FieldInfo(
        base_type=base_type,
        required=unwrapped.required,
        default=unwrapped.default,
        description=unwrapped.description,
        enum_values=enum_values,
    )


def introspect_shape(
    shape: Shape, type_handlers: Mapping[str, TypeHandler] | None = None
) -> list[FieldInfo]:
    """Introspect the direct fields of a shape, in declaration order."""
    return [introspect_field(node, type_handlers) for node in shape.fields.values()]


def resolve_base_kind(
    node: SchemaNode, type_handlers: Mapping[str, TypeHandler] | None = None
) -> BaseKind:
    """Map a node tag onto a base kind.

    Unrecognised tags resolve to ``STRING`` instead of raising.
    """
    handler = (type_handlers or {}).get(node.tag)
    if handler is not None:
        handled = handler(node)
        if handled is not None:
            return handled
    try:
        return BaseKind(node.tag)
    except ValueError:
        return BaseKind.STRING


def is_known_tag(
    node: SchemaNode, type_handlers: Mapping[str, TypeHandler] | None = None
) -> bool:
    if type_handlers and node.tag in type_handlers:
        return True
    return node.tag in {kind.value for kind in BaseKind}


def array_element(node: SchemaNode) -> SchemaNode | None:
    """Return the element description of an array node, if it declares one."""
    inner = unwrap_field(node).inner
    if isinstance(inner, FieldNode) and inner.tag == BaseKind.ARRAY.value:
        return inner.element
    return None


def element_is_shape(
    node: SchemaNode, type_handlers: Mapping[str, TypeHandler] | None = None
) -> bool:
    """Return True when the array's element type is an object (nested shape or blob)."""
    element = array_element(node)
    if element is None:
        return False
    return resolve_base_kind(unwrap_field(element).inner, type_handlers) is BaseKind.OBJECT
