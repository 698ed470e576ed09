"""Schema flattening exports."""

from .collision_report import FlagCollisionError, check_collisions, format_collisions
from .field_introspector import (
    TypeHandler,
    array_element,
    element_is_shape,
    introspect_field,
    introspect_shape,
    is_known_tag,
    resolve_base_kind,
)
from .field_models import FieldInfo, FlattenContext, FlattenedField, FlattenOptions
from .shape_flattener import flatten, flatten_with_context
from .wrapper_unwrapper import MAX_UNWRAP_DEPTH, UnwrapResult, unwrap_field, unwrap_node

__all__ = [
    "FieldInfo",
    "FlattenContext",
    "FlattenedField",
    "FlattenOptions",
    "FlagCollisionError",
    "MAX_UNWRAP_DEPTH",
    "TypeHandler",
    "UnwrapResult",
    "array_element",
    "check_collisions",
    "element_is_shape",
    "flatten",
    "flatten_with_context",
    "format_collisions",
    "introspect_field",
    "introspect_shape",
    "is_known_tag",
    "resolve_base_kind",
    "unwrap_field",
    "unwrap_node",
]
