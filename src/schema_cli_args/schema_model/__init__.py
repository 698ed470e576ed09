"""Schema description model exports."""

from .builders import (
    array_field,
    boolean_field,
    custom_field,
    enum_field,
    number_field,
    object_shape,
    string_field,
)
from .json_schema_reader import (
    SchemaShapeError,
    load_shape_file,
    load_shape_text,
    read_json_schema,
    read_pydantic_model,
)
from .shape_nodes import UNSET, BaseKind, FieldNode, SchemaNode, Shape, Wrapper, WrapperKind

__all__ = [
    "UNSET",
    "BaseKind",
    "FieldNode",
    "SchemaNode",
    "Shape",
    "Wrapper",
    "WrapperKind",
    "SchemaShapeError",
    "array_field",
    "boolean_field",
    "custom_field",
    "enum_field",
    "number_field",
    "object_shape",
    "string_field",
    "load_shape_file",
    "load_shape_text",
    "read_json_schema",
    "read_pydantic_model",
]
