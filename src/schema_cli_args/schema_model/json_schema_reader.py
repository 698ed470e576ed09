"""JSON Schema and pydantic model reading into shape descriptions."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from .shape_nodes import BaseKind, FieldNode, SchemaNode, Shape

UNION_TAG = "union"


class SchemaShapeError(Exception):
    """Raised when a schema document cannot be read into a shape."""


def load_shape_file(path: Path | str) -> Shape:
    """Read a JSON Schema document stored as JSON or YAML."""
    schema_path = Path(path)
    if not schema_path.exists():
        raise SchemaShapeError(f"Schema file not found: {schema_path}")
    text = schema_path.read_text(encoding="utf-8")
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaShapeError(f"Invalid schema file {schema_path}: {exc}") from exc
    return read_json_schema(document)


def load_shape_text(text: str) -> Shape:
    """Read a JSON Schema document from JSON text."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaShapeError(f"Invalid JSON schema: {exc}") from exc
    return read_json_schema(document)


def read_pydantic_model(model: type[BaseModel]) -> Shape:
    """Describe a pydantic model class as a shape."""
    return read_json_schema(model.model_json_schema())


def read_json_schema(document: Any) -> Shape:
    """Convert a JSON Schema object document into a shape."""
    if not isinstance(document, Mapping):
        raise SchemaShapeError("JSON schema root must be an object.")
    reader = _JsonSchemaReader(_collect_definitions(document))
    root = reader.resolve(document, resolving=())
    if not isinstance(root.get("properties"), Mapping):
        raise SchemaShapeError("JSON schema root must define object properties.")
    return reader.read_object(root, resolving=())


def _collect_definitions(document: Mapping[str, Any]) -> dict[str, Any]:
    definitions: dict[str, Any] = {}
    for key in ("definitions", "$defs"):
        section = document.get(key)
        if isinstance(section, Mapping):
            definitions.update(section)
    return definitions


class _JsonSchemaReader:
    def __init__(self, definitions: Mapping[str, Any]) -> None:
        self._definitions = definitions

    def read_object(self, node: Mapping[str, Any], *, resolving: tuple[str, ...]) -> Shape:
        properties = node.get("properties") or {}
        required = node.get("required") or ()
        if not isinstance(required, Sequence) or isinstance(required, str):
            raise SchemaShapeError("JSON schema 'required' must be a list of names.")
        fields: dict[str, SchemaNode] = {}
        for name, child in properties.items():
            field_node = self.read_property(child, resolving=resolving)
            if name not in required:
                field_node = field_node.optional()
            fields[str(name)] = field_node
        return Shape(fields=fields, description=_description(node))

    def read_property(self, raw: Any, *, resolving: tuple[str, ...]) -> SchemaNode:
        if not isinstance(raw, Mapping):
            raise SchemaShapeError("JSON schema property definitions must be objects.")
        node, next_resolving = self._resolve_with_chain(raw, resolving)
        node, nullable = _strip_null_member(node)
        if nullable:
            node, next_resolving = self._resolve_with_chain(node, next_resolving)
        field_node = self._read_base(node, resolving=next_resolving)
        if nullable:
            field_node = field_node.nullable()
        if "default" in node:
            field_node = field_node.with_default(node["default"])
        return field_node

    def resolve(self, node: Mapping[str, Any], *, resolving: tuple[str, ...]) -> Mapping[str, Any]:
        resolved, _ = self._resolve_with_chain(node, resolving)
        return resolved

    def _resolve_with_chain(
        self, node: Mapping[str, Any], resolving: tuple[str, ...]
    ) -> tuple[Mapping[str, Any], tuple[str, ...]]:
        current = node
        chain = resolving
        while "$ref" in current or _single_all_of(current) is not None:
            wrapped = _single_all_of(current)
            if wrapped is not None:
                merged = {key: value for key, value in current.items() if key != "allOf"}
                merged.update(wrapped)
                current = merged
                continue
            ref = current["$ref"]
            if not isinstance(ref, str):
                raise SchemaShapeError("JSON schema $ref must be a string.")
            if ref in chain:
                raise SchemaShapeError(f"Recursive schema reference is not supported: {ref}")
            chain = (*chain, ref)
            siblings = {key: value for key, value in current.items() if key != "$ref"}
            merged = dict(self._lookup(ref))
            merged.update(siblings)
            current = merged
        return current, chain

    def _lookup(self, ref: str) -> Mapping[str, Any]:
        parts = ref.removeprefix("#/").split("/")
        if not ref.startswith("#/") or len(parts) != 2 or parts[0] not in ("$defs", "definitions"):
            raise SchemaShapeError(f"Unsupported $ref: {ref}")
        target = self._definitions.get(parts[1])
        if not isinstance(target, Mapping):
            raise SchemaShapeError(f"$ref not found: {ref}")
        return target

    def _read_base(self, node: Mapping[str, Any], *, resolving: tuple[str, ...]) -> SchemaNode:
        description = _description(node)
        if "enum" in node:
            if not isinstance(node["enum"], Sequence) or isinstance(node["enum"], str):
                raise SchemaShapeError("JSON schema 'enum' must be a list of values.")
            values = tuple(str(value) for value in node["enum"] if value is not None)
            return FieldNode(kind=BaseKind.ENUM.value, enum_values=values, description=description)
        if any(key in node for key in ("anyOf", "oneOf", "allOf")):
            return FieldNode(kind=UNION_TAG, description=description)

        node_types = _json_schema_types(node)
        if len(node_types) > 1:
            return FieldNode(kind=UNION_TAG, description=description)
        node_type = node_types[0] if node_types else _implied_type(node)

        if node_type == "object":
            if isinstance(node.get("properties"), Mapping):
                return self.read_object(node, resolving=resolving)
            return FieldNode(kind=BaseKind.OBJECT.value, description=description)
        if node_type == "array":
            items = node.get("items")
            element = (
                self.read_property(items, resolving=resolving)
                if isinstance(items, Mapping)
                else None
            )
            return FieldNode(kind=BaseKind.ARRAY.value, element=element, description=description)
        if node_type in ("number", "integer"):
            return FieldNode(kind=BaseKind.NUMBER.value, description=description)
        if node_type in ("string", "boolean"):
            return FieldNode(kind=node_type, description=description)
        return FieldNode(kind=node_type or "unknown", description=description)


def _strip_null_member(node: Mapping[str, Any]) -> tuple[Mapping[str, Any], bool]:
    node_type = node.get("type")
    if isinstance(node_type, list) and "null" in node_type:
        remaining = [value for value in node_type if value != "null"]
        stripped = dict(node)
        stripped["type"] = remaining[0] if len(remaining) == 1 else remaining
        return stripped, True
    for key in ("anyOf", "oneOf"):
        members = node.get(key)
        if not isinstance(members, list):
            continue
        non_null = [
            member
            for member in members
            if not (isinstance(member, Mapping) and member.get("type") == "null")
        ]
        if len(non_null) == len(members) or len(non_null) != 1:
            continue
        merged = {k: v for k, v in node.items() if k != key}
        merged.update(non_null[0])
        return merged, True
    return node, False


def _single_all_of(node: Mapping[str, Any]) -> Mapping[str, Any] | None:
    members = node.get("allOf")
    if isinstance(members, list) and len(members) == 1 and isinstance(members[0], Mapping):
        return members[0]
    return None


def _json_schema_types(node: Mapping[str, Any]) -> tuple[str, ...]:
    node_type = node.get("type")
    if isinstance(node_type, list):
        return tuple(value for value in node_type if isinstance(value, str))
    if isinstance(node_type, str):
        return (node_type,)
    return ()


def _implied_type(node: Mapping[str, Any]) -> str:
    if "properties" in node:
        return "object"
    if "items" in node:
        return "array"
    return ""


def _description(node: Mapping[str, Any]) -> str | None:
    description = node.get("description")
    return description if isinstance(description, str) else None

