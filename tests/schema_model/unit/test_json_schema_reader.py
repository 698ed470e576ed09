"""JSON Schema and pydantic reading tests."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

import pytest
from pydantic import BaseModel, Field
from schema_cli_args.flattening import flatten
from schema_cli_args.flattening.wrapper_unwrapper import unwrap_field
from schema_cli_args.schema_model import (
    BaseKind,
    FieldNode,
    SchemaShapeError,
    Shape,
    load_shape_file,
    load_shape_text,
    read_json_schema,
    read_pydantic_model,
)


class Level(str, Enum):
    LOW = "low"
    HIGH = "high"


class Address(BaseModel):
    street: str
    city: str = "Berlin"


class Order(BaseModel):
    name: str = Field(description="Customer name")
    quantity: int = 1
    level: Level = Level.LOW
    tags: list[str] = Field(default_factory=list)
    address: Address
    note: str | None = None


def _document() -> dict:
    return {
        "type": "object",
        "required": ["name", "config"],
        "properties": {
            "name": {"type": "string", "description": "Name"},
            "config": {
                "type": "object",
                "required": ["timeout"],
                "properties": {
                    "timeout": {"type": "integer", "default": 30},
                    "verbose": {"type": "boolean"},
                },
            },
            "mode": {"enum": ["fast", "slow"]},
            "items": {"type": "array", "items": {"type": "string"}},
            "extra": {"type": "object"},
        },
    }


def test_reads_required_and_optional_fields() -> None:
    shape = read_json_schema(_document())

    assert list(shape.fields) == ["name", "config", "mode", "items", "extra"]
    assert unwrap_field(shape.fields["name"]).required is True
    assert unwrap_field(shape.fields["mode"]).required is False
    assert isinstance(unwrap_field(shape.fields["config"]).inner, Shape)


def test_flattened_json_schema_keeps_types_and_defaults() -> None:
    fields = {field.flat_key: field for field in flatten(read_json_schema(_document()))}

    assert list(fields) == ["name", "config-timeout", "config-verbose", "mode", "items", "extra"]
    assert fields["name"].info.description == "Name"
    assert fields["config-timeout"].info.base_type is BaseKind.NUMBER
    assert fields["config-timeout"].info.default == 30
    assert fields["config-verbose"].optional is True
    assert fields["mode"].info.enum_values == ("fast", "slow")
    assert fields["items"].info.base_type is BaseKind.ARRAY
    assert fields["extra"].info.base_type is BaseKind.OBJECT


def test_reads_pydantic_model_with_refs_and_nullable_fields() -> None:
    fields = {field.flat_key: field for field in flatten(read_pydantic_model(Order))}

    assert list(fields) == [
        "name",
        "quantity",
        "level",
        "tags",
        "address-street",
        "address-city",
        "note",
    ]
    assert fields["name"].info.description == "Customer name"
    assert fields["name"].optional is False
    assert fields["quantity"].info.default == 1
    assert fields["level"].info.enum_values == ("low", "high")
    assert fields["level"].info.default == "low"
    assert fields["address-city"].info.default == "Berlin"
    assert fields["address-street"].optional is False
    assert fields["note"].info.base_type is BaseKind.STRING
    assert fields["note"].info.default is None
    assert fields["note"].optional is True


def test_union_types_get_union_tag() -> None:
    shape = read_json_schema(
        {"type": "object", "properties": {"value": {"type": ["string", "number"]}}}
    )

    inner = unwrap_field(shape.fields["value"]).inner

    assert isinstance(inner, FieldNode)
    assert inner.tag == "union"


def test_recursive_reference_is_rejected() -> None:
    document = {
        "type": "object",
        "properties": {"root": {"$ref": "#/$defs/Node"}},
        "$defs": {
            "Node": {
                "type": "object",
                "properties": {"child": {"$ref": "#/$defs/Node"}},
            }
        },
    }

    with pytest.raises(SchemaShapeError, match="Recursive"):
        read_json_schema(document)


def test_missing_reference_is_rejected() -> None:
    document = {"type": "object", "properties": {"root": {"$ref": "#/$defs/Missing"}}}

    with pytest.raises(SchemaShapeError, match="not found"):
        read_json_schema(document)


def test_root_must_define_properties() -> None:
    with pytest.raises(SchemaShapeError):
        read_json_schema({"type": "string"})
    with pytest.raises(SchemaShapeError):
        read_json_schema(["not", "a", "mapping"])


def test_load_shape_text_rejects_invalid_json() -> None:
    with pytest.raises(SchemaShapeError, match="Invalid JSON schema"):
        load_shape_text("{not json")


def test_load_shape_file_reads_json_and_yaml(tmp_path: Path) -> None:
    json_path = tmp_path / "schema.json"
    json_path.write_text(json.dumps(_document()), encoding="utf-8")
    yaml_path = tmp_path / "schema.yaml"
    yaml_path.write_text(
        "type: object\nproperties:\n  name:\n    type: string\n", encoding="utf-8"
    )

    assert list(load_shape_file(json_path).fields) == list(_document()["properties"])
    assert list(load_shape_file(yaml_path).fields) == ["name"]


def test_load_shape_file_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SchemaShapeError, match="not found"):
        load_shape_file(tmp_path / "missing.json")


def test_enum_must_be_a_list() -> None:
    document = {"type": "object", "properties": {"mode": {"enum": "abc"}}}

    with pytest.raises(SchemaShapeError, match="'enum' must be a list"):
        read_json_schema(document)
