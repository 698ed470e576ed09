"""Click command generation tests."""

from __future__ import annotations

import json
from typing import Any

import click
import pytest
from click.testing import CliRunner
from pydantic import BaseModel
from schema_cli_args.configuration import GenerationSettings
from schema_cli_args.flattening import FlagCollisionError
from schema_cli_args.schema_model import (
    array_field,
    boolean_field,
    enum_field,
    number_field,
    object_shape,
    string_field,
)
from schema_cli_args.tool_commands import (
    ToolDefinition,
    ToolRegistry,
    build_tool_command,
    build_tool_group,
)


def _order_shape():
    return object_shape(
        name=string_field("Customer name"),
        level=enum_field(["low", "high"]).with_default("low"),
        verbose=boolean_field().optional(),
        config=object_shape(timeout=number_field(), retries=number_field().optional()),
        tags=array_field(string_field()).optional(),
        items=array_field(object_shape(id=number_field())).optional(),
    )


def _recording_tool(received: list[dict[str, Any]], **kwargs: Any) -> ToolDefinition:
    def handler(payload: dict[str, Any]) -> dict[str, Any]:
        received.append(payload)
        return payload

    return ToolDefinition(
        name=kwargs.pop("name", "order"),
        description="Create an order.",
        input_shape=kwargs.pop("input_shape", _order_shape()),
        handler=handler,
        **kwargs,
    )


def test_flags_are_reconstructed_into_nested_payload() -> None:
    received: list[dict[str, Any]] = []
    command = build_tool_command(_recording_tool(received))

    result = CliRunner().invoke(
        command,
        [
            "--name",
            "Ada",
            "--config-timeout",
            "30",
            "--verbose",
            "--tags",
            "a, b",
            "--items",
            '{"id": 1}',
            "--items",
            '{"id": 2}',
        ],
    )

    assert result.exit_code == 0, result.output
    assert received == [
        {
            "name": "Ada",
            "level": "low",
            "verbose": True,
            "config": {"timeout": 30},
            "tags": ["a", "b"],
            "items": [{"id": 1}, {"id": 2}],
        }
    ]
    assert json.loads(result.output) == received[0]


def test_missing_required_flag_is_a_usage_error() -> None:
    command = build_tool_command(_recording_tool([]))

    result = CliRunner().invoke(command, ["--name", "Ada"])

    assert result.exit_code == 2
    assert "--config-timeout" in result.output


def test_enum_choices_are_enforced() -> None:
    command = build_tool_command(_recording_tool([]))

    result = CliRunner().invoke(
        command, ["--name", "Ada", "--config-timeout", "1", "--level", "medium"]
    )

    assert result.exit_code == 2
    assert "medium" in result.output


def test_invalid_json_value_is_a_usage_error() -> None:
    command = build_tool_command(_recording_tool([]))

    result = CliRunner().invoke(
        command, ["--name", "Ada", "--config-timeout", "1", "--items", "{broken"]
    )

    assert result.exit_code == 2
    assert "Invalid value" in result.output


def test_invalid_number_is_a_usage_error() -> None:
    command = build_tool_command(_recording_tool([]))

    result = CliRunner().invoke(command, ["--name", "Ada", "--config-timeout", "soon"])

    assert result.exit_code == 2
    assert "soon" in result.output


def test_overrides_and_separator_shape_the_options() -> None:
    received: list[dict[str, Any]] = []
    tool = _recording_tool(
        received,
        cli_overrides={"name": {"short": "n"}, "config_retries": {"default": 3}},
        cli_options=GenerationSettings(separator="_"),
    )
    command = build_tool_command(tool)

    result = CliRunner().invoke(command, ["-n", "Ada", "--config_timeout", "5"])

    assert result.exit_code == 0, result.output
    assert received[0]["config"] == {"timeout": 5, "retries": 3}


def test_no_flag_sets_boolean_false() -> None:
    received: list[dict[str, Any]] = []
    command = build_tool_command(_recording_tool(received))

    result = CliRunner().invoke(
        command, ["--name", "Ada", "--config-timeout", "1", "--no-verbose"]
    )

    assert result.exit_code == 0, result.output
    assert received[0]["verbose"] is False


def test_input_model_validates_payload() -> None:
    class Greeting(BaseModel):
        name: str
        times: int = 1

    received: list[dict[str, Any]] = []
    tool = _recording_tool(
        received,
        input_shape=object_shape(name=string_field(), times=string_field().optional()),
        input_model=Greeting,
    )
    command = build_tool_command(tool)

    ok = CliRunner().invoke(command, ["--name", "Ada", "--times", "2"])
    bad = CliRunner().invoke(command, ["--name", "Ada", "--times", "often"])

    assert ok.exit_code == 0, ok.output
    assert received == [{"name": "Ada", "times": 2}]
    assert bad.exit_code == 2
    assert "Invalid input for 'order'" in bad.output


def test_string_results_are_echoed_verbatim() -> None:
    tool = ToolDefinition(
        name="greet",
        description="Say hello.",
        input_shape=object_shape(name=string_field()),
        handler=lambda payload: f"hello {payload['name']}",
    )

    result = CliRunner().invoke(build_tool_command(tool), ["--name", "Ada"])

    assert result.output == "hello Ada\n"


def test_strict_collisions_prevent_command_generation() -> None:
    tool = _recording_tool(
        [],
        input_shape=object_shape(
            {"foo": object_shape(bar=string_field()), "foo-bar": number_field()}
        ),
    )

    with pytest.raises(FlagCollisionError):
        build_tool_command(tool)


def test_group_uses_prefixed_command_names() -> None:
    registry = ToolRegistry()
    registry.register(_recording_tool([], name="create"))
    registry.register(_recording_tool([], name="update"))

    group = build_tool_group(registry, prefix="orders")

    assert isinstance(group, click.Group)
    assert sorted(group.commands) == ["orders:create", "orders:update"]
    result = CliRunner().invoke(group, ["orders:create", "--help"])
    assert result.exit_code == 0
    assert "--config-timeout" in result.output
    assert "Customer name" in result.output


def test_repeated_primitive_array_is_one_comma_separated_flag() -> None:
    received: list[dict[str, Any]] = []
    command = build_tool_command(_recording_tool(received))

    tags_option = next(param for param in command.params if "--tags" in param.opts)
    items_option = next(param for param in command.params if "--items" in param.opts)
    result = CliRunner().invoke(
        command, ["--name", "Ada", "--config-timeout", "1", "--tags", "a,b,c"]
    )

    assert tags_option.multiple is False
    assert items_option.multiple is True
    assert result.exit_code == 0, result.output
    assert received[0]["tags"] == ["a", "b", "c"]


class _ParseFailure(Exception):
    pass


def _failing_parse(value: str) -> str:
    raise _ParseFailure(value)


def test_override_parse_errors_propagate_unchanged() -> None:
    tool = _recording_tool([], cli_overrides={"name": {"parse": _failing_parse}})
    command = build_tool_command(tool)

    result = CliRunner().invoke(command, ["--name", "Ada", "--config-timeout", "1"])

    assert isinstance(result.exception, _ParseFailure)
    assert result.exception.args == ("Ada",)


def test_override_parse_value_error_becomes_usage_error() -> None:
    def reject(value: str) -> str:
        raise ValueError("not allowed")

    tool = _recording_tool([], cli_overrides={"name": {"parse": reject}})
    command = build_tool_command(tool)

    result = CliRunner().invoke(command, ["--name", "Ada", "--config-timeout", "1"])

    assert result.exit_code == 2
    assert "not allowed" in result.output
    assert not isinstance(result.exception, ValueError)


def test_child_default_creates_its_optional_parent() -> None:
    received: list[dict[str, Any]] = []
    tool = _recording_tool(
        received,
        input_shape=object_shape(
            inner=object_shape(
                host=string_field(), port=number_field().with_default(80)
            ).optional()
        ),
    )

    result = CliRunner().invoke(build_tool_command(tool), [])

    assert result.exit_code == 0, result.output
    assert received == [{"inner": {"port": 80}}]
