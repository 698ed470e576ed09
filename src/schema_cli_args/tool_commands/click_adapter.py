"""Click commands generated from tool input shapes."""

from __future__ import annotations

import json
import logging
from typing import Any

import click
from click.core import ParameterSource
from pydantic import ValidationError

from schema_cli_args.argument_synthesis.argument_builder import synthesize_arguments
from schema_cli_args.argument_synthesis.argument_models import ArgumentType, GeneratedArgument
from schema_cli_args.argument_synthesis.value_codec import ParseFunction
from schema_cli_args.argument_synthesis.value_parsing import parse_number
from schema_cli_args.argument_synthesis.value_reconstruction import reconstruct
from schema_cli_args.configuration.runtime_settings import GenerationSettings
from schema_cli_args.schema_analysis.schema_analyzer import SchemaAnalyzer

from .registry import ToolRegistry
from .tool_models import ToolDefinition

logger = logging.getLogger(__name__)


class ParsedValueType(click.ParamType):
    """Click parameter type that delegates conversion to a parse function."""

    def __init__(self, parse: ParseFunction, name: str = "value") -> None:
        self._parse = parse
        self.name = name

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        # Defaults arrive already converted.
        if not isinstance(value, str):
            return value
        try:
            return self._parse(value)
        except ValueError as exc:
            self.fail(f"{value!r}: {exc}", param, ctx)


def build_tool_command(
    tool: ToolDefinition,
    settings: GenerationSettings | None = None,
    *,
    name: str | None = None,
    analyzer: SchemaAnalyzer | None = None,
) -> click.Command:
    """Build a click command whose options are the tool's flattened input fields.

    Raises:
      FlagCollisionError: If the input shape produces colliding flags under strict settings.
      ArgumentOverrideError: If the tool overrides do not fit the generated arguments.
    """
    resolved = tool.cli_options or settings or GenerationSettings()
    arguments = synthesize_arguments(
        tool.input_shape,
        tool.cli_overrides,
        resolved.synthesis_options(),
        analyzer=analyzer,
    )

    flat_keys: dict[str, str] = {}
    params: list[click.Parameter] = []
    for index, (flat_key, argument) in enumerate(arguments.items()):
        param_name = f"arg_{index}"
        flat_keys[param_name] = flat_key
        params.append(_build_option(flat_key, param_name, argument))

    def callback(**values: Any) -> None:
        ctx = click.get_current_context()
        supplied: dict[str, Any] = {}
        for param_name, flat_key in flat_keys.items():
            source = ctx.get_parameter_source(param_name)
            if source is ParameterSource.DEFAULT and not arguments[flat_key].has_default:
                continue
            value = values[param_name]
            supplied[flat_key] = list(value) if arguments[flat_key].multiple else value
        payload = reconstruct(supplied, resolved.separator)
        logger.debug("Invoking tool %s with %s", tool.name, payload)
        result = tool.handler(_validate_payload(tool, payload, ctx))
        _echo_result(result)

    return click.Command(
        name=name or tool.name,
        params=params,
        callback=callback,
        help=tool.description,
        short_help=tool.title,
        context_settings={"help_option_names": ["-h", "--help"]},
    )


def build_tool_group(
    registry: ToolRegistry,
    settings: GenerationSettings | None = None,
    prefix: str = "",
    *,
    analyzer: SchemaAnalyzer | None = None,
) -> click.Group:
    """Build a click group with one command per registered tool."""
    group = click.Group(
        name="tools",
        help="Commands generated from registered tools.",
        context_settings={"help_option_names": ["-h", "--help"]},
    )
    for tool in registry.list():
        command_name = f"{prefix}:{tool.name}" if prefix else tool.name
        group.add_command(
            build_tool_command(tool, settings, name=command_name, analyzer=analyzer),
            name=command_name,
        )
    return group


def _build_option(flat_key: str, param_name: str, argument: GeneratedArgument) -> click.Option:
    declarations = [f"--{flat_key}"]
    if argument.type_tag == ArgumentType.BOOLEAN.value and argument.parse is None:
        declarations = [f"--{flat_key}/--no-{flat_key}"]
    if argument.short:
        declarations.append(f"-{argument.short}")
    declarations.append(param_name)

    option_kwargs: dict[str, Any] = {
        "required": bool(argument.required),
        "help": argument.description,
        "multiple": argument.multiple,
    }
    if argument.has_default:
        default = argument.default
        if argument.multiple and not isinstance(default, (list, tuple)):
            default = [default]
        option_kwargs["default"] = default
        option_kwargs["show_default"] = True

    if argument.parse is not None:
        option_kwargs["type"] = ParsedValueType(argument.parse, flat_key.upper())
    elif argument.choices:
        option_kwargs["type"] = click.Choice(list(argument.choices))
    elif argument.type_tag == ArgumentType.BOOLEAN.value:
        option_kwargs["is_flag"] = True
    elif argument.type_tag == ArgumentType.NUMBER.value:
        option_kwargs["type"] = ParsedValueType(parse_number, "NUMBER")
    else:
        option_kwargs["type"] = click.STRING
    return click.Option(declarations, **option_kwargs)


def _validate_payload(tool: ToolDefinition, payload: dict[str, Any], ctx: click.Context) -> Any:
    if tool.input_model is None:
        return payload
    try:
        model = tool.input_model.model_validate(payload)
    except ValidationError as exc:
        raise click.UsageError(f"Invalid input for '{tool.name}':\n{exc}", ctx) from exc
    return model.model_dump()


def _echo_result(result: Any) -> None:
    if result is None:
        return
    if isinstance(result, str):
        click.echo(result)
        return
    click.echo(json.dumps(result, indent=2, default=str))
