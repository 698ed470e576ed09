"""Command line interface entry point."""

from __future__ import annotations

import json
import sys
from dataclasses import replace
from typing import Any

import click

from schema_cli_args.argument_synthesis import (
    ArgumentOverrideError,
    ArrayHandling,
    GeneratedArgument,
    synthesize_arguments,
)
from schema_cli_args.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    GenerationSettings,
    load_configuration,
    write_placeholder_configuration,
)
from schema_cli_args.flattening import FlagCollisionError
from schema_cli_args.logging_setup import configure_logging
from schema_cli_args.schema_analysis import SchemaAnalysis, SchemaAnalyzer
from schema_cli_args.schema_model import (
    SchemaShapeError,
    Shape,
    load_shape_file,
    load_shape_text,
)
from schema_cli_args.tool_commands import ToolDefinition, build_tool_command


class CliError(Exception):
    """Custom CLI error."""


def _generation_options(command: Any) -> Any:
    """Attach the schema, config and generation options shared by describe and invoke."""
    options = [
        click.option(
            "--schema",
            "schema_path",
            required=False,
            type=click.Path(path_type=str),
            help="Path to a JSON Schema document (JSON or YAML)",
        ),
        click.option(
            "--config",
            "config_path",
            required=False,
            type=click.Path(path_type=str),
            help="Path to YAML/JSON generation configuration file",
        ),
        click.option("--separator", required=False, help="Separator joining nested field names"),
        click.option(
            "--max-depth",
            "max_depth",
            required=False,
            type=click.IntRange(min=0),
            help="Nesting depth flattened into individual flags",
        ),
        click.option(
            "--array-handling",
            "array_handling",
            required=False,
            type=click.Choice([item.value for item in ArrayHandling]),
            help="How array fields are read from the command line",
        ),
        click.option(
            "--strict/--no-strict",
            "strict",
            default=None,
            help="Fail when two schema paths produce the same flag",
        ),
    ]
    for option in reversed(options):
        command = option(command)
    return command


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-cli-args")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug details to stderr.")
@click.option("--quiet", "-q", is_flag=True, default=False, help="Only log errors to stderr.")
def cli(verbose: bool, quiet: bool) -> None:
    """Schema-driven command line argument generator."""
    if verbose and quiet:
        raise click.UsageError("--verbose and --quiet cannot be combined.")
    configure_logging(verbose=verbose, quiet=quiet)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="describe")
@_generation_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format for the argument table",
)
def describe(
    schema_path: str | None,
    config_path: str | None,
    separator: str | None,
    max_depth: int | None,
    array_handling: str | None,
    strict: bool | None,
    output_format: str,
) -> None:
    """Print the command line arguments generated from a schema."""
    try:
        configuration = _load_optional_configuration(config_path)
        shape = _load_shape(schema_path, configuration)
        settings = _merge_settings(
            configuration.generation, separator, max_depth, array_handling, strict
        )
        analyzer = SchemaAnalyzer()
        options = settings.synthesis_options()
        analysis = analyzer.analyze(shape, options.analyze_options())
        arguments = synthesize_arguments(
            shape, configuration.overrides, options, analyzer=analyzer
        )
    except (
        ConfigurationError,
        SchemaShapeError,
        FlagCollisionError,
        ArgumentOverrideError,
        OSError,
        ValueError,
    ) as exc:
        raise CliError(str(exc)) from exc

    if output_format == "json":
        click.echo(json.dumps(_describe_document(arguments, analysis), indent=2, default=str))
        return
    for line in _describe_lines(arguments, analysis):
        click.echo(line)


@cli.command(
    name="invoke",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@_generation_options
@click.argument("tool_args", nargs=-1, type=click.UNPROCESSED)
def invoke(
    schema_path: str | None,
    config_path: str | None,
    separator: str | None,
    max_depth: int | None,
    array_handling: str | None,
    strict: bool | None,
    tool_args: tuple[str, ...],
) -> None:
    """Parse TOOL_ARGS against the schema and print the nested value as JSON."""
    try:
        configuration = _load_optional_configuration(config_path)
        shape = _load_shape(schema_path, configuration)
        settings = _merge_settings(
            configuration.generation, separator, max_depth, array_handling, strict
        )
        command = build_tool_command(
            ToolDefinition(
                name="invoke",
                description="Arguments generated from the schema.",
                input_shape=shape,
                handler=_echo_payload,
                cli_overrides=configuration.overrides,
            ),
            settings,
        )
    except (
        ConfigurationError,
        SchemaShapeError,
        FlagCollisionError,
        ArgumentOverrideError,
        OSError,
        ValueError,
    ) as exc:
        raise CliError(str(exc)) from exc

    prog_name = f"{configuration.command_prefix}:invoke" if configuration.command_prefix else None
    command.main(args=list(tool_args), prog_name=prog_name, standalone_mode=False)


def _echo_payload(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, default=str)


def _load_optional_configuration(config_path: str | None) -> Configuration:
    if config_path is None:
        return Configuration(path=None)
    return load_configuration(config_path)


def _load_shape(schema_path: str | None, configuration: Configuration) -> Shape:
    if schema_path is not None:
        return load_shape_file(schema_path)
    if configuration.schema is None:
        raise CliError("A schema is required: pass --schema or configure schema in --config.")
    if configuration.schema.source_path is not None:
        return load_shape_file(configuration.schema.source_path)
    return load_shape_text(configuration.schema.text)


def _merge_settings(
    base: GenerationSettings,
    separator: str | None,
    max_depth: int | None,
    array_handling: str | None,
    strict: bool | None,
) -> GenerationSettings:
    updates: dict[str, Any] = {}
    if separator is not None:
        if not separator:
            raise CliError("--separator must not be empty.")
        updates["separator"] = separator
    if max_depth is not None:
        updates["max_depth"] = max_depth
    if array_handling is not None:
        updates["array_handling"] = ArrayHandling(array_handling)
    if strict is not None:
        updates["strict"] = strict
    return replace(base, **updates)


def _describe_document(
    arguments: dict[str, GeneratedArgument], analysis: SchemaAnalysis
) -> dict[str, Any]:
    return {
        "arguments": [
            {
                "flag": f"--{flat_key}",
                "short": argument.short,
                "type": argument.type_tag,
                "required": bool(argument.required),
                "default": argument.default if argument.has_default else None,
                "choices": list(argument.choices) if argument.choices else None,
                "multiple": argument.multiple,
                "description": argument.description,
            }
            for flat_key, argument in arguments.items()
        ],
        "warnings": [
            {"code": warning.code.value, "path": warning.path, "message": warning.message}
            for warning in analysis.warnings
        ],
    }


def _describe_lines(
    arguments: dict[str, GeneratedArgument], analysis: SchemaAnalysis
) -> list[str]:
    lines: list[str] = []
    for flat_key, argument in arguments.items():
        parts = [f"--{flat_key}"]
        if argument.short:
            parts.append(f"-{argument.short}")
        parts.append(argument.type_tag)
        if argument.required:
            parts.append("required")
        if argument.has_default:
            parts.append(f"default={argument.default!r}")
        if argument.choices:
            parts.append("choices=" + "|".join(argument.choices))
        if argument.multiple:
            parts.append("repeatable")
        lines.append("  ".join(parts))
        if argument.description:
            lines.append(f"    {argument.description}")
    for warning in analysis.warnings:
        lines.append(f"warning[{warning.code.value}] {warning.message}")
    return lines


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
