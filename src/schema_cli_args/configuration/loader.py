"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from schema_cli_args.argument_synthesis.argument_models import (
    ArgumentOverride,
    ArgumentOverrideError,
    ArgumentType,
)
from schema_cli_args.argument_synthesis.value_codec import ArrayHandling

from .runtime_settings import Configuration, GenerationSettings, SchemaConfig


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    schema = (
        _parse_schema_section(parsed["schema"], path.parent) if parsed.get("schema") else None
    )
    generation = _parse_generation_section(parsed.get("generation"))
    command_prefix = _optional_string(parsed.get("command_prefix"), "command_prefix") or ""
    overrides = _parse_overrides_section(parsed.get("overrides"))

    return Configuration(
        path=path,
        schema=schema,
        generation=generation,
        command_prefix=command_prefix,
        overrides=overrides,
    )


def _parse_schema_section(value: Any, base_path: Path) -> SchemaConfig:
    if isinstance(value, str):
        return SchemaConfig(text=value, source_path=None)
    mapping = _require_mapping(value, "schema")
    inline = mapping.get("inline")
    path_value = mapping.get("path")
    if inline and path_value:
        raise ConfigurationError("Schema definition must not set both inline and path.")
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError("Schema inline value must be a string.")
        return SchemaConfig(text=inline, source_path=None)
    if path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError("Schema path must be a string.")
        schema_path = _resolve_path(base_path, path_value)
        if not schema_path.exists():
            raise ConfigurationError(f"Schema file not found: {schema_path}")
        return SchemaConfig(text=schema_path.read_text(encoding="utf-8"), source_path=schema_path)
    raise ConfigurationError("Schema definition requires either inline or path.")


def _parse_generation_section(value: Any) -> GenerationSettings:
    if value is None:
        return GenerationSettings()
    section = _require_mapping(value, "generation")
    defaults = GenerationSettings()
    separator = section.get("separator", defaults.separator)
    if not isinstance(separator, str) or not separator:
        raise ConfigurationError("generation.separator must be a non-empty string.")
    max_depth = _require_non_negative_int(
        section.get("max_depth", defaults.max_depth), "generation.max_depth"
    )
    array_handling_raw = _require_non_empty_string(
        section.get("array_handling", defaults.array_handling.value), "generation.array_handling"
    ).lower()
    try:
        array_handling = ArrayHandling(array_handling_raw)
    except ValueError as exc:
        raise ConfigurationError(
            "generation.array_handling must be one of: "
            + ", ".join(item.value for item in ArrayHandling)
        ) from exc
    strict = _require_bool(section.get("strict", defaults.strict), "generation.strict")
    return GenerationSettings(
        separator=separator,
        max_depth=max_depth,
        array_handling=array_handling,
        strict=strict,
    )


def _parse_overrides_section(value: Any) -> dict[str, ArgumentOverride]:
    if value is None:
        return {}
    section = _require_mapping(value, "overrides")
    overrides: dict[str, ArgumentOverride] = {}
    for flat_key, raw_override in section.items():
        label = f"overrides.{flat_key}"
        override_section = _require_mapping(raw_override, label)
        if "parse" in override_section:
            raise ConfigurationError(f"{label}.parse cannot be set from a configuration file.")
        type_tag = override_section.get("type")
        if type_tag is not None and type_tag not in {item.value for item in ArgumentType}:
            raise ConfigurationError(
                f"{label}.type must be one of: " + ", ".join(item.value for item in ArgumentType)
            )
        short = _optional_string(override_section.get("short"), f"{label}.short")
        if short is not None and len(short) != 1:
            raise ConfigurationError(f"{label}.short must be a single character.")
        required = override_section.get("required")
        if required is not None:
            _require_bool(required, f"{label}.required")
        _optional_string(override_section.get("description"), f"{label}.description")
        try:
            overrides[str(flat_key)] = ArgumentOverride.from_mapping(
                str(flat_key), {**override_section, "short": short}
            )
        except ArgumentOverrideError as exc:
            raise ConfigurationError(str(exc)) from exc
    return overrides


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return value
