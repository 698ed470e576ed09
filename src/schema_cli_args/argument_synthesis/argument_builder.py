"""Argument synthesis from flattened schema fields."""

from __future__ import annotations

from collections.abc import Mapping

from schema_cli_args.flattening.field_introspector import element_is_shape
from schema_cli_args.flattening.field_models import FieldInfo
from schema_cli_args.schema_analysis.schema_analyzer import SchemaAnalyzer, default_analyzer
from schema_cli_args.schema_model.shape_nodes import UNSET, BaseKind, Shape

from .argument_models import (
    ArgumentOverride,
    ArgumentOverrideError,
    ArgumentType,
    GeneratedArgument,
    SynthesisOptions,
)
from .value_codec import ParseFunction, decide_codec

_PRIMITIVE_DEFAULT_TYPES = (str, int, float, bool)


def build_argument(
    info: FieldInfo,
    override: ArgumentOverride | None = None,
    parse: ParseFunction | None = None,
    *,
    optional: bool | None = None,
    multiple: bool = False,
) -> GeneratedArgument:
    """Merge introspected field data, a derived parse function and an override.

    Every attribute set on ``override`` wins over the derived value. When
    ``optional`` is given it reflects ancestor optionality and replaces
    ``info.required`` as the source of requiredness.
    """
    resolved = override or ArgumentOverride()
    if resolved.required is not None:
        required = resolved.required
    elif optional is not None:
        required = not optional
    else:
        required = info.required

    return GeneratedArgument(
        type_tag=resolved.type_tag or _derived_type_tag(info.base_type),
        description=(
            resolved.description if resolved.description is not None else info.description
        ),
        short=resolved.short,
        required=True if required else None,
        default=resolved.default if resolved.default is not UNSET else _cli_default(info),
        parse=resolved.parse or parse,
        multiple=multiple,
        choices=info.enum_values,
    )


def synthesize_arguments(
    shape: Shape,
    overrides: Mapping[str, ArgumentOverride | Mapping[str, object]] | None = None,
    options: SynthesisOptions | None = None,
    *,
    analyzer: SchemaAnalyzer | None = None,
) -> dict[str, GeneratedArgument]:
    """Build the flat argument table for ``shape``.

    Raises:
      FlagCollisionError: If collisions exist and ``options.strict`` is set.
      ArgumentOverrideError: If an override names an unknown flat key or is malformed.
    """
    resolved = options or SynthesisOptions()
    active_analyzer = analyzer or default_analyzer()
    analysis = active_analyzer.analyze(shape, resolved.analyze_options())
    normalized = _normalize_overrides(overrides or {})

    unknown = sorted(set(normalized) - {field.flat_key for field in analysis.flattened})
    if unknown:
        raise ArgumentOverrideError(f"Overrides refer to unknown flags: {', '.join(unknown)}")

    arguments: dict[str, GeneratedArgument] = {}
    for flattened in analysis.flattened:
        info = flattened.info
        parse: ParseFunction | None = None
        multiple = False
        if info.base_type in (BaseKind.ARRAY, BaseKind.OBJECT):
            element_is_object = flattened.node is not None and element_is_shape(
                flattened.node, active_analyzer.type_handlers
            )
            codec = decide_codec(info.base_type, element_is_object, resolved.array_handling)
            parse = codec.parse
            multiple = codec.uses_multi_value_repeat
        arguments[flattened.flat_key] = build_argument(
            info,
            normalized.get(flattened.flat_key),
            parse,
            optional=flattened.optional,
            multiple=multiple,
        )
    return arguments


def _normalize_overrides(
    overrides: Mapping[str, ArgumentOverride | Mapping[str, object]],
) -> dict[str, ArgumentOverride]:
    normalized: dict[str, ArgumentOverride] = {}
    for flat_key, override in overrides.items():
        if isinstance(override, ArgumentOverride):
            normalized[flat_key] = override
        elif isinstance(override, Mapping):
            normalized[flat_key] = ArgumentOverride.from_mapping(flat_key, override)
        else:
            raise ArgumentOverrideError(
                f"Override for '{flat_key}' must be an ArgumentOverride or a mapping."
            )
    return normalized


def _derived_type_tag(base_type: BaseKind) -> str:
    if base_type is BaseKind.ENUM:
        return ArgumentType.STRING.value
    if base_type in (BaseKind.ARRAY, BaseKind.OBJECT):
        return ArgumentType.CUSTOM.value
    return base_type.value


def _cli_default(info: FieldInfo) -> object:
    if isinstance(info.default, _PRIMITIVE_DEFAULT_TYPES):
        return info.default
    return UNSET
