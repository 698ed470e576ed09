"""Recursive flattening of nested shapes into flat keys."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from schema_cli_args.schema_model.shape_nodes import BaseKind, Shape

from .field_introspector import TypeHandler, introspect_unwrapped
from .field_models import FlattenContext, FlattenedField, FlattenOptions
from .wrapper_unwrapper import unwrap_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _WalkResult:
    """Fields and flags collected from one shape level and everything below it."""

    fields: tuple[FlattenedField, ...]
    has_nested: bool
    truncated_paths: tuple[str, ...]


@dataclass(frozen=True)
class _WalkPosition:
    key_prefix: str
    dot_prefix: str
    depth: int
    parent_optional: bool


def flatten(shape: Shape, options: FlattenOptions | None = None) -> list[FlattenedField]:
    """Return one flattened field per distinct flat key."""
    return list(flatten_with_context(shape, options).fields)


def flatten_with_context(
    shape: Shape,
    options: FlattenOptions | None = None,
    *,
    type_handlers: Mapping[str, TypeHandler] | None = None,
) -> FlattenContext:
    """Flatten a shape and report collisions, nesting and depth truncation."""
    resolved = options or FlattenOptions()
    walked = _walk(
        shape,
        _WalkPosition(
            key_prefix=resolved.prefix,
            dot_prefix=resolved.prefix,
            depth=0,
            parent_optional=False,
        ),
        resolved,
        type_handlers,
    )
    fields, collisions = _index_by_flat_key(walked.fields)
    if collisions:
        logger.debug("flat key collisions found: %s", sorted(collisions))
    return FlattenContext(
        fields=tuple(fields),
        collisions=collisions,
        has_nested=walked.has_nested,
        max_depth=resolved.max_depth,
        truncated_paths=walked.truncated_paths,
    )


def _walk(
    shape: Shape,
    position: _WalkPosition,
    options: FlattenOptions,
    type_handlers: Mapping[str, TypeHandler] | None,
) -> _WalkResult:
    fields: list[FlattenedField] = []
    truncated: list[str] = []
    has_nested = False

    for name, node in shape.fields.items():
        flat_key = (
            f"{position.key_prefix}{options.separator}{name}" if position.key_prefix else name
        )
        dot_path = f"{position.dot_prefix}.{name}" if position.dot_prefix else name
        unwrapped = unwrap_field(node)
        info = introspect_unwrapped(unwrapped, type_handlers)
        optional = position.parent_optional or not info.required
        inner = unwrapped.inner
        nested_shape = (
            inner if isinstance(inner, Shape) and info.base_type is BaseKind.OBJECT else None
        )

        if nested_shape is not None and position.depth < options.max_depth:
            child = _walk(
                nested_shape,
                _WalkPosition(
                    key_prefix=flat_key,
                    dot_prefix=dot_path,
                    depth=position.depth + 1,
                    parent_optional=optional,
                ),
                options,
                type_handlers,
            )
            has_nested = True
            fields.extend(child.fields)
            truncated.extend(child.truncated_paths)
            continue

        if nested_shape is not None:
            logger.debug("max depth %d reached at %s", options.max_depth, dot_path)
            truncated.append(dot_path)
        fields.append(
            FlattenedField(
                flat_key=flat_key,
                info=info,
                depth=position.depth,
                dot_path=dot_path,
                optional=optional,
                node=inner,
            )
        )

    return _WalkResult(
        fields=tuple(fields),
        has_nested=has_nested,
        truncated_paths=tuple(truncated),
    )


def _index_by_flat_key(
    fields: Iterable[FlattenedField],
) -> tuple[list[FlattenedField], dict[str, tuple[str, ...]]]:
    """Keep the last producer per flat key and record every distinct producer path.

    A retained field stays at the position where its flat key was first seen.
    """
    retained: dict[str, FlattenedField] = {}
    first_paths: dict[str, str] = {}
    collisions: dict[str, list[str]] = {}

    for flattened in fields:
        first_path = first_paths.setdefault(flattened.flat_key, flattened.dot_path)
        if first_path != flattened.dot_path:
            paths = collisions.setdefault(flattened.flat_key, [first_path])
            if flattened.dot_path not in paths:
                paths.append(flattened.dot_path)
        retained[flattened.flat_key] = flattened

    return list(retained.values()), {key: tuple(paths) for key, paths in collisions.items()}
