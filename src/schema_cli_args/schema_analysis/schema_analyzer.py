"""Schema analysis service."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from schema_cli_args.flattening.collision_report import FlagCollisionError, format_collisions
from schema_cli_args.flattening.field_introspector import (
    TypeHandler,
    introspect_shape,
    is_known_tag,
)
from schema_cli_args.flattening.field_models import FlattenContext
from schema_cli_args.flattening.shape_flattener import flatten_with_context
from schema_cli_args.flattening.wrapper_unwrapper import unwrap_node
from schema_cli_args.schema_model.shape_nodes import Shape

from .analysis_cache import AnalysisCache
from .analysis_models import (
    AnalyzeOptions,
    ErrorCode,
    SchemaAnalysis,
    SchemaIssue,
    SchemaWarning,
    WarningCode,
)
from .required_fields import validate_required_fields

logger = logging.getLogger(__name__)


class SchemaAnalyzer:
    """Analyses shapes, memoising results per schema object.

    Pass ``use_cache=False`` to disable memoisation.
    """

    def __init__(
        self,
        cache: AnalysisCache | None = None,
        type_handlers: Mapping[str, TypeHandler] | None = None,
        *,
        use_cache: bool = True,
    ) -> None:
        self._cache = (cache if cache is not None else AnalysisCache()) if use_cache else None
        self._type_handlers: dict[str, TypeHandler] = dict(type_handlers or {})

    @property
    def cache(self) -> AnalysisCache | None:
        return self._cache

    @property
    def type_handlers(self) -> Mapping[str, TypeHandler]:
        return dict(self._type_handlers)

    def register_type_handler(self, tag: str, handler: TypeHandler) -> None:
        """Teach the analyzer a custom tag. Cached analyses are discarded."""
        self._type_handlers[tag] = handler
        if self._cache is not None:
            self._cache.clear()

    def analyze(self, shape: Shape, options: AnalyzeOptions | None = None) -> SchemaAnalysis:
        """Flatten, check collisions and collect requiredness for ``shape``.

        Raises:
          FlagCollisionError: If ``options.strict`` is set and collisions exist.
        """
        resolved = options or AnalyzeOptions()
        if self._cache is not None:
            cached = self._cache.get(shape, resolved)
            if cached is not None:
                logger.debug("analysis cache hit")
                return cached
            logger.debug("analysis cache miss")

        context = flatten_with_context(shape, resolved, type_handlers=self._type_handlers)
        if context.collisions and resolved.strict:
            raise FlagCollisionError(context.collisions)

        warnings = self._collect_warnings(context)
        errors = tuple(_structural_issues(shape, dot_prefix="", ancestors=(id(shape),)))
        validation = validate_required_fields(context.fields)
        analysis = SchemaAnalysis(
            fields=tuple(introspect_shape(shape, self._type_handlers)),
            flattened=context.fields,
            required=validation.required,
            has_nested=context.has_nested,
            max_depth=context.max_depth,
            collisions=context.collisions,
            is_valid=not errors,
            warnings=warnings,
            errors=errors,
        )

        if self._cache is not None:
            self._cache.put(shape, resolved, analysis)
        return analysis

    def _collect_warnings(self, context: FlattenContext) -> tuple[SchemaWarning, ...]:
        warnings: list[SchemaWarning] = []
        if context.collisions:
            report = format_collisions(context.collisions)
            logger.warning("Collision detected:\n%s", report)
            warnings.append(
                SchemaWarning(
                    code=WarningCode.COLLISION,
                    message=f"Collision detected:\n{report}",
                    path="root",
                )
            )
        for path in context.truncated_paths:
            warnings.append(
                SchemaWarning(
                    code=WarningCode.MAX_DEPTH,
                    message=(
                        f"'{path}' is nested deeper than max depth {context.max_depth}; "
                        "it is accepted as a single JSON value."
                    ),
                    path=path,
                )
            )
        for field in context.fields:
            if field.node is not None and not is_known_tag(field.node, self._type_handlers):
                warnings.append(
                    SchemaWarning(
                        code=WarningCode.UNSUPPORTED_TYPE,
                        message=(
                            f"'{field.dot_path}' has unsupported type '{field.node.tag}'; "
                            "it is treated as a string."
                        ),
                        path=field.dot_path,
                    )
                )
        return tuple(warnings)


def _structural_issues(
    shape: Shape, *, dot_prefix: str, ancestors: tuple[int, ...]
) -> list[SchemaIssue]:
    issues: list[SchemaIssue] = []
    for name, node in shape.fields.items():
        path = f"{dot_prefix}.{name}" if dot_prefix else name
        if not name:
            issues.append(
                SchemaIssue(
                    code=ErrorCode.INVALID_SCHEMA,
                    message=f"Field names must not be empty (under '{dot_prefix or 'root'}').",
                    path=dot_prefix or "root",
                )
            )
            continue
        inner = unwrap_node(node)
        if not isinstance(inner, Shape):
            continue
        if id(inner) in ancestors:
            issues.append(
                SchemaIssue(
                    code=ErrorCode.CIRCULAR_DEPENDENCY,
                    message=f"'{path}' refers back to one of its own ancestors.",
                    path=path,
                )
            )
            continue
        issues.extend(
            _structural_issues(inner, dot_prefix=path, ancestors=(*ancestors, id(inner)))
        )
    return issues


_DEFAULT_ANALYZER = SchemaAnalyzer()


def default_analyzer() -> SchemaAnalyzer:
    """Return the process-wide analyzer used by :func:`analyze`."""
    return _DEFAULT_ANALYZER


def analyze(shape: Shape, options: AnalyzeOptions | None = None) -> SchemaAnalysis:
    """Analyse ``shape`` with the process-wide analyzer and its cache."""
    return _DEFAULT_ANALYZER.analyze(shape, options)
