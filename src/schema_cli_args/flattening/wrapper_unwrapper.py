"""Stripping of optional/default/nullable/catch layers from a field description."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from schema_cli_args.schema_model.shape_nodes import UNSET, SchemaNode, Wrapper, WrapperKind

logger = logging.getLogger(__name__)

MAX_UNWRAP_DEPTH = 10


@dataclass(frozen=True)
class UnwrapResult:
    """Innermost non-wrapper node plus the side effects of the stripped layers."""

    inner: SchemaNode
    required: bool
    default: object = UNSET
    description: str | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not UNSET


def unwrap_field(node: SchemaNode) -> UnwrapResult:
    """Strip wrapper layers, accumulating requiredness and the default value.

    The loop re-inspects the tag after each layer, so wrapper order has no
    effect on the result. At most ``MAX_UNWRAP_DEPTH`` layers are removed.
    """
    inner = node
    required = True
    default: object = UNSET
    description: str | None = None

    for _ in range(MAX_UNWRAP_DEPTH):
        if description is None:
            description = inner.description
        if not isinstance(inner, Wrapper):
            break
        required = False
        if inner.wrapper is WrapperKind.DEFAULT and default is UNSET:
            default = _evaluate_default(inner)
        inner = inner.inner

    if description is None:
        description = inner.description

    return UnwrapResult(inner=inner, required=required, default=default, description=description)


def unwrap_node(node: SchemaNode) -> SchemaNode:
    """Return the innermost non-wrapper node."""
    return unwrap_field(node).inner


def _evaluate_default(wrapper: Wrapper) -> object:
    try:
        return wrapper.resolve_default()
    except Exception:  # pylint: disable=broad-exception-caught
        logger.debug("default factory failed; treating default as absent", exc_info=True)
        return UNSET
