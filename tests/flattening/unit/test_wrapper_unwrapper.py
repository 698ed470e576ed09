"""Wrapper unwrapping tests."""

from __future__ import annotations

import itertools
import logging

import pytest
from schema_cli_args.flattening.wrapper_unwrapper import (
    MAX_UNWRAP_DEPTH,
    unwrap_field,
    unwrap_node,
)
from schema_cli_args.schema_model import UNSET, FieldNode, Wrapper, WrapperKind, string_field


def _wrap(node, kinds):
    for kind in kinds:
        if kind == "optional":
            node = node.optional()
        elif kind == "nullable":
            node = node.nullable()
        elif kind == "catch":
            node = node.catch("fallback")
        else:
            node = node.with_default("d")
    return node


def test_unwrapped_field_is_required_without_default() -> None:
    result = unwrap_field(string_field("Name"))

    assert result.required is True
    assert result.default is UNSET
    assert result.description == "Name"
    assert result.inner == string_field("Name")


def test_optional_marks_field_not_required() -> None:
    result = unwrap_field(string_field().optional())

    assert result.required is False
    assert result.default is UNSET
    assert result.has_default is False
    assert result.inner.tag == "string"


def test_default_value_is_captured() -> None:
    result = unwrap_field(string_field().with_default("x"))

    assert result.required is False
    assert result.default == "x"
    assert result.has_default is True


def test_default_factory_is_evaluated() -> None:
    result = unwrap_field(string_field().with_default(factory=lambda: "generated"))

    assert result.default == "generated"


def test_failing_default_factory_is_treated_as_absent(caplog: pytest.LogCaptureFixture) -> None:
    def broken() -> object:
        raise RuntimeError("boom")

    with caplog.at_level(logging.DEBUG, logger="schema_cli_args.flattening.wrapper_unwrapper"):
        result = unwrap_field(string_field().with_default(factory=broken))

    assert result.required is False
    assert result.default is UNSET
    assert "default factory failed" in caplog.text


def test_none_default_is_a_real_default() -> None:
    result = unwrap_field(string_field().nullable().with_default(None))

    assert result.default is None
    assert result.required is False


def test_catch_does_not_set_default() -> None:
    result = unwrap_field(string_field().catch("fallback"))

    assert result.required is False
    assert result.default is UNSET


def test_only_outermost_default_is_kept() -> None:
    result = unwrap_field(string_field().with_default("inner").with_default("outer"))

    assert result.default == "outer"


def test_outer_description_wins_over_inner() -> None:
    node = string_field("inner").optional().describe("outer")

    assert unwrap_field(node).description == "outer"


def test_inner_description_is_used_when_wrappers_have_none() -> None:
    assert unwrap_field(string_field("inner").optional()).description == "inner"


@pytest.mark.parametrize(
    "kinds",
    list(itertools.permutations(["optional", "default", "nullable", "catch"])),
)
def test_wrapper_order_does_not_change_result(kinds: tuple[str, ...]) -> None:
    result = unwrap_field(_wrap(string_field(), kinds))

    assert result.required is False
    assert result.default == "d"
    assert result.inner.tag == "string"


def test_unwrapping_stops_after_max_depth() -> None:
    node = string_field()
    for _ in range(MAX_UNWRAP_DEPTH + 2):
        node = node.optional()

    result = unwrap_field(node)

    assert isinstance(result.inner, Wrapper)
    assert result.inner.wrapper is WrapperKind.OPTIONAL
    assert result.required is False


def test_unwrap_node_returns_innermost_node() -> None:
    inner = FieldNode(kind="number")

    assert unwrap_node(inner.optional().nullable()) is inner
