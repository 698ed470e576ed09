"""Collision reporting tests."""

from __future__ import annotations

import pytest
from schema_cli_args.flattening import FlagCollisionError, check_collisions, format_collisions


def test_format_collisions_renders_one_line_per_key() -> None:
    report = format_collisions({"foo-bar": ("foo.bar", "foo-bar"), "a-b": ("a.b", "a-b", "a_b")})

    assert report == "  foo-bar: foo.bar, foo-bar\n  a-b: a.b, a-b, a_b"


def test_check_collisions_raises_with_report() -> None:
    with pytest.raises(FlagCollisionError) as excinfo:
        check_collisions({"foo-bar": ["foo.bar", "foo-bar"]})

    assert excinfo.value.collisions == {"foo-bar": ("foo.bar", "foo-bar")}
    assert str(excinfo.value) == "CLI flag collisions detected:\n  foo-bar: foo.bar, foo-bar"


def test_check_collisions_accepts_empty_map() -> None:
    check_collisions({})
