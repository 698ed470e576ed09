"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from schema_cli_args.configuration import load_configuration
from schema_cli_args.configuration.config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)


def test_build_placeholder_configuration_contains_all_supported_sections() -> None:
    scaffold = build_placeholder_configuration()

    assert "schema-cli-args" in scaffold
    assert "generation:" in scaffold
    assert "separator:" in scaffold
    assert "max_depth:" in scaffold
    assert "array_handling:" in scaffold
    assert "strict:" in scaffold
    assert "command_prefix:" in scaffold
    assert "overrides:" in scaffold
    assert "<OPTIONAL>" in scaffold


def test_written_scaffold_loads_as_default_configuration(tmp_path: Path) -> None:
    output_path = tmp_path / DEFAULT_CONFIG_FILENAME

    written_path = write_placeholder_configuration(output_path)
    configuration = load_configuration(written_path)

    assert written_path == output_path.resolve()
    assert configuration.generation.separator == "-"
    assert configuration.generation.max_depth == 3
    assert configuration.generation.strict is True
    assert configuration.overrides == {}


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(output_path)


def test_scaffold_describes_comma_separated_primitive_arrays() -> None:
    scaffold = build_placeholder_configuration()

    assert "--tag a,b" in scaffold
    assert "--tag a --tag b" not in scaffold
