"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from schema_cli_args.argument_synthesis.argument_models import ArgumentOverride, SynthesisOptions
from schema_cli_args.argument_synthesis.value_codec import ArrayHandling


@dataclass(frozen=True)
class SchemaConfig:
    """Normalized schema source settings."""

    text: str
    source_path: Path | None


@dataclass(frozen=True)
class GenerationSettings:
    """Flag naming, depth and encoding settings for argument generation."""

    separator: str = "-"
    max_depth: int = 3
    array_handling: ArrayHandling = ArrayHandling.REPEATED
    strict: bool = True

    def synthesis_options(self) -> SynthesisOptions:
        return SynthesisOptions(
            separator=self.separator,
            max_depth=self.max_depth,
            strict=self.strict,
            array_handling=self.array_handling,
        )


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    schema: SchemaConfig | None = None
    generation: GenerationSettings = field(default_factory=GenerationSettings)
    command_prefix: str = ""
    overrides: Mapping[str, ArgumentOverride] = field(default_factory=dict)
