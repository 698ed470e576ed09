"""Tool definition entities."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from schema_cli_args.argument_synthesis.argument_models import ArgumentOverride
from schema_cli_args.configuration.runtime_settings import GenerationSettings
from schema_cli_args.schema_model.shape_nodes import Shape

ToolHandler = Callable[[dict[str, Any]], Any]


@dataclass(frozen=True)
class ToolDefinition:  # pylint: disable=too-many-instance-attributes
    """A named operation whose input is described by a shape.

    ``cli_options`` replaces the group generation settings for this tool only.
    ``input_model`` is an optional pydantic model class used to validate the
    reconstructed input before the handler runs.
    """

    name: str
    description: str | None
    input_shape: Shape
    handler: ToolHandler = field(compare=False)
    title: str | None = None
    cli_overrides: Mapping[str, ArgumentOverride | Mapping[str, Any]] = field(
        default_factory=dict, compare=False
    )
    cli_options: GenerationSettings | None = None
    input_model: type[Any] | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Tool name must not be empty.")
