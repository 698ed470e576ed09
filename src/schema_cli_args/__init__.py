"""Flatten nested schemas into command line arguments and rebuild nested values."""

import logging

from .argument_synthesis import (
    ArgumentOverride,
    ArrayHandling,
    GeneratedArgument,
    SynthesisOptions,
    reconstruct,
    synthesize_arguments,
)
from .flattening import FlagCollisionError, FlattenOptions, flatten
from .schema_analysis import AnalysisCache, SchemaAnalyzer, analyze
from .tool_commands import ToolDefinition, ToolRegistry, build_tool_command, build_tool_group

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AnalysisCache",
    "ArgumentOverride",
    "ArrayHandling",
    "FlagCollisionError",
    "FlattenOptions",
    "GeneratedArgument",
    "SchemaAnalyzer",
    "SynthesisOptions",
    "ToolDefinition",
    "ToolRegistry",
    "analyze",
    "build_tool_command",
    "build_tool_group",
    "flatten",
    "reconstruct",
    "synthesize_arguments",
]
