"""Tool command exports."""

from .click_adapter import ParsedValueType, build_tool_command, build_tool_group
from .registry import ConflictPolicy, ToolRegistry, ToolRegistryError
from .tool_models import ToolDefinition, ToolHandler

__all__ = [
    "ConflictPolicy",
    "ParsedValueType",
    "ToolDefinition",
    "ToolHandler",
    "ToolRegistry",
    "ToolRegistryError",
    "build_tool_command",
    "build_tool_group",
]
