"""In-memory tool registry."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from .tool_models import ToolDefinition

logger = logging.getLogger(__name__)


class ToolRegistryError(Exception):
    """Raised when a tool cannot be registered."""


class ConflictPolicy(str, Enum):
    """What to do when a tool name is registered twice."""

    ERROR = "error"
    REPLACE = "replace"
    SKIP = "skip"


class ToolRegistry:
    """Tools keyed by name, listed in registration order."""

    def __init__(self, on_conflict: ConflictPolicy | str = ConflictPolicy.ERROR) -> None:
        self._on_conflict = ConflictPolicy(on_conflict)
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, tool: ToolDefinition) -> None:
        if tool.name in self._tools:
            if self._on_conflict is ConflictPolicy.ERROR:
                raise ToolRegistryError(f"Tool '{tool.name}' is already registered.")
            if self._on_conflict is ConflictPolicy.SKIP:
                logger.debug("Skipping duplicate tool registration for %s", tool.name)
                return
        self._tools[tool.name] = tool

    def register_all(self, tools: Iterable[ToolDefinition]) -> None:
        for tool in tools:
            self.register(tool)

    def unregister(self, name: str) -> bool:
        return self._tools.pop(name, None) is not None

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def list(self) -> tuple[ToolDefinition, ...]:
        return tuple(self._tools.values())

    def clear(self) -> None:
        self._tools.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
