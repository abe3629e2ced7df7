"""
Tool Registry - Single source of truth for tool definitions.

Provides a central, ordered registry for all tools with their metadata,
argument models and handlers.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from pydantic import BaseModel


@dataclass(frozen=True)
class ToolParameter:
    """A single parameter in a tool's schema."""

    name: str
    type: str  # JSON schema type: "string", "number", ...
    required: bool = True
    enum: Optional[tuple[str, ...]] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class ToolDefinition:
    """Metadata for a tool - defined once, used everywhere."""

    name: str
    description: str
    parameters: tuple[ToolParameter, ...]
    args_model: type[BaseModel]
    handler: Callable[[BaseModel], dict]


class ToolRegistry:
    """Central registry for all tools, kept in registration order."""

    _tools: dict[str, ToolDefinition] = {}

    @classmethod
    def register(
        cls,
        name: str,
        description: str,
        parameters: list[ToolParameter],
        args_model: type[BaseModel],
        handler: Callable[[BaseModel], dict],
    ) -> None:
        """Register a tool with its metadata."""
        cls._tools[name] = ToolDefinition(
            name=name,
            description=description,
            parameters=tuple(parameters),
            args_model=args_model,
            handler=handler,
        )

    @classmethod
    def get(cls, name: str) -> Optional[ToolDefinition]:
        """Get a tool by name."""
        return cls._tools.get(name)

    @classmethod
    def all_tools(cls) -> dict[str, ToolDefinition]:
        """Get a copy of all registered tools."""
        return cls._tools.copy()

    @classmethod
    def names(cls) -> list[str]:
        """Registered tool names in registration order."""
        return list(cls._tools)
