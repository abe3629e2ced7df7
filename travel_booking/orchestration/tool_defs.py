"""
Tool definitions for the selection pass.

Converts ToolRegistry entries into OpenAI-style JSON tool definitions
that are sent with the first chat-completions request.
"""

import logging

from ..tools.registry import ToolDefinition, ToolParameter, ToolRegistry

logger = logging.getLogger(__name__)


def _parameter_schema(param: ToolParameter) -> dict:
    schema: dict = {"type": param.type}
    if param.enum:
        schema["enum"] = list(param.enum)
    if param.description:
        schema["description"] = param.description
    return schema


def build_tool_definition(tool_def: ToolDefinition) -> dict:
    """Build the OpenAI function-calling definition for a single tool."""
    properties = {p.name: _parameter_schema(p) for p in tool_def.parameters}
    required = [p.name for p in tool_def.parameters if p.required]

    return {
        "type": "function",
        "function": {
            "name": tool_def.name,
            "description": tool_def.description,
            "parameters": {
                "type": "object",
                "properties": properties,
                "required": required,
            },
        },
    }


def build_tool_definitions() -> list[dict]:
    """
    Build OpenAI function-calling tool definitions from the registry.

    Returns:
        List of OpenAI-format tool definitions, in registration order.
    """
    tools = [build_tool_definition(t) for t in ToolRegistry.all_tools().values()]
    logger.debug(f"Built {len(tools)} tool definitions")
    return tools
