"""
Tool Dispatcher

Maps a tool name from the model to its registered handler. Arguments are
parsed from the model's JSON payload and validated against the tool's
argument model before the handler runs.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from ..errors import ToolArgumentError, UnknownToolError
from .registry import ToolDefinition, ToolRegistry

logger = logging.getLogger(__name__)


def get_tool(name: str) -> ToolDefinition:
    """
    Look up a registered tool.

    Raises:
        UnknownToolError: If no tool with this name is registered
    """
    tool_def = ToolRegistry.get(name)
    if tool_def is None:
        logger.error(
            f"Unknown tool requested: {name} "
            f"(available: {', '.join(ToolRegistry.names())})"
        )
        raise UnknownToolError(name)
    return tool_def


def parse_arguments(tool_name: str, payload: str | None) -> dict[str, Any]:
    """
    Decode a JSON argument payload into a mapping.

    An empty payload is treated as ``{}``.

    Raises:
        ToolArgumentError: If the payload is not a JSON object
    """
    try:
        arguments = json.loads(payload or "{}")
    except json.JSONDecodeError as e:
        raise ToolArgumentError(tool_name, f"payload is not valid JSON ({e})") from e

    if not isinstance(arguments, dict):
        raise ToolArgumentError(
            tool_name, f"expected a JSON object, got {type(arguments).__name__}"
        )
    return arguments


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "arguments"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def execute_tool(name: str, arguments: dict[str, Any]) -> dict:
    """
    Execute a registered tool.

    Args:
        name: Tool name as requested by the model
        arguments: Untyped argument mapping

    Returns:
        The tool's result mapping

    Raises:
        UnknownToolError: If the name is not registered
        ToolArgumentError: If the arguments fail validation
    """
    tool_def = get_tool(name)

    try:
        args = tool_def.args_model.model_validate(arguments)
    except ValidationError as e:
        raise ToolArgumentError(name, _format_validation_error(e)) from e

    logger.debug(f"Executing tool '{name}' with {arguments}")
    return tool_def.handler(args)
