"""
Booking orchestration: tool catalog, conversation state and the
two-pass selection/synthesis loop.
"""

from .conversation import Conversation, Message, Role, ToolInvocation
from .tool_defs import build_tool_definition, build_tool_definitions
from .loop import (
    DEFAULT_QUERY,
    BookingOrchestrator,
    OrchestrationResult,
    OrchestrationState,
    ToolCallRecord,
    run_query,
)

__all__ = [
    "Conversation",
    "Message",
    "Role",
    "ToolInvocation",
    "build_tool_definition",
    "build_tool_definitions",
    "DEFAULT_QUERY",
    "BookingOrchestrator",
    "OrchestrationResult",
    "OrchestrationState",
    "ToolCallRecord",
    "run_query",
]
