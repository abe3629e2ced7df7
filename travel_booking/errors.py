"""
Exception types for the travel booking agent.

Nothing in the core catches these: they propagate to the caller and end
the run.
"""


class TravelBookingError(Exception):
    """Base class for all travel booking errors."""


class ConfigurationError(TravelBookingError):
    """Raised when required configuration is missing or unreadable."""


class UnknownToolError(TravelBookingError):
    """Raised when the model requests a tool that is not registered."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ToolArgumentError(TravelBookingError, TypeError):
    """Raised when a tool's argument payload cannot be parsed or validated."""

    def __init__(self, tool_name: str, detail: str):
        self.tool_name = tool_name
        self.detail = detail
        super().__init__(f"Invalid arguments for '{tool_name}': {detail}")


class ConversationError(TravelBookingError):
    """Raised when a tool result does not match a pending tool call."""
