"""
Conversation state for a single orchestration run.

The conversation is an append-only list of messages. Tool results must
answer a tool call made earlier in the same conversation, once each.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from ..errors import ConversationError


class Role(str, Enum):
    """Message author roles used in chat-completions requests."""

    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True)
class ToolInvocation:
    """A tool call requested by the model."""

    id: str
    name: str
    arguments: str  # raw JSON payload, as sent by the model

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


@dataclass(frozen=True)
class Message:
    """A single conversation message."""

    role: Role
    content: Optional[str] = None
    tool_calls: tuple[ToolInvocation, ...] = ()
    tool_call_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Render as an OpenAI chat message dict."""
        data: dict = {"role": self.role.value, "content": self.content}
        if self.tool_calls:
            data["tool_calls"] = [call.to_dict() for call in self.tool_calls]
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        return data


@dataclass
class Conversation:
    """Append-only message history owned by the orchestrator."""

    messages: list[Message] = field(default_factory=list)
    _requested_ids: set[str] = field(default_factory=set, repr=False)
    _answered_ids: set[str] = field(default_factory=set, repr=False)

    def add_user(self, content: str) -> Message:
        return self._append(Message(role=Role.USER, content=content))

    def add_assistant(
        self,
        content: Optional[str],
        tool_calls: tuple[ToolInvocation, ...] = (),
    ) -> Message:
        """Append a model reply, recording any tool calls it requests."""
        for call in tool_calls:
            if call.id in self._requested_ids:
                raise ConversationError(f"Duplicate tool call id '{call.id}'")
            self._requested_ids.add(call.id)
        return self._append(
            Message(role=Role.ASSISTANT, content=content, tool_calls=tuple(tool_calls))
        )

    def add_tool_result(self, tool_call_id: str, result: dict) -> Message:
        """
        Append a tool result answering an earlier tool call.

        Raises:
            ConversationError: If the id was never requested or is
                already answered
        """
        if tool_call_id not in self._requested_ids:
            raise ConversationError(
                f"Tool result for unknown tool call id '{tool_call_id}'"
            )
        if tool_call_id in self._answered_ids:
            raise ConversationError(
                f"Tool call id '{tool_call_id}' already has a result"
            )
        self._answered_ids.add(tool_call_id)
        return self._append(
            Message(
                role=Role.TOOL,
                content=json.dumps(result),
                tool_call_id=tool_call_id,
            )
        )

    @property
    def pending_tool_call_ids(self) -> set[str]:
        """Tool call ids that have no result yet."""
        return self._requested_ids - self._answered_ids

    def to_openai(self) -> list[dict]:
        """Render the whole history for a chat-completions request."""
        return [m.to_dict() for m in self.messages]

    def _append(self, message: Message) -> Message:
        self.messages.append(message)
        return message

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)
