"""
Pytest configuration and fixtures for the travel booking agent tests.
"""

import json
from unittest.mock import patch

import pytest
from openai.types.chat import ChatCompletion

from travel_booking.config import LLMConfig
from travel_booking.llm_call import LLMClient
from travel_booking.tracing import shutdown_tracing


def _tool_call(call_id: str, name: str, arguments) -> dict:
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {
        "id": call_id,
        "type": "function",
        "function": {"name": name, "arguments": arguments},
    }


@pytest.fixture
def make_completion():
    """Factory for real ChatCompletion objects.

    ``tool_calls`` is a list of ``(id, name, arguments)`` tuples; arguments
    may be a dict or a raw JSON string. A dict entry is used as-is, for
    tool calls that are not function calls.
    """

    def _make(content=None, tool_calls=None, finish_reason=None, usage=None):
        message: dict = {"role": "assistant", "content": content}
        if tool_calls:
            message["tool_calls"] = [
                call if isinstance(call, dict) else _tool_call(*call)
                for call in tool_calls
            ]
        if finish_reason is None:
            finish_reason = "tool_calls" if tool_calls else "stop"
        data: dict = {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 1700000000,
            "model": "test-model",
            "choices": [
                {"index": 0, "finish_reason": finish_reason, "message": message}
            ],
        }
        if usage:
            data["usage"] = usage
        return ChatCompletion.model_validate(data)

    return _make


@pytest.fixture
def llm_config():
    """LLM configuration that never touches the real environment."""
    return LLMConfig(
        api_key="test-key",
        base_url="http://localhost:9999/v1",
        selection_model="test/selector",
        synthesis_model="test/synthesizer",
        temperature=None,
        timeout=5.0,
    )


@pytest.fixture
def mock_llm_client(llm_config):
    """LLMClient whose OpenAI SDK client is a mock.

    Set ``mock_llm_client.client.chat.completions.create.side_effect`` to
    script the model's replies.
    """
    with patch("travel_booking.llm_call.OpenAI"):
        yield LLMClient(llm_config)


@pytest.fixture(autouse=True)
def reset_tracing():
    """Make sure no tracing client leaks between tests."""
    shutdown_tracing()
    yield
    shutdown_tracing()
