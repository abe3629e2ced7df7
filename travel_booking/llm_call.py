"""
LLM Call Interface for the travel booking agent.

Thin wrapper over the OpenAI SDK pointed at an OpenAI-compatible
endpoint (OpenRouter by default). Failures are not retried: the client
is built with ``max_retries=0`` and errors propagate to the caller.
"""

import logging
from typing import Optional

from openai import OpenAI
from openai.types.chat import ChatCompletion

from .config import LLMConfig, config
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class LLMClient:
    """Chat-completions client shared by the selection and synthesis passes."""

    def __init__(self, llm_config: Optional[LLMConfig] = None):
        self.config = llm_config or config.llm
        if not self.config.api_key:
            raise ConfigurationError(
                "No API key configured. Set OPENROUTER_API_KEY or llm.api_key."
            )
        self.client = OpenAI(
            api_key=self.config.api_key,
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            max_retries=0,
        )

    def create_completion(
        self,
        model: str,
        messages: list[dict],
        tools: Optional[list[dict]] = None,
        tool_choice: Optional[str] = None,
    ) -> ChatCompletion:
        """Call ``chat.completions.create``.

        Args:
            model: Model identifier on the endpoint
            messages: Conversation history as OpenAI message dicts
            tools: Tool definitions; omitted from the request when None
            tool_choice: Tool-choice policy, only sent together with tools
        """
        create_kwargs: dict = {
            "model": model,
            "messages": messages,
        }
        if tools:
            create_kwargs["tools"] = tools
            if tool_choice:
                create_kwargs["tool_choice"] = tool_choice
        if self.config.temperature is not None:
            create_kwargs["temperature"] = self.config.temperature

        logger.debug(
            f"Calling {model} with {len(messages)} messages ({len(tools or [])} tools)"
        )
        return self.client.chat.completions.create(**create_kwargs)

    def close(self) -> None:
        """Close the underlying OpenAI client."""
        self.client.close()
