"""
Configuration management for the travel booking agent.

Loads all configuration from environment variables (and a local ``.env``
file) with sensible defaults for OpenRouter.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_SELECTION_MODEL = "nvidia/nemotron-3-nano-30b-a3b:free"
DEFAULT_SYNTHESIS_MODEL = "openai/gpt-4o-mini"


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


@dataclass
class LLMConfig:
    """Configuration for the chat-completions endpoint and the two models."""
    api_key: str = os.getenv("OPENROUTER_API_KEY", "")
    base_url: str = os.getenv("OPENROUTER_API_BASE_URL", "") or DEFAULT_BASE_URL
    selection_model: str = os.getenv("SELECTION_MODEL", DEFAULT_SELECTION_MODEL)
    synthesis_model: str = os.getenv("SYNTHESIS_MODEL", DEFAULT_SYNTHESIS_MODEL)
    # None leaves the provider default in place
    temperature: Optional[float] = _optional_float(os.getenv("LLM_TEMPERATURE"))
    timeout: float = float(os.getenv("LLM_TIMEOUT", "60"))


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = os.getenv("LOG_LEVEL", "INFO")


@dataclass
class LangfuseConfig:
    """Configuration for Langfuse observability.

    Tracing auto-enables when both public_key and secret_key are provided.
    """
    public_key: str = os.getenv("LANGFUSE_PUBLIC_KEY", "")
    secret_key: str = os.getenv("LANGFUSE_SECRET_KEY", "")
    host: str = os.getenv("LANGFUSE_HOST", "")
    debug: bool = os.getenv("LANGFUSE_DEBUG", "false").lower() == "true"

    @property
    def enabled(self) -> bool:
        """Auto-enable when both keys are configured."""
        return bool(self.public_key and self.secret_key)


@dataclass
class Config:
    """Main configuration container."""
    llm: LLMConfig = field(default_factory=LLMConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    langfuse: LangfuseConfig = field(default_factory=LangfuseConfig)

    @property
    def log_level(self) -> str:
        return self.logging.level


def get_config() -> Config:
    """Get the application configuration from the environment."""
    return Config(
        llm=LLMConfig(),
        logging=LoggingConfig(),
        langfuse=LangfuseConfig(),
    )


# Global config instance
config = get_config()
