"""
Configuration loader for the travel booking agent.

Loads configuration from an optional YAML file with support for
environment variable interpolation. Values missing from the file fall
back to the environment-based defaults in ``config.py``.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml

from .config import Config, LangfuseConfig, LLMConfig, LoggingConfig, get_config
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Regex for environment variable interpolation: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def resolve_env_vars(value: str) -> str:
    """
    Resolve environment variable references in a string.

    Supports ${VAR} and ${VAR:-default} syntax.

    Args:
        value: String potentially containing env var references

    Returns:
        String with env vars resolved
    """

    def replace_match(match: re.Match) -> str:
        var_name = match.group(1)
        default_value = match.group(2) if match.group(2) is not None else ""
        return os.environ.get(var_name, default_value)

    return ENV_VAR_PATTERN.sub(replace_match, value)


def _substitute_env_vars_recursive(data: Any) -> Any:
    """Recursively substitute environment variables in a data structure."""
    if isinstance(data, dict):
        return {k: _substitute_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_substitute_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    return data


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)


def _section(raw_config: dict, name: str) -> dict:
    section = raw_config.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Configuration section '{name}' must be a mapping")
    return section


def _as_float(key: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"llm.{key} must be a number, got {value!r}") from e


def _parse_llm_config(data: dict, base: LLMConfig) -> LLMConfig:
    """Parse the ``llm`` section over the environment defaults."""
    temperature = data.get("temperature", base.temperature)
    if temperature == "":
        temperature = None

    return LLMConfig(
        api_key=data.get("api_key") or base.api_key,
        base_url=data.get("base_url") or base.base_url,
        selection_model=data.get("selection_model") or base.selection_model,
        synthesis_model=data.get("synthesis_model") or base.synthesis_model,
        temperature=(
            _as_float("temperature", temperature) if temperature is not None else None
        ),
        timeout=_as_float("timeout", data.get("timeout", base.timeout)),
    )


def _parse_logging_config(data: dict, base: LoggingConfig) -> LoggingConfig:
    """Parse the ``logging`` section."""
    return LoggingConfig(level=str(data.get("level", base.level)).upper())


def _parse_langfuse_config(data: dict, base: LangfuseConfig) -> LangfuseConfig:
    """Parse the ``langfuse`` section."""
    return LangfuseConfig(
        public_key=data.get("public_key", base.public_key),
        secret_key=data.get("secret_key", base.secret_key),
        host=data.get("host", base.host),
        debug=_as_bool(data.get("debug", base.debug)),
    )


def load_config(path: Optional[str] = None) -> Config:
    """
    Load application configuration.

    Args:
        path: Path to a YAML configuration file. If None, uses the
              CONFIG_PATH env var; if that is unset too, configuration
              comes from the environment alone.

    Returns:
        Config with all sections populated

    Raises:
        ConfigurationError: If an explicit config file is missing, unreadable,
            empty or holds invalid values
    """
    if path is None:
        path = os.environ.get("CONFIG_PATH") or None

    base = get_config()
    if path is None:
        logger.debug("No config file given, using environment configuration")
        return base

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found at {config_path}")

    logger.info(f"Loading configuration from {config_path}")

    try:
        with open(config_path, "r") as f:
            raw_config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Could not read configuration file {config_path}: {e}"
        ) from e

    if raw_config is None:
        raise ConfigurationError(f"Configuration file {config_path} is empty")
    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            f"Configuration file {config_path} must contain a mapping"
        )

    raw_config = _substitute_env_vars_recursive(raw_config)

    return Config(
        llm=_parse_llm_config(_section(raw_config, "llm"), base.llm),
        logging=_parse_logging_config(_section(raw_config, "logging"), base.logging),
        langfuse=_parse_langfuse_config(
            _section(raw_config, "langfuse"), base.langfuse
        ),
    )
