"""Configuration for the local workflow awaiter.

This module provides type-safe configuration with support for:
- Step inputs passed as ``INPUT_*`` environment variables
- The triggering-event context passed as ``GITHUB_*`` environment variables
- Pydantic-based validation and type safety

Example usage:
    from src.config import load_action_config

    config = load_action_config()
    timeout_ms = config.timeout_ms
"""

from .exceptions import ConfigurationError, ConfigurationValidationError
from .loader import load_action_config, load_github_context
from .models import (
    POLL_INTERVAL_MS,
    WORKFLOW_TIMEOUT_MINUTES,
    ActionConfig,
    LogLevel,
    parse_int_input,
)

__all__ = [
    "POLL_INTERVAL_MS",
    "WORKFLOW_TIMEOUT_MINUTES",
    "ActionConfig",
    "ConfigurationError",
    "ConfigurationValidationError",
    "LogLevel",
    "load_action_config",
    "load_github_context",
    "parse_int_input",
]
