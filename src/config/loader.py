"""Loading of the action inputs and the triggering-event context.

Both are read from the process environment. Pydantic validation failures are
re-raised as ConfigurationValidationError so callers only need to handle the
configuration exception hierarchy.
"""

from typing import Any

from pydantic import ValidationError

from src.github.context import GitHubContext

from .exceptions import ConfigurationValidationError
from .models import ActionConfig


def _validation_messages(error: ValidationError) -> list[str]:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        messages.append(f"{location}: {item.get('msg')}" if location else item["msg"])
    return messages


def load_action_config(**overrides: Any) -> ActionConfig:
    """Load the action inputs from ``INPUT_*`` environment variables.

    Args:
        **overrides: Values taking precedence over the environment

    Returns:
        Validated action configuration

    Raises:
        ConfigurationValidationError: If an input is missing or malformed
    """
    try:
        return ActionConfig(**overrides)
    except ValidationError as e:
        messages = _validation_messages(e)
        raise ConfigurationValidationError(
            f"Action input validation failed: {'; '.join(messages)}",
            validation_errors=messages,
        ) from e


def load_github_context(**overrides: Any) -> GitHubContext:
    """Load the triggering-event context from ``GITHUB_*`` environment variables.

    Args:
        **overrides: Values taking precedence over the environment

    Returns:
        Validated event context

    Raises:
        ConfigurationValidationError: If the context is missing or malformed
    """
    try:
        return GitHubContext(**overrides)
    except ValidationError as e:
        messages = _validation_messages(e)
        raise ConfigurationValidationError(
            f"GitHub context validation failed: {'; '.join(messages)}",
            validation_errors=messages,
        ) from e
