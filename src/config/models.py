"""Pydantic models for the action inputs.

The CI runner hands step inputs to the process as ``INPUT_<NAME>``
environment variables, always as strings and with unset inputs rendered as
the empty string. The models below turn those strings into typed values and
fall back to the documented defaults.
"""

import re
from enum import Enum
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

WORKFLOW_TIMEOUT_MINUTES = 15
POLL_INTERVAL_MS = 15000

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class LogLevel(str, Enum):
    """Supported logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def parse_int_input(value: Any) -> int | None:
    """Parse a numeric step input.

    Args:
        value: Raw input value

    Returns:
        The parsed integer, or None when the input was left empty

    Raises:
        ValueError: If the value does not start with an integer
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value

    text = str(value)
    if text.strip() == "":
        return None

    match = _LEADING_INT.match(text)
    if not match:
        raise ValueError(f"Unable to parse value: {text}")
    return int(match.group(1))


class ActionConfig(BaseSettings):
    """Inputs of the await step.

    Environment variables:
    - INPUT_TOKEN: GitHub API token (required)
    - INPUT_WORKFLOW: Workflow file name to await, e.g. ``build.yml`` (required)
    - INPUT_CHECK_NAME: Specific check within the workflow to await (optional)
    - INPUT_TIMEOUT_MINS: Minutes before giving up (default: 15)
    - INPUT_POLL_INTERVAL_MS: Milliseconds between polls (default: 15000)
    - INPUT_LOG_LEVEL: Logging level (default: INFO)
    """

    token: str = Field(description="GitHub API token for making requests")
    workflow: str = Field(description="Workflow file name to await completion of")
    check_name: str | None = Field(
        default=None,
        description="Specific check within the workflow to wait for",
    )
    timeout_mins: int = Field(
        default=WORKFLOW_TIMEOUT_MINUTES,
        ge=1,
        description="Time until giving up on the completion of the run",
    )
    poll_interval_ms: int = Field(
        default=POLL_INTERVAL_MS,
        ge=1,
        description="Frequency to poll the run for a status",
    )
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("token", "workflow")
    @classmethod
    def validate_required(cls, v: str) -> str:
        """Validate required inputs are not blank."""
        if not v or not v.strip():
            raise ValueError("Input required and not supplied")
        return v.strip()

    @field_validator("check_name", mode="before")
    @classmethod
    def validate_check_name(cls, v: Any) -> Any:
        """Treat an empty check name as not supplied."""
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @field_validator("timeout_mins", mode="before")
    @classmethod
    def validate_timeout_mins(cls, v: Any) -> int:
        """Parse the timeout, falling back to the default when empty or zero."""
        return parse_int_input(v) or WORKFLOW_TIMEOUT_MINUTES

    @field_validator("poll_interval_ms", mode="before")
    @classmethod
    def validate_poll_interval_ms(cls, v: Any) -> int:
        """Parse the poll interval, falling back to the default when empty or zero."""
        return parse_int_input(v) or POLL_INTERVAL_MS

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> Any:
        """Accept log levels in any case, empty meaning the default."""
        if isinstance(v, str):
            return v.strip().upper() or LogLevel.INFO
        return v

    @property
    def timeout_ms(self) -> int:
        """Timeout in milliseconds."""
        return self.timeout_mins * 60 * 1000

    @property
    def poll_interval_seconds(self) -> float:
        """Poll interval in seconds."""
        return self.poll_interval_ms / 1000
