"""Log formatting for CI runner output.

Inside a runner, records are written as workflow commands so that debug
lines are folded away and warnings and errors become annotations.
"""

import logging
import os
import sys

from src.config.models import LogLevel

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def escape_data(message: str) -> str:
    """Escape a message so it fits on a single workflow command line."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandFormatter(logging.Formatter):
    """Render records as ``::debug::``, ``::warning::`` and ``::error::`` commands."""

    def __init__(self) -> None:
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


def running_in_actions() -> bool:
    """Check if the process runs inside a CI runner job."""
    return os.getenv("GITHUB_ACTIONS", "").lower() == "true"


def resolve_log_level(level: LogLevel) -> str:
    """Debug logging is forced on when the runner was started with debugging enabled."""
    if os.getenv("RUNNER_DEBUG") == "1":
        return LogLevel.DEBUG.value
    return level.value


def configure_logging(
    level: LogLevel = LogLevel.INFO, workflow_commands: bool | None = None
) -> None:
    """Configure the root logger.

    Args:
        level: Logging level
        workflow_commands: Emit workflow commands, detected from the
            environment if not given
    """
    if workflow_commands is None:
        workflow_commands = running_in_actions()

    handler = logging.StreamHandler(sys.stdout)
    if workflow_commands:
        handler.setFormatter(WorkflowCommandFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))

    logging.basicConfig(
        level=resolve_log_level(level),
        handlers=[handler],
        force=True,
    )
