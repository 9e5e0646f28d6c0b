"""Entry point awaiting the local workflow run of the triggering commit."""

import asyncio
import logging
import sys

from src.config.loader import load_action_config, load_github_context
from src.config.models import ActionConfig, LogLevel
from src.github.auth import TokenAuth
from src.github.client import GitHubClient, GitHubClientConfig
from src.github.context import GitHubContext

from .log_format import configure_logging, resolve_log_level
from .models import RunStatusResult
from .orchestrator import WorkflowAwaiter
from .registry import RunRegistry

logger = logging.getLogger(__name__)

PERMISSIONS_REMINDER = "Does the token have the correct permissions?"


async def await_local_workflow(
    config: ActionConfig,
    context: GitHubContext,
    client: GitHubClient | None = None,
) -> RunStatusResult:
    """Await the configured workflow run for the triggering commit.

    Args:
        config: Action inputs
        context: Triggering-event context
        client: GitHub client, one authenticated with the input token if not given

    Returns:
        Final status of the run or check
    """
    if client is None:
        client = GitHubClient(
            auth=TokenAuth(config.token),
            config=GitHubClientConfig(base_url=context.api_url),
        )

    async with client:
        awaiter = WorkflowAwaiter(
            registry=RunRegistry(client, context),
            workflow=config.workflow,
            check_name=config.check_name,
            timeout_ms=config.timeout_ms,
            poll_interval_ms=config.poll_interval_ms,
        )
        return await awaiter.run()


async def run(
    config: ActionConfig | None = None,
    context: GitHubContext | None = None,
    client: GitHubClient | None = None,
) -> int:
    """Run the awaiter and translate the outcome into an exit code.

    Returns:
        0 if the run completed successfully, 1 otherwise
    """
    try:
        config = config or load_action_config()
        logging.getLogger().setLevel(resolve_log_level(config.log_level))
        context = context or load_github_context()

        await await_local_workflow(config, context, client)
        return 0
    except Exception as e:
        logger.error(f"Failed: {e}")
        if "Timeout" not in str(e):
            logger.warning(PERMISSIONS_REMINDER)
        logger.debug("Failure details", exc_info=True)
        return 1


def main() -> None:
    """Console script entry point."""
    configure_logging(LogLevel.INFO)
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
