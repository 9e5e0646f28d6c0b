"""Polling loop that blocks until the local workflow run completes.

The awaiter moves through these phases:

    SEARCHING_RUN -> SEARCHING_CHECK -> POLLING_RUN | POLLING_CHECK
                  -> COMPLETED | TIMED_OUT | FAILED

Identifiers are resolved lazily, one tick at a time, because the run for
the triggering commit may not be listed yet when the loop starts. Once the
identifier to poll is known it is fixed for the rest of the session.
"""

import asyncio
import enum
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from .exceptions import AwaitTimeoutError, WorkflowConclusionError
from .models import RunStatusResult, RunType
from .registry import RunRegistry
from .resolver import RunResolver
from .utils import format_duration, get_elapsed_time

logger = logging.getLogger(__name__)

# Gives GitHub time to register the triggering event and queue the checks.
INITIAL_WAIT_MS = 10 * 1000


class AwaitPhase(enum.Enum):
    """Phases of a polling session."""

    SEARCHING_RUN = "searching_run"
    SEARCHING_CHECK = "searching_check"
    POLLING_RUN = "polling_run"
    POLLING_CHECK = "polling_check"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


@dataclass(frozen=True)
class PollTarget:
    """The identifier being polled, decided once per session."""

    run_type: RunType
    run_id: int

    @property
    def label(self) -> str:
        return "Check Run" if self.run_type is RunType.CHECK_RUN else "Workflow Run"


@dataclass
class AwaitSession:
    """Mutable state of one polling session."""

    started_at: float
    workflow_id: int | None = None
    workflow_run_id: int | None = None
    check_suite_id: int | None = None
    check_run_id: int | None = None
    target: PollTarget | None = None
    attempt: int = 0
    phase: AwaitPhase = AwaitPhase.SEARCHING_RUN


class WorkflowAwaiter:
    """Awaits completion of a workflow run, or one check within it."""

    def __init__(
        self,
        registry: RunRegistry,
        workflow: str,
        check_name: str | None = None,
        timeout_ms: int = 15 * 60 * 1000,
        poll_interval_ms: int = 15000,
        resolver: RunResolver | None = None,
        initial_wait_ms: int = INITIAL_WAIT_MS,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize workflow awaiter.

        Args:
            registry: Run registry for the current repository
            workflow: File name of the workflow to await
            check_name: Specific check to await instead of the whole run
            timeout_ms: Wall-clock budget for the whole session
            poll_interval_ms: Wait between polling ticks
            resolver: Run resolver, one backed by the registry if not given
            initial_wait_ms: Wait before the first lookup
            clock: Source of the current time in seconds
            sleep: Coroutine used to wait, in seconds
        """
        self.registry = registry
        self.workflow = workflow
        self.check_name = check_name
        self.timeout_ms = timeout_ms
        self.poll_interval_ms = poll_interval_ms
        self.resolver = resolver or RunResolver(registry)
        self.initial_wait_ms = initial_wait_ms
        self._clock = clock
        self._sleep = sleep
        self.session: AwaitSession | None = None

    def _elapsed_ms(self, session: AwaitSession) -> float:
        return (self._clock() - session.started_at) * 1000

    async def run(self) -> RunStatusResult:
        """Block until the run completes or the timeout elapses.

        Returns:
            Final status of the run or check, always a success

        Raises:
            WorkflowConclusionError: If the run completed without succeeding
            AwaitTimeoutError: If the run did not complete in time
            GitHubError: If an identifier could not be resolved
        """
        session = AwaitSession(started_at=self._clock())
        self.session = session

        try:
            return await self._run(session)
        except AwaitTimeoutError:
            session.phase = AwaitPhase.TIMED_OUT
            raise
        except WorkflowConclusionError:
            session.phase = AwaitPhase.COMPLETED
            raise
        except Exception:
            session.phase = AwaitPhase.FAILED
            raise

    async def _run(self, session: AwaitSession) -> RunStatusResult:
        logger.info(
            f"Awaiting completion of local Workflow Run {self.workflow}...\n"
            f"  Workflow: {self.workflow}\n"
            + (f"  Check: {self.check_name}\n" if self.check_name else "")
            + f"  Timeout: {format_duration(self.timeout_ms)}"
        )

        await self._sleep(self.initial_wait_ms / 1000)

        session.workflow_id = await self.registry.get_workflow_id(self.workflow)
        self.resolver.reset_resolution_mode()

        while self._elapsed_ms(session) < self.timeout_ms:
            session.attempt += 1

            result = await self._tick(session)
            if result is not None:
                return result

            logger.debug(f"Run has not concluded, attempt {session.attempt}...\n")
            await self._sleep(self.poll_interval_ms / 1000)

        raise AwaitTimeoutError()

    async def _tick(self, session: AwaitSession) -> RunStatusResult | None:
        """Advance the session by one polling tick.

        Returns:
            The final status once the run has completed successfully
        """
        if session.workflow_run_id is None:
            await self._search_run(session)

        if (
            self.check_name
            and session.check_run_id is None
            and session.check_suite_id is not None
        ):
            # A suite without the named check is a misconfiguration, not a
            # listing delay, so a lookup failure here ends the session.
            session.check_run_id = await self.registry.get_check_id(
                session.check_suite_id, self.check_name
            )

        if session.target is None:
            session.target = self._select_target(session)
            if session.target is None:
                logger.debug("Run ID has not been discovered yet...")
                return None

        return await self._poll(session, session.target)

    async def _search_run(self, session: AwaitSession) -> None:
        assert session.workflow_id is not None
        run = await self.resolver.resolve_run(session.workflow_id)
        if run is None:
            return

        session.workflow_run_id = run.id
        session.check_suite_id = run.check_suite_id
        if self.check_name:
            session.phase = AwaitPhase.SEARCHING_CHECK
            if run.check_suite_id is None:
                logger.warning(
                    f"Workflow Run {run.id} has no check suite, awaiting the "
                    f"whole run instead of check '{self.check_name}'"
                )

    def _select_target(self, session: AwaitSession) -> PollTarget | None:
        """Decide once which identifier to poll, if it is known yet."""
        if session.workflow_run_id is None:
            return None

        if session.check_run_id is not None:
            session.phase = AwaitPhase.POLLING_CHECK
            return PollTarget(RunType.CHECK_RUN, session.check_run_id)

        session.phase = AwaitPhase.POLLING_RUN
        return PollTarget(RunType.WORKFLOW_RUN, session.workflow_run_id)

    async def _poll(
        self, session: AwaitSession, target: PollTarget
    ) -> RunStatusResult | None:
        result = await self.registry.get_run_status(target.run_id, target.run_type)
        if not result.completed:
            return None

        session.phase = AwaitPhase.COMPLETED
        completion_msg = (
            f"{target.label} Completed:\n"
            f"  {target.label} ID: {target.run_id}\n"
            f"  Elapsed Time: {get_elapsed_time(session.started_at, self._clock())}\n"
            f"  Conclusion: {result.conclusion}"
        )

        if not result.succeeded:
            logger.error(completion_msg)
            if result.failure and result.failure != result.conclusion:
                logger.error(result.failure)
            assert session.workflow_id is not None
            raise WorkflowConclusionError(
                self.workflow, session.workflow_id, result.conclusion, result.failure
            )

        logger.info(completion_msg)
        return result
