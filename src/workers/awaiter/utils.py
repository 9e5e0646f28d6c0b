"""Time and git-ref helpers for the awaiter.

All functions here are pure apart from logging; the event context they read
from is passed in explicitly.
"""

import logging
import re
from datetime import UTC, datetime, timedelta

from src.github.context import GitHubContext

logger = logging.getLogger(__name__)

_BRANCH_REF_SEPARATOR = re.compile(r"/?refs/heads/")
_TAG_REF = re.compile(r"/?refs/tags/")


def _get_branch_name_from_ref(ref: str) -> str | None:
    ref_items = _BRANCH_REF_SEPARATOR.split(ref)
    if len(ref_items) > 1 and len(ref_items[1]) > 0:
        return ref_items[1]
    return None


def is_tag_ref(ref: str) -> bool:
    """Check whether a ref points at a tag."""
    return _TAG_REF.search(ref) is not None


def get_branch_name(ref: str) -> str | None:
    """Derive the branch name from a fully-formed ref.

    The workflow runs listing only accepts a bare branch name, not a ref.

    Args:
        ref: Ref such as ``refs/heads/main`` (leading slash tolerated)

    Returns:
        The branch name, or None for tag refs and refs that carry no branch
    """
    if is_tag_ref(ref):
        logger.debug(f"Unable to filter branch, unsupported ref: {ref}")
        return None

    branch = _get_branch_name_from_ref(ref)
    if branch is None:
        logger.warning(
            f"failed to get branch for ref: {ref}, please raise an issue with this git ref."
        )
        return None

    logger.debug(f"Filtered branch name: {ref}")
    return branch


def get_target_branch(context: GitHubContext) -> str | None:
    """Branch the triggering event ran on.

    For pull requests the payload already carries the bare head branch name.
    """
    ref = get_ref(context)
    if context.is_pull_request:
        return ref or None
    return get_branch_name(ref)


def get_head_sha(context: GitHubContext) -> str:
    """Commit SHA of the triggering event, preferring the pull request head."""
    if context.is_pull_request:
        head_sha: str = context.pull_request_head.get("sha", "")
        return head_sha
    return context.sha


def get_ref(context: GitHubContext) -> str:
    """Ref of the triggering event, preferring the pull request head."""
    if context.is_pull_request:
        head_ref: str = context.pull_request_head.get("ref", "")
        return head_ref
    return context.ref


def get_offset_range(days_before: int, now: datetime | None = None) -> str:
    """Build a ``created`` date range starting some days in the past.

    Args:
        days_before: Number of days before today to start from, at least 1
        now: Reference time, defaults to the current time

    Returns:
        Range in the ``YYYY-MM-DD..*`` form accepted by the GitHub search syntax

    Raises:
        ValueError: If days_before is less than 1
    """
    if days_before < 1:
        raise ValueError(f"daysBefore must be greater than 1, received: {days_before}")

    reference = (now or datetime.now(UTC)).astimezone(UTC)
    start_date = (reference - timedelta(days=days_before)).strftime("%Y-%m-%d")
    return f"{start_date}..*"


def _unit(value: int, name: str) -> str:
    return f"{value} {name}" if value == 1 else f"{value} {name}s"


def get_elapsed_time(start: float, end: float) -> str:
    """Human readable difference between two epoch timestamps in seconds.

    Example: ``4 hours, 3 minutes, 2.001 seconds``. Seconds keep millisecond
    precision without trailing zeros, so ``1 second`` and ``10 seconds``.
    """
    total_ms = max(0, round((end - start) * 1000))
    hours, remainder = divmod(total_ms, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    seconds = f"{remainder / 1000:.3f}".rstrip("0").rstrip(".")
    seconds_name = "second" if remainder == 1000 else "seconds"
    return (
        f"{_unit(hours, 'hour')}, {_unit(minutes, 'minute')}, "
        f"{seconds} {seconds_name}"
    )


def format_duration(milliseconds: int) -> str:
    """Compact human readable duration, e.g. ``1 hour, 30 minutes``."""
    total_seconds = max(0, milliseconds) // 1000
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts = []
    if hours:
        parts.append(_unit(hours, "hour"))
    if minutes:
        parts.append(_unit(minutes, "minute"))
    if seconds or not parts:
        parts.append(_unit(seconds, "second"))
    return ", ".join(parts)
