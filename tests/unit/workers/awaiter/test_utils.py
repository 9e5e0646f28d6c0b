"""
Unit tests for awaiter time and git-ref helpers.

Why: Run lookups filter on the branch, head SHA and creation date derived by
     these helpers, and the completion log reports elapsed time through them.

What: Tests branch extraction, pull request aware SHA/ref selection, the
      created date range and duration formatting.

How: Pure function calls with fixed inputs; caplog for the ref diagnostics.
"""

import logging
from datetime import UTC, datetime, timedelta, timezone

import pytest

from src.workers.awaiter.utils import (
    format_duration,
    get_branch_name,
    get_elapsed_time,
    get_head_sha,
    get_offset_range,
    get_ref,
    get_target_branch,
    is_tag_ref,
)
from tests.fixtures.awaiter import MOCK_BRANCH, MOCK_REF, MOCK_SHA, make_context

PR_PAYLOAD = {"pull_request": {"head": {"sha": "abc123", "ref": "feature/pie"}}}


class TestGetBranchName:
    """Test branch extraction from refs."""

    @pytest.mark.parametrize(
        "ref,expected",
        [
            ("refs/heads/lanayru", "lanayru"),
            ("/refs/heads/lanayru", "lanayru"),
            ("refs/heads/feature/nested/branch", "feature/nested/branch"),
        ],
    )
    def test_branch_refs(self, ref: str, expected: str) -> None:
        """Test the branch name follows the heads prefix."""
        assert get_branch_name(ref) == expected

    def test_tag_ref_is_not_a_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """
        Why: Tag pushes are a normal trigger, they just cannot be filtered by branch
        What: Tests a tag ref yields None with a debug record and no warning
        How: Captures records at DEBUG and inspects their levels
        """
        caplog.set_level(logging.DEBUG)

        assert get_branch_name("/refs/tags/1.5.0") is None

        assert [r.levelno for r in caplog.records] == [logging.DEBUG]
        assert (
            caplog.records[0].getMessage()
            == "Unable to filter branch, unsupported ref: /refs/tags/1.5.0"
        )

    @pytest.mark.parametrize("ref", ["refs/heads/", "refs/pull/12/merge", ""])
    def test_ref_without_branch_warns(
        self, ref: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test refs that carry no branch yield None and a warning."""
        caplog.set_level(logging.DEBUG)

        assert get_branch_name(ref) is None

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert f"failed to get branch for ref: {ref}" in warnings[0].getMessage()

    def test_is_tag_ref(self) -> None:
        """Test tag detection with and without the leading slash."""
        assert is_tag_ref("refs/tags/v1")
        assert is_tag_ref("/refs/tags/v1")
        assert not is_tag_ref(MOCK_REF)


class TestContextSelectors:
    """Test branch, SHA and ref selection from the event context."""

    def test_push_event(self) -> None:
        """Test push events use the context SHA and ref."""
        context = make_context()

        assert get_head_sha(context) == MOCK_SHA
        assert get_ref(context) == MOCK_REF
        assert get_target_branch(context) == MOCK_BRANCH

    def test_pull_request_event(self) -> None:
        """
        Why: For pull requests the context SHA is a merge commit no run is keyed on
        What: Tests the head SHA and head ref of the payload are preferred
        How: Builds a pull_request context with a head section
        """
        context = make_context(event_name="pull_request", payload=PR_PAYLOAD)

        assert get_head_sha(context) == "abc123"
        assert get_ref(context) == "feature/pie"
        assert get_target_branch(context) == "feature/pie"

    def test_pull_request_branch_comes_from_head_ref(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test the merge ref of a pull request is never parsed for a branch."""
        caplog.set_level(logging.DEBUG)
        context = make_context(
            event_name="pull_request", ref="refs/pull/12/merge", payload=PR_PAYLOAD
        )

        assert get_target_branch(context) == get_ref(context) == "feature/pie"
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_pull_request_without_head(self) -> None:
        """Test a pull request payload without a head section yields empty values."""
        context = make_context(event_name="pull_request", payload={"action": "opened"})

        assert get_head_sha(context) == ""
        assert get_ref(context) == ""
        assert get_target_branch(context) is None


class TestGetOffsetRange:
    """Test the created date range."""

    def test_one_day_before(self) -> None:
        """Test the range starts the day before the reference time."""
        now = datetime(2024, 3, 1, 0, 30, tzinfo=UTC)
        assert get_offset_range(1, now=now) == "2024-02-29..*"

    def test_uses_utc_date(self) -> None:
        """Test a non-UTC reference time is converted before formatting."""
        # 2024-03-01 01:00 at +05:00 is 2024-02-29 20:00 in UTC
        now = datetime(2024, 3, 1, 1, 0, tzinfo=timezone(timedelta(hours=5)))
        assert get_offset_range(1, now=now) == "2024-02-28..*"

    def test_defaults_to_current_time(self) -> None:
        """Test the range ends open and starts yesterday by default."""
        expected = (datetime.now(UTC) - timedelta(days=1)).strftime("%Y-%m-%d")
        assert get_offset_range(1) == f"{expected}..*"

    @pytest.mark.parametrize("days", [0, -1])
    def test_rejects_days_below_one(self, days: int) -> None:
        """Test the window must reach at least one day back."""
        with pytest.raises(
            ValueError, match=f"daysBefore must be greater than 1, received: {days}"
        ):
            get_offset_range(days)


class TestDurations:
    """Test elapsed time and duration formatting."""

    def test_elapsed_time(self) -> None:
        """Test hours, minutes and fractional seconds are reported."""
        start = 1_700_000_000.0
        end = start + 4 * 3600 + 3 * 60 + 2.001

        assert get_elapsed_time(start, end) == "4 hours, 3 minutes, 2.001 seconds"

    def test_elapsed_time_singular_units(self) -> None:
        """Test one hour and one minute are not pluralised."""
        assert get_elapsed_time(0, 3661.5) == "1 hour, 1 minute, 1.5 seconds"

    def test_elapsed_time_zero(self) -> None:
        """Test equal timestamps report zero in every unit."""
        assert get_elapsed_time(10, 10) == "0 hours, 0 minutes, 0 seconds"

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (1, "0 hours, 0 minutes, 1 second"),
            (10, "0 hours, 0 minutes, 10 seconds"),
            (1.25, "0 hours, 0 minutes, 1.25 seconds"),
        ],
    )
    def test_elapsed_time_trims_seconds(self, seconds: float, expected: str) -> None:
        """
        Why: Whole seconds read better without a millisecond suffix
        What: Tests trailing zeros are dropped and one second is singular
        How: Formats short durations starting from zero
        """
        assert get_elapsed_time(0, seconds) == expected

    @pytest.mark.parametrize(
        "milliseconds,expected",
        [
            (15 * 60 * 1000, "15 minutes"),
            (90 * 60 * 1000, "1 hour, 30 minutes"),
            (15000, "15 seconds"),
            (61000, "1 minute, 1 second"),
            (0, "0 seconds"),
        ],
    )
    def test_format_duration(self, milliseconds: int, expected: str) -> None:
        """Test compact durations omit zero units."""
        assert format_duration(milliseconds) == expected
