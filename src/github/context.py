"""Triggering-event context exposed to a job by the CI runner.

Environment variables:
- GITHUB_REPOSITORY: ``owner/repo`` of the repository running the job
- GITHUB_SHA: Commit SHA that triggered the workflow
- GITHUB_REF: Fully-formed ref that triggered the workflow
- GITHUB_EVENT_NAME: Name of the triggering event (``push``, ``pull_request``...)
- GITHUB_EVENT_PATH: Path to the JSON webhook payload of the event
- GITHUB_API_URL: REST API base URL (default: https://api.github.com)
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

PULL_REQUEST_EVENT = "pull_request"


class GitHubContext(BaseSettings):
    """Context of the event that triggered the current job."""

    repository: str = Field(description="Repository in owner/repo form")
    sha: str = Field(default="", description="Commit SHA of the triggering event")
    ref: str = Field(default="", description="Git ref of the triggering event")
    event_name: str = Field(default="", description="Triggering event name")
    event_path: str | None = Field(
        default=None, description="Path to the event payload JSON file"
    )
    api_url: str = Field(
        default="https://api.github.com", description="GitHub REST API base URL"
    )
    payload: dict[str, Any] = Field(
        default_factory=dict, description="Decoded event payload"
    )

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, v: str) -> str:
        """Validate the repository is in owner/repo form."""
        parts = v.strip().split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"Repository must be in owner/repo form, received: {v}")
        return v.strip()

    @model_validator(mode="after")
    def load_payload(self) -> "GitHubContext":
        """Load the event payload from disk when it was not given directly."""
        if not self.payload and self.event_path:
            path = Path(self.event_path)
            try:
                self.payload = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Unable to read event payload at {path}: {e}")
        return self

    @property
    def owner(self) -> str:
        """Repository owner."""
        return self.repository.split("/")[0]

    @property
    def repo(self) -> str:
        """Repository name."""
        return self.repository.split("/")[1]

    @property
    def is_pull_request(self) -> bool:
        """Whether the job was triggered by a pull request event."""
        return self.event_name == PULL_REQUEST_EVENT

    @property
    def pull_request_head(self) -> dict[str, Any]:
        """``pull_request.head`` section of the payload, empty if absent."""
        pull_request = self.payload.get("pull_request") or {}
        head: dict[str, Any] = pull_request.get("head") or {}
        return head
