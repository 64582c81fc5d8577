"""Data models for the GitHub pull request client."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from prlabeler.github.exceptions import EventContextError


@dataclass(frozen=True)
class PullRequestRef:
    """Identifies the pull request a run works on."""

    owner: str
    repo: str
    number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_repository(cls, repository: str, number: int) -> PullRequestRef:
        """Build a reference from `owner/repo` and a pull request number.

        Raises:
            EventContextError: If repository is not in owner/repo form or the
                number is not an integer.
        """
        owner, sep, repo = (repository or "").partition("/")
        if not sep or not owner or not repo or "/" in repo:
            raise EventContextError(f"Repository must be in 'owner/repo' form, got '{repository}'")
        try:
            number = int(number)
        except (TypeError, ValueError) as e:
            raise EventContextError(f"Invalid pull request number: {number!r}") from e
        return cls(owner=owner, repo=repo, number=number)

    @classmethod
    def from_event(cls, event_path: str | Path, repository: str) -> PullRequestRef:
        """Read the pull request number from a GitHub Actions event payload.

        Args:
            event_path: Path to the event JSON (GITHUB_EVENT_PATH)
            repository: `owner/repo` (GITHUB_REPOSITORY)

        Raises:
            EventContextError: If the payload is missing or not a pull request event.
        """
        path = Path(event_path)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise EventContextError(f"Event payload not found: {path}") from e
        except json.JSONDecodeError as e:
            raise EventContextError(f"Invalid event payload in {path}: {e}") from e

        pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
        if not pull_request or "number" not in pull_request:
            raise EventContextError(
                "Event payload has no pull_request; run this on pull_request events"
            )
        return cls.from_repository(repository, pull_request["number"])
