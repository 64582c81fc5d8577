"""PullRequestClient - GitHub REST calls for one pull request."""

from __future__ import annotations

import logging

import httpx

from prlabeler.github.exceptions import PullRequestError
from prlabeler.github.models import PullRequestRef
from prlabeler.logging import truncate_output

logger = logging.getLogger("prlabeler.github")

COMMITS_PER_PAGE = 100


class PullRequestClient:
    """Reads labels and commits of a pull request and adds labels to it."""

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float | None = 30.0,
    ) -> None:
        """Initialize Pull Request Client.

        Args:
            token: GitHub token with pull-requests write scope
            base_url: GitHub API base URL (for testing/enterprise)
            timeout: Request timeout in seconds
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for GitHub API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": "application/vnd.github+json",
                    "X-GitHub-Api-Version": "2022-11-28",
                },
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> PullRequestClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_labels(self, pr: PullRequestRef) -> frozenset[str]:
        """Get the names of the labels currently on a pull request.

        Raises:
            PullRequestError: If the pull request cannot be read
        """
        response = self.client.get(f"/repos/{pr.full_name}/pulls/{pr.number}")
        if response.status_code != 200:
            raise PullRequestError(
                f"Failed to get PR {pr.number}: {response.status_code} - "
                f"{truncate_output(response.text)}"
            )

        labels = frozenset(label["name"] for label in response.json().get("labels") or [])
        logger.debug("Current Pull Request Labels: %s", sorted(labels))
        return labels

    def list_commit_messages(self, pr: PullRequestRef) -> list[str]:
        """List the messages of all commits on a pull request.

        Follows pagination until a short page is returned.

        Raises:
            PullRequestError: If the commits cannot be listed
        """
        messages: list[str] = []
        page = 1
        while True:
            response = self.client.get(
                f"/repos/{pr.full_name}/pulls/{pr.number}/commits",
                params={"per_page": COMMITS_PER_PAGE, "page": page},
            )
            if response.status_code != 200:
                raise PullRequestError(
                    f"Failed to list commits of PR {pr.number}: {response.status_code} - "
                    f"{truncate_output(response.text)}"
                )

            commits = response.json()
            messages.extend(commit["commit"]["message"] for commit in commits)
            if len(commits) < COMMITS_PER_PAGE:
                break
            page += 1

        logger.debug("Read %d commit(s) from PR #%d", len(messages), pr.number)
        return messages

    def add_labels(self, pr: PullRequestRef, labels: list[str]) -> None:
        """Add labels to a pull request.

        Raises:
            PullRequestError: If GitHub rejects the request
        """
        logger.info("Adding label(s) %s to PR #%d", labels, pr.number)
        response = self.client.post(
            f"/repos/{pr.full_name}/issues/{pr.number}/labels",
            json={"labels": labels},
        )

        if response.status_code != 200:
            logger.error("Failed to add labels to PR #%d: %s", pr.number, response.text)
            raise PullRequestError(
                f"Failed to add labels {labels} to PR {pr.number}: {response.status_code} - "
                f"{truncate_output(response.text)}"
            )
