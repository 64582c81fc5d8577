"""TagApplier - Adds labels to the pull request unless already present."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prlabeler.github.client import PullRequestClient
    from prlabeler.github.models import PullRequestRef

logger = logging.getLogger("prlabeler.github")


class TagApplier:
    """Ensures labels exist on a pull request.

    Presence is checked against the label snapshot taken at the start of the
    run. The snapshot is never refreshed, so by default a label requested
    twice in one run is written twice (GitHub ignores the repeat). With
    dedupe enabled, labels written during the run are remembered and each
    is written at most once.
    """

    def __init__(
        self,
        client: PullRequestClient,
        pull_request: PullRequestRef,
        existing_tags: Iterable[str],
        dedupe: bool = False,
        dry_run: bool = False,
    ) -> None:
        """Initialize Tag Applier.

        Args:
            client: GitHub client used for the write calls
            pull_request: Pull request to label
            existing_tags: Labels on the pull request when the run started
            dedupe: Skip labels already written during this run
            dry_run: Log writes instead of making them
        """
        self.client = client
        self.pull_request = pull_request
        self.existing_tags = frozenset(existing_tags)
        self.dedupe = dedupe
        self.dry_run = dry_run
        self.written: list[str] = []

    def ensure_tag(self, tag: str) -> bool:
        """Add a label to the pull request if it is not there yet.

        Args:
            tag: Label name

        Returns:
            True if a write was issued (or would be, in dry-run mode).

        Raises:
            PullRequestError: If the write fails
        """
        if tag in self.existing_tags:
            logger.debug("GitHub Label '%s' already exists on the pull request.", tag)
            return False
        if self.dedupe and tag in self.written:
            logger.debug("GitHub Label '%s' was already added in this run.", tag)
            return False

        if self.dry_run:
            logger.info(
                "[DRY-RUN] Would add GitHub Label '%s' to PR #%d", tag, self.pull_request.number
            )
        else:
            logger.debug("Adding GitHub Label: %s", tag)
            self.client.add_labels(self.pull_request, [tag])

        self.written.append(tag)
        return True
