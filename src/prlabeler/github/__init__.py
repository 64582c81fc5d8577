"""GitHub - Pull request reads and label writes."""

from prlabeler.github.applier import TagApplier
from prlabeler.github.client import PullRequestClient
from prlabeler.github.exceptions import (
    EventContextError,
    GitHubError,
    PullRequestError,
)
from prlabeler.github.models import PullRequestRef

__all__ = [
    "EventContextError",
    "GitHubError",
    "PullRequestClient",
    "PullRequestError",
    "PullRequestRef",
    "TagApplier",
]
