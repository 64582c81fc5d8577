"""Custom exceptions for the GitHub pull request client."""


class GitHubError(Exception):
    """Base exception for GitHub client errors."""


class PullRequestError(GitHubError):
    """Error reading or updating a pull request."""


class EventContextError(GitHubError):
    """The CI event does not identify a pull request."""
