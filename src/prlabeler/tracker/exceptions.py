"""Custom exceptions for the Jira tracker client."""

from __future__ import annotations


class TrackerError(Exception):
    """Base exception for tracker client errors."""


class TrackerFetchError(TrackerError):
    """Jira answered, but not with the ticket's field data."""

    def __init__(self, ticket: str, field_kind: str, status_code: int | None = None) -> None:
        self.ticket = ticket
        self.field_kind = str(field_kind)
        self.status_code = status_code
        super().__init__(f"Failed to get {self.field_kind} for Jira ticket '{ticket}'")
