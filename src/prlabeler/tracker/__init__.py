"""Tracker Client - Reads ticket labels and components from Jira."""

from prlabeler.tracker.client import TrackerClient, build_auth_header, construct_url
from prlabeler.tracker.exceptions import TrackerError, TrackerFetchError
from prlabeler.tracker.models import FieldKind, TrackerTicket

__all__ = [
    "FieldKind",
    "TrackerClient",
    "TrackerError",
    "TrackerFetchError",
    "TrackerTicket",
    "build_auth_header",
    "construct_url",
]
