"""Data models for the Jira tracker client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FieldKind(str, Enum):
    """Ticket field that can be mapped to pull request labels."""

    LABELS = "labels"
    COMPONENTS = "components"

    def __str__(self) -> str:
        return self.value


@dataclass
class TrackerTicket:
    """Field values fetched for one ticket. None means not fetched."""

    key: str
    labels: set[str] | None = None
    components: set[str] | None = None

    def values(self, field_kind: FieldKind) -> set[str]:
        """Fetched values for a field kind, empty if it was not fetched."""
        return getattr(self, field_kind.value) or set()
