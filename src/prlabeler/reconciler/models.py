"""Data models for the Reconciler."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from prlabeler.tracker.models import FieldKind


@dataclass
class TagDecision:
    """A Jira value found on a ticket that maps to a GitHub label."""

    ticket: str
    field_kind: FieldKind
    tracker_value: str
    tag_name: str
    applied: bool  # True if a write was issued for this decision


@dataclass
class ReconcileSummary:
    """Counts for the end-of-run log line."""

    tickets: int
    matches: int
    writes: int
    labels_added: list[str]

    @classmethod
    def from_decisions(
        cls, tickets: Iterable[str], decisions: list[TagDecision]
    ) -> ReconcileSummary:
        added: list[str] = []
        for decision in decisions:
            if decision.applied and decision.tag_name not in added:
                added.append(decision.tag_name)
        return cls(
            tickets=len(set(tickets)),
            matches=len(decisions),
            writes=sum(1 for d in decisions if d.applied),
            labels_added=added,
        )
