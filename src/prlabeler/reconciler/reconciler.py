"""Reconciler - Decides which pull request labels each ticket calls for."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from prlabeler.config import ConfigurationError, FieldMapping
from prlabeler.reconciler.models import TagDecision
from prlabeler.tracker.models import FieldKind

if TYPE_CHECKING:
    from prlabeler.github import TagApplier
    from prlabeler.tracker import TrackerClient

logger = logging.getLogger("prlabeler.reconciler")


class Reconciler:
    """Matches Jira ticket fields against configured mappings.

    For every ticket and every configured field kind, the field is fetched
    once and each mapping is checked in list order. A hit is handed to the
    TagApplier, which skips labels already on the pull request.

    Any error aborts the run; tickets after the failing one are not
    processed.
    """

    def __init__(
        self,
        tracker: TrackerClient,
        applier: TagApplier,
        label_mappings: list[FieldMapping] | None = None,
        component_mappings: list[FieldMapping] | None = None,
    ) -> None:
        """Initialize the Reconciler.

        Args:
            tracker: Client used to fetch ticket fields
            applier: Applies labels to the pull request
            label_mappings: Jira label -> GitHub label pairs
            component_mappings: Jira component -> GitHub label pairs

        Raises:
            ConfigurationError: If both mapping lists are empty.
        """
        self.tracker = tracker
        self.applier = applier
        self.mappings: dict[FieldKind, list[FieldMapping]] = {}
        if label_mappings:
            self.mappings[FieldKind.LABELS] = list(label_mappings)
        if component_mappings:
            self.mappings[FieldKind.COMPONENTS] = list(component_mappings)

        if not self.mappings:
            raise ConfigurationError("Either jira-labels or jira-components must be provided.")

    def reconcile(self, tickets: Iterable[str]) -> list[TagDecision]:
        """Apply the labels called for by a set of tickets.

        Tickets are processed in sorted order so runs are reproducible.

        Args:
            tickets: Distinct ticket ids found in the pull request's commits

        Returns:
            One TagDecision per mapping hit, in processing order.

        Raises:
            TrackerFetchError: If Jira fails for a ticket/field.
            PullRequestError: If a label write fails.
        """
        decisions: list[TagDecision] = []
        for ticket in sorted(set(tickets)):
            logger.debug("Checking Jira Ticket: %s", ticket)
            for field_kind, mappings in self.mappings.items():
                decisions.extend(self._reconcile_field(ticket, field_kind, mappings))
        return decisions

    def _reconcile_field(
        self, ticket: str, field_kind: FieldKind, mappings: list[FieldMapping]
    ) -> list[TagDecision]:
        """Check one field of one ticket against its mappings."""
        values = self.tracker.fetch_field(ticket, field_kind)
        logger.debug("Jira Ticket %s %s: %s", ticket, field_kind.value, sorted(values))

        decisions = []
        for mapping in mappings:
            if mapping.tracker_value not in values:
                logger.debug(
                    "Jira Ticket '%s' does not have a matching %s '%s' in Jira.",
                    ticket,
                    field_kind.value,
                    mapping.tracker_value,
                )
                continue

            logger.debug(
                "Jira Ticket '%s' has %s '%s'. Matching GitHub Label: '%s'",
                ticket,
                field_kind.value,
                mapping.tracker_value,
                mapping.tag_name,
            )
            applied = self.applier.ensure_tag(mapping.tag_name)
            decisions.append(
                TagDecision(
                    ticket=ticket,
                    field_kind=field_kind,
                    tracker_value=mapping.tracker_value,
                    tag_name=mapping.tag_name,
                    applied=applied,
                )
            )
        return decisions
