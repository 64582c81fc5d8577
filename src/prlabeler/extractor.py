"""Ticket extraction from commit messages."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

logger = logging.getLogger("prlabeler.extractor")

TICKET_PATTERN = re.compile(r"[A-Z]+-[0-9]+")


def extract_tickets(messages: Iterable[str | None]) -> set[str]:
    """Collect the distinct Jira ticket ids mentioned in commit messages.

    Matching is case-sensitive: `abc-1` is not a ticket id.

    Args:
        messages: Commit messages, in any order.

    Returns:
        Set of ticket ids. Empty when no message mentions a ticket.
    """
    tickets: set[str] = set()
    for message in messages:
        if not message:
            continue
        tickets.update(TICKET_PATTERN.findall(message))

    logger.debug("Jira tickets found in commits: %s", sorted(tickets))
    return tickets
