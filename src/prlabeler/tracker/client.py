"""TrackerClient - Reads ticket labels and components from the Jira REST API."""

from __future__ import annotations

import base64
import logging
from collections.abc import Iterable
from typing import Any

import httpx

from prlabeler.tracker.exceptions import TrackerFetchError
from prlabeler.tracker.models import FieldKind, TrackerTicket

logger = logging.getLogger("prlabeler.tracker")


def construct_url(base_url: str, ticket: str) -> str:
    """Build the issue URL for a ticket.

    At most one trailing slash is stripped from base_url, so
    `https://jira/rest/api/2/` and `https://jira/rest/api/2` give the same URL.
    """
    api_url = base_url[:-1] if base_url.endswith("/") else base_url
    return f"{api_url}/issue/{ticket}"


def build_auth_header(credential: str, encoded: bool = False) -> str:
    """Build a Basic Authorization header value.

    Args:
        credential: `user:token` pair, or its base64 form when encoded is True.
        encoded: Whether the credential is already base64-encoded.

    Returns:
        Header value, e.g. `Basic dXNlcjp0b2tlbg==`.
    """
    if encoded:
        return f"Basic {credential}"
    token = base64.b64encode(credential.encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class TrackerClient:
    """Fetches ticket fields from Jira.

    One GET per call, no retries and no caching. Ticket ids are deduplicated
    before they reach this client.
    """

    def __init__(
        self,
        base_url: str,
        credential: str,
        credential_encoded: bool = False,
        timeout: float | None = None,
    ) -> None:
        """Initialize Tracker Client.

        Args:
            base_url: Jira REST API URL, e.g. https://jira.example.com/rest/api/2
            credential: Basic auth credential (raw `user:token` or base64)
            credential_encoded: Whether credential is already base64-encoded
            timeout: Request timeout in seconds, None for no timeout
        """
        self.base_url = base_url
        self.credential = credential
        self.credential_encoded = credential_encoded
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the Jira API."""
        if self._client is None:
            self._client = httpx.Client(
                headers={
                    "Authorization": build_auth_header(self.credential, self.credential_encoded),
                    "Accept": "application/json",
                },
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> TrackerClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch_field(self, ticket: str, field_kind: FieldKind) -> set[str]:
        """Fetch one field of a ticket.

        Args:
            ticket: Jira ticket id, e.g. ABC-123
            field_kind: LABELS or COMPONENTS

        Returns:
            Set of label strings or component names. Empty if the ticket
            has no such field.

        Raises:
            TrackerFetchError: If Jira answers with a non-200 status or a
                body it cannot read.
            httpx.TransportError: If Jira cannot be reached at all.
        """
        field_kind = FieldKind(field_kind)
        url = construct_url(self.base_url, ticket)
        logger.debug("Fetching Jira Ticket %s from '%s'", field_kind.value, url)

        response = self.client.get(url)

        if response.status_code != 200:
            logger.debug(
                "Jira returned %d for %s (%s)", response.status_code, ticket, field_kind.value
            )
            raise TrackerFetchError(ticket, field_kind, response.status_code)

        try:
            data = response.json() if response.content else {}
            return self._parse_field(data, field_kind)
        except ValueError as e:
            raise TrackerFetchError(ticket, field_kind, response.status_code) from e

    def fetch_ticket(self, ticket: str, kinds: Iterable[FieldKind]) -> TrackerTicket:
        """Fetch several fields of a ticket, one request per field kind."""
        result = TrackerTicket(key=ticket)
        for kind in kinds:
            kind = FieldKind(kind)
            setattr(result, kind.value, self.fetch_field(ticket, kind))
        return result

    @staticmethod
    def _parse_field(data: Any, field_kind: FieldKind) -> set[str]:
        """Pull label strings or component names out of an issue payload.

        Raises:
            ValueError: If a component entry is not an object.
        """
        fields = data.get("fields") if isinstance(data, dict) else None
        values = (fields if isinstance(fields, dict) else {}).get(field_kind.value) or []

        if field_kind is FieldKind.COMPONENTS:
            if not all(isinstance(component, dict) for component in values):
                raise ValueError(f"Unexpected component entries: {values!r}")
            return {component["name"] for component in values if component.get("name")}
        return {str(label) for label in values}
