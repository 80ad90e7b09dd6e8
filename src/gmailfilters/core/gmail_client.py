"""Gmail API client for the label and filter settings endpoints."""

from __future__ import annotations

import logging
from typing import Any

from googleapiclient.discovery import Resource

from gmailfilters.core.exceptions import RemoteAPIError

logger = logging.getLogger(__name__)


class GmailClient:
    """Thin wrapper around Gmail API for listing and mutating labels and filters.

    Every call blocks until Gmail answers. Failures are not retried; they are
    wrapped in RemoteAPIError naming the operation and its target.
    """

    def __init__(self, service: Resource, user_id: str = "me") -> None:
        self._service = service
        self._user_id = user_id

    def _execute(self, request: Any, operation: str, target: str | None = None) -> Any:
        """Execute a single API request.

        Args:
            request: A googleapiclient HttpRequest object.
            operation: Description for error messages (e.g. "list labels").
            target: Identifier of the object acted upon, if any.

        Returns:
            The API response dict.

        Raises:
            RemoteAPIError: On any API error.
        """
        try:
            return request.execute()
        except Exception as e:
            raise RemoteAPIError(operation, target, e) from e

    def list_labels(self) -> list[dict[str, Any]]:
        """List all Gmail labels as raw API dicts."""
        request = self._service.users().labels().list(userId=self._user_id)
        results = self._execute(request, "list labels")
        return results.get("labels", [])

    def create_label(self, name: str) -> dict[str, Any]:
        """Create a label with only its name set; Gmail fills in the defaults."""
        request = self._service.users().labels().create(
            userId=self._user_id, body={"name": name}
        )
        return self._execute(request, "create label", name)

    def update_label(self, label_id: str, body: dict[str, Any]) -> dict[str, Any]:
        """Patch an existing label. ``None`` values in ``body`` clear the field."""
        request = self._service.users().labels().patch(
            userId=self._user_id, id=label_id, body=body
        )
        return self._execute(request, "update label", label_id)

    def list_filters(self) -> list[dict[str, Any]]:
        """List installed filters as raw API dicts."""
        request = self._service.users().settings().filters().list(userId=self._user_id)
        results = self._execute(request, "list filters")
        # The API omits the key entirely when there are no filters.
        return results.get("filter", [])

    def create_filter(self, body: dict[str, Any]) -> str:
        """Create a filter and return its new id."""
        request = self._service.users().settings().filters().create(
            userId=self._user_id, body=body
        )
        created = self._execute(request, "create filter", str(body.get("criteria", "")))
        return created.get("id", "")

    def delete_filter(self, filter_id: str) -> None:
        request = self._service.users().settings().filters().delete(
            userId=self._user_id, id=filter_id
        )
        self._execute(request, "delete filter", filter_id)
