"""Storage of the content calendar."""

from __future__ import annotations

from typing import Any

from .models import ContentCalendar, ContentCalendarInput
from .rest import RepositoryError, RestClient


def _decode(records: list[dict[str, Any]] | None) -> list[ContentCalendar]:
    try:
        return [ContentCalendar.from_dict(record) for record in records or []]
    except (TypeError, ValueError, AttributeError) as exc:
        raise RepositoryError(f"failed to unmarshal response: {exc}") from exc


class CalendarRepository:
    """Create, list, update and delete scheduled posts."""

    def __init__(self, client: RestClient) -> None:
        self.client = client

    def create_entry(self, entry: ContentCalendarInput) -> ContentCalendar:
        records = self.client.request(
            "POST", "content_calendar", "create entry", entry.to_dict(), (201,), True
        )
        entries = _decode(records)
        if not entries:
            raise RepositoryError("no entry returned from API")
        return entries[0]

    def get_entries(self, status: str = "", limit: int = 0) -> list[ContentCalendar]:
        """List entries by scheduled time, optionally by status and up to ``limit``."""
        path = "content_calendar?select=*&order=scheduled_for.asc"
        if status:
            path += f"&status=eq.{status}"
        if limit > 0:
            path += f"&limit={limit}"
        records = self.client.request("GET", path, "get entries")
        return _decode(records)

    def update_entry_status(self, entry_id: str, status: str) -> None:
        self.client.request(
            "PATCH",
            f"content_calendar?id=eq.{entry_id}",
            "update entry",
            {"status": status},
            (200, 204),
        )

    def delete_entry(self, entry_id: str) -> None:
        self.client.request(
            "DELETE",
            f"content_calendar?id=eq.{entry_id}",
            "delete entry",
            expected=(204, 200),
        )