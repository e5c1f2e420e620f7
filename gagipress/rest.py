"""Minimal client for the database's REST interface."""

from __future__ import annotations

import json
from collections.abc import Collection
from typing import Any

import requests


class RepositoryError(Exception):
    """A request to the REST API failed or returned something unusable."""


class RestClient:
    """Sends authenticated requests to the ``/rest/v1`` endpoints of a project."""

    def __init__(
        self,
        url: str,
        anon_key: str = "",
        service_key: str = "",
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.anon_key = anon_key
        self.service_key = service_key
        self.session = session if session is not None else requests.Session()

    @property
    def api_key(self) -> str:
        """The service key when configured, otherwise the anonymous key."""
        return self.service_key or self.anon_key

    def request(
        self,
        method: str,
        path: str,
        action: str,
        payload: Any = None,
        expected: Collection[int] = (200,),
        representation: bool = False,
    ) -> list[dict[str, Any]] | None:
        """Send a request to ``/rest/v1/<path>``.

        ``action`` names the operation in error messages. ``payload``, when
        given, is sent as a JSON body. A response whose status is not in
        ``expected`` raises ``RepositoryError``. GET requests and requests
        asking for the stored representation return the decoded list of
        records; other requests return ``None``.
        """
        key = self.api_key
        headers = {"apikey": key, "Authorization": f"Bearer {key}"}
        data = None
        if payload is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(payload)
        if representation:
            headers["Prefer"] = "return=representation"

        try:
            response = self.session.request(
                method, f"{self.url}/rest/v1/{path}", headers=headers, data=data
            )
        except requests.RequestException as exc:
            raise RepositoryError(f"failed to {action}: {exc}") from exc

        if response.status_code not in expected:
            raise RepositoryError(
                f"failed to {action}: HTTP {response.status_code}: {response.text}"
            )

        if method.upper() != "GET" and not representation:
            return None

        try:
            records = json.loads(response.text)
        except ValueError as exc:
            raise RepositoryError(f"failed to unmarshal response: {exc}") from exc
        if records is None:
            return []
        if not isinstance(records, list) or not all(
            isinstance(record, dict) for record in records
        ):
            raise RepositoryError(
                "failed to unmarshal response: expected a JSON array of objects"
            )
        return records