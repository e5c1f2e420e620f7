"""Storage of content ideas and scripts."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from .models import ContentIdea, ContentIdeaInput, ContentScript, ContentScriptInput
from .rest import RepositoryError, RestClient

_MIN_PREFIX = 6

_T = TypeVar("_T")


def _decode(records: list[dict[str, Any]] | None, factory: Callable[[dict[str, Any]], _T]) -> list[_T]:
    try:
        return [factory(record) for record in records or []]
    except (TypeError, ValueError, AttributeError) as exc:
        raise RepositoryError(f"failed to unmarshal response: {exc}") from exc


class ContentRepository:
    """Create and read content ideas and scripts."""

    def __init__(self, client: RestClient) -> None:
        self.client = client

    def create_idea(self, idea: ContentIdeaInput) -> ContentIdea:
        records = self.client.request(
            "POST", "content_ideas", "create idea", idea.to_dict(), (201,), True
        )
        ideas = _decode(records, ContentIdea.from_dict)
        if not ideas:
            raise RepositoryError("no idea returned from API")
        return ideas[0]

    def get_ideas(self, status: str = "", limit: int = 0) -> list[ContentIdea]:
        path = "content_ideas?select=*&order=generated_at.desc"
        if status:
            path += f"&status=eq.{status}"
        if limit > 0:
            path += f"&limit={limit}"
        records = self.client.request("GET", path, "get ideas")
        return _decode(records, ContentIdea.from_dict)

    def update_idea_status(self, idea_id: str, status: str) -> None:
        self.client.request(
            "PATCH",
            f"content_ideas?id=eq.{idea_id}",
            "update idea",
            {"status": status},
            (200, 204),
        )

    def get_idea_by_id_prefix(self, prefix: str) -> ContentIdea:
        """Find the one idea whose ID starts with ``prefix`` (6 characters at least)."""
        if len(prefix) < _MIN_PREFIX:
            raise ValueError(
                f"prefix too short: must be at least {_MIN_PREFIX} characters, "
                f"got {len(prefix)}"
            )
        records = self.client.request(
            "GET", f"content_ideas?select=*&id=like.{prefix}*", "get idea by prefix"
        )
        ideas = _decode(records, ContentIdea.from_dict)
        if not ideas:
            raise RepositoryError(f"no idea found with ID prefix {prefix!r}")
        if len(ideas) > 1:
            ids = ", ".join(idea.id for idea in ideas)
            raise RepositoryError(
                f"ambiguous prefix {prefix!r} matches {len(ideas)} ideas: {ids}"
            )
        return ideas[0]

    def create_script(self, script: ContentScriptInput) -> ContentScript:
        records = self.client.request(
            "POST", "content_scripts", "create script", script.to_dict(), (201,), True
        )
        scripts = _decode(records, ContentScript.from_dict)
        if not scripts:
            raise RepositoryError("no script returned from API")
        return scripts[0]

    def get_scripts(self, limit: int = 0) -> list[ContentScript]:
        path = "content_scripts?select=*&order=scripted_at.desc"
        if limit > 0:
            path += f"&limit={limit}"
        records = self.client.request("GET", path, "get scripts")
        return _decode(records, ContentScript.from_dict)