"""Planning the content calendar from the available scripts."""

from __future__ import annotations

from .content import ContentRepository
from .models import ContentCalendarInput, ContentScript
from .optimizer import Optimizer
from .rest import RepositoryError

_LONG_SCRIPT_SECONDS = 60


class Planner:
    """Assigns scripts to posting slots."""

    def __init__(
        self,
        content_repo: ContentRepository | None,
        optimizer: Optimizer | None = None,
    ) -> None:
        self.content_repo = content_repo
        self.optimizer = optimizer if optimizer is not None else Optimizer()

    def plan_week(self, days: int, posts_per_day: int) -> list[ContentCalendarInput]:
        """Schedule one script per slot over ``days`` days.

        Scripts longer than a minute go to Instagram, the rest to TikTok.
        Raises ``ValueError`` when there are too few scripts.
        """
        if self.content_repo is None:
            raise RepositoryError("failed to get scripts: no content repository")
        try:
            scripts = self.content_repo.get_scripts(0)
        except RepositoryError as exc:
            raise RepositoryError(f"failed to get scripts: {exc}") from exc

        if not scripts:
            raise ValueError("no scripts available for planning")

        total_posts = days * posts_per_day
        if len(scripts) < total_posts:
            raise ValueError(
                f"not enough scripts: need {total_posts}, have {len(scripts)}"
            )

        slots = self.optimizer.get_optimal_times(days, posts_per_day)
        calendar: list[ContentCalendarInput] = []
        for slot, script in zip(slots, scripts):
            if len(calendar) >= total_posts:
                break
            platform = (
                "instagram"
                if script.estimated_length > _LONG_SCRIPT_SECONDS
                else "tiktok"
            )
            calendar.append(
                ContentCalendarInput(
                    scheduled_for=slot.time,
                    platform=platform,
                    script_id=script.id,
                )
            )
        return calendar

    def balance_content_mix(self, scripts: list[ContentScript]) -> list[ContentScript]:
        """Order scripts by ID, in place, and return them."""
        scripts.sort(key=lambda script: script.id)
        return scripts