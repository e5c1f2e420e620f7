"""Choosing posting times and the balance of content types."""

from __future__ import annotations

import datetime as _dt
from collections.abc import Callable, Iterable
from dataclasses import dataclass

# Peak hours for short-form video: mornings, lunch time and evenings.
PEAK_HOURS = (7, 12, 19, 21)

_INSTAGRAM_HOURS = range(11, 15)


@dataclass
class MetricPoint:
    """Engagement observed at an hour on a day of the week (0 is Monday)."""

    hour: int
    day_of_week: int
    engagement_rate: float


@dataclass
class TimeSlot:
    """A time at which a post goes out, and the platform it goes to."""

    time: _dt.datetime
    platform: str
    type: str = "scheduled"


@dataclass
class ContentMixStrategy:
    """Shares of each content type, each between 0.0 and 1.0."""

    educational: float = 0.0
    entertainment: float = 0.0
    bts: float = 0.0
    ugc: float = 0.0
    trend: float = 0.0


def default_mix_strategy() -> ContentMixStrategy:
    """A balanced mix of content types."""
    return ContentMixStrategy(
        educational=0.25,
        entertainment=0.25,
        bts=0.15,
        ugc=0.20,
        trend=0.15,
    )


class Optimizer:
    """Picks posting times from peak hours."""

    def __init__(self, clock: Callable[[], _dt.datetime] | None = None) -> None:
        self.historical_data: dict[str, list[MetricPoint]] = {}
        self._clock = clock if clock is not None else _dt.datetime.now

    def get_optimal_times(self, days: int, posts_per_day: int) -> list[TimeSlot]:
        """Slots for ``days`` days starting tomorrow, ``posts_per_day`` each day.

        Posts cycle through the peak hours; the minute shifts by seven each
        day so that posts do not go out at the same time every day.
        """
        start = self._clock().date() + _dt.timedelta(days=1)
        slots: list[TimeSlot] = []
        for day in range(days):
            current = start + _dt.timedelta(days=day)
            minute = (day * 7) % 60
            for post in range(posts_per_day):
                hour = PEAK_HOURS[post % len(PEAK_HOURS)]
                platform = "instagram" if hour in _INSTAGRAM_HOURS else "tiktok"
                slots.append(
                    TimeSlot(
                        time=_dt.datetime.combine(current, _dt.time(hour, minute)),
                        platform=platform,
                    )
                )
        return slots

    def analyze_historical_data(
        self, platform: str, metrics: Iterable[MetricPoint]
    ) -> None:
        """Keep a platform's past performance."""
        self.historical_data[platform] = list(metrics)

    def get_peak_times(self, platform: str, count: int) -> list[_dt.datetime]:
        """``count`` times today, cycling through the peak hours."""
        today = self._clock().date()
        return [
            _dt.datetime.combine(today, _dt.time(PEAK_HOURS[i % len(PEAK_HOURS)]))
            for i in range(count)
        ]