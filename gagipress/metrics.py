"""Storage and aggregation of post performance metrics."""

from __future__ import annotations

import datetime as _dt
from typing import Any

from .models import AggregateMetrics, PostMetric, PostMetricInput
from .rest import RepositoryError, RestClient


def _decode(records: list[dict[str, Any]] | None) -> list[PostMetric]:
    try:
        return [PostMetric.from_dict(record) for record in records or []]
    except (TypeError, ValueError, AttributeError) as exc:
        raise RepositoryError(f"failed to unmarshal response: {exc}") from exc


def _rfc3339(value: _dt.datetime) -> str:
    if value.tzinfo is None:
        value = value.astimezone()
    text = value.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


class MetricsRepository:
    """Record post metrics and summarise them over a period."""

    def __init__(self, client: RestClient) -> None:
        self.client = client

    def create_metric(self, metric: PostMetricInput) -> PostMetric:
        """Store a metric together with its computed engagement rate."""
        payload = metric.to_dict()
        payload["engagement_rate"] = metric.engagement_rate()
        records = self.client.request(
            "POST", "post_metrics", "create metric", payload, (201,), True
        )
        metrics = _decode(records)
        if not metrics:
            raise RepositoryError("no metric returned from API")
        return metrics[0]

    def get_metrics(
        self,
        platform: str = "",
        start: _dt.datetime | None = None,
        end: _dt.datetime | None = None,
    ) -> list[PostMetric]:
        """List metrics, newest first, optionally by platform and time range."""
        path = "post_metrics?select=*&order=collected_at.desc"
        if platform:
            path += f"&platform=eq.{platform}"
        if start is not None:
            path += f"&collected_at=gte.{_rfc3339(start)}"
        if end is not None:
            path += f"&collected_at=lte.{_rfc3339(end)}"
        records = self.client.request("GET", path, "get metrics")
        return _decode(records)

    def get_aggregate_metrics(
        self,
        platform: str = "",
        start: _dt.datetime | None = None,
        end: _dt.datetime | None = None,
    ) -> AggregateMetrics:
        """Sum the metrics of a period and find its best-engaging post."""
        metrics = self.get_metrics(platform, start, end)
        if not metrics:
            return AggregateMetrics()

        aggregate = AggregateMetrics(total_posts=len(metrics))
        total_engagement = 0.0
        for metric in metrics:
            aggregate.total_views += metric.views
            aggregate.total_likes += metric.likes
            aggregate.total_comments += metric.comments
            aggregate.total_shares += metric.shares
            total_engagement += metric.engagement_rate
            if metric.engagement_rate > aggregate.top_engagement:
                aggregate.top_engagement = metric.engagement_rate
                aggregate.top_post = metric.calendar_id

        aggregate.avg_engagement = total_engagement / len(metrics)
        return aggregate