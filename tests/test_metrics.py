import datetime as dt
import json

import pytest
import responses

from gagipress.metrics import MetricsRepository
from gagipress.models import AggregateMetrics, PostMetricInput
from gagipress.rest import RepositoryError, RestClient

BASE = "http://db.example.com"
ENDPOINT = f"{BASE}/rest/v1/post_metrics"


def _record(calendar_id, views, likes, rate):
    return {
        "id": f"m-{calendar_id}",
        "calendar_id": calendar_id,
        "platform": "tiktok",
        "views": views,
        "likes": likes,
        "comments": 0,
        "shares": 0,
        "saves": 0,
        "engagement_rate": rate,
        "collected_at": "2024-01-15T10:30:00Z",
    }


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


@pytest.fixture
def repo():
    return MetricsRepository(RestClient(BASE, anon_key="placeholder"))


def _metric_input():
    return PostMetricInput(
        calendar_id="cal-1",
        platform="tiktok",
        views=1000,
        likes=100,
        comments=20,
        shares=10,
        saves=5,
    )


def test_create_metric_sends_engagement_rate(rsps, repo):
    rsps.add(responses.POST, ENDPOINT, json=[_record("cal-1", 1000, 100, 13.5)], status=201)
    metric = repo.create_metric(_metric_input())
    body = json.loads(rsps.calls[0].request.body)
    assert body["engagement_rate"] == 13.5
    assert body["calendar_id"] == "cal-1"
    assert body["views"] == 1000
    assert metric.calendar_id == "cal-1"
    assert metric.engagement_rate == 13.5


def test_create_metric_empty_response(rsps, repo):
    rsps.add(responses.POST, ENDPOINT, json=[], status=201)
    with pytest.raises(RepositoryError, match="no metric returned from API"):
        repo.create_metric(_metric_input())


def test_create_metric_http_error(rsps, repo):
    rsps.add(responses.POST, ENDPOINT, body="bad", status=500)
    with pytest.raises(RepositoryError, match="failed to create metric: HTTP 500: bad"):
        repo.create_metric(_metric_input())


def test_get_metrics_filters(rsps, repo):
    rsps.add(responses.GET, ENDPOINT, json=[_record("cal-9", 50, 5, 10.0)], status=200)
    start = dt.datetime(2024, 1, 15, 10, 30, tzinfo=dt.timezone.utc)
    metrics = repo.get_metrics("instagram", start, None)
    assert [m.calendar_id for m in metrics] == ["cal-9"]
    url = rsps.calls[0].request.url
    assert "order=collected_at.desc" in url
    assert "platform=eq.instagram" in url
    assert "collected_at=gte.2024-01-15T10:30:00Z" in url
    assert "collected_at=lte." not in url


def test_get_metrics_without_filters(rsps, repo):
    rsps.add(responses.GET, ENDPOINT, json=[_record("cal-1", 10, 1, 10.0)], status=200)
    metrics = repo.get_metrics()
    url = rsps.calls[0].request.url
    assert "platform=" not in url
    assert "collected_at=" not in url
    assert [m.calendar_id for m in metrics] == ["cal-1"]


def test_aggregate_of_nothing_is_empty(rsps, repo):
    rsps.add(responses.GET, ENDPOINT, json=[], status=200)
    assert repo.get_aggregate_metrics() == AggregateMetrics()


def test_aggregate_single_metric(rsps, repo):
    rsps.add(responses.GET, ENDPOINT, json=[_record("cal-1", 1000, 100, 13.5)], status=200)
    agg = repo.get_aggregate_metrics("tiktok")
    assert agg.total_posts == 1
    assert agg.total_views == 1000
    assert agg.total_likes == 100
    assert agg.avg_engagement == 13.5
    assert agg.top_post == "cal-1"
    assert agg.top_engagement == 13.5


def test_aggregate_tie_keeps_first_top_post(rsps, repo):
    rsps.add(
        responses.GET,
        ENDPOINT,
        json=[_record("cal-1", 100, 5, 5.0), _record("cal-2", 200, 10, 5.0)],
        status=200,
    )
    agg = repo.get_aggregate_metrics()
    assert agg.total_posts == 2
    assert agg.total_views == 300
    assert agg.avg_engagement == 5.0
    assert agg.top_post == "cal-1"
    assert agg.top_engagement == 5.0


def test_aggregate_picks_highest_engagement(rsps, repo):
    rsps.add(
        responses.GET,
        ENDPOINT,
        json=[_record("cal-1", 100, 5, 2.0), _record("cal-2", 100, 9, 9.0)],
        status=200,
    )
    agg = repo.get_aggregate_metrics()
    assert agg.top_post == "cal-2"
    assert agg.top_engagement == 9.0
    assert agg.avg_engagement <= agg.top_engagement


def test_aggregate_propagates_errors(rsps, repo):
    rsps.add(responses.GET, ENDPOINT, body="down", status=503)
    with pytest.raises(RepositoryError, match="failed to get metrics: HTTP 503"):
        repo.get_aggregate_metrics()