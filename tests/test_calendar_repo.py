import datetime as dt
import json

import pytest
import responses

from gagipress.calendar_repo import CalendarRepository
from gagipress.models import ContentCalendarInput
from gagipress.rest import RepositoryError, RestClient

BASE = "http://db.example.com"
ENDPOINT = f"{BASE}/rest/v1/content_calendar"

ENTRY = {
    "id": "entry-1",
    "script_id": "script-1",
    "scheduled_for": "2024-01-15T07:00:00Z",
    "platform": "tiktok",
    "status": "pending_approval",
}


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


@pytest.fixture
def repo():
    return CalendarRepository(RestClient(BASE, anon_key="placeholder"))


def _entry_input():
    return ContentCalendarInput(
        scheduled_for=dt.datetime(2024, 1, 15, 7, 0, tzinfo=dt.timezone.utc),
        platform="tiktok",
        script_id="script-1",
    )


def test_create_entry_returns_stored_entry(rsps, repo):
    rsps.add(responses.POST, ENDPOINT, json=[ENTRY], status=201)
    entry = repo.create_entry(_entry_input())
    assert entry.id == "entry-1"
    assert entry.script_id == "script-1"
    assert entry.platform == "tiktok"
    assert entry.scheduled_for == dt.datetime(2024, 1, 15, 7, 0, tzinfo=dt.timezone.utc)


def test_create_entry_sends_json_and_headers(rsps, repo):
    rsps.add(responses.POST, ENDPOINT, json=[ENTRY], status=201)
    entry = repo.create_entry(_entry_input())
    assert entry.status == "pending_approval"
    request = rsps.calls[0].request
    body = json.loads(request.body)
    assert body["platform"] == "tiktok"
    assert body["script_id"] == "script-1"
    assert request.headers["Prefer"] == "return=representation"
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["apikey"] == "placeholder"


def test_create_entry_empty_response_raises(rsps, repo):
    rsps.add(responses.POST, ENDPOINT, json=[], status=201)
    with pytest.raises(RepositoryError, match="no entry returned from API"):
        repo.create_entry(_entry_input())


def test_create_entry_http_error(rsps, repo):
    rsps.add(responses.POST, ENDPOINT, body="boom", status=400)
    with pytest.raises(RepositoryError, match="failed to create entry: HTTP 400: boom"):
        repo.create_entry(_entry_input())


def test_get_entries_with_filters(rsps, repo):
    rsps.add(responses.GET, ENDPOINT, json=[ENTRY], status=200)
    entries = repo.get_entries("approved", 5)
    url = rsps.calls[0].request.url
    assert "order=scheduled_for.asc" in url
    assert "status=eq.approved" in url
    assert "limit=5" in url
    assert [e.id for e in entries] == ["entry-1"]


def test_get_entries_without_filters(rsps, repo):
    rsps.add(responses.GET, ENDPOINT, json=[], status=200)
    assert repo.get_entries() == []
    url = rsps.calls[0].request.url
    assert "status=" not in url
    assert "limit=" not in url


def test_update_entry_status_sends_patch(rsps, repo):
    rsps.add(responses.PATCH, ENDPOINT, status=204)
    assert repo.update_entry_status("entry-1", "approved") is None
    request = rsps.calls[0].request
    assert "id=eq.entry-1" in request.url
    assert json.loads(request.body) == {"status": "approved"}


def test_update_entry_status_error(rsps, repo):
    rsps.add(responses.PATCH, ENDPOINT, body="missing", status=404)
    with pytest.raises(RepositoryError, match="failed to update entry: HTTP 404"):
        repo.update_entry_status("entry-1", "approved")


def test_delete_entry(rsps, repo):
    rsps.add(responses.DELETE, ENDPOINT, status=204)
    assert repo.delete_entry("entry-1") is None
    assert rsps.calls[0].request.method == "DELETE"
    assert "id=eq.entry-1" in rsps.calls[0].request.url


def test_delete_entry_error(rsps, repo):
    rsps.add(responses.DELETE, ENDPOINT, body="denied", status=403)
    with pytest.raises(RepositoryError, match="failed to delete entry: HTTP 403"):
        repo.delete_entry("entry-1")


def test_service_key_preferred(rsps):
    repo = CalendarRepository(RestClient(BASE, anon_key="placeholder", service_key="secret"))
    rsps.add(responses.GET, ENDPOINT, json=[ENTRY], status=200)
    entries = repo.get_entries()
    assert [e.id for e in entries] == ["entry-1"]
    assert rsps.calls[0].request.headers["apikey"] == "secret"
    assert rsps.calls[0].request.headers["Authorization"] == "Bearer secret"