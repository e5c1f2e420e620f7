import json

import pytest
import requests
import responses

from gagipress.rest import RepositoryError, RestClient

BASE = "http://db.example.com"


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def _client(**keys):
    return RestClient(BASE, **keys)


def test_api_key_prefers_service_key():
    client = _client(anon_key="placeholder", service_key="secret")
    assert client.api_key == "secret"


def test_api_key_falls_back_to_anon_key():
    client = _client(anon_key="placeholder")
    assert client.api_key == "placeholder"


def test_get_returns_records_and_sends_auth_headers(rsps):
    rsps.add(responses.GET, f"{BASE}/rest/v1/books", json=[{"id": "a"}], status=200)
    client = _client(anon_key="token")

    records = client.request("GET", "books?select=*", "get books")

    assert records == [{"id": "a"}]
    sent = rsps.calls[0].request
    assert sent.headers["apikey"] == "token"
    assert sent.headers["Authorization"] == "Bearer token"
    assert "Prefer" not in sent.headers
    assert "Content-Type" not in sent.headers


def test_post_with_representation_sends_json_and_prefer_header(rsps):
    rsps.add(responses.POST, f"{BASE}/rest/v1/books", json=[{"id": "x"}], status=201)
    client = _client(anon_key="token")

    records = client.request(
        "POST", "books", "create book", {"title": "T"}, expected=(201,), representation=True
    )

    assert records == [{"id": "x"}]
    sent = rsps.calls[0].request
    assert sent.headers["Prefer"] == "return=representation"
    assert sent.headers["Content-Type"] == "application/json"
    assert json.loads(sent.body) == {"title": "T"}


def test_patch_without_representation_returns_none(rsps):
    rsps.add(responses.PATCH, f"{BASE}/rest/v1/books", status=204)
    client = _client(anon_key="token")

    result = client.request(
        "PATCH", "books?id=eq.1", "update book", {"status": "ok"}, expected=(200, 204)
    )

    assert result is None
    assert json.loads(rsps.calls[0].request.body) == {"status": "ok"}


def test_unexpected_status_raises_with_body(rsps):
    rsps.add(responses.GET, f"{BASE}/rest/v1/books", body="boom", status=400)
    client = _client(anon_key="token")

    with pytest.raises(RepositoryError) as info:
        client.request("GET", "books", "get books")

    assert str(info.value) == "failed to get books: HTTP 400: boom"


def test_connection_failure_raises_repository_error(rsps):
    rsps.add(responses.GET, f"{BASE}/rest/v1/books", body=requests.ConnectionError("down"))
    client = _client(anon_key="token")

    with pytest.raises(RepositoryError, match="failed to get books"):
        client.request("GET", "books", "get books")


def test_invalid_json_raises_unmarshal_error(rsps):
    rsps.add(responses.GET, f"{BASE}/rest/v1/books", body="not json", status=200)
    client = _client(anon_key="token")

    with pytest.raises(RepositoryError, match="failed to unmarshal response"):
        client.request("GET", "books", "get books")


def test_non_array_json_raises_unmarshal_error(rsps):
    rsps.add(responses.GET, f"{BASE}/rest/v1/books", json={"id": "a"}, status=200)
    client = _client(anon_key="token")

    with pytest.raises(RepositoryError, match="failed to unmarshal response"):
        client.request("GET", "books", "get books")


def test_null_body_gives_empty_list(rsps):
    rsps.add(responses.GET, f"{BASE}/rest/v1/books", body="null", status=200)
    client = _client(anon_key="token")

    assert client.request("GET", "books", "get books") == []