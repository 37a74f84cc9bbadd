from types import SimpleNamespace

import pytest
import requests

from analytics.providers import BackendSummaryProvider, ClientSideSummaryProvider, fetch_both
from supabase_client.errors import ErrorKind, StoreError


def test_fetch_both_returns_pair():
    assert fetch_both(lambda: [1], lambda: [2]) == ([1], [2])


def test_fetch_both_failure_fails_the_pair():
    def boom():
        raise StoreError(ErrorKind.TRANSPORT, "offline")

    with pytest.raises(StoreError):
        fetch_both(lambda: [1], boom)


def test_client_side_summaries(seeded_store):
    members = ClientSideSummaryProvider(seeded_store).summaries()
    assert sorted(m.email for m in members) == ["bob_smith7@example.com", "carol@example.com", "jane.doe@example.com"]


def test_client_side_profile(seeded_store):
    profile = ClientSideSummaryProvider(seeded_store).profile("bob_smith7@example.com")
    assert profile.member.strategies == 1
    assert [r["name"] for r in profile.datasets] == ["S&P Daily (2020)"]


def test_client_side_error_propagates(seeded_store):
    seeded_store.fail_next("datasets", RuntimeError("connection reset"))
    with pytest.raises(StoreError) as exc:
        ClientSideSummaryProvider(seeded_store).summaries()
    assert exc.value.kind == ErrorKind.TRANSPORT


class FakeHTTP:
    def __init__(self, status=200, payload=None, error=None):
        self.status = status
        self.payload = payload or {}
        self.error = error
        self.urls = []

    def get(self, url, timeout=None):
        self.urls.append(url)
        if self.error:
            raise self.error
        return SimpleNamespace(status_code=self.status, json=lambda: self.payload, text=str(self.payload))


MEMBER = {
    "email": "jane.doe@example.com",
    "strategies": 2,
    "datasets": 0,
    "total_contributions": 2,
    "last_active": "2025-03-01T12:00:00+00:00",
    "joined_date": "2025-01-10T09:00:00+00:00",
    "display_name": "Jane Doe",
}


def test_backend_summaries():
    http = FakeHTTP(payload={"count": 1, "total": 1, "results": [MEMBER]})
    members = BackendSummaryProvider("http://api/", session=http).summaries()
    assert http.urls == ["http://api/community"]
    assert members[0].display_name == "Jane Doe"


def test_backend_profile_quotes_email():
    http = FakeHTTP(payload={**MEMBER, "strategy_rows": [{"id": 1}], "dataset_rows": []})
    profile = BackendSummaryProvider("http://api", session=http).profile("jane.doe@example.com")
    assert http.urls == ["http://api/community/jane.doe%40example.com"]
    assert profile.strategies == [{"id": 1}]
    assert profile.member.total_contributions == 2


def test_backend_errors():
    not_found = BackendSummaryProvider("http://api", session=FakeHTTP(status=404, payload={"detail": "gone"}))
    with pytest.raises(StoreError) as exc:
        not_found.profile("x@y.z")
    assert exc.value.kind == ErrorKind.NOT_FOUND

    offline = BackendSummaryProvider("http://api", session=FakeHTTP(error=requests.exceptions.ConnectionError()))
    with pytest.raises(StoreError) as exc:
        offline.summaries()
    assert exc.value.kind == ErrorKind.TRANSPORT


class HTMLResponse:
    """Error page from a proxy in front of the backend."""

    def __init__(self, status):
        self.status_code = status
        self.text = "<html><body>Bad Gateway</body></html>"

    def json(self):
        raise ValueError("Expecting value: line 1 column 1 (char 0)")


def test_backend_non_json_errors():
    class ProxyHTTP:
        def __init__(self, status):
            self.status = status

        def get(self, url, timeout=None):
            return HTMLResponse(self.status)

    with pytest.raises(StoreError) as exc:
        BackendSummaryProvider("http://api", session=ProxyHTTP(404)).profile("x@y.z")
    assert exc.value.kind == ErrorKind.NOT_FOUND

    with pytest.raises(StoreError) as exc:
        BackendSummaryProvider("http://api", session=ProxyHTTP(502)).summaries()
    assert exc.value.kind == ErrorKind.TRANSPORT
    assert exc.value.message.startswith("HTTP 502: <html>")
