from types import SimpleNamespace

import pytest

from core import ui_helpers
from core.ui_helpers import fetch_backend, fetch_backend_live, invalidate_backend_cache
from supabase_client.errors import ErrorKind, StoreError


class FakeBackend:
    """Stands in for `requests.get`; serves the current strategy rows."""

    def __init__(self):
        self.rows = [{"id": 1, "name": "Momentum Alpha"}]
        self.calls = 0

    def get(self, url, params=None, timeout=None):
        self.calls += 1
        rows = list(self.rows)
        return SimpleNamespace(status_code=200, json=lambda: rows, text="")


@pytest.fixture
def backend(monkeypatch):
    fake = FakeBackend()
    monkeypatch.setattr(ui_helpers.requests, "get", fake.get)
    invalidate_backend_cache()
    yield fake
    invalidate_backend_cache()


def test_new_upload_visible_after_invalidation(backend):
    assert [r["id"] for r in fetch_backend("strategies")] == [1]

    backend.rows.append({"id": 2, "name": "Pairs Notebook"})
    # cached read still serves the old listing
    assert [r["id"] for r in fetch_backend("strategies")] == [1]

    invalidate_backend_cache()
    assert [r["id"] for r in fetch_backend("strategies")] == [1, 2]
    assert backend.calls == 2


def test_error_body_is_rebuilt(monkeypatch):
    def not_found(url, params=None, timeout=None):
        body = {"detail": "No row with id 9 in 'datasets'.", "kind": "not_found", "code": None}
        return SimpleNamespace(status_code=404, json=lambda: body, text="")

    monkeypatch.setattr(ui_helpers.requests, "get", not_found)
    with pytest.raises(StoreError) as exc:
        fetch_backend_live("datasets/9")
    assert exc.value.kind == ErrorKind.NOT_FOUND
    assert exc.value.message == "No row with id 9 in 'datasets'."
