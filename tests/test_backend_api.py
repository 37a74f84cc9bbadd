import asyncio
import inspect

import pytest
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from backend.deps import get_dataset_listing, get_store
from backend.live_listing import LiveDatasetListing
from backend.main import app
from supabase_client.helpers import fetch_rows, insert_record


@pytest.fixture
def client(seeded_store):
    app.dependency_overrides[get_store] = lambda: seeded_store
    app.dependency_overrides[get_dataset_listing] = lambda: None
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_root(client):
    body = client.get("/").json()
    assert body["status"] == "ok"
    assert body["version"] == app.version


def test_list_strategies_newest_first(client):
    rows = client.get("/strategies").json()
    assert [r["id"] for r in rows] == [2, 3, 1]
    mine = client.get("/strategies", params={"author": "bob_smith7@example.com"}).json()
    assert [r["name"] for r in mine] == ["Mean Revert"]
    assert len(client.get("/strategies", params={"limit": 1}).json()) == 1


def test_strategy_detail_and_preview(client):
    assert client.get("/strategies/1").json()["name"] == "Momentum Alpha"
    preview = client.get("/strategies/2/preview").json()
    assert preview["language"] == "python"
    assert preview["content"].startswith("# In [0]")


def test_unknown_id_is_404(client):
    resp = client.get("/strategies/999")
    assert resp.status_code == 404
    assert resp.json()["kind"] == "not_found"
    assert client.get("/datasets/999/preview").status_code == 404


def test_store_outage_is_502(client, seeded_store):
    seeded_store.fail_next("datasets", RuntimeError("connection reset"))
    resp = client.get("/datasets")
    assert resp.status_code == 502
    assert resp.json()["detail"] == "connection reset"


def test_datasets_listing_reads_table_despite_live_listing(client, seeded_store):
    listing = LiveDatasetListing(lambda: fetch_rows("datasets", client=seeded_store))
    asyncio.run(listing.refresh())
    app.dependency_overrides[get_dataset_listing] = lambda: listing

    # an upload lands in the table without any change notification
    insert_record(
        "datasets",
        {"name": "Fresh", "author_email": "z@x.com", "created_at": "2025-05-01T00:00:00+00:00"},
        client=seeded_store,
    )
    names = [r["name"] for r in client.get("/datasets").json()]
    assert names[0] == "Fresh"
    assert len(names) == 3
    assert [r["id"] for r in client.get("/datasets", params={"limit": 1}).json()] == [3]

    summary = client.get("/status/summary").json()["live_datasets"]
    assert summary == {"live": False, "updated_at": listing.updated_at, "refresh_count": 1, "rows": 2}


def test_blocking_handlers_run_in_threadpool():
    blocking = {
        "/health",
        "/strategies",
        "/strategies/{strategy_id}",
        "/strategies/{strategy_id}/preview",
        "/datasets",
        "/datasets/{dataset_id}",
        "/datasets/{dataset_id}/preview",
        "/community",
        "/community/{email}",
    }
    endpoints = {route.path: route.endpoint for route in app.routes if isinstance(route, APIRoute)}
    assert blocking <= set(endpoints)
    for path in blocking:
        assert not inspect.iscoroutinefunction(endpoints[path]), path


def test_community_listing(client):
    body = client.get("/community", params={"sort": "name"}).json()
    assert body["count"] == body["total"] == 3
    assert [m["display_name"] for m in body["results"]] == ["Bob Smith", "Carol", "Jane Doe"]

    filtered = client.get("/community", params={"filter": "datasets", "q": "carol"}).json()
    assert filtered["count"] == 1 and filtered["total"] == 3


def test_community_bad_sort_is_400(client):
    assert client.get("/community", params={"sort": "stars"}).status_code == 400


def test_community_profile(client):
    body = client.get("/community/jane.doe@example.com").json()
    assert body["strategies"] == 2
    assert [r["id"] for r in body["strategy_rows"]] == [2, 1]
    assert client.get("/community/ghost@example.com").status_code == 404


def test_status_summary_without_listing(client):
    body = client.get("/status/summary").json()
    assert body["backend_version"] == app.version
    assert body["live_datasets"] is None
