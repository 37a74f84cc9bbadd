from core.health import system_health


def test_health_ok_with_reachable_store(fake_store):
    report = system_health(client_factory=lambda: fake_store)
    assert report["status"] == "ok"
    assert report["supabase_connected"] is True
    assert report["supabase_url"] == "https://fake.supabase.co"
    assert report["tables"] == {"strategies": "ok", "datasets": "ok"}


def test_health_degraded_when_store_fails(fake_store):
    fake_store.fail_next("strategies", RuntimeError("timeout"))
    report = system_health(client_factory=lambda: fake_store)
    assert report["status"] == "degraded"
    assert report["supabase_connected"] is False
    assert "RuntimeError" in report["message"]
    assert report["tables"] == {"strategies": "RuntimeError", "datasets": "ok"}
