from core.config import Settings, get_settings


def _seed(cache):
    cache.set("game:search:zelda", [], ttl=60)
    cache.set("game:detail:1", {}, ttl=60)
    cache.set("game:similar:1", [], ttl=60)
    cache.set("session:1", {}, ttl=60)


def test_clear_defaults_to_all_game_keys(authorized_client):
    client, _, _ = authorized_client
    cache = client.app.state.cache
    _seed(cache)

    resp = client.post("/api/v1/cache/clear", json={})

    assert resp.json() == {"success": True, "message": "Cleared all game caches"}
    assert cache.keys() == ["session:1"]


def test_clear_without_body(authorized_client):
    client, _, _ = authorized_client
    cache = client.app.state.cache
    _seed(cache)

    assert client.post("/api/v1/cache/clear").status_code == 200
    assert cache.keys() == ["session:1"]


def test_clear_by_pattern_and_key(authorized_client):
    client, _, _ = authorized_client
    cache = client.app.state.cache
    _seed(cache)

    client.post("/api/v1/cache/clear", json={"pattern": "game:detail:*"})
    assert sorted(cache.keys()) == ["game:search:zelda", "game:similar:1", "session:1"]

    resp = client.post("/api/v1/cache/clear", json={"key": "session:1"})
    assert resp.json()["message"] == "Cleared cache key: session:1"
    assert "session:1" not in cache.keys()


def test_clear_forbidden_in_production(authorized_client):
    client, _, _ = authorized_client
    client.app.dependency_overrides[get_settings] = lambda: Settings(ENV="production")

    try:
        resp = client.post("/api/v1/cache/clear", json={})
    finally:
        client.app.dependency_overrides.pop(get_settings, None)

    assert resp.status_code == 403
    assert resp.json() == {"detail": "Not available in production", "status_code": 403}
