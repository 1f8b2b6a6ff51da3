"""Tests for the HTTP API via FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from geocoin.api.app import create_app
from geocoin.api.session import GameSession
from geocoin.utils.save_store import SaveStore
from tests.helpers.oracle import cache_at_origin, small_config


@pytest.fixture
def store(tmp_path):
    return SaveStore(tmp_path / "save.json")


@pytest.fixture
def client(store):
    session = GameSession(small_config(), store=store, oracle=cache_at_origin())
    with TestClient(create_app(session=session)) as c:
        yield c


class TestState:
    def test_state_shape(self, client):
        body = client.get("/api/v1/state").json()
        assert body["player"]["i"] == 0
        assert body["player"]["coins"] == 0
        assert [(c["i"], c["j"]) for c in body["caches"]] == [(0, 0)]
        cache = body["caches"][0]
        assert cache["coins"] == ["0,0#0", "0,0#1", "0,0#2"]
        assert cache["in_reach"] is True
        assert cache["bounds"]["north_east"]["lat"] == pytest.approx(1e-4)
        assert body["events"][0]["message"] == "New game started."

    def test_events_since(self, client):
        client.post("/api/v1/move/north")
        body = client.get("/api/v1/state", params={"since": 1}).json()
        assert [e["category"] for e in body["events"]] == ["move"]
        assert body["events"][0]["cell"] == {"i": 1, "j": 0}

    def test_config(self, client):
        body = client.get("/api/v1/config").json()
        assert body["neighborhood_size"] == 2
        assert body["spawn_probability"] == 0.1


class TestCaches:
    def test_collect_and_deposit(self, client):
        r = client.post("/api/v1/caches/0/0/collect").json()
        assert r == {
            "status": "ok",
            "message": "Transferred 1 coin.",
            "coin": "0,0#2",
            "player_coins": 1,
            "cache_coins": 2,
        }
        r = client.post("/api/v1/caches/0/0/deposit").json()
        assert r["coin"] == "0,0#2"
        assert r["player_coins"] == 0

    def test_deposit_without_funds_is_noop(self, client):
        r = client.post("/api/v1/caches/0/0/deposit")
        assert r.status_code == 200
        assert r.json()["status"] == "insufficient_funds"
        assert r.json()["cache_coins"] == 3

    def test_empty_cache(self, client):
        for _ in range(3):
            client.post("/api/v1/caches/0/0/collect")
        r = client.post("/api/v1/caches/0/0/collect").json()
        assert r["status"] == "empty"
        assert r["coin"] is None

    def test_unknown_cache_is_404(self, client):
        assert client.get("/api/v1/caches/7/7").status_code == 404
        assert client.post("/api/v1/caches/7/7/collect").status_code == 404

    def test_out_of_reach_is_409(self, client):
        client.post("/api/v1/position", json={"lat": 0.01, "lng": 0.01})
        assert client.post("/api/v1/caches/0/0/collect").status_code == 409
        assert client.get("/api/v1/caches/0/0").json()["in_reach"] is False

    def test_list_caches(self, client):
        assert len(client.get("/api/v1/caches").json()) == 1


class TestMovementAndControl:
    def test_move(self, client):
        body = client.post("/api/v1/move/east").json()
        assert (body["player"]["i"], body["player"]["j"]) == (0, 1)
        assert body["discovered"] == []

    def test_bad_direction(self, client):
        assert client.post("/api/v1/move/up").status_code == 422

    def test_position_validates_range(self, client):
        assert client.post("/api/v1/position", json={"lat": 91, "lng": 0}).status_code == 422

    def test_reset(self, client):
        client.post("/api/v1/caches/0/0/collect")
        client.post("/api/v1/move/north")
        assert client.post("/api/v1/control/reset").json()["status"] == "ok"
        body = client.get("/api/v1/state").json()
        assert body["player"]["coins"] == 0
        assert body["player"]["i"] == 0
        assert body["trail"] == []
        assert len(body["caches"][0]["coins"]) == 3

    def test_save(self, client, store):
        r = client.post("/api/v1/control/save").json()
        assert r["status"] == "ok"
        assert store.exists()


def test_shutdown_saves(store):
    session = GameSession(small_config(), store=store, oracle=cache_at_origin())
    with TestClient(create_app(session=session)) as c:
        c.post("/api/v1/caches/0/0/collect")
    assert '"playerCoins":1' in store.read()
