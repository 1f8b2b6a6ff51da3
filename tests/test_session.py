"""Tests for GameSession: lifecycle, persistence triggers and reach checks."""

import json

import pytest

from geocoin.api.session import Direction, GameSession
from geocoin.core.models import GeoPoint, GridCell, TransferStatus
from geocoin.utils.save_store import SaveStore
from tests.helpers.oracle import cache_at_origin, small_config

ORIGIN = GridCell(0, 0)


@pytest.fixture
def store(tmp_path):
    return SaveStore(tmp_path / "save.json")


@pytest.fixture
def session(store):
    s = GameSession(small_config(), store=store, oracle=cache_at_origin())
    s.start()
    return s


class TestLifecycle:
    def test_start_without_save_discovers_neighborhood(self, session):
        assert session.started
        assert session.query(ORIGIN) is not None
        assert session.event_log.latest()[0].message == "New game started."

    def test_stop_writes_save(self, session, store):
        session.collect(ORIGIN)
        session.stop()
        data = json.loads(store.read())
        assert data["playerCoins"] == 1
        assert not session.started

    def test_stop_before_start_is_noop(self, store):
        GameSession(small_config(), store=store, oracle=cache_at_origin()).stop()
        assert not store.exists()

    def test_restart_restores_progress(self, session, store):
        session.collect(ORIGIN)
        session.move(Direction.north)
        session.stop()

        again = GameSession(small_config(), store=store, oracle=cache_at_origin())
        assert again.start()
        assert again.read(lambda w: w.player.position) == GridCell(1, 0)
        assert again.read(lambda w: w.player.coins) == 1
        assert len(again.query(ORIGIN)) == 2

    def test_corrupt_save_starts_fresh(self, store):
        store.write("{broken")
        s = GameSession(small_config(), store=store, oracle=cache_at_origin())
        assert not s.start()
        assert s.read(lambda w: w.player.coins) == 0

    def test_reset_persists(self, session, store):
        session.collect(ORIGIN)
        session.reset()
        data = json.loads(store.read())
        assert data["playerCoins"] == 0
        assert data["movementTrail"] == []
        assert len(session.query(ORIGIN)) == 3


class TestCommands:
    @pytest.mark.parametrize("direction,expected", [
        (Direction.north, GridCell(1, 0)),
        (Direction.south, GridCell(-1, 0)),
        (Direction.east, GridCell(0, 1)),
        (Direction.west, GridCell(0, -1)),
    ])
    def test_move_directions(self, session, direction, expected):
        session.move(direction)
        assert session.read(lambda w: w.player.position) == expected

    def test_set_position(self, session):
        session.set_position(GeoPoint(0.001, 0.002))
        assert session.read(lambda w: w.player.position) == GridCell(10, 20)

    def test_transfer_out_of_reach(self, session):
        for _ in range(5):
            session.move(Direction.north)
        result = session.collect(ORIGIN)
        assert result.status is TransferStatus.OUT_OF_REACH
        assert session.read(lambda w: w.player.coins) == 0

    def test_transfer_unknown_cell(self, session):
        assert session.deposit(GridCell(40, 40)).status is TransferStatus.NOT_FOUND

    def test_transfers_are_logged(self, session):
        session.collect(ORIGIN)
        session.deposit(ORIGIN)
        messages = [e.message for e in session.event_log.latest()]
        assert "Collected coin 0,0#2." in messages
        assert "Deposited coin 0,0#2." in messages

    def test_discoveries_are_logged(self, store):
        s = GameSession(small_config(spawn_i=10), store=store, oracle=cache_at_origin())
        s.start()
        s.set_position(GeoPoint(0.0, 0.0))
        categories = [e.category for e in s.event_log.latest()]
        assert "discover" in categories
