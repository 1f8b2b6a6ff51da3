"""Tests for the cache registry and memento store."""

import random

import pytest

from geocoin.core.mementos import DiscoveryTracker, MementoStore
from geocoin.core.models import Coin, GridCell, PlayerState, TransferStatus
from geocoin.core.registry import CacheNotFoundError, CacheRegistry
from geocoin.systems.generator import CacheGenerator
from tests.helpers.oracle import ScriptedOracle

ORIGIN = GridCell(0, 0)


@pytest.fixture
def mementos():
    return MementoStore()


@pytest.fixture
def registry(mementos):
    gen = CacheGenerator(ScriptedOracle({"0,0,coins": 0.35, "1,1,coins": 0.5}))
    return CacheRegistry(gen, mementos)


@pytest.fixture
def player():
    return PlayerState(position=ORIGIN)


class TestMaterialize:
    def test_generates_and_records_memento(self, registry, mementos):
        cache = registry.materialize(ORIGIN)
        assert len(cache) == 3
        assert mementos.restore(ORIGIN) == tuple(cache.coins)

    def test_reuses_existing_memento(self, registry, mementos):
        mementos.snapshot(ORIGIN, [Coin("0,0#0")])
        cache = registry.materialize(ORIGIN)
        assert cache.coins == [Coin("0,0#0")]

    def test_live_cache_is_a_copy(self, registry, mementos, player):
        registry.materialize(ORIGIN)
        registry.collect(ORIGIN, player)
        assert len(mementos.restore(ORIGIN)) == 3


class TestCollect:
    def test_removes_highest_serial(self, registry, player):
        registry.materialize(ORIGIN)
        result = registry.collect(ORIGIN, player)
        assert result.ok
        assert result.coin == Coin("0,0#2")
        assert player.coins == 1
        assert registry.query(ORIGIN) == (Coin("0,0#0"), Coin("0,0#1"))

    def test_empty_cache_is_noop(self, registry, player):
        registry.materialize(ORIGIN)
        for _ in range(3):
            registry.collect(ORIGIN, player)
        result = registry.collect(ORIGIN, player)
        assert result.status is TransferStatus.EMPTY
        assert result.coin is None
        assert result.transferred == 0
        assert player.coins == 3

    def test_unknown_cell(self, registry, player):
        result = registry.collect(GridCell(9, 9), player)
        assert result.status is TransferStatus.NOT_FOUND
        assert player.coins == 0


class TestDeposit:
    def test_mints_serial_equal_to_length(self, registry, player):
        registry.materialize(ORIGIN)
        registry.collect(ORIGIN, player)
        registry.collect(ORIGIN, player)
        result = registry.deposit(ORIGIN, player)
        assert result.coin == Coin("0,0#1")
        assert player.coins == 1
        assert len(registry.get(ORIGIN)) == 2

    def test_no_funds_is_noop(self, registry, player):
        registry.materialize(ORIGIN)
        result = registry.deposit(ORIGIN, player)
        assert result.status is TransferStatus.INSUFFICIENT_FUNDS
        assert player.coins == 0
        assert len(registry.get(ORIGIN)) == 3

    def test_unknown_cell(self, registry):
        rich = PlayerState(position=ORIGIN, coins=5)
        assert registry.deposit(GridCell(9, 9), rich).status is TransferStatus.NOT_FOUND
        assert rich.coins == 5


class TestQuery:
    def test_unmaterialized_is_none(self, registry):
        assert registry.query(GridCell(3, 3)) is None

    def test_get_raises_not_found(self, registry):
        with pytest.raises(CacheNotFoundError) as exc:
            registry.get(GridCell(3, 3))
        assert exc.value.cell == GridCell(3, 3)
        assert isinstance(exc.value, KeyError)

    def test_view_is_immutable(self, registry):
        registry.materialize(ORIGIN)
        assert isinstance(registry.query(ORIGIN), tuple)


class TestEconomyInvariants:
    def test_conservation_and_non_negativity(self, registry, player):
        registry.materialize(ORIGIN)
        registry.materialize(GridCell(1, 1))
        total = player.coins + registry.total_coins()
        rng = random.Random(1234)
        for _ in range(500):
            cell = rng.choice([ORIGIN, GridCell(1, 1)])
            if rng.random() < 0.5:
                registry.collect(cell, player)
            else:
                registry.deposit(cell, player)
            assert player.coins >= 0
            assert all(len(c) >= 0 for c in registry)
            assert player.coins + registry.total_coins() == total


class TestMementoStore:
    def test_write_once(self, mementos):
        assert mementos.snapshot(ORIGIN, [Coin("0,0#0")])
        assert not mementos.snapshot(ORIGIN, [Coin("x")])
        assert mementos.restore(ORIGIN) == (Coin("0,0#0"),)

    def test_restore_unknown(self, mementos):
        assert mementos.restore(ORIGIN) is None

    def test_reset_all_restores_and_clears_discovery(self, registry, mementos, player):
        discovery = DiscoveryTracker()
        registry.materialize(ORIGIN)
        discovery.mark(ORIGIN)
        registry.collect(ORIGIN, player)
        restored = mementos.reset_all(registry, discovery)
        assert restored == 1
        assert len(registry.get(ORIGIN)) == 3
        assert ORIGIN not in discovery
