"""ScriptedOracle - deterministic stand-in for the luck oracle.

Lets tests pin exact luck values per key, so spawn decisions and coin
counts can be chosen instead of searched for.

Usage:
    oracle = ScriptedOracle({"0,0": 0.05, "0,0,coins": 0.35})
    world = World(small_config(), oracle)
    world.materialize(GridCell(0, 0))   # spawns with 3 coins
"""

from __future__ import annotations

from geocoin.config import GameConfig


class ScriptedOracle:
    """Returns the scripted value for known keys and ``default`` otherwise."""

    def __init__(self, values: dict[str, float] | None = None, default: float = 0.5) -> None:
        self.values = dict(values or {})
        self.default = default
        self.calls: list[str] = []

    def luck(self, key: str) -> float:
        self.calls.append(key)
        return self.values.get(key, self.default)


def small_config(**overrides) -> GameConfig:
    """Config centred on (0, 0) with a 4x4 neighborhood."""
    params = dict(spawn_i=0, spawn_j=0, neighborhood_size=2)
    params.update(overrides)
    return GameConfig(**params)


def cache_at_origin(coins_luck: float = 0.35) -> ScriptedOracle:
    """Only cell (0, 0) holds a cache."""
    return ScriptedOracle({"0,0": 0.05, "0,0,coins": coins_luck})
