"""Deterministic luck oracle using xxhash.

The same key always yields the same value, on every run and every machine.
World content depends only on WorldSeed + key, so save files stay
compatible with the caches they describe.

Formula: luck(key) = xxh64(key, WorldSeed) / 2**64
"""

from __future__ import annotations

from typing import Protocol

import xxhash


class Oracle(Protocol):
    def luck(self, key: str) -> float: ...


def luck_key(*parts: object) -> str:
    """Join key parts with commas: ``luck_key(3, -4, "coins") == "3,-4,coins"``."""
    return ",".join(str(p) for p in parts)


class LuckOracle:
    """Stateless string-keyed pseudo-random oracle.

    Each call is a pure function of (seed, key) with no internal
    mutable state, therefore fully thread-safe.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int = 0) -> None:
        self._seed = seed & self._MAX_UINT64

    def _hash(self, key: str) -> int:
        return xxhash.xxh64(key.encode("utf-8"), seed=self._seed).intdigest()

    def luck(self, key: str) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(key) / (self._MAX_UINT64 + 1)
