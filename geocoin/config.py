"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a game world."""

    # World generation
    world_seed: int = 0
    spawn_probability: float = 0.1
    max_coins_per_cache: int = 10

    # Grid
    tile_degrees: float = 1e-4
    origin_lat: float = 0.0                # Null Island
    origin_lng: float = 0.0
    neighborhood_size: int = 8             # Cells materialized on each side of the player

    # Player
    spawn_i: int = 369894                  # Oakes classroom
    spawn_j: int = -1220627
    initial_player_coins: int = 0

    # Persistence
    save_file: str = "geocoin_save.json"

    # Event feed
    event_log_size: int = 500

    # Logging
    log_level: str = "INFO"
