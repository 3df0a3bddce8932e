# -*- coding: utf-8 -*-
"""
Game configuration.
"""
from dataclasses import dataclass

from tentwentyfour.core.randomness import TILE_SPAWN_PROBS
from tentwentyfour.core.resolver import DEFAULT_TARGET


@dataclass
class GameConfig:
    """
    Settings of a game session.
    """

    size: int = 4  # Rows and columns of the grid
    target: int = DEFAULT_TARGET  # Tile value that wins the game
    start_tiles: int = 2  # Tiles placed by a new game
    four_probability: float = TILE_SPAWN_PROBS[4]  # Chance that a spawned tile is a 4

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be >= 2, got {self.size}')
        if self.target < 4 or self.target & (self.target - 1):
            raise ValueError(f'target must be a power of two >= 4, got {self.target}')
        if not 1 <= self.start_tiles <= self.size * self.size:
            raise ValueError(f'start_tiles must be between 1 and {self.size * self.size}, got {self.start_tiles}')
        if not 0.0 <= self.four_probability <= 1.0:
            raise ValueError(f'four_probability must be between 0 and 1, got {self.four_probability}')
