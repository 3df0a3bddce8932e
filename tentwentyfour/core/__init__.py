# -*- coding: utf-8 -*-
"""
This module provides the rules of the game: the grid and its tiles, the resolution of a move, the spawning of
new tiles and the detection of the end of the game.
"""

from .gameboard import Grid, fill_cells
from .gamemove import has_legal_move, has_won, legal_directions, legal_directions_mask
from .randomness import TILE_SPAWN_PROBS, NumpyRandomSource, RandomSource, ScriptedRandomSource
from .resolver import DEFAULT_TARGET, MoveResult, build_traversals, find_farthest_position, resolve
from .tiles import (
    Cell,
    Direction,
    InvalidDirectionError,
    Merged,
    MoveEffect,
    OutOfBoundsError,
    Slid,
    Spawned,
    Tile,
    TileIdGenerator,
)

__all__ = [
    "Cell",
    "Direction",
    "Grid",
    "InvalidDirectionError",
    "Merged",
    "MoveEffect",
    "MoveResult",
    "NumpyRandomSource",
    "OutOfBoundsError",
    "RandomSource",
    "ScriptedRandomSource",
    "Slid",
    "Spawned",
    "TILE_SPAWN_PROBS",
    "DEFAULT_TARGET",
    "Tile",
    "TileIdGenerator",
    "build_traversals",
    "fill_cells",
    "find_farthest_position",
    "has_legal_move",
    "has_won",
    "legal_directions",
    "legal_directions_mask",
    "resolve",
]
