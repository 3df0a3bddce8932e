# -*- coding: utf-8 -*-
"""
1024: a sliding-tile merge puzzle engine.

Tiles slide in one of four directions, equal tiles merge into one of double value, and the game is won once a
tile reaches 1024 or lost once no move is left.
"""

from tentwentyfour.config import GameConfig
from tentwentyfour.core import Direction, Grid, InvalidDirectionError, Merged, MoveEffect, Slid, Spawned, Tile
from tentwentyfour.envs import GameSession, GameState, GameStateError, MoveOutcome, apply_move, keep_playing, new_game

__all__ = [
    "Direction",
    "GameConfig",
    "GameSession",
    "GameState",
    "GameStateError",
    "Grid",
    "InvalidDirectionError",
    "Merged",
    "MoveEffect",
    "MoveOutcome",
    "Slid",
    "Spawned",
    "Tile",
    "apply_move",
    "keep_playing",
    "new_game",
]
