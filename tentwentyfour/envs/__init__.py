# -*- coding: utf-8 -*-
"""
Python implementation of the 1024 game.

This module provides the `GameSession` class, which holds the grid, the score and the state of a game, along
with functional helpers for the rendering and input layers.
"""

from .tentwentyfour import (
    GameSession,
    GameState,
    GameStateError,
    MoveOutcome,
    apply_move,
    keep_playing,
    new_game,
)

__all__ = ["GameSession", "GameState", "GameStateError", "MoveOutcome", "apply_move", "keep_playing", "new_game"]
