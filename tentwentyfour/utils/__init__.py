# -*- coding: utf-8 -*-
"""
This module provides the stores used to keep the best score between games.
"""

from .storage import BestScoreStore, FileScoreStore, MemoryScoreStore

__all__ = ["BestScoreStore", "FileScoreStore", "MemoryScoreStore"]
