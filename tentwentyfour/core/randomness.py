"""
Random sources used to spawn tiles.

The engine never draws random numbers itself: a ``RandomSource`` chooses the cell and the value of every new
tile, so a game can be replayed exactly from a seed or from a fixed script.
"""

from typing import Iterable, Protocol, Sequence

from numpy.random import PCG64DXSM, Generator, default_rng

from tentwentyfour.core.tiles import Cell

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}


class RandomSource(Protocol):
    """Chooses where new tiles appear and what they are worth."""

    def choose_cell(self, cells: Sequence[Cell]) -> Cell:
        """Pick one cell, uniformly, among the empty ones."""

    def tile_value(self) -> int:
        """Draw the value of a new tile: 2 or 4."""


class NumpyRandomSource:
    """
    Random source backed by a NumPy generator.

    Parameters
    ----------
    seed : int, optional
        Seed for reproducible games. A fresh PCG64DXSM stream is used when omitted.
    four_probability : float, optional
        Probability that a new tile is a 4 (default is 0.1).
    """

    def __init__(self, seed: int | None = None, four_probability: float = TILE_SPAWN_PROBS[4]):
        self._generator: Generator = default_rng(seed) if seed is not None else default_rng(PCG64DXSM())
        self._four_probability = four_probability

    def choose_cell(self, cells: Sequence[Cell]) -> Cell:
        if not cells:
            raise ValueError('Cannot choose a cell from an empty sequence')
        return cells[int(self._generator.integers(len(cells)))]

    def tile_value(self) -> int:
        return 4 if self._generator.random() < self._four_probability else 2


class ScriptedRandomSource:
    """
    Replays fixed choices, for tests and replays.

    Parameters
    ----------
    picks : Iterable[int], optional
        Indices into the row-major list of empty cells, consumed one per spawn.
    values : Iterable[int], optional
        Values of the spawned tiles, consumed one per spawn.

    Notes
    -----
    Once a sequence is exhausted, the first empty cell and a 2 are used.
    """

    def __init__(self, picks: Iterable[int] = (), values: Iterable[int] = ()):
        self._picks = iter(picks)
        self._values = iter(values)

    def choose_cell(self, cells: Sequence[Cell]) -> Cell:
        if not cells:
            raise ValueError('Cannot choose a cell from an empty sequence')
        index = next(self._picks, 0)
        if not 0 <= index < len(cells):
            raise ValueError(f'Scripted pick {index} is out of range for {len(cells)} empty cells')
        return cells[index]

    def tile_value(self) -> int:
        value = next(self._values, 2)
        if value not in TILE_SPAWN_PROBS:
            raise ValueError(f'Scripted tile value must be 2 or 4, got {value}')
        return value
