"""
Tiles, directions and the effects a move produces.

A tile keeps its identity while it slides; a merge retires both sources and creates a new tile with a fresh
identifier. Effects are plain data handed to whatever renders the board.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from itertools import count
from numbers import Integral

Cell = tuple[int, int]


class InvalidDirectionError(ValueError):
    """Raised when a move direction is not one of the four known directions."""


class OutOfBoundsError(IndexError):
    """Raised when a cell outside the grid is read or written."""


class Direction(IntEnum):
    """
    The four moves, coded the way the input layer sends them.
    """

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def vector(self) -> Cell:
        """
        Unit step as ``(delta_row, delta_col)``.
        """
        return _VECTORS[self]

    @classmethod
    def parse(cls, value: Direction | int | str) -> Direction:
        """
        Convert a direction, its integer code or its name into a ``Direction``.

        Parameters
        ----------
        value : Direction | int | str
            ``Direction.LEFT``, ``3`` and ``'left'`` all name the same move.

        Returns
        -------
        Direction
            The parsed direction.

        Raises
        ------
        InvalidDirectionError
            If the value names none of the four directions.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise InvalidDirectionError(f'Unknown direction: {value!r}') from None
        if isinstance(value, Integral) and not isinstance(value, bool):
            try:
                return cls(int(value))
            except ValueError:
                raise InvalidDirectionError(f'Unknown direction code: {value!r}') from None
        raise InvalidDirectionError(f'Unknown direction: {value!r}')


_VECTORS: dict[Direction, Cell] = {
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
}


def is_tile_value(value: int) -> bool:
    """Check that a value is a power of two greater or equal to 2."""
    return isinstance(value, Integral) and not isinstance(value, bool) and value >= 2 and value & (value - 1) == 0


@dataclass(frozen=True)
class Tile:
    """
    A numbered tile.

    Attributes
    ----------
    value : int
        Power of two, at least 2.
    id : int
        Identifier, stable while the tile only slides.
    merged_from : tuple[Tile, Tile] | None
        The two tiles consumed to create this one, during the move that created it only.
    """

    value: int
    id: int
    merged_from: tuple[Tile, Tile] | None = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if not is_tile_value(self.value):
            raise ValueError(f'Tile value must be a power of two >= 2, got {self.value!r}')
        # ##>: Store plain ints, whatever integer type the value came in as.
        object.__setattr__(self, 'value', int(self.value))

    @property
    def is_merged(self) -> bool:
        """True if the tile was produced by a merge during the current move."""
        return self.merged_from is not None

    def settled(self) -> Tile:
        """Return the same tile with its merge history cleared."""
        if self.merged_from is None:
            return self
        return replace(self, merged_from=None)


class TileIdGenerator:
    """
    Monotonic source of tile identifiers.

    Parameters
    ----------
    start : int, optional
        First identifier handed out (default is 1).
    """

    def __init__(self, start: int = 1):
        self._counter = count(start)

    def __call__(self) -> int:
        return next(self._counter)


# ##: Effects emitted by a move, in the order they happened.
@dataclass(frozen=True)
class Slid:
    """A tile moved from ``source`` to ``target`` without merging."""

    tile_id: int
    source: Cell
    target: Cell


@dataclass(frozen=True)
class Merged:
    """The tile at ``source`` merged into the one at ``target``, giving ``tile``."""

    tile: Tile
    source: Cell
    target: Cell


@dataclass(frozen=True)
class Spawned:
    """A new tile appeared at ``cell``."""

    tile: Tile
    cell: Cell


MoveEffect = Slid | Merged | Spawned
