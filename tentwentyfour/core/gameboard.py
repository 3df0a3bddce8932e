"""
The grid of tiles and the spawning of new tiles.
"""

import logging
from typing import Callable, Iterator, Sequence

from numpy import int64, ndarray, zeros

from tentwentyfour.core.randomness import RandomSource
from tentwentyfour.core.tiles import Cell, OutOfBoundsError, Spawned, Tile

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class Grid:
    """
    Square grid where each cell holds a tile or nothing.

    Parameters
    ----------
    size : int
        Number of rows and columns. Must be at least 2.

    Notes
    -----
    Every access is bounds-checked: reading or writing outside the grid raises ``OutOfBoundsError``.
    """

    def __init__(self, size: int):
        if size < 2:
            raise ValueError(f'Grid size must be >= 2, got {size}')
        self.size = size
        self._cells: list[list[Tile | None]] = [[None] * size for _ in range(size)]

    @classmethod
    def from_values(cls, rows: Sequence[Sequence[int]], next_id: Callable[[], int]) -> 'Grid':
        """
        Build a grid from a matrix of values, 0 meaning empty.

        Parameters
        ----------
        rows : Sequence[Sequence[int]]
            Square matrix of tile values.
        next_id : Callable[[], int]
            Identifier generator for the created tiles.

        Returns
        -------
        Grid
            The filled grid, tiles numbered in row-major order.
        """
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise ValueError('Grid values must form a square matrix')
        grid = cls(size)
        for row, values in enumerate(rows):
            for col, value in enumerate(values):
                if value:
                    grid.place((row, col), Tile(value=int(value), id=next_id()))
        return grid

    def within_bounds(self, cell: Cell) -> bool:
        """Check whether a cell lies on the grid."""
        row, col = cell
        return 0 <= row < self.size and 0 <= col < self.size

    def _check(self, cell: Cell) -> None:
        if not self.within_bounds(cell):
            raise OutOfBoundsError(f'Cell {cell} is outside a {self.size}x{self.size} grid')

    def at(self, cell: Cell) -> Tile | None:
        """Return the tile on a cell, or None if it is empty."""
        self._check(cell)
        row, col = cell
        return self._cells[row][col]

    def place(self, cell: Cell, tile: Tile) -> None:
        """Put a tile on a cell, replacing what was there."""
        self._check(cell)
        row, col = cell
        self._cells[row][col] = tile

    def remove(self, cell: Cell) -> Tile | None:
        """Empty a cell and return the tile it held."""
        self._check(cell)
        row, col = cell
        tile, self._cells[row][col] = self._cells[row][col], None
        return tile

    def empty_cells(self) -> list[Cell]:
        """Empty cells, in row-major order."""
        return [
            (row, col) for row in range(self.size) for col in range(self.size) if self._cells[row][col] is None
        ]

    def tiles(self) -> Iterator[tuple[Cell, Tile]]:
        """Iterate over occupied cells in row-major order."""
        for row in range(self.size):
            for col in range(self.size):
                tile = self._cells[row][col]
                if tile is not None:
                    yield (row, col), tile

    @property
    def is_full(self) -> bool:
        return all(tile is not None for row in self._cells for tile in row)

    def values(self) -> ndarray:
        """
        Tile values as a matrix.

        Returns
        -------
        ndarray
            ``size x size`` array of int64, 0 for empty cells.
        """
        board = zeros((self.size, self.size), dtype=int64)
        for (row, col), tile in self.tiles():
            board[row, col] = tile.value
        return board

    def copy(self) -> 'Grid':
        """Snapshot of the grid. Tiles are immutable, so they are shared."""
        clone = Grid(self.size)
        clone._cells = [list(row) for row in self._cells]
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f'Grid(size={self.size}, values={self.values().tolist()})'


def fill_cells(grid: Grid, number_tile: int, random_source: RandomSource, next_id: Callable[[], int]) -> list[Spawned]:
    """
    Spawn new tiles (2 or 4) on empty cells.

    Parameters
    ----------
    grid : Grid
        The grid to fill. **Modified in-place.**
    number_tile : int
        Number of new tiles to add.
    random_source : RandomSource
        Chooses the cell and the value of each tile.
    next_id : Callable[[], int]
        Identifier generator for the new tiles.

    Returns
    -------
    list[Spawned]
        One effect per tile added.

    Notes
    -----
    - If there are fewer empty cells than requested, it fills all available cells.
    - Nothing happens on a full grid.
    """
    spawned = []
    for _ in range(number_tile):
        empty = grid.empty_cells()
        if not empty:
            break

        cell = random_source.choose_cell(empty)
        tile = Tile(value=random_source.tile_value(), id=next_id())
        grid.place(cell, tile)
        spawned.append(Spawned(tile=tile, cell=cell))
        _logger.debug('Spawned %d at %s', tile.value, cell)
    return spawned
