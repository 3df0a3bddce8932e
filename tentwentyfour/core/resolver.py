"""
Resolution of a single move: sliding, merging and the effects they produce.
"""

from dataclasses import dataclass, field
from typing import Callable

from tentwentyfour.core.gameboard import Grid
from tentwentyfour.core.tiles import Cell, Direction, Merged, MoveEffect, Slid, Tile, TileIdGenerator

DEFAULT_TARGET = 1024


@dataclass
class MoveResult:
    """
    Outcome of resolving a move on a grid.

    Attributes
    ----------
    grid : Grid
        The grid after the move, before any tile is spawned.
    effects : list[MoveEffect]
        Slides and merges, in processing order.
    score : int
        Sum of the values created by merges.
    moved : bool
        True if at least one tile slid or merged.
    reached_target : bool
        True if a merge created a tile worth exactly the target.
    """

    grid: Grid
    effects: list[MoveEffect] = field(default_factory=list)
    score: int = 0
    moved: bool = False
    reached_target: bool = False


def build_traversals(size: int, direction: Direction) -> tuple[list[int], list[int]]:
    """
    Order in which rows and columns are visited for a move.

    Parameters
    ----------
    size : int
        Grid size.
    direction : Direction
        The move.

    Returns
    -------
    tuple[list[int], list[int]]
        Row order and column order.

    Notes
    -----
    Tiles are processed starting from the edge they move towards, so an order is reversed when the
    corresponding component of the direction vector is +1.
    """
    delta_row, delta_col = direction.vector
    rows = list(range(size))
    cols = list(range(size))
    if delta_row == 1:
        rows.reverse()
    if delta_col == 1:
        cols.reverse()
    return rows, cols


def find_farthest_position(grid: Grid, cell: Cell, direction: Direction) -> tuple[Cell, Cell]:
    """
    Walk from a cell along a direction until something blocks the way.

    Parameters
    ----------
    grid : Grid
        The grid being resolved.
    cell : Cell
        Starting cell.
    direction : Direction
        The move.

    Returns
    -------
    tuple[Cell, Cell]
        ``farthest``, the last empty cell reached (or the start cell), and ``next``, the first occupied or
        out-of-bounds cell after it.
    """
    delta_row, delta_col = direction.vector
    previous = cell
    current = (cell[0] + delta_row, cell[1] + delta_col)
    while grid.within_bounds(current) and grid.at(current) is None:
        previous = current
        current = (current[0] + delta_row, current[1] + delta_col)
    return previous, current


def resolve(
    grid: Grid,
    direction: Direction,
    target: int = DEFAULT_TARGET,
    next_id: Callable[[], int] | None = None,
) -> MoveResult:
    """
    Slide every tile in a direction and merge equal tiles that collide.

    Parameters
    ----------
    grid : Grid
        Current grid. Left untouched.
    direction : Direction
        The move.
    target : int, optional
        Value that signals a win when a merge creates it (default is 1024).
    next_id : Callable[[], int], optional
        Identifier generator for merged tiles. Defaults to a counter starting above every id on the grid.

    Returns
    -------
    MoveResult
        The new grid with its effects, score gained and flags.

    Notes
    -----
    - A tile created by a merge during this move never merges again, so ``2 2 4`` moved left gives ``4 4``.
    - No tile is spawned here.
    """
    direction = Direction.parse(direction)
    if next_id is None:
        next_id = TileIdGenerator(start=max((tile.id for _, tile in grid.tiles()), default=0) + 1)

    # ##: Work on a snapshot where every tile may merge again.
    board = Grid(grid.size)
    for cell, tile in grid.tiles():
        board.place(cell, tile.settled())

    result = MoveResult(grid=board)
    rows, cols = build_traversals(board.size, direction)
    for row in rows:
        for col in cols:
            cell = (row, col)
            tile = board.at(cell)
            if tile is None:
                continue

            farthest, following = find_farthest_position(board, cell, direction)
            neighbour = board.at(following) if board.within_bounds(following) else None

            # ##: Merge with the blocking tile if equal and not itself fresh from a merge.
            if neighbour is not None and neighbour.value == tile.value and not neighbour.is_merged:
                merged = Tile(value=tile.value * 2, id=next_id(), merged_from=(tile, neighbour))
                board.place(following, merged)
                board.remove(cell)

                result.effects.append(Merged(tile=merged, source=cell, target=following))
                result.score += merged.value
                result.reached_target = result.reached_target or merged.value == target
                result.moved = True
            elif farthest != cell:
                board.place(farthest, tile)
                board.remove(cell)

                result.effects.append(Slid(tile_id=tile.id, source=cell, target=farthest))
                result.moved = True
    return result
