"""
Game move utilities, providing functions for detecting legal moves and the end of the game.
"""

from numpy import ndarray

from tentwentyfour.core.gameboard import Grid
from tentwentyfour.core.tiles import Direction


def legal_directions_mask(grid: Grid) -> tuple[bool, bool, bool, bool]:
    """
    Tell, for each direction, whether moving that way changes the grid.

    Parameters
    ----------
    grid : Grid
        The current grid.

    Returns
    -------
    tuple[bool, bool, bool, bool]
        One flag per direction, indexed by ``Direction`` (up, right, down, left).

    Notes
    -----
    A direction is legal when some tile has an empty cell ahead of it, or when two equal tiles touch along
    that axis. Equal neighbours make both directions of their axis legal.
    """
    board = grid.values()
    occupied = board != 0

    # ##>: Cell pairs along each axis: (first, second) with second to the right of, or below, first.
    west, east = board[:, :-1], board[:, 1:]
    north, south = board[:-1, :], board[1:, :]
    equal_across = bool((occupied[:, :-1] & (west == east)).any())
    equal_along = bool((occupied[:-1, :] & (north == south)).any())

    # ##>: A tile slides when the cell ahead of it is empty.
    slides = {
        Direction.UP: (north == 0) & (south != 0),
        Direction.RIGHT: (east == 0) & (west != 0),
        Direction.DOWN: (south == 0) & (north != 0),
        Direction.LEFT: (west == 0) & (east != 0),
    }
    merges = {
        Direction.UP: equal_along,
        Direction.RIGHT: equal_across,
        Direction.DOWN: equal_along,
        Direction.LEFT: equal_across,
    }

    up, right, down, left = (bool(slides[direction].any()) or merges[direction] for direction in Direction)
    return up, right, down, left


def legal_directions(grid: Grid) -> list[Direction]:
    """
    Determine the moves that would change the grid.

    Parameters
    ----------
    grid : Grid
        The current grid.

    Returns
    -------
    list[Direction]
        Legal directions, in ``Direction`` order.
    """
    mask = legal_directions_mask(grid)
    return [direction for direction in Direction if mask[direction]]


def _has_equal_neighbours(board: ndarray) -> bool:
    return bool((board[:-1] == board[1:]).any() or (board[:, :-1] == board[:, 1:]).any())


def has_legal_move(grid: Grid) -> bool:
    """
    Check whether the player can still move.

    Parameters
    ----------
    grid : Grid
        The current grid.

    Returns
    -------
    bool
        False exactly when the grid is full and no two orthogonal neighbours share a value.
    """
    board = grid.values()
    return bool((board == 0).any()) or _has_equal_neighbours(board)


def has_won(grid: Grid, threshold: int) -> bool:
    """Check whether a tile reached the threshold."""
    return bool((grid.values() >= threshold).any())
