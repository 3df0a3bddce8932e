"""1024 game session: the state machine driving the board between player inputs."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Union

from tentwentyfour.config import GameConfig
from tentwentyfour.core.gameboard import Grid, fill_cells
from tentwentyfour.core.gamemove import has_legal_move
from tentwentyfour.core.randomness import NumpyRandomSource, RandomSource
from tentwentyfour.core.resolver import resolve
from tentwentyfour.core.tiles import Direction, MoveEffect, TileIdGenerator
from tentwentyfour.utils.storage import BestScoreStore, MemoryScoreStore

# ##>: Module logger.
_logger = logging.getLogger(__name__)

DirectionLike = Union[Direction, int, str]


class GameStateError(RuntimeError):
    """Raised when a session is asked for a transition its state does not allow."""


class GameState(str, Enum):
    """
    Where the game stands.

    PLAYING: Moves are accepted.
    WON: The target was reached; moves are ignored until the player decides to keep playing.
    WON_CONTINUING: The target was reached and the player keeps playing.
    LOST: No move is left.
    """

    PLAYING = 'playing'
    WON = 'won'
    WON_CONTINUING = 'won_continuing'
    LOST = 'lost'


@dataclass
class MoveOutcome:
    """What a move did, for the renderer."""

    grid: Grid
    effects: list[MoveEffect] = field(default_factory=list)
    score: int = 0
    score_delta: int = 0
    moved: bool = False
    state: GameState = GameState.PLAYING


class GameSession:
    """
    A single game of 1024.

    The session is the only owner of the grid and the score. It is not reentrant: moves must be applied one at a
    time, each one running to completion (spawn and end-of-game check included) before the next.

    Parameters
    ----------
    config : GameConfig, optional
        Size of the grid, target and spawning settings.
    random_source : RandomSource, optional
        Chooses spawned tiles. Defaults to an unseeded ``NumpyRandomSource``.
    score_store : BestScoreStore, optional
        Where the best score is read and written. Defaults to memory.
    next_id : Callable[[], int], optional
        Tile identifier generator. Defaults to a counter starting at 1.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        random_source: RandomSource | None = None,
        score_store: BestScoreStore | None = None,
        next_id: Callable[[], int] | None = None,
    ):
        self.config = config or GameConfig()
        self._random = random_source or NumpyRandomSource(four_probability=self.config.four_probability)
        self._store = score_store or MemoryScoreStore()
        self._next_id = next_id or TileIdGenerator()

        self._grid = Grid(self.config.size)
        self._score = 0
        self._best = max(0, self._store.get(default=0))
        self._state = GameState.PLAYING
        self.new_game()

    @property
    def grid(self) -> Grid:
        """Snapshot of the current grid."""
        return self._grid.copy()

    @property
    def score(self) -> int:
        return self._score

    @property
    def best(self) -> int:
        return self._best

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def won(self) -> bool:
        return self._state in (GameState.WON, GameState.WON_CONTINUING)

    @property
    def is_finished(self) -> bool:
        """True when moves are ignored: the game is lost, or won and waiting for the player."""
        return self._state in (GameState.WON, GameState.LOST)

    def new_game(self) -> list[MoveEffect]:
        """
        Start over with an empty grid seeded with the starting tiles.

        Returns
        -------
        list[MoveEffect]
            The spawn effects of the starting tiles.
        """
        self._grid = Grid(self.config.size)
        self._score = 0
        self._state = GameState.PLAYING
        spawned = fill_cells(self._grid, self.config.start_tiles, self._random, self._next_id)
        _logger.info('New %dx%d game started', self.config.size, self.config.size)
        return spawned

    def apply_move(self, direction: DirectionLike) -> MoveOutcome:
        """
        Play one move.

        Parameters
        ----------
        direction : Direction | int | str
            The move: a ``Direction``, its code (0 up, 1 right, 2 down, 3 left) or its name.

        Returns
        -------
        MoveOutcome
            New grid, effects (slides, merges, then the spawned tile), score and state.

        Raises
        ------
        InvalidDirectionError
            If the direction is unknown, whatever the state of the game.

        Notes
        -----
        - A move that changes nothing is ignored: no tile spawns and the state stays the same.
        - Moves are ignored while the game is won (until ``keep_playing``) or lost.
        """
        direction = Direction.parse(direction)
        if self.is_finished:
            _logger.debug('Ignoring %s: game is %s', direction.name, self._state.value)
            return self._outcome()

        result = resolve(self._grid, direction, target=self.config.target, next_id=self._next_id)
        if not result.moved:
            _logger.debug('Ignoring %s: nothing moves', direction.name)
            return self._outcome()

        # ##: Commit the move, then spawn one tile.
        self._grid = result.grid
        self._score += result.score
        if self._score > self._best:
            self._best = self._score
            self._store.set(self._best)
            _logger.info('New best score: %d', self._best)
        effects = list(result.effects)
        effects.extend(fill_cells(self._grid, 1, self._random, self._next_id))

        # ##: Update the state.
        if result.reached_target and self._state is GameState.PLAYING:
            self._state = GameState.WON
            _logger.info('Reached %d with a score of %d', self.config.target, self._score)
        elif not has_legal_move(self._grid):
            self._state = GameState.LOST
            _logger.info('Game over with a score of %d', self._score)

        return self._outcome(effects=effects, score_delta=result.score, moved=True)

    def keep_playing(self) -> None:
        """
        Continue after a win.

        Raises
        ------
        GameStateError
            If the game is not in the ``won`` state.
        """
        if self._state is not GameState.WON:
            raise GameStateError(f'Cannot keep playing from state {self._state.value!r}')
        if has_legal_move(self._grid):
            self._state = GameState.WON_CONTINUING
        else:
            self._state = GameState.LOST
            _logger.info('Game over with a score of %d', self._score)

    def render(self) -> None:
        """Print the score line, then one line per row with `.` for empty cells."""
        print(f'Score: {self._score}\tBest: {self._best}')
        for row in self._grid.values().tolist():
            print(' \t'.join(str(value) if value else '.' for value in row))

    def _outcome(
        self, effects: list[MoveEffect] | None = None, score_delta: int = 0, moved: bool = False
    ) -> MoveOutcome:
        return MoveOutcome(
            grid=self.grid,
            effects=effects or [],
            score=self._score,
            score_delta=score_delta,
            moved=moved,
            state=self._state,
        )


def new_game(size: int = 4, **kwargs) -> GameSession:
    """
    Create a session and start a game.

    Parameters
    ----------
    size : int, optional
        Grid size (default is 4).
    **kwargs
        ``target``, ``start_tiles`` and ``four_probability`` go to ``GameConfig``; ``random_source``,
        ``score_store`` and ``next_id`` go to ``GameSession``.
    """
    session_keys = ('random_source', 'score_store', 'next_id')
    session_kwargs = {key: kwargs.pop(key) for key in session_keys if key in kwargs}
    return GameSession(config=GameConfig(size=size, **kwargs), **session_kwargs)


def apply_move(session: GameSession, direction: DirectionLike) -> MoveOutcome:
    """Play one move on a session."""
    return session.apply_move(direction)


def keep_playing(session: GameSession) -> None:
    """Continue a won game."""
    session.keep_playing()
