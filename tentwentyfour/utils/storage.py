"""Persistence of the best score between games."""

import logging
from pathlib import Path
from typing import Protocol

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class BestScoreStore(Protocol):
    """Reads and writes the best score."""

    def get(self, default: int = 0) -> int:
        """Return the stored best score, or ``default`` if there is none."""

    def set(self, value: int) -> None:
        """Store a new best score."""


class MemoryScoreStore:
    """Keeps the best score for the lifetime of the process."""

    def __init__(self, value: int | None = None):
        self._value = value

    def get(self, default: int = 0) -> int:
        return default if self._value is None else self._value

    def set(self, value: int) -> None:
        self._value = int(value)


class FileScoreStore:
    """
    Keeps the best score in a text file holding a single integer.

    Parameters
    ----------
    path : str | Path
        Location of the file. Parent directories are created on the first write.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def get(self, default: int = 0) -> int:
        if not self.path.exists():
            return default
        try:
            value = int(self.path.read_text(encoding='utf-8').strip())
        except (OSError, ValueError) as error:
            _logger.warning('Ignoring unreadable best score in %s: %s', self.path, error)
            return default
        if value < 0:
            _logger.warning('Ignoring negative best score in %s: %d', self.path, value)
            return default
        return value

    def set(self, value: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(f'{int(value)}\n', encoding='utf-8')
