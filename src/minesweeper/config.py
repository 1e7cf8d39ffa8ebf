"""
Board configuration and difficulty presets.
"""
from dataclasses import dataclass
from typing import Dict

from .errors import InvalidConfiguration


# Cells kept mine-free around the first click (the click plus 8 neighbors).
SAFE_AREA = 9


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mines: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.mines < 1:
            raise InvalidConfiguration("Board needs at least one mine")
        max_mines = self.rows * self.cols - SAFE_AREA - 1
        if self.mines > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.total_cells - self.mines


# Preset difficulty levels
EASY = BoardConfig(9, 9, 10)
MEDIUM = BoardConfig(16, 16, 40)
HARD = BoardConfig(16, 30, 99)

DIFFICULTIES: Dict[str, BoardConfig] = {
    "easy": EASY,
    "medium": MEDIUM,
    "hard": HARD,
}


def get_difficulty(name: str) -> BoardConfig:
    """
    Look up a preset by name.

    Args:
        name: One of "easy", "medium" or "hard" (case-insensitive).

    Returns:
        The matching preset configuration.
    """
    try:
        return DIFFICULTIES[name.strip().lower()]
    except KeyError:
        choices = ", ".join(DIFFICULTIES)
        raise InvalidConfiguration(
            f"Unknown difficulty {name!r} (choose from {choices})"
        ) from None
