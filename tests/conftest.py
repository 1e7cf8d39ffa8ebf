"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pytest

# Add src and the project root (for main.py) to path for imports
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT))

from minesweeper import Board, BoardConfig, Cell, ElapsedTimer


# ============================================================================
# Helpers
# ============================================================================

class ScriptedRandom:
    """
    Stand-in for random.Random that plants mines at chosen positions.

    Mine placement draws a row then a column for every candidate, so the
    scripted positions are handed out as consecutive randrange results.
    """

    def __init__(self, positions: Iterable[Tuple[int, int]]) -> None:
        self._values: List[int] = [value for pos in positions for value in pos]

    def randrange(self, *args, **kwargs) -> int:
        return self._values.pop(0)


# Three mines down the right-hand column of a 5x5 board. A first click
# at (2, 0) floods columns 0-3 and leaves (1, 4) and (3, 4) hidden.
COLUMN_MINES = [(0, 4), (2, 4), (4, 4)]
COLUMN_CONFIG = BoardConfig(5, 5, 3)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def make_board():
    """Factory for boards whose clocks are stopped at teardown."""
    boards: List[Board] = []

    def factory(
        config: Optional[BoardConfig] = None,
        mines: Optional[Iterable[Tuple[int, int]]] = None,
        seed: Optional[int] = None,
        interval: float = 1.0,
    ) -> Board:
        if mines is not None:
            rng = ScriptedRandom(mines)
        else:
            rng = random.Random(seed)
        board = Board(
            config or BoardConfig(),
            rng=rng,
            timer=ElapsedTimer(interval=interval),
        )
        boards.append(board)
        return board

    yield factory

    for board in boards:
        board.timer.stop()


@pytest.fixture
def default_board(make_board) -> Board:
    """Create a default 9x9 board with 10 mines."""
    return make_board(seed=1234)


@pytest.fixture
def column_board(make_board) -> Board:
    """5x5 board with mines planted at COLUMN_MINES."""
    return make_board(COLUMN_CONFIG, mines=COLUMN_MINES)


@pytest.fixture
def opened_column_board(column_board: Board) -> Board:
    """Column board after the first click at (2, 0)."""
    column_board.reveal(2, 0)
    return column_board


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
