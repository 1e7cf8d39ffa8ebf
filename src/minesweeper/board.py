"""
Board module for Minesweeper.

Implements the game engine: lazy mine placement with a safe first click,
flood-fill revealing, flag toggling, win/lose detection and the game clock.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell
from .config import BoardConfig
from .errors import InvalidPosition
from .timer import ElapsedTimer


logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST)


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of a reveal or flag toggle.

    Attributes:
        status: Game status after the move.
        changed: Positions whose visible state changed, in change order.
    """

    status: GameStatus
    changed: Tuple[Position, ...] = ()


@dataclass(frozen=True)
class GameSnapshot:
    """
    Everything a front end needs to draw the game.

    Attributes:
        status: Current game status.
        elapsed_seconds: Seconds on the game clock.
        remaining_mines: Mines minus flags (negative when over-flagged).
        cells: Per-cell values by row, encoded as in Board.get_observation.
    """

    status: GameStatus
    elapsed_seconds: int
    remaining_mines: int
    cells: Tuple[Tuple[int, ...], ...] = field(repr=False)

    def to_array(self) -> np.ndarray:
        """Cell values as an int8 array."""
        return np.array(self.cells, dtype=np.int8)


# ============================================================================
# Board Class
# ============================================================================

@dataclass(eq=False)
class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, mine placement, revealing logic,
    and win/lose conditions. Each instance is an independent game.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    timer: ElapsedTimer = field(default_factory=ElapsedTimer, repr=False)
    _grid: List[List[Cell]] = field(init=False, default_factory=list, repr=False)
    _mines: Set[Position] = field(init=False, default_factory=set, repr=False)
    _status: GameStatus = field(init=False, default=GameStatus.NOT_STARTED)
    _revealed_count: int = field(init=False, default=0)
    _flagged_count: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        """Start a fresh game after dataclass creation."""
        self.initialize()

    def initialize(self, config: Optional[BoardConfig] = None) -> None:
        """
        Discard the current game and start a new one.

        Stops the clock, hides every cell and removes all mines. Mines are
        placed on the first reveal.

        Args:
            config: New configuration, or None to replay the current one.
        """
        self.timer.reset()
        if config is not None:
            self.config = config
        self._init_grid()
        self._mines = set()
        self._status = GameStatus.NOT_STARTED
        self._revealed_count = 0
        self._flagged_count = 0

    def seed(self, seed: Optional[int]) -> None:
        """Reseed mine placement for reproducible games."""
        self.rng = random.Random(seed)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.cols)]
            for _ in range(self.config.rows)
        ]

    def _place_mines(self, row: int, col: int) -> None:
        """
        Place mines randomly around a safe area.

        Candidate positions are drawn uniformly and rejected when they
        are already mined or fall inside the safe area.

        Args:
            row: Row of the first click.
            col: Column of the first click.
        """
        excluded = {(row, col), *self._get_neighbors(row, col)}
        while len(self._mines) < self.config.mines:
            position = (
                self.rng.randrange(self.config.rows),
                self.rng.randrange(self.config.cols),
            )
            if position in excluded or position in self._mines:
                continue
            self._mines.add(position)
            self._grid[position[0]][position[1]].is_mine = True
        logger.debug(
            "Placed %d mines avoiding %d cells around (%d, %d)",
            len(self._mines), len(excluded), row, col,
        )

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if not self._grid[row][col].is_mine:
                    count = self._count_adjacent_mines(row, col)
                    self._grid[row][col].adjacent_mines = count

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if (neighbor_row, neighbor_col) in self._mines:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def _check_position(self, row: int, col: int) -> None:
        """Raise InvalidPosition if position is off the board."""
        if not self._is_valid_position(row, col):
            raise InvalidPosition(row, col, self.config.rows, self.config.cols)

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> MoveResult:
        """
        Reveal a cell at the given position.

        On first click, places mines avoiding this cell and its neighbors
        and starts the clock. If the cell is empty (0 adjacent mines), the
        surrounding region is revealed too. If the cell is a mine, the
        game is lost.

        Revealing a flagged or already revealed cell, or revealing after
        the game has ended, changes nothing.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            Status after the move and the positions that changed.

        Raises:
            InvalidPosition: If the position is off the board.
        """
        self._check_position(row, col)
        if not self._can_reveal(row, col):
            return MoveResult(self._status)

        if self._status == GameStatus.NOT_STARTED:
            self._handle_first_click(row, col)

        changed: List[Position] = []
        cell = self._grid[row][col]
        self._reveal_cell(row, col, changed)

        if cell.is_mine:
            self._lose(changed)
        else:
            if cell.adjacent_mines == 0:
                self._flood_fill(row, col, changed)
            self._check_win_condition(changed)

        return MoveResult(self._status, tuple(changed))

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if self._status.is_terminal:
            return False
        return self._grid[row][col].is_hidden

    def _handle_first_click(self, row: int, col: int) -> None:
        """Handle first click: place mines, calculate counts, start clock."""
        self._place_mines(row, col)
        self._calculate_adjacent_mines()
        self._status = GameStatus.IN_PROGRESS
        self.timer.start()

    def _reveal_cell(self, row: int, col: int, changed: List[Position]) -> None:
        """Reveal a single hidden cell and record the change."""
        self._grid[row][col].reveal()
        self._revealed_count += 1
        changed.append((row, col))

    def _flood_fill(self, row: int, col: int, changed: List[Position]) -> None:
        """
        Reveal the zero region around (row, col) and its numbered border.

        Uses an explicit stack; every cell is revealed at most once since
        only hidden cells are pushed and they are revealed when pushed.
        """
        frontier = [(row, col)]
        while frontier:
            current_row, current_col = frontier.pop()
            for neighbor_row, neighbor_col in self._get_neighbors(
                current_row, current_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if not neighbor.is_hidden:
                    continue
                self._reveal_cell(neighbor_row, neighbor_col, changed)
                if neighbor.adjacent_mines == 0:
                    frontier.append((neighbor_row, neighbor_col))

    def _lose(self, changed: List[Position]) -> None:
        """End the game and show every mine that is not flagged."""
        self._status = GameStatus.LOST
        self.timer.stop()
        for row, col in sorted(self._mines):
            if self._grid[row][col].is_hidden:
                self._reveal_cell(row, col, changed)
        logger.info("Game lost after %ss", self.timer.elapsed)

    def _check_win_condition(self, changed: List[Position]) -> None:
        """Win once every non-mine cell is revealed, then flag all mines."""
        if self._revealed_count != self.config.safe_cells:
            return
        self._status = GameStatus.WON
        self.timer.stop()
        for row, col in sorted(self._mines):
            cell = self._grid[row][col]
            if cell.is_hidden:
                cell.toggle_flag()
                self._flagged_count += 1
                changed.append((row, col))
        logger.info("Game won in %ss", self.timer.elapsed)

    def toggle_flag(self, row: int, col: int) -> MoveResult:
        """
        Toggle flag on a hidden cell.

        No-op on a revealed cell or once the game has ended. Flagging
        never affects the status or the clock.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            Status and the toggled position, if any.

        Raises:
            InvalidPosition: If the position is off the board.
        """
        self._check_position(row, col)
        if self._status.is_terminal:
            return MoveResult(self._status)

        cell = self._grid[row][col]
        if not cell.toggle_flag():
            return MoveResult(self._status)

        self._flagged_count += 1 if cell.is_flagged else -1
        return MoveResult(self._status, ((row, col),))

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    @property
    def is_playing(self) -> bool:
        """Check if the game still accepts moves."""
        return not self._status.is_terminal

    @property
    def is_over(self) -> bool:
        """Check if the game has been won or lost."""
        return self._status.is_terminal

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._status == GameStatus.LOST

    @property
    def elapsed_seconds(self) -> int:
        """Get seconds on the game clock."""
        return self.timer.elapsed

    @property
    def remaining_mines(self) -> int:
        """Mines minus flags. Not clamped, so over-flagging goes negative."""
        return self.config.mines - self._flagged_count

    @property
    def revealed_count(self) -> int:
        """Get number of revealed cells, mines included after a loss."""
        return self._revealed_count

    @property
    def mines(self) -> FrozenSet[Position]:
        """Mine positions; empty until the first reveal."""
        return frozenset(self._mines)

    @property
    def revealed(self) -> FrozenSet[Position]:
        """Get positions of revealed cells."""
        return frozenset(self._positions_where(lambda cell: cell.is_revealed))

    @property
    def flagged(self) -> FrozenSet[Position]:
        """Get positions of flagged cells."""
        return frozenset(self._positions_where(lambda cell: cell.is_flagged))

    def _positions_where(self, predicate) -> List[Position]:
        return [
            (row, col)
            for row in range(self.config.rows)
            for col in range(self.config.cols)
            if predicate(self._grid[row][col])
        ]

    def adjacent_mine_count(self, row: int, col: int) -> int:
        """
        Count mines among the in-bounds neighbors of a position.

        Raises:
            InvalidPosition: If the position is off the board.
        """
        self._check_position(row, col)
        return self._count_adjacent_mines(row, col)

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def get_observation(self) -> np.ndarray:
        """
        Get visible board state as a numpy array.

        Returns:
            2D numpy array where:
                -2 = flagged
                -1 = hidden
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of hidden, unflagged (row, col) positions.
        """
        if self._status.is_terminal:
            return []
        return self._positions_where(lambda cell: cell.is_hidden)

    def query_state(self) -> GameSnapshot:
        """Snapshot status, clock, mine counter and cell values."""
        return GameSnapshot(
            status=self._status,
            elapsed_seconds=self.elapsed_seconds,
            remaining_mines=self.remaining_mines,
            cells=tuple(tuple(row) for row in self.get_observation().tolist()),
        )
