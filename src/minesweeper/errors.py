"""
Exceptions raised by the Minesweeper engine.

Only two things are treated as errors: a configuration that cannot
describe a playable board, and a position outside the grid. Every other
questionable move (revealing a flagged cell, flagging after the game has
ended, ...) is a silent no-op.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class InvalidConfiguration(MinesweeperError, ValueError):
    """Board dimensions or mine count cannot form a playable game."""


class InvalidPosition(MinesweeperError, IndexError):
    """A (row, col) position lies outside the board."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside a {rows}x{cols} board"
        )
        self.row = row
        self.col = col
