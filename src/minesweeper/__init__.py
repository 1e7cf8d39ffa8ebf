"""
Minesweeper game engine.

Provides board management, cell state, difficulty presets, the game
clock and a Gymnasium environment wrapper.
"""
from .errors import MinesweeperError, InvalidConfiguration, InvalidPosition
from .config import BoardConfig, EASY, MEDIUM, HARD, DIFFICULTIES, get_difficulty
from .cell import Cell, CellState, MINE_VALUE
from .timer import ElapsedTimer
from .board import Board, GameStatus, GameSnapshot, MoveResult
from .environment import MinesweeperEnv, render_ansi

__all__ = [
    "MinesweeperError",
    "InvalidConfiguration",
    "InvalidPosition",
    "BoardConfig",
    "EASY",
    "MEDIUM",
    "HARD",
    "DIFFICULTIES",
    "get_difficulty",
    "Cell",
    "CellState",
    "MINE_VALUE",
    "ElapsedTimer",
    "Board",
    "GameStatus",
    "GameSnapshot",
    "MoveResult",
    "MinesweeperEnv",
    "render_ansi",
]
