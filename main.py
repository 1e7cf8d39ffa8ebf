#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {easy,medium,hard}] [--seed N]
    python main.py demo [--games N] [--difficulty ...] [--seed N]
"""
import argparse
import logging
from typing import List, Optional, Tuple

import numpy as np

from minesweeper import (
    DIFFICULTIES,
    Board,
    BoardConfig,
    MinesweeperEnv,
    MinesweeperError,
    get_difficulty,
    render_ansi,
)


HELP_TEXT = "Commands: r ROW COL (reveal), f ROW COL (flag), n (new game), q (quit)"

COMMAND_ALIASES = {
    "r": "reveal",
    "reveal": "reveal",
    "f": "flag",
    "flag": "flag",
    "n": "new",
    "new": "new",
    "q": "quit",
    "quit": "quit",
}


def parse_command(text: str) -> Tuple[str, Optional[int], Optional[int]]:
    """
    Parse a line typed by the player.

    Returns:
        (action, row, col); row and col are None for "new" and "quit".

    Raises:
        ValueError: If the line is not a known command.
    """
    parts = text.split()
    if not parts:
        raise ValueError("Empty command")

    action = COMMAND_ALIASES.get(parts[0].lower())
    if action is None:
        raise ValueError(f"Unknown command: {parts[0]}")

    if action in ("new", "quit"):
        return action, None, None

    if len(parts) != 3:
        raise ValueError(f"Usage: {parts[0]} ROW COL")
    return action, int(parts[1]), int(parts[2])


def handle_command(board: Board, text: str) -> Optional[str]:
    """
    Apply one command to the board.

    Returns:
        A message for the player, or None to quit.
    """
    action, row, col = parse_command(text)

    if action == "quit":
        return None
    if action == "new":
        board.initialize()
        return "New game."
    if action == "flag":
        board.toggle_flag(row, col)
        return ""

    board.reveal(row, col)
    if board.is_lost:
        return "BOOM! You hit a mine."
    if board.is_won:
        return f"You win in {board.elapsed_seconds}s!"
    return ""


def print_board(board: Board) -> None:
    """Print the board and the status line."""
    snapshot = board.query_state()
    print()
    print(render_ansi(board))
    print(
        f"Mines: {snapshot.remaining_mines} | "
        f"Time: {snapshot.elapsed_seconds}s | "
        f"Status: {snapshot.status.name}"
    )


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    board = Board(get_difficulty(args.difficulty))
    if args.seed is not None:
        board.seed(args.seed)

    print(HELP_TEXT)
    try:
        while True:
            print_board(board)
            try:
                text = input("> ")
            except EOFError:
                break

            try:
                message = handle_command(board, text)
            except (MinesweeperError, ValueError) as error:
                print(f"Invalid move: {error}")
                continue

            if message is None:
                break
            if message:
                print(message)
    finally:
        board.timer.stop()


def positive_int(text: str) -> int:
    """argparse type for counts that must be at least one."""
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def pick_random_action(mask: np.ndarray, rng: np.random.Generator) -> int:
    """
    Pick a uniformly random valid action from an action mask.

    Returns:
        Action index, or -1 when the mask is empty.
    """
    valid_indices = np.flatnonzero(mask)
    if len(valid_indices) == 0:
        return -1
    return int(rng.choice(valid_indices))


def demo(args: argparse.Namespace) -> None:
    """Watch random moves play a number of games."""
    config: BoardConfig = get_difficulty(args.difficulty)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(args.seed)

    wins = 0
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        env.reset(seed=seed)

        done = False
        info = {}
        while not done:
            action = pick_random_action(env.get_action_mask(), rng)
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info.get("game_state") == "WON":
            wins += 1
        print(
            f"Game {game + 1}/{args.games}: {info.get('game_state')} | "
            f"Revealed {info.get('revealed')}/{info.get('total_safe')}"
        )
        if args.show:
            print(env.render())

    env.close()
    print(f"\n=== Final: {wins}/{args.games} wins ({100 * wins / args.games:.0f}%) ===")


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--difficulty",
        choices=list(DIFFICULTIES),
        default="medium",
        help="Board preset",
    )
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )

    # Demo command
    demo_parser = subparsers.add_parser(
        "demo", help="Watch random moves play"
    )
    demo_parser.add_argument(
        "--games", type=positive_int, default=5, help="Number of games to play"
    )
    demo_parser.add_argument(
        "--difficulty",
        choices=list(DIFFICULTIES),
        default="easy",
        help="Board preset",
    )
    demo_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for boards and moves"
    )
    demo_parser.add_argument(
        "--show", action="store_true", help="Print each final board"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "demo":
        demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
