# main.py

from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from typing import Callable, List, Optional

from board import Board, CoordinateOutOfBoundsError, Resolution
from commands import CommandParseError, parse_command
from config import DEFAULT_CONFIGURATION, GameConfiguration, parse_configuration
from render import render_board

logger = logging.getLogger(__name__)

BANNER = """Welcome to minesweeper
Commands:
  explore(r, c)  -> open the cell at row r, column c (0-based)
  flag(r, c)     -> flag a cell you believe hides a mine
  note(r, c)     -> put a '?' note on a cell
  clear(r, c)    -> remove any flag or note from a cell
  pass           -> do nothing this turn
  quit           -> give up
Flag every mine to win."""

OUTCOME_MESSAGES = {
    Resolution.ALL_MINES_FLAGGED: "All mines flagged. You win!",
    Resolution.MINE_HIT: "You hit a mine. Game over!",
    Resolution.QUIT: "Goodbye!",
}

EXIT_CODES = {
    Resolution.ALL_MINES_FLAGGED: 0,
    Resolution.MINE_HIT: 1,
    Resolution.QUIT: 3,
}
EXIT_INVALID_CONFIGURATION = 2


# ---------------------------------------------------------------------------
# Console helpers
# ---------------------------------------------------------------------------

def clear_console() -> None:
    """Clear the terminal and move the cursor home (ANSI escape codes)."""
    sys.stdout.write("\033[2J\033[1;1H")
    sys.stdout.flush()


def ask_configuration(read_line: Callable[[str], str] = input) -> GameConfiguration:
    """Ask the user for a board configuration; an empty answer keeps the default."""
    default = DEFAULT_CONFIGURATION
    raw = read_line(
        "Board as 'side mines' or 'width height mines' "
        f"(default: {default.width} {default.height} {default.total_mines}): "
    ).strip()
    if not raw:
        return default
    return parse_configuration(raw)


# ---------------------------------------------------------------------------
# Game loop
# ---------------------------------------------------------------------------

def run_game(
    board: Board,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    clear: Optional[Callable[[], None]] = None,
) -> Resolution:
    """
    Play until the board resolves to something other than CONTINUE.

    Bad commands and out-of-bounds coordinates are reported and the player
    is asked again; the board is not touched. End of input counts as quit.
    """
    message = ""

    while True:
        if clear is not None:
            clear()
        write(render_board(board))
        write(f"Mines remaining (estimate): {board.remaining_mines_estimate()}")
        if message:
            write(message)
            message = ""

        try:
            line = read_line("\nEnter your move: ")
        except EOFError:
            return Resolution.QUIT

        try:
            command = parse_command(line)
        except CommandParseError as exc:
            logger.debug("Rejected input %r: %s", line, exc)
            message = f"Invalid move: {exc}"
            continue

        try:
            resolution = board.apply(command)
        except CoordinateOutOfBoundsError as exc:
            message = f"Invalid move: {exc}"
            continue

        if resolution is not Resolution.CONTINUE:
            return resolution


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def get_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Terminal minesweeper.")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Board as 'SIDE MINES' or 'WIDTH HEIGHT MINES'; prompted for if omitted",
    )
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for mine placement")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument("--no-clear", action="store_true", help="Do not clear the console between turns")
    parser.add_argument("--gui", action="store_true", help="Play in a tkinter window instead")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = get_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.gui:
        from gui import MinesweeperUI

        MinesweeperUI(seed=args.seed).mainloop()
        return 0

    print(BANNER)
    print()

    try:
        if args.config is not None:
            configuration = parse_configuration(args.config)
        else:
            configuration = ask_configuration(read_line=input)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIGURATION
    except EOFError:
        return EXIT_CODES[Resolution.QUIT]

    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    board = Board.generate(configuration, rng=rng)
    logger.info(
        "Starting a %dx%d game with %d mines",
        configuration.width,
        configuration.height,
        configuration.total_mines,
    )

    started = time.monotonic()
    try:
        resolution = run_game(
            board,
            read_line=input,
            clear=None if args.no_clear else clear_console,
        )
    except KeyboardInterrupt:
        print()
        resolution = Resolution.QUIT
    elapsed = time.monotonic() - started

    print("\nFinal board:")
    print(render_board(board, reveal_mines=True))
    print(f"\n{OUTCOME_MESSAGES[resolution]} ({elapsed:.0f}s)")
    return EXIT_CODES[resolution]


if __name__ == "__main__":
    sys.exit(main())
