# gui.py
from __future__ import annotations

import logging
import random
from typing import Optional

import tkinter as tk

from board import Board, ConcealedMine, Mark, Resolution, Revealed
from commands import ClearMark, Command, Coordinate, Explore, SetFlag, SetNote
from config import DEFAULT_CONFIGURATION, GameConfiguration
from render import MINE, WRONG_FLAG

logger = logging.getLogger(__name__)

CELL_SIZE = 28
BOARD_BORDER = 2
CANVAS_BG = "black"
CELL_CLOSED = "#b0b0b0"
CELL_OPEN = "#dcdcdc"
FLAG_GLYPH = "🚩"
NOTE_GLYPH = "?"

LEFT_BUTTON = 1
MIDDLE_BUTTON = 2
RIGHT_BUTTON = 3

NUMBER_COLORS = {
    1: "#0b24fb",
    2: "#0f7b0f",
    3: "#e00b0b",
    4: "#0b0b76",
    5: "#6e0909",
    6: "#0b7676",
    7: "#000000",
    8: "#4d4d4d",
}

STATUS_MESSAGES = {
    Resolution.ALL_MINES_FLAGGED: "All mines flagged. You win! 🎉",
    Resolution.MINE_HIT: "Boom! You hit a mine.",
}


def command_for_click(board: Board, coordinate: Coordinate, button: int) -> Optional[Command]:
    """
    Map a mouse click on a cell to a board command.

    - left   : explore
    - right  : flag, or clear an existing flag
    - middle : note, or clear an existing note
    Clicks on revealed cells do nothing.
    """
    cell = board.cell_at(coordinate)
    if isinstance(cell, Revealed):
        return None

    if button == LEFT_BUTTON:
        return Explore(coordinate)
    if button == RIGHT_BUTTON:
        return ClearMark(coordinate) if cell.mark is Mark.FLAG else SetFlag(coordinate)
    if button == MIDDLE_BUTTON:
        return ClearMark(coordinate) if cell.mark is Mark.NOTE else SetNote(coordinate)
    return None


class MinesweeperUI(tk.Tk):
    def __init__(self, seed: Optional[int] = None) -> None:
        super().__init__()
        self.title("Minesweeper")
        self.configure(bg="#1a1a1a")

        self.rng = random.Random(seed) if seed is not None else random.Random()
        self.board: Board | None = None
        self.resolution = Resolution.CONTINUE

        self.width_var = tk.IntVar(value=16)
        self.height_var = tk.IntVar(value=16)
        self.mines_var = tk.IntVar(value=40)
        self.status_var = tk.StringVar(value="Mines left: -")

        self._build_controls()
        self._build_canvas()
        self.new_game()

    # UI setup
    def _build_controls(self) -> None:
        top = tk.Frame(self, bg="#1a1a1a")
        top.pack(side=tk.TOP, fill=tk.X, padx=8, pady=6)

        tk.Label(top, text="Width", fg="white", bg="#1a1a1a").pack(side=tk.LEFT)
        tk.Entry(top, width=4, textvariable=self.width_var).pack(side=tk.LEFT, padx=4)

        tk.Label(top, text="Height", fg="white", bg="#1a1a1a").pack(side=tk.LEFT)
        tk.Entry(top, width=4, textvariable=self.height_var).pack(side=tk.LEFT, padx=4)

        tk.Label(top, text="Mines", fg="white", bg="#1a1a1a").pack(side=tk.LEFT)
        tk.Entry(top, width=5, textvariable=self.mines_var).pack(side=tk.LEFT, padx=4)

        tk.Button(top, text="New Game", command=self.new_game).pack(side=tk.LEFT, padx=8)

        tk.Label(top, textvariable=self.status_var, fg="white", bg="#1a1a1a").pack(
            side=tk.RIGHT, padx=4
        )

    def _build_canvas(self) -> None:
        self.canvas = tk.Canvas(self, bg=CANVAS_BG, highlightthickness=0)
        self.canvas.pack(side=tk.TOP, padx=8, pady=8)
        self.canvas.bind("<Button-1>", lambda event: self._handle_click(event, LEFT_BUTTON))
        self.canvas.bind("<Button-2>", lambda event: self._handle_click(event, MIDDLE_BUTTON))
        self.canvas.bind("<Button-3>", lambda event: self._handle_click(event, RIGHT_BUTTON))
        # Shift+Left for flag on mac/trackpads that lack right-click
        self.canvas.bind("<Shift-Button-1>", lambda event: self._handle_click(event, RIGHT_BUTTON))

    # Game lifecycle
    def new_game(self) -> None:
        try:
            configuration = GameConfiguration(
                width=self.width_var.get(),
                height=self.height_var.get(),
                total_mines=self.mines_var.get(),
            )
        except (tk.TclError, ValueError) as exc:
            logger.warning("Invalid board settings, using defaults: %s", exc)
            configuration = DEFAULT_CONFIGURATION

        self.width_var.set(configuration.width)
        self.height_var.set(configuration.height)
        self.mines_var.set(configuration.total_mines)

        self.board = Board.generate(configuration, rng=self.rng)
        self.resolution = Resolution.CONTINUE
        self._resize_canvas()
        self._update_status()
        self.draw_board()

    # Event handlers
    def _handle_click(self, event, button: int) -> str:
        if not self.board or self.resolution is not Resolution.CONTINUE:
            return "break"
        coordinate = self._coords_from_event(event)
        if coordinate is None:
            return "break"

        command = command_for_click(self.board, coordinate, button)
        if command is None:
            return "break"

        self.resolution = self.board.apply(command)
        self._update_status()
        self.draw_board()
        return "break"

    # Drawing
    def _resize_canvas(self) -> None:
        if not self.board:
            return
        w = self.board.width * CELL_SIZE + BOARD_BORDER * 2
        h = self.board.height * CELL_SIZE + BOARD_BORDER * 2
        self.canvas.config(width=w, height=h)

    def draw_board(self) -> None:
        if not self.board:
            return

        self.canvas.delete("all")
        game_over = self.resolution is not Resolution.CONTINUE

        w = self.board.width * CELL_SIZE + BOARD_BORDER * 2
        h = self.board.height * CELL_SIZE + BOARD_BORDER * 2
        self.canvas.create_rectangle(
            0, 0, w - 1, h - 1, outline="black", fill=CANVAS_BG, width=BOARD_BORDER
        )

        for coordinate, cell in self.board.iter_cells():
            x0 = BOARD_BORDER + coordinate.col * CELL_SIZE
            y0 = BOARD_BORDER + coordinate.row * CELL_SIZE
            x1 = x0 + CELL_SIZE
            y1 = y0 + CELL_SIZE
            center = ((x0 + x1) / 2, (y0 + y1) / 2)

            is_open = isinstance(cell, Revealed)
            fill = CELL_OPEN if is_open else CELL_CLOSED
            self.canvas.create_rectangle(x0, y0, x1, y1, fill=fill, outline="#7a7a7a", width=1)

            if is_open:
                if cell.neighbour_count > 0:
                    num = cell.neighbour_count
                    self.canvas.create_text(
                        *center,
                        text=str(num),
                        fill=NUMBER_COLORS.get(num, "black"),
                        font=("Arial", 12, "bold"),
                    )
                continue

            is_mine = isinstance(cell, ConcealedMine)
            if game_over and is_mine and cell.mark is not Mark.FLAG:
                text = MINE
            elif game_over and not is_mine and cell.mark is Mark.FLAG:
                text = WRONG_FLAG
            elif cell.mark is Mark.FLAG:
                text = FLAG_GLYPH
            elif cell.mark is Mark.NOTE:
                text = NOTE_GLYPH
            else:
                continue
            self.canvas.create_text(*center, text=text, font=("Segoe UI Emoji", 14, "bold"))

    # Helpers
    def _coords_from_event(self, event) -> Optional[Coordinate]:
        if not self.board:
            return None
        coordinate = Coordinate(
            int((event.y - BOARD_BORDER) // CELL_SIZE),
            int((event.x - BOARD_BORDER) // CELL_SIZE),
        )
        return coordinate if self.board.in_bounds(coordinate) else None

    def _update_status(self) -> None:
        if not self.board:
            self.status_var.set("Mines left: -")
            return
        status = f"Mines left: {self.board.remaining_mines_estimate()}"
        if self.resolution in STATUS_MESSAGES:
            status = f"{status}  {STATUS_MESSAGES[self.resolution]}"
        self.status_var.set(status)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app = MinesweeperUI()
    app.mainloop()
