# render.py
from __future__ import annotations

from typing import List

from board import Board, Cell, ConcealedMine, Mark, Revealed

CELL_WIDTH = 3

CONCEALED = "#"
FLAG = "F"
NOTE = "?"
MINE = "*"
WRONG_FLAG = "x"


def display_char(cell: Cell, reveal_mines: bool = False) -> str:
    """
    Character for this cell.

    - '#' : concealed, unmarked (mine or not, they look the same)
    - 'F' : flagged
    - '?' : noted
    - ' ' : revealed, 0 adjacent mines
    - '1'..'8' : revealed, that many adjacent mines

    With reveal_mines=True (end of game) unflagged mines show as '*' and
    flags on safe cells show as 'x'.
    """
    if isinstance(cell, Revealed):
        return " " if cell.neighbour_count == 0 else str(cell.neighbour_count)

    is_mine = isinstance(cell, ConcealedMine)
    if reveal_mines:
        if is_mine and cell.mark is not Mark.FLAG:
            return MINE
        if not is_mine and cell.mark is Mark.FLAG:
            return WRONG_FLAG

    if cell.mark is Mark.FLAG:
        return FLAG
    if cell.mark is Mark.NOTE:
        return NOTE
    return CONCEALED


def to_display_grid(board: Board, reveal_mines: bool = False) -> List[List[str]]:
    """Return a 2D list of display characters, one row per board row."""
    grid: List[List[str]] = [[] for _ in range(board.height)]
    for coordinate, cell in board.iter_cells():
        grid[coordinate.row].append(display_char(cell, reveal_mines=reveal_mines))
    return grid


def render_board(board: Board, reveal_mines: bool = False) -> str:
    """
    Render the board as a multiline string, e.g.:

            0  1  2  3
          +------------
        0 |  #  1
        1 |  F  2  ?  #
    """
    grid = to_display_grid(board, reveal_mines=reveal_mines)
    label_width = len(str(max(board.height - 1, 0)))

    header = "".join(f"{col:>{CELL_WIDTH}}" for col in range(board.width))
    lines = [
        " " * (label_width + 2) + header,
        " " * (label_width + 1) + "+" + "-" * (CELL_WIDTH * board.width),
    ]
    for row, chars in enumerate(grid):
        cells = "".join(f"{char:>{CELL_WIDTH}}" for char in chars)
        lines.append(f"{row:>{label_width}} |{cells}")
    return "\n".join(lines)
