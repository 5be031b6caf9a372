from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from commands import (
    ClearMark,
    Command,
    Coordinate,
    Explore,
    Pass,
    Quit,
    SetFlag,
    SetNote,
)
from config import GameConfiguration

logger = logging.getLogger(__name__)


class Mark(Enum):
    """Annotation a player can put on a concealed cell."""
    NONE = auto()
    NOTE = auto()
    FLAG = auto()


@dataclass(frozen=True)
class ConcealedSafe:
    """A cell without a mine that the player has not opened yet."""
    mark: Mark = Mark.NONE
    neighbour_count: int = 0


@dataclass(frozen=True)
class ConcealedMine:
    """A cell hiding a mine."""
    mark: Mark = Mark.NONE


@dataclass(frozen=True)
class Revealed:
    """An opened safe cell. Terminal state: carries no mark."""
    neighbour_count: int


Cell = Union[ConcealedSafe, ConcealedMine, Revealed]


class Resolution(Enum):
    """Outcome of applying a single command to the board."""
    CONTINUE = auto()
    QUIT = auto()
    MINE_HIT = auto()
    ALL_MINES_FLAGGED = auto()


class CoordinateOutOfBoundsError(IndexError):
    def __init__(self, coordinate: Coordinate) -> None:
        super().__init__(
            f"Cell ({coordinate.row}, {coordinate.col}) is out of bounds."
        )
        self.coordinate = coordinate


class Board:
    """
    Minesweeper board engine.

    Design:
    - Cells live in one flat list indexed by ``row * width + col``.
    - Each cell is one of ConcealedSafe / ConcealedMine / Revealed, so a
      revealed cell can never carry a mark.
    - ``apply`` is the only way to change the board once it is built.
    - ``flagged_mines`` counts flags sitting on actual mines; the game is won
      when it reaches the configured mine count.
    """

    def __init__(self, configuration: GameConfiguration) -> None:
        self.configuration = configuration
        self.flagged_mines: int = 0
        self._cells: List[Cell] = [
            ConcealedSafe(Mark.NONE, 0) for _ in range(configuration.cell_count)
        ]

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def generate(
        cls,
        configuration: GameConfiguration,
        rng: Optional[random.Random] = None,
    ) -> Board:
        """
        Build a board with ``total_mines`` mines placed uniformly at random.

        Every placement of the mines is equally likely. The board comes back
        fully generated: neighbour counts are already computed.
        """
        rng = rng or random.Random()
        width = configuration.width
        positions = rng.sample(range(configuration.cell_count), configuration.total_mines)
        mines = [Coordinate(*divmod(index, width)) for index in positions]
        return cls.with_mines(configuration, mines)

    @classmethod
    def with_mines(
        cls,
        configuration: GameConfiguration,
        mines: Iterable[Coordinate],
    ) -> Board:
        """Build a board with mines at exactly the given coordinates."""
        board = cls(configuration)
        mines = list(mines)

        if len(set(mines)) != len(mines):
            raise ValueError("Mine coordinates must be distinct.")
        if len(mines) != configuration.total_mines:
            raise ValueError(
                f"Expected {configuration.total_mines} mines, got {len(mines)}."
            )

        for mine in mines:
            board._cells[board._index(mine)] = ConcealedMine(Mark.NONE)

        for mine in mines:
            for neighbour in board.neighbours(mine):
                index = board._index(neighbour)
                cell = board._cells[index]
                if isinstance(cell, ConcealedSafe):
                    board._cells[index] = replace(
                        cell, neighbour_count=cell.neighbour_count + 1
                    )

        logger.debug(
            "Placed %d mines on a %dx%d board",
            len(mines),
            configuration.width,
            configuration.height,
        )
        return board

    # ------------------------------------------------------------------
    # Core board / cell helpers
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self.configuration.width

    @property
    def height(self) -> int:
        return self.configuration.height

    @property
    def total_mines(self) -> int:
        return self.configuration.total_mines

    def in_bounds(self, coordinate: Coordinate) -> bool:
        return 0 <= coordinate.row < self.height and 0 <= coordinate.col < self.width

    def _index(self, coordinate: Coordinate) -> int:
        if not self.in_bounds(coordinate):
            raise CoordinateOutOfBoundsError(coordinate)
        return coordinate.row * self.width + coordinate.col

    def cell_at(self, coordinate: Coordinate) -> Cell:
        return self._cells[self._index(coordinate)]

    def neighbours(self, coordinate: Coordinate) -> Iterator[Coordinate]:
        """Yield the in-bounds coordinates around ``coordinate`` (up to 8)."""
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                neighbour = Coordinate(coordinate.row + dr, coordinate.col + dc)
                if self.in_bounds(neighbour):
                    yield neighbour

    # ------------------------------------------------------------------
    # Mutation entry point
    # ------------------------------------------------------------------
    def apply(self, command: Command) -> Resolution:
        """
        Apply one command and report how the game stands afterwards.

        QUIT and MINE_HIT are returned as-is. Any other outcome becomes
        ALL_MINES_FLAGGED once every mine carries a flag.

        Raises:
            CoordinateOutOfBoundsError: if the command targets a cell outside
                the board. The board is left untouched.
        """
        logger.debug("Applying %s", command)

        if isinstance(command, Pass):
            resolution = Resolution.CONTINUE
        elif isinstance(command, Quit):
            return Resolution.QUIT
        elif isinstance(command, ClearMark):
            resolution = self._set_mark(command.coordinate, Mark.NONE)
        elif isinstance(command, SetFlag):
            resolution = self._set_mark(command.coordinate, Mark.FLAG)
        elif isinstance(command, SetNote):
            resolution = self._set_mark(command.coordinate, Mark.NOTE)
        elif isinstance(command, Explore):
            resolution = self._explore(command.coordinate)
        else:
            raise TypeError(f"Unsupported command: {command!r}")

        if resolution is Resolution.MINE_HIT:
            return resolution

        if self.flagged_mines == self.total_mines:
            return Resolution.ALL_MINES_FLAGGED
        return Resolution.CONTINUE

    def _set_mark(self, coordinate: Coordinate, mark: Mark) -> Resolution:
        index = self._index(coordinate)
        cell = self._cells[index]

        if isinstance(cell, ConcealedSafe):
            self._cells[index] = replace(cell, mark=mark)
        elif isinstance(cell, ConcealedMine):
            if cell.mark is Mark.FLAG and mark is not Mark.FLAG:
                self.flagged_mines -= 1
            elif cell.mark is not Mark.FLAG and mark is Mark.FLAG:
                self.flagged_mines += 1
            self._cells[index] = ConcealedMine(mark)
        # Revealed cells cannot be marked.

        return Resolution.CONTINUE

    def _explore(self, coordinate: Coordinate) -> Resolution:
        cell = self._cells[self._index(coordinate)]

        if isinstance(cell, ConcealedMine):
            logger.debug("Mine hit at %s", coordinate)
            return Resolution.MINE_HIT
        if isinstance(cell, ConcealedSafe):
            self._flood_fill_reveal(coordinate)
        return Resolution.CONTINUE

    def _flood_fill_reveal(self, start: Coordinate) -> None:
        """
        Reveal every concealed safe cell connected to ``start``.

        Expansion does not stop at numbered cells: each safe cell reached
        pushes all of its neighbours, and mines are left concealed. Revealed
        cells are skipped when popped, so each cell expands at most once.
        """
        stack: List[Coordinate] = [start]
        revealed = 0

        while stack:
            coordinate = stack.pop()
            index = self._index(coordinate)
            cell = self._cells[index]

            if not isinstance(cell, ConcealedSafe):
                continue

            stack.extend(self.neighbours(coordinate))
            self._cells[index] = Revealed(cell.neighbour_count)
            revealed += 1

        logger.debug("Flood fill from %s revealed %d cells", start, revealed)

    # ------------------------------------------------------------------
    # Queries (useful for front-ends & tests)
    # ------------------------------------------------------------------
    def iter_cells(self) -> Iterator[Tuple[Coordinate, Cell]]:
        """Iterate over all cells in row-major order."""
        for index, cell in enumerate(self._cells):
            yield Coordinate(*divmod(index, self.width)), cell

    def mine_coordinates(self) -> List[Coordinate]:
        return [
            coordinate
            for coordinate, cell in self.iter_cells()
            if isinstance(cell, ConcealedMine)
        ]

    def revealed_count(self) -> int:
        return sum(1 for cell in self._cells if isinstance(cell, Revealed))

    def flags_placed(self) -> int:
        """Count flags on concealed cells, whether or not they hide a mine."""
        return sum(
            1
            for cell in self._cells
            if not isinstance(cell, Revealed) and cell.mark is Mark.FLAG
        )

    def remaining_mines_estimate(self) -> int:
        """
        How many mines *should* remain, assuming every flag is correct.
        Mainly for UI display, not used for the win check.
        """
        return self.total_mines - self.flags_placed()
