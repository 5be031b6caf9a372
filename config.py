# config.py
from __future__ import annotations

from dataclasses import dataclass

from commands import parse_unsigned

DIMENSION_BITS = 16
MINE_COUNT_BITS = 32


@dataclass(frozen=True)
class GameConfiguration:
    """Board size and mine count. Fixed for the lifetime of a board."""
    width: int = 32
    height: int = 32
    total_mines: int = 90

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Board dimensions must be positive.")
        if self.total_mines < 0:
            raise ValueError("Number of mines cannot be negative.")
        if self.total_mines > self.cell_count:
            raise ValueError(
                f"Cannot place {self.total_mines} mines on a "
                f"{self.width}x{self.height} board."
            )

    @property
    def cell_count(self) -> int:
        return self.width * self.height


DEFAULT_CONFIGURATION = GameConfiguration()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ConfigError(ValueError):
    """Base class for configuration text that cannot be understood."""


class MalformedConfigError(ConfigError):
    """Wrong number of fields in the configuration text."""


class MalformedIntegerError(ConfigError):
    """A configuration field is not an unsigned integer of the right width."""

    def __init__(self, field: str, cause: ValueError) -> None:
        super().__init__(f"Invalid number {field!r}: {cause}")
        self.field = field
        self.cause = cause


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _parse_integer(text: str, bits: int) -> int:
    try:
        return parse_unsigned(text, bits)
    except ValueError as error:
        raise MalformedIntegerError(text, error) from error


def parse_configuration(text: str) -> GameConfiguration:
    """
    Parse a board configuration line.

    Two numbers, ``"side mines"``, describe a square board. Three numbers,
    ``"width height mines"``, set the dimensions independently.

    Raises:
        MalformedConfigError: if the line does not hold two or three fields.
        MalformedIntegerError: if a field is not an unsigned integer.
        ValueError: if the numbers parse but describe an impossible board.
    """
    fields = text.split()

    if len(fields) == 2:
        side = _parse_integer(fields[0], DIMENSION_BITS)
        mines = _parse_integer(fields[1], MINE_COUNT_BITS)
        return GameConfiguration(width=side, height=side, total_mines=mines)

    if len(fields) == 3:
        width = _parse_integer(fields[0], DIMENSION_BITS)
        height = _parse_integer(fields[1], DIMENSION_BITS)
        mines = _parse_integer(fields[2], MINE_COUNT_BITS)
        return GameConfiguration(width=width, height=height, total_mines=mines)

    raise MalformedConfigError(
        f"Expected 'side mines' or 'width height mines', got {text.strip()!r}"
    )
