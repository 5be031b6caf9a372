# commands.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Type, Union


# ---------------------------------------------------------------------------
# Parsed player intents
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coordinate:
    """A zero-based (row, col) position on the board."""
    row: int
    col: int


@dataclass(frozen=True)
class Pass:
    """Do nothing this turn."""


@dataclass(frozen=True)
class Quit:
    """Leave the game immediately."""


@dataclass(frozen=True)
class ClearMark:
    coordinate: Coordinate


@dataclass(frozen=True)
class SetFlag:
    coordinate: Coordinate


@dataclass(frozen=True)
class SetNote:
    coordinate: Coordinate


@dataclass(frozen=True)
class Explore:
    coordinate: Coordinate


Command = Union[Pass, Quit, ClearMark, SetFlag, SetNote, Explore]

CoordinateCommand = Union[ClearMark, SetFlag, SetNote, Explore]

VERBS: Dict[str, Type[CoordinateCommand]] = {
    "clear": ClearMark,
    "flag": SetFlag,
    "note": SetNote,
    "explore": Explore,
}

COORDINATE_BITS = 16


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class CommandParseError(ValueError):
    """Base class for every way a command line can fail to parse."""


class MalformedStringError(CommandParseError):
    """The line has no opening parenthesis."""


class MalformedCoordinateError(CommandParseError):
    """The parenthesised part has no comma separating row and column."""


class CoordinateParsingError(CommandParseError):
    """A row or column field is not an unsigned 16-bit integer."""

    def __init__(self, field: str, cause: ValueError) -> None:
        super().__init__(f"Invalid coordinate {field!r}: {cause}")
        self.field = field
        self.cause = cause


class UnknownCommandError(CommandParseError):
    """The verb in front of the parenthesis is not a known command."""

    def __init__(self, verb: str) -> None:
        super().__init__(f"Unknown command {verb!r}")
        self.verb = verb


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_unsigned(text: str, bits: int) -> int:
    """
    Parse a non-negative integer made only of ASCII digits.

    Unlike ``int()``, signs, underscores and inner whitespace are rejected,
    and the value must fit into ``bits`` unsigned bits.

    Raises ValueError on an empty field, a non-digit or an overflow.
    """
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not all("0" <= ch <= "9" for ch in text):
        raise ValueError("invalid digit found in string")

    value = int(text)
    if value >= 1 << bits:
        raise ValueError(f"number too large to fit in {bits} bits")
    return value


def _parse_field(text: str) -> int:
    try:
        return parse_unsigned(text, COORDINATE_BITS)
    except ValueError as error:
        raise CoordinateParsingError(text, error) from error


def parse_command(text: str) -> Command:
    """
    Turn one line of player input into a Command.

    Accepted forms (case-insensitive, surrounding whitespace ignored):

      pass
      quit
      clear(r, c) | flag(r, c) | note(r, c) | explore(r, c)

    Checks run in a fixed order: missing '(' first, then missing ',',
    then the row and column numbers, and only then the verb. A bad number
    is therefore reported even when the verb is unknown too.
    """
    line = text.strip().lower()

    if line == "pass":
        return Pass()
    if line == "quit":
        return Quit()

    verb, paren, arguments = line.partition("(")
    if not paren:
        raise MalformedStringError(f"Expected '<command>(row, col)', got {text.strip()!r}")

    row_text, comma, col_text = arguments.partition(",")
    if not comma:
        raise MalformedCoordinateError(f"Expected 'row, col' inside parentheses, got {arguments!r}")

    row = _parse_field(row_text.strip())
    # Tolerate the closing parenthesis and anything like a newline around it.
    col = _parse_field(col_text.strip().rstrip(")").strip())

    command_type = VERBS.get(verb.strip())
    if command_type is None:
        raise UnknownCommandError(verb.strip())

    return command_type(Coordinate(row, col))
