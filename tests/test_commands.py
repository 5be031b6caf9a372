# tests/test_commands.py

import pytest

from commands import (
    ClearMark,
    Coordinate,
    CoordinateParsingError,
    Explore,
    MalformedCoordinateError,
    MalformedStringError,
    Pass,
    Quit,
    SetFlag,
    SetNote,
    UnknownCommandError,
    parse_command,
    parse_unsigned,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("pass", Pass()),
        ("quit", Quit()),
        ("clear(0, 0)", ClearMark(Coordinate(0, 0))),
        ("note(2,1)", SetNote(Coordinate(2, 1))),
        ("flag(100, 21)", SetFlag(Coordinate(100, 21))),
        ("explore(20, 20)", Explore(Coordinate(20, 20))),
    ],
)
def test_recognised_commands(text, expected):
    assert parse_command(text) == expected


def test_parsing_is_case_insensitive_and_whitespace_tolerant():
    """Keywords and verbs ignore case; blanks around fields and the line are stripped."""
    assert parse_command("  PASS \n") == Pass()
    assert parse_command("Quit\n") == Quit()
    assert parse_command("  EXPLORE ( 3 ,  4 ) \n") == Explore(Coordinate(3, 4))
    assert parse_command("Flag(7,8") == SetFlag(Coordinate(7, 8))


def test_stray_closing_parentheses_are_stripped_from_column():
    assert parse_command("note(1, 2))\n") == SetNote(Coordinate(1, 2))


def test_largest_coordinate_fits_in_sixteen_bits():
    assert parse_command("explore(65535, 0)") == Explore(Coordinate(65535, 0))
    with pytest.raises(CoordinateParsingError):
        parse_command("explore(65536, 0)")


@pytest.mark.parametrize(
    "text, error",
    [
        ("asd", MalformedStringError),
        ("", MalformedStringError),
        ("mark(10,10,10)", CoordinateParsingError),
        ("mark(10.10)", MalformedCoordinateError),
        ("flag(1000000, 10)", CoordinateParsingError),
        ("flag((1000, 20))", CoordinateParsingError),
        ("test(10, 10)", UnknownCommandError),
        ("explore(, 3)", CoordinateParsingError),
        ("explore(-1, 3)", CoordinateParsingError),
        ("explore(1, +3)", CoordinateParsingError),
    ],
)
def test_parse_failures_report_their_kind(text, error):
    with pytest.raises(error):
        parse_command(text)


def test_numeric_failure_wins_over_unknown_verb():
    """Numbers are checked before the verb is looked up."""
    with pytest.raises(CoordinateParsingError):
        parse_command("dance(x, 1)")


def test_coordinate_parsing_error_keeps_cause():
    with pytest.raises(CoordinateParsingError) as info:
        parse_command("flag(1000000, 10)")

    assert info.value.field == "1000000"
    assert isinstance(info.value.cause, ValueError)
    assert info.value.__cause__ is info.value.cause


def test_unknown_command_names_the_verb():
    with pytest.raises(UnknownCommandError) as info:
        parse_command("test(10, 10)")
    assert info.value.verb == "test"


def test_all_parse_errors_are_value_errors():
    for text in ("asd", "mark(10.10)", "flag(x, 1)", "test(1, 1)"):
        with pytest.raises(ValueError):
            parse_command(text)


def test_parse_unsigned_limits():
    assert parse_unsigned("0", 16) == 0
    assert parse_unsigned("255", 8) == 255
    with pytest.raises(ValueError):
        parse_unsigned("256", 8)
    with pytest.raises(ValueError):
        parse_unsigned("1_000", 32)
