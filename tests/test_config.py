# tests/test_config.py

import pytest

from config import (
    DEFAULT_CONFIGURATION,
    ConfigError,
    GameConfiguration,
    MalformedConfigError,
    MalformedIntegerError,
    parse_configuration,
)


def test_side_and_mines_make_a_square_board():
    """'side mines' reuses the first number for width and height."""
    configuration = parse_configuration("10 10")

    assert configuration == GameConfiguration(width=10, height=10, total_mines=10)


def test_three_numbers_set_width_and_height_independently():
    configuration = parse_configuration("  30 16\t99\n")

    assert configuration.width == 30
    assert configuration.height == 16
    assert configuration.total_mines == 99


def test_default_configuration():
    assert DEFAULT_CONFIGURATION == GameConfiguration(32, 32, 90)


@pytest.mark.parametrize("text", ["", "10", "1 2 3 4", "ten"])
def test_wrong_field_count_is_malformed(text):
    with pytest.raises(MalformedConfigError):
        parse_configuration(text)


@pytest.mark.parametrize("text", ["x 10", "10 -1", "65536 1", "10 4294967296", "1.5 2"])
def test_bad_numbers_are_malformed_integers(text):
    with pytest.raises(MalformedIntegerError) as info:
        parse_configuration(text)
    assert isinstance(info.value.cause, ValueError)


def test_config_errors_share_a_base():
    for text in ("10", "a b"):
        with pytest.raises(ConfigError):
            parse_configuration(text)


def test_impossible_boards_are_rejected():
    """Values that parse but cannot describe a board fail fast."""
    with pytest.raises(ValueError):
        parse_configuration("0 0")

    with pytest.raises(ValueError):
        # 3x3 board only has 9 cells
        parse_configuration("3 10")

    with pytest.raises(ValueError):
        GameConfiguration(width=5, height=5, total_mines=-1)


def test_full_board_of_mines_is_allowed():
    configuration = parse_configuration("3 9")
    assert configuration.total_mines == configuration.cell_count == 9
