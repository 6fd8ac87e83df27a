"""
Tests for dice notation parsing.
"""

import pytest
from encounter.core.constants import MAX_DICE_COUNT, MAX_DICE_SIDES
from encounter.core.dice_parser import (
    DiceNotation,
    check_dice_limits,
    parse_dice,
    try_parse_dice,
)
from encounter.core.error_handling import CombatError, DiceParseError


@pytest.mark.parametrize(
    "text, count, sides, modifier",
    [
        ("1d8", 1, 8, 0),
        ("2d6+3", 2, 6, 3),
        ("3d10-1", 3, 10, -1),
        ("2D6+3", 2, 6, 3),
        ("1d20 + 5", 1, 20, 5),
        ("4d4 -2", 4, 4, -2),
        ("  1d12  ", 1, 12, 0),
        ("1d6+0", 1, 6, 0),
    ],
)
def test_parse_valid_notation(text, count, sides, modifier):
    notation = parse_dice(text)
    assert notation == DiceNotation(count=count, sides=sides, modifier=modifier)


@pytest.mark.parametrize(
    "text",
    [
        "banana",
        "",
        "d6",
        "2d",
        "2d6+",
        "2d6+3+1",
        "2d6 slashing",
        "roll 1d8",
        "1d8 x2",
        "0d6",
        "1d1",
        "1d0",
        "101d6",
        "1d1001",
        "١d٦",
        "٢d6+٣",
    ],
)
def test_parse_invalid_notation(text):
    with pytest.raises(DiceParseError):
        parse_dice(text)


def test_parse_error_is_value_error_and_combat_error():
    with pytest.raises(ValueError):
        parse_dice("banana")
    with pytest.raises(CombatError) as excinfo:
        parse_dice("banana")
    assert excinfo.value.context["notation"] == "banana"


def test_parse_rejects_non_string():
    with pytest.raises(DiceParseError):
        parse_dice(None)


def test_notation_is_immutable():
    notation = parse_dice("2d6+3")
    with pytest.raises(Exception):
        notation.count = 5
    assert notation.count == 2


def test_notation_str_round_trips_canonical_form():
    assert str(parse_dice("2d6 + 3")) == "2d6+3"
    assert str(parse_dice("3d10-1")) == "3d10-1"
    assert str(parse_dice("1D8")) == "1d8"


def test_notation_model_rejects_impossible_dice():
    with pytest.raises(ValueError):
        DiceNotation(count=0, sides=6)
    with pytest.raises(ValueError):
        DiceNotation(count=1, sides=1)


def test_try_parse_treats_blank_as_no_roll(mocker):
    warn = mocker.patch("encounter.core.dice_parser.log_warning")
    assert try_parse_dice(None) is None
    assert try_parse_dice("") is None
    assert try_parse_dice("   ") is None
    warn.assert_not_called()


def test_try_parse_warns_on_malformed_text(mocker):
    warn = mocker.patch("encounter.core.dice_parser.log_warning")
    assert try_parse_dice("a lot") is None
    warn.assert_called_once()


def test_try_parse_returns_notation():
    assert try_parse_dice("1d8+2") == DiceNotation(count=1, sides=8, modifier=2)


def test_check_dice_limits_boundaries():
    check_dice_limits(MAX_DICE_COUNT, MAX_DICE_SIDES)
    with pytest.raises(DiceParseError):
        check_dice_limits(MAX_DICE_COUNT + 1, 6)
    with pytest.raises(DiceParseError):
        check_dice_limits(1, MAX_DICE_SIDES + 1)
    with pytest.raises(DiceParseError):
        check_dice_limits(True, 6)
