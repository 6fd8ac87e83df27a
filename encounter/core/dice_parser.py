"""
Dice parser module for the encounter engine.

Turns human-authored dice notation such as "2d6+3" into an immutable
DiceNotation. Only the single-term grammar COUNTdSIDES[+/-MODIFIER] is
accepted; anything else is rejected rather than partially matched.
"""

import re
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, ConfigDict, Field

from encounter.core.constants import MAX_DICE_COUNT, MAX_DICE_SIDES
from encounter.core.error_handling import DiceParseError, require_int

DICE_PATTERN = re.compile(
    r"^(?P<count>\d+)d(?P<sides>\d+)(?:\s*(?P<sign>[+-])\s*(?P<modifier>\d+))?$",
    re.IGNORECASE | re.ASCII,
)


class DiceNotation(BaseModel):
    """Parsed form of a dice expression."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(description="Number of dice to roll")
    sides: int = Field(description="Number of sides on each die")
    modifier: int = Field(default=0, description="Flat modifier added once")

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        if self.count < 1:
            raise ValueError("count must be at least 1")
        if self.sides < 2:
            raise ValueError("sides must be at least 2")

    def __str__(self) -> str:
        if self.modifier:
            return f"{self.count}d{self.sides}{self.modifier:+d}"
        return f"{self.count}d{self.sides}"


def check_dice_limits(
    count: int, sides: int, context: dict[str, Any] | None = None
) -> None:
    """
    Validates a dice count and side count against the engine limits.

    Args:
        count (int): Number of dice.
        sides (int): Number of sides on each die.
        context (dict[str, Any] | None): Extra context attached to the error.

    Raises:
        DiceParseError: If either value is not an integer, the roll is
            impossible, or it exceeds MAX_DICE_COUNT or MAX_DICE_SIDES.

    """
    context = {**(context or {}), "count": count, "sides": sides}
    require_int(count, "count", DiceParseError, context)
    require_int(sides, "sides", DiceParseError, context)
    if count < 1:
        raise DiceParseError(f"Invalid dice count: {count}", context)
    if count > MAX_DICE_COUNT:
        raise DiceParseError(
            f"Too many dice: {count} (limit: {MAX_DICE_COUNT})", context
        )
    if sides < 2:
        raise DiceParseError(f"Invalid dice sides: {sides}", context)
    if sides > MAX_DICE_SIDES:
        raise DiceParseError(
            f"Too many sides: {sides} (limit: {MAX_DICE_SIDES})", context
        )


def parse_dice(notation: str) -> DiceNotation:
    """
    Parses a dice expression into a DiceNotation.

    Args:
        notation (str): Dice expression like "1d8", "2d6+3" or "3d10 - 1".

    Returns:
        DiceNotation: The parsed notation.

    Raises:
        DiceParseError: If the expression does not match the grammar or
            describes an impossible or unreasonably large roll.

    """
    if not isinstance(notation, str):
        raise DiceParseError(
            f"Dice notation must be a string, got {type(notation).__name__}",
            {"notation": notation},
        )
    match = DICE_PATTERN.match(notation.strip())
    if not match:
        raise DiceParseError(
            f"Invalid dice notation: {notation!r}",
            {"notation": notation},
        )

    count = int(match.group("count"))
    sides = int(match.group("sides"))
    modifier = int(match.group("modifier") or 0)
    if match.group("sign") == "-":
        modifier = -modifier

    check_dice_limits(count, sides, {"notation": notation})
    return DiceNotation(count=count, sides=sides, modifier=modifier)


def try_parse_dice(notation: str | None) -> DiceNotation | None:
    """
    Parses a free-text dice field, treating absent or malformed text as "no roll".

    Args:
        notation (str | None): The text to parse, possibly empty.

    Returns:
        DiceNotation | None: The parsed notation, or None if there is nothing to roll.

    """
    if not notation or not notation.strip():
        return None
    try:
        return parse_dice(notation)
    except DiceParseError as e:
        log_warning(
            f"Ignoring malformed dice notation: {notation!r}",
            {"notation": notation, "error": e.message},
        )
        return None
