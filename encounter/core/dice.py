"""
Dice rolling module for the encounter engine.

Executes parsed DiceNotation against an injected randomness source, so every
roll can be reproduced under test by scripting or seeding the source.
"""

import random
from collections import deque
from logging import debug
from typing import Protocol, runtime_checkable

from catchery import log_warning
from pydantic import BaseModel, ConfigDict, Field

from encounter.core.constants import ROLL_HISTORY_LIMIT
from encounter.core.dice_parser import DiceNotation, check_dice_limits, try_parse_dice
from encounter.core.error_handling import DiceParseError, require_int


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can draw a uniform integer from a closed range."""

    def randint(self, a: int, b: int) -> int: ...


class DefaultRandomSource:
    """RandomSource backed by a private random.Random instance."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        return self._random.randint(a, b)


class RollResult(BaseModel):
    """Outcome of executing a dice notation once."""

    model_config = ConfigDict(frozen=True)

    sides: int = Field(description="Number of sides on each die rolled")
    rolls: list[int] = Field(
        description="Individual die outcomes, in draw order",
        default_factory=list,
    )
    modifier: int = Field(default=0, description="Flat modifier applied once")
    total: int = Field(description="Sum of the rolls plus the modifier")

    @property
    def description(self) -> str:
        """
        Returns a human-readable breakdown such as "2d6(3+5)+2".
        """
        if len(self.rolls) == 1:
            detail = f"d{self.sides}({self.rolls[0]})"
        else:
            detail = f"{len(self.rolls)}d{self.sides}({'+'.join(map(str, self.rolls))})"
        if self.modifier != 0:
            detail += f"{self.modifier:+d}"
        return detail


def _roll_individual_dice(num: int, sides: int, rng: RandomSource) -> list[int]:
    """
    Helper function to roll individual dice.

    Args:
        num (int): Number of dice to roll.
        sides (int): Number of sides on each die.
        rng (RandomSource): Source of the draws.

    Returns:
        list[int]: List of individual dice roll results.

    """
    return [rng.randint(1, sides) for _ in range(num)]


def _build_result(
    num: int, sides: int, modifier: int, rng: RandomSource
) -> RollResult:
    rolls = _roll_individual_dice(num, sides, rng)
    result = RollResult(
        sides=sides,
        rolls=rolls,
        modifier=modifier,
        total=sum(rolls) + modifier,
    )
    debug(f"Rolled {result.description} → {result.total}")
    return result


def roll(notation: DiceNotation, rng: RandomSource) -> RollResult:
    """
    Rolls a dice notation.

    Args:
        notation (DiceNotation): What to roll.
        rng (RandomSource): Source of the draws.

    Returns:
        RollResult: The draws, the modifier and the unclamped total.

    """
    return _build_result(notation.count, notation.sides, notation.modifier, rng)


def roll_critical(notation: DiceNotation, rng: RandomSource) -> RollResult:
    """
    Rolls a dice notation as a critical hit: twice the dice, the modifier once.

    Args:
        notation (DiceNotation): What to roll.
        rng (RandomSource): Source of the draws.

    Returns:
        RollResult: The draws, the modifier and the unclamped total.

    """
    return _build_result(
        notation.count * 2, notation.sides, notation.modifier, rng
    )


def roll_range(sides: int, rng: RandomSource) -> int:
    """
    Draws a single uniform integer in [1, sides].

    Args:
        sides (int): Number of sides of the die.
        rng (RandomSource): Source of the draw.

    Returns:
        int: The drawn value.

    """
    if sides < 1:
        raise DiceParseError(f"Invalid dice sides: {sides}", {"sides": sides})
    return rng.randint(1, sides)


def is_natural_max(result: int, sides: int) -> bool:
    """Whether a single die landed on its highest face."""
    return result == sides


def is_natural_one(result: int) -> bool:
    """Whether a single die landed on 1."""
    return result == 1


class DiceRoller:
    """Free-form dice roller that remembers its most recent rolls.

    Used for ad hoc table rolls outside of attack resolution. The history is
    kept newest first and trimmed to `history_limit` entries.
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        history_limit: int = ROLL_HISTORY_LIMIT,
    ) -> None:
        self.rng: RandomSource = rng or DefaultRandomSource()
        self._history: deque[RollResult] = deque(maxlen=history_limit)

    @property
    def history(self) -> list[RollResult]:
        return list(self._history)

    def roll_dice(self, sides: int = 20, count: int = 1, modifier: int = 0) -> RollResult:
        """
        Rolls `count` dice with `sides` faces and adds `modifier`.

        Args:
            sides (int): Number of sides on each die. Defaults to 20.
            count (int): Number of dice. Defaults to 1.
            modifier (int): Flat modifier. Defaults to 0.

        Returns:
            RollResult: The recorded roll.

        Raises:
            DiceParseError: If the dice described are impossible or exceed the
                engine limits.

        """
        check_dice_limits(count, sides, {"modifier": modifier})
        require_int(modifier, "modifier", DiceParseError, {"count": count, "sides": sides})
        notation = DiceNotation(count=count, sides=sides, modifier=modifier)
        result = roll(notation, self.rng)
        self._history.appendleft(result)
        return result

    def roll_notation(self, text: str) -> RollResult | None:
        """
        Rolls a notation typed by the user; malformed text is ignored.

        Args:
            text (str): The notation, e.g. "2d6+3".

        Returns:
            RollResult | None: The recorded roll, or None if nothing was rolled.

        """
        notation = try_parse_dice(text)
        if notation is None:
            log_warning(
                "Dice roller received no rollable notation",
                {"text": text},
            )
            return None
        result = roll(notation, self.rng)
        self._history.appendleft(result)
        return result

    def clear_history(self) -> None:
        self._history.clear()
