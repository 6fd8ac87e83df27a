"""
Attack resolution module for the encounter engine.

Rolls the d20 to-hit check for an attack, flags critical hits and fumbles,
and rolls the attack's damage with doubled dice on a critical.
"""

from logging import debug

from catchery import log_warning
from pydantic import BaseModel, Field

from encounter.combat.combatant import Attack
from encounter.core.constants import D20
from encounter.core.dice import RandomSource, RollResult, roll, roll_critical, roll_range
from encounter.core.dice_parser import parse_dice
from encounter.core.error_handling import DiceParseError
from encounter.core.utils import modifier_to_string


class AttackRollResult(BaseModel):
    """Outcome of resolving one attack, for display by the caller."""

    attack_name: str = Field(description="Name of the attack used")
    creature_name: str = Field(description="Name of the attacking combatant")
    attack_roll: int = Field(description="The natural d20 roll")
    attack_bonus: int = Field(description="Bonus added to the d20")
    attack_total: int = Field(description="Natural roll plus bonus")
    is_critical: bool = Field(description="True on a natural 20")
    is_fail: bool = Field(description="True on a natural 1")
    damage: RollResult | None = Field(
        default=None,
        description="Damage roll, absent when the attack has no usable notation",
    )

    @property
    def damage_rolls(self) -> list[int] | None:
        return self.damage.rolls if self.damage else None

    @property
    def damage_modifier(self) -> int | None:
        return self.damage.modifier if self.damage else None

    @property
    def damage_total(self) -> int | None:
        return self.damage.total if self.damage else None


def roll_attack_damage(
    attack: Attack, is_critical: bool, rng: RandomSource
) -> RollResult | None:
    """
    Rolls the damage of an attack, doubling the dice on a critical hit.

    Args:
        attack (Attack): The attack whose damage is rolled.
        is_critical (bool): Whether the to-hit roll was a natural 20.
        rng (RandomSource): Source of the draws.

    Returns:
        RollResult | None: The damage roll, or None if the attack has no
            damage notation or its notation cannot be parsed.

    """
    if not attack.damage:
        return None
    try:
        notation = parse_dice(attack.damage)
    except DiceParseError as e:
        log_warning(
            f"Attack '{attack.name}' has unrollable damage '{attack.damage}'",
            {"attack": attack.name, "damage": attack.damage, "error": e.message},
        )
        return None
    if is_critical:
        return roll_critical(notation, rng)
    return roll(notation, rng)


def resolve_attack_roll(
    attack: Attack, creature_name: str, rng: RandomSource
) -> AttackRollResult:
    """
    Resolves one attack: d20 plus bonus, crit/fumble flags, then damage.

    Args:
        attack (Attack): The attack being made.
        creature_name (str): Name of the attacker, carried into the result.
        rng (RandomSource): Source of the draws.

    Returns:
        AttackRollResult: The full outcome.

    """
    natural = roll_range(D20, rng)
    is_critical = natural == D20
    is_fail = natural == 1
    result = AttackRollResult(
        attack_name=attack.name,
        creature_name=creature_name,
        attack_roll=natural,
        attack_bonus=attack.attack_bonus,
        attack_total=natural + attack.attack_bonus,
        is_critical=is_critical,
        is_fail=is_fail,
        damage=roll_attack_damage(attack, is_critical, rng),
    )
    debug(
        f"{creature_name} uses {attack.name}: "
        f"{natural}{modifier_to_string(attack.attack_bonus)} = {result.attack_total}"
        f"{' (critical)' if is_critical else ''}{' (fumble)' if is_fail else ''}"
    )
    return result
