"""
Combatant models for the encounter engine.

Defines the attack, combatant and combat-state models that make up the roster
snapshot of a live encounter, plus the mapping from the encounter service's
creature records onto that roster.
"""

from typing import Any

from pydantic import BaseModel, Field

from encounter.core.constants import STARTING_ROUND, hp_color
from encounter.core.utils import make_bar


class Attack(BaseModel):
    """One attack a combatant can make."""

    name: str = Field(description="Name of the attack")
    attack_bonus: int = Field(
        default=0,
        description="Bonus added to the d20 attack roll",
    )
    damage: str | None = Field(
        default=None,
        description="Damage notation (e.g., '2d6+3'); free text rolls nothing",
    )
    damage_type: list[str] = Field(
        default_factory=list,
        description="Damage types dealt by the attack",
    )
    range: str | None = Field(default=None, description="Reach or range")
    description: str | None = Field(default=None, description="Flavour text")

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "Attack":
        """
        Builds an attack from an encounter-service attack record.

        Args:
            data (dict[str, Any]): Record with camelCase keys.

        Returns:
            Attack: The attack.

        """
        damage_type = data.get("damageType") or []
        if isinstance(damage_type, str):
            damage_type = [damage_type]
        return cls(
            name=data.get("name", "Attack"),
            attack_bonus=data.get("attackBonus") or 0,
            damage=data.get("damage") or None,
            damage_type=list(damage_type),
            range=data.get("range"),
            description=data.get("description"),
        )


class Combatant(BaseModel):
    """A creature or character taking part in a live encounter.

    Hit points are kept within [0, max_hp]; everything else is free for the
    combat manager to update as the fight progresses.
    """

    id: str = Field(description="Stable identifier within the session")
    name: str = Field(description="Display name")
    current_hp: int = Field(description="Current hit points")
    max_hp: int = Field(description="Maximum hit points")
    armor_class: int = Field(default=10, description="Armor class")
    initiative: int = Field(default=0, description="Current initiative score")
    initiative_bonus: int = Field(
        default=0,
        description="Modifier added to initiative rolls",
    )
    status_effects: list[str] = Field(
        default_factory=list,
        description="Active status effect labels; duplicates stack",
    )
    attacks: list[Attack] = Field(default_factory=list)
    resistances: list[str] = Field(default_factory=list)
    immunities: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    traits: list[str] = Field(default_factory=list)
    is_player: bool = Field(default=False)

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        if not self.id:
            raise ValueError("id must be a non-empty string")
        if self.max_hp <= 0:
            raise ValueError("max_hp must be positive")
        self.current_hp = max(0, min(self.max_hp, self.current_hp))

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "Combatant":
        """
        Builds a combatant from an encounter-service creature record.

        The record's `initiative` is the creature's initiative modifier, so it
        becomes `initiative_bonus`; the live initiative starts at zero until
        rolled or set.

        Args:
            data (dict[str, Any]): Creature record as served by the API.

        Returns:
            Combatant: A combatant at full health.

        """
        hp = data.get("HP", data.get("maxHp", 1))
        return cls(
            id=str(data.get("Id") or data.get("id") or ""),
            name=data.get("name", "Unknown"),
            current_hp=hp,
            max_hp=hp,
            armor_class=data.get("AC", data.get("armorClass", 10)),
            initiative=0,
            initiative_bonus=data.get("initiative") or 0,
            status_effects=list(data.get("statusEffects") or []),
            attacks=[
                Attack.from_record(attack)
                for attack in (data.get("attack") or data.get("attacks") or [])
            ],
            resistances=list(data.get("resistances") or []),
            immunities=list(data.get("immunities") or []),
            weaknesses=list(data.get("weaknesses") or []),
            traits=list(data.get("traits") or []),
            is_player=bool(data.get("isPlayer", False)),
        )

    @property
    def hp_percentage(self) -> float:
        return self.current_hp / self.max_hp * 100

    @property
    def is_down(self) -> bool:
        return self.current_hp == 0

    def get_status_line(self) -> str:
        """
        Returns a one-line summary with an HP bar and active effects.
        """
        bar = make_bar(self.current_hp, self.max_hp, color=hp_color(self.hp_percentage))
        line = (
            f"{self.name:<20} {bar} {self.current_hp:>3}/{self.max_hp:<3} "
            f"AC {self.armor_class:>2}"
        )
        if self.status_effects:
            line += f" [{', '.join(self.status_effects)}]"
        return line


class CombatState(BaseModel):
    """Aggregate state of one live encounter session."""

    encounter_id: str = Field(description="Source encounter identifier")
    user_id: str = Field(description="Owning user identifier")
    combatants: list[Combatant] = Field(default_factory=list)
    current_turn: int = Field(
        default=0,
        description="Zero-based turn index, always read modulo the roster size",
    )
    round: int = Field(default=STARTING_ROUND)
    is_active: bool = Field(default=True)
