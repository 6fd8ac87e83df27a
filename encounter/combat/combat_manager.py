"""
Combat manager module for the encounter engine.

Owns one live encounter session and drives it: initiative, turn and round
progression, hit point and status effect updates, attack resolution and the
end of the session.
"""

from logging import debug
from typing import Any

from encounter.combat.attack import AttackRollResult, resolve_attack_roll
from encounter.combat.combatant import Combatant, CombatState
from encounter.core.constants import D20, STARTING_ROUND, CombatPhase
from encounter.core.dice import DefaultRandomSource, RandomSource, roll_range
from encounter.core.error_handling import (
    AttackNotFound,
    CombatantNotFound,
    EmptyRoster,
    InvalidCombatant,
    InvalidInitiative,
    SessionEnded,
    require_int,
    require_non_empty_label,
    require_positive_int,
)


class CombatManager:
    """Runs one live encounter session: turn order, rounds and combatant updates.

    The manager exclusively owns its CombatState and mutates it in place. Every
    operation validates its arguments before touching the state, so a failed
    call leaves the session exactly as it was. Callers sharing a session across
    threads or requests must serialize access themselves.

    Once `end_combat` has been called the session is ENDED: every mutating
    operation, and attack resolution, raises SessionEnded. Read-only queries
    keep working so the final state can still be rendered.
    """

    def __init__(self, state: CombatState, rng: RandomSource | None = None):
        """Initialize the CombatManager around an existing state.

        Args:
            state (CombatState): The session state to own.
            rng (RandomSource | None): Source of every dice draw. Defaults to
                an unseeded DefaultRandomSource.

        Raises:
            InvalidCombatant: If two combatants share an id.

        """
        ids = [combatant.id for combatant in state.combatants]
        duplicates = sorted({cid for cid in ids if ids.count(cid) > 1})
        if duplicates:
            raise InvalidCombatant(
                f"Duplicate combatant ids: {', '.join(duplicates)}",
                {"encounter_id": state.encounter_id, "duplicates": duplicates},
            )
        self.state: CombatState = state
        self.rng: RandomSource = rng or DefaultRandomSource()

    @classmethod
    def from_active_encounter(
        cls,
        payload: dict[str, Any],
        encounter_id: str,
        user_id: str,
        rng: RandomSource | None = None,
    ) -> "CombatManager":
        """Starts a session from the encounter service's active-encounter payload.

        Args:
            payload (dict[str, Any]): Payload with a "creatures" list.
            encounter_id (str): Identifier of the source encounter.
            user_id (str): Identifier of the owning user.
            rng (RandomSource | None): Source of every dice draw.

        Returns:
            CombatManager: A manager on round 1, first turn, active.

        Raises:
            InvalidCombatant: If a creature record is unusable or ids repeat.

        """
        combatants = []
        for position, record in enumerate(payload.get("creatures") or []):
            try:
                combatants.append(Combatant.from_record(record))
            except (ValueError, TypeError, AttributeError) as e:
                raise InvalidCombatant(
                    f"Creature #{position} cannot join the encounter: {e}",
                    {"encounter_id": encounter_id, "position": position},
                ) from e
        state = CombatState(
            encounter_id=encounter_id,
            user_id=user_id,
            combatants=combatants,
            current_turn=0,
            round=STARTING_ROUND,
            is_active=True,
        )
        debug(
            f"{CombatPhase.ACTIVE.emoji} Combat started for encounter {encounter_id} "
            f"with {len(combatants)} combatants"
        )
        return cls(state, rng)

    # ============================================================================
    # QUERIES
    # ============================================================================

    @property
    def phase(self) -> CombatPhase:
        return CombatPhase.ACTIVE if self.state.is_active else CombatPhase.ENDED

    def get_combatant(self, combatant_id: str) -> Combatant:
        """Returns the combatant with the given id.

        Raises:
            CombatantNotFound: If no combatant has that id.

        """
        for combatant in self.state.combatants:
            if combatant.id == combatant_id:
                return combatant
        raise CombatantNotFound(
            f"No combatant with id '{combatant_id}'",
            {"combatant_id": combatant_id, "encounter_id": self.state.encounter_id},
        )

    def turn_order(self) -> list[Combatant]:
        """Returns the combatants by descending initiative.

        Ties keep their roster order. The order is recomputed on every call so
        manual initiative edits show up immediately.
        """
        return sorted(self.state.combatants, key=lambda c: c.initiative, reverse=True)

    def current_combatant(self) -> Combatant:
        """Returns the combatant whose turn it is.

        Raises:
            EmptyRoster: If the session has no combatants.

        """
        order = self.turn_order()
        if not order:
            raise EmptyRoster(
                "No combatants in the session",
                {"encounter_id": self.state.encounter_id},
            )
        return order[self.state.current_turn % len(order)]

    def is_combatants_turn(self, combatant_id: str) -> bool:
        """Whether it is the given combatant's turn; always False without combatants."""
        if not self.state.combatants:
            return False
        return self.current_combatant().id == combatant_id

    @staticmethod
    def hp_percentage(combatant: Combatant) -> float:
        """Returns current HP as a percentage of maximum HP."""
        return combatant.hp_percentage

    def snapshot(self) -> dict[str, Any]:
        """Returns the state as plain data, for syncing to storage."""
        return self.state.model_dump()

    # ============================================================================
    # TURN MANAGEMENT
    # ============================================================================

    def _require_active(self, operation: str) -> None:
        if not self.state.is_active:
            raise SessionEnded(
                f"Cannot {operation}: combat has ended",
                {"operation": operation, "encounter_id": self.state.encounter_id},
            )

    def roll_initiative_all(self) -> CombatState:
        """Rolls d20 + initiative bonus for everyone and re-sorts the roster.

        The current turn index is left untouched, so re-rolling mid-combat can
        hand the turn to a different combatant.
        """
        self._require_active("roll initiative")
        rolls = [roll_range(D20, self.rng) for _ in self.state.combatants]
        for combatant, natural in zip(self.state.combatants, rolls):
            combatant.initiative = natural + combatant.initiative_bonus
        # list.sort is stable, ties keep their previous relative order.
        self.state.combatants.sort(key=lambda c: c.initiative, reverse=True)
        debug("Turn order:")
        for combatant in self.state.combatants:
            debug(f"    🎲 {combatant.initiative:3}  {combatant.get_status_line()}")
        return self.state

    def set_initiative(self, combatant_id: str, value: int) -> Combatant:
        """Overwrites one combatant's initiative without re-sorting the roster.

        Raises:
            InvalidInitiative: If value is not an integer.

        """
        self._require_active("set initiative")
        combatant = self.get_combatant(combatant_id)
        require_int(value, "value", InvalidInitiative, {"combatant_id": combatant_id})
        combatant.initiative = value
        return combatant

    def advance_turn(self) -> Combatant:
        """Moves to the next turn, wrapping into a new round after the last one.

        Returns:
            Combatant: The combatant whose turn it now is.

        Raises:
            EmptyRoster: If the session has no combatants.

        """
        self._require_active("advance turn")
        count = len(self.state.combatants)
        if count == 0:
            raise EmptyRoster(
                "Cannot advance turn without combatants",
                {"encounter_id": self.state.encounter_id},
            )
        self.state.current_turn += 1
        if self.state.current_turn >= count:
            self.state.current_turn = 0
            self.state.round += 1
            debug(f"Start of round {self.state.round}")
        return self.current_combatant()

    def end_combat(self) -> CombatState:
        """Ends the session; no further mutation is accepted afterwards."""
        self._require_active("end combat")
        self.state.is_active = False
        phase_label = self.phase.colorize(self.phase.display_name)
        debug(
            f"{self.phase.emoji} Combat {phase_label} for encounter "
            f"{self.state.encounter_id} on round {self.state.round}"
        )
        return self.state

    # ============================================================================
    # COMBATANT UPDATES
    # ============================================================================

    def apply_damage(self, combatant_id: str, amount: int) -> Combatant:
        """Reduces a combatant's HP, never below zero.

        Raises:
            InvalidAmount: If amount is not a positive integer.

        """
        self._require_active("apply damage")
        combatant = self.get_combatant(combatant_id)
        require_positive_int(amount, "amount", {"combatant_id": combatant_id})
        combatant.current_hp = max(0, combatant.current_hp - amount)
        debug(f"{combatant.name} takes {amount} damage ({combatant.current_hp}/{combatant.max_hp})")
        if combatant.is_down:
            debug(f"{combatant.name} is down")
        return combatant

    def apply_healing(self, combatant_id: str, amount: int) -> Combatant:
        """Restores a combatant's HP, never above its maximum.

        Raises:
            InvalidAmount: If amount is not a positive integer.

        """
        self._require_active("apply healing")
        combatant = self.get_combatant(combatant_id)
        require_positive_int(amount, "amount", {"combatant_id": combatant_id})
        combatant.current_hp = min(combatant.max_hp, combatant.current_hp + amount)
        debug(f"{combatant.name} heals {amount} ({combatant.current_hp}/{combatant.max_hp})")
        return combatant

    def add_status_effect(self, combatant_id: str, label: str) -> Combatant:
        """Appends a status effect; repeated labels stack."""
        self._require_active("add status effect")
        combatant = self.get_combatant(combatant_id)
        effect = require_non_empty_label(label, "label", {"combatant_id": combatant_id})
        combatant.status_effects.append(effect)
        return combatant

    def remove_status_effect(self, combatant_id: str, label: str) -> Combatant:
        """Removes every occurrence of a status effect, if present."""
        self._require_active("remove status effect")
        combatant = self.get_combatant(combatant_id)
        combatant.status_effects = [
            effect for effect in combatant.status_effects if effect != label
        ]
        return combatant

    def resolve_attack(
        self,
        combatant_id: str,
        attack_index: int,
        rng: RandomSource | None = None,
    ) -> AttackRollResult:
        """Rolls one of a combatant's attacks.

        Args:
            combatant_id (str): The attacker.
            attack_index (int): Index into the attacker's attack list.
            rng (RandomSource | None): Overrides the session's source for this roll.

        Returns:
            AttackRollResult: The to-hit roll and, when available, the damage.

        Raises:
            AttackNotFound: If attack_index is not an integer or is out of range.

        """
        self._require_active("resolve attack")
        combatant = self.get_combatant(combatant_id)
        if (
            isinstance(attack_index, bool)
            or not isinstance(attack_index, int)
            or not 0 <= attack_index < len(combatant.attacks)
        ):
            raise AttackNotFound(
                f"{combatant.name} has no attack #{attack_index}",
                {
                    "combatant_id": combatant_id,
                    "attack_index": attack_index,
                    "attack_count": len(combatant.attacks),
                },
            )
        attack = combatant.attacks[attack_index]
        return resolve_attack_roll(attack, combatant.name, rng or self.rng)
