"""
Combat system module for the encounter engine.

This module handles the live encounter: combatant models, attack resolution and
the turn-based combat manager.
"""

from .attack import AttackRollResult, resolve_attack_roll, roll_attack_damage
from .combat_manager import CombatManager
from .combatant import Attack, Combatant, CombatState

__all__ = [
    "Attack",
    "AttackRollResult",
    "CombatManager",
    "CombatState",
    "Combatant",
    "resolve_attack_roll",
    "roll_attack_damage",
]
