"""
Core system module for the encounter engine.

This module contains the fundamental components the combat engine is built on:
constants, error types, dice parsing and rolling, logging setup and content
loading.
"""

from .constants import (
    D20,
    MAX_DICE_COUNT,
    MAX_DICE_SIDES,
    ROLL_HISTORY_LIMIT,
    STARTING_ROUND,
    CombatPhase,
    NiceEnum,
    hp_color,
)
from .content import load_encounter_file
from .dice import (
    DefaultRandomSource,
    DiceRoller,
    RandomSource,
    RollResult,
    is_natural_max,
    is_natural_one,
    roll,
    roll_critical,
    roll_range,
)
from .dice_parser import DiceNotation, check_dice_limits, parse_dice, try_parse_dice
from .error_handling import (
    AttackNotFound,
    CombatantNotFound,
    CombatError,
    DiceParseError,
    EmptyRoster,
    InvalidAmount,
    InvalidCombatant,
    InvalidInitiative,
    InvalidStatusEffect,
    SessionEnded,
)
from .logging import get_logger, setup_logging
from .utils import make_bar, modifier_to_string

__all__ = [
    # Import from constants.py
    "D20",
    "MAX_DICE_COUNT",
    "MAX_DICE_SIDES",
    "ROLL_HISTORY_LIMIT",
    "STARTING_ROUND",
    "CombatPhase",
    "NiceEnum",
    "hp_color",
    # Import from content.py
    "load_encounter_file",
    # Import from dice.py
    "DefaultRandomSource",
    "DiceRoller",
    "RandomSource",
    "RollResult",
    "is_natural_max",
    "is_natural_one",
    "roll",
    "roll_critical",
    "roll_range",
    # Import from dice_parser.py
    "DiceNotation",
    "check_dice_limits",
    "parse_dice",
    "try_parse_dice",
    # Import from error_handling.py
    "AttackNotFound",
    "CombatantNotFound",
    "CombatError",
    "DiceParseError",
    "EmptyRoster",
    "InvalidAmount",
    "InvalidCombatant",
    "InvalidInitiative",
    "InvalidStatusEffect",
    "SessionEnded",
    # Import from logging.py
    "get_logger",
    "setup_logging",
    # Import from utils.py
    "make_bar",
    "modifier_to_string",
]
