"""
Constants and enumerations for the encounter engine.

Defines the dice limits, turn bookkeeping defaults, HP colour bands and the
combat phase enumeration used throughout the engine.
"""

from enum import Enum

# Sides of the die used for initiative and attack checks.
D20 = 20

# Sanity limits for parsed dice notation.
MAX_DICE_COUNT = 100
MAX_DICE_SIDES = 1000

# Number of rolls kept by the free dice roller.
ROLL_HISTORY_LIMIT = 10

# Every session starts on the first round.
STARTING_ROUND = 1

# HP percentage thresholds, checked from the top down (strictly greater).
HP_COLOR_BANDS: list[tuple[float, str]] = [
    (75, "#4ade80"),
    (50, "#fbbf24"),
    (25, "#fb923c"),
]
HP_COLOR_CRITICAL = "#ef4444"


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().capitalize()


class CombatPhase(NiceEnum):
    """Lifecycle phase of a combat session."""

    ACTIVE = "ACTIVE"
    ENDED = "ENDED"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this phase."""
        return {
            CombatPhase.ACTIVE: "⚔️",
            CombatPhase.ENDED: "🏁",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this phase."""
        return {
            CombatPhase.ACTIVE: "bold green",
            CombatPhase.ENDED: "dim white",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies phase color formatting to a message."""
        return f"[{self.color}]{message}[/]"


def hp_color(percentage: float) -> str:
    """
    Returns the display colour for a hit point percentage.

    Args:
        percentage (float): Current HP as a percentage of maximum HP.

    Returns:
        str: A hex colour string usable as a rich style.

    """
    for threshold, color in HP_COLOR_BANDS:
        if percentage > threshold:
            return color
    return HP_COLOR_CRITICAL
