"""
Utilities module for the encounter engine.

Provides small formatting helpers shared by the combat package.
"""


def make_bar(current: int, maximum: int, length: int = 10, color: str = "white") -> str:
    """
    Creates a visual progress bar representation.

    Args:
        current (int): The current value.
        maximum (int): The maximum value.
        length (int): The length of the bar in characters. Defaults to 10.
        color (str): The color for the filled portion. Defaults to "white".

    Returns:
        str: A formatted progress bar string, with rich markup.

    """
    # Compute the filled part of the bar, clamped to the bar length.
    filled = int((current / maximum) * length) if maximum > 0 else 0
    filled = max(0, min(length, filled))
    empty = length - filled
    bar = f"[{color}]" + "▮" * filled
    if empty > 0:
        bar += "[dim white]" + "▯" * empty + "[/]"
    bar += "[/]"
    return bar


def modifier_to_string(modifier: int) -> str:
    """
    Formats a modifier with an explicit sign, e.g. "+3" or "-1".
    """
    return f"{modifier:+d}"
