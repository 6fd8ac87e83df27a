"""
Error types and input guards for the encounter engine.

Every failure the engine can report is a subclass of CombatError, carrying a
context dictionary so callers can log or translate it without parsing the
message text.
"""

from typing import Any, Optional


class CombatError(Exception):
    """Base class for all recoverable engine failures."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}


class DiceParseError(CombatError, ValueError):
    """Raised when a dice notation string does not match the grammar."""


class CombatantNotFound(CombatError):
    """Raised when a combatant id is not part of the roster."""


class AttackNotFound(CombatError):
    """Raised when an attack index is out of range for a combatant."""


class InvalidAmount(CombatError):
    """Raised when damage or healing is not a positive integer."""


class InvalidStatusEffect(CombatError):
    """Raised when a status effect label is empty after trimming."""


class InvalidInitiative(CombatError):
    """Raised when an initiative value is not an integer."""


class InvalidCombatant(CombatError):
    """Raised when a roster entry cannot become a combatant."""


class EmptyRoster(CombatError):
    """Raised when a turn query or advance runs without combatants."""


class SessionEnded(CombatError):
    """Raised when an operation is attempted on an ended session."""


# ==============================================================================
# VALIDATION HELPERS
# ==============================================================================


def require_positive_int(
    value: Any, param_name: str, context: Optional[dict[str, Any]] = None
) -> int:
    """
    Validates that a value is a strictly positive integer.

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages
        context: Additional context attached to the error

    Returns:
        int: The validated value

    Raises:
        InvalidAmount: If the value is not an int or is not above zero

    """
    # bool is an int subclass, but True is not a meaningful amount.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidAmount(
            f"{param_name} must be a positive integer, got {value!r}",
            {**(context or {}), param_name: value},
        )
    return value


def require_non_empty_label(
    value: Any, param_name: str, context: Optional[dict[str, Any]] = None
) -> str:
    """
    Validates that a value is a string that is non-empty once trimmed.

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages
        context: Additional context attached to the error

    Returns:
        str: The trimmed label

    Raises:
        InvalidStatusEffect: If the value is not a string or is blank

    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidStatusEffect(
            f"{param_name} must be a non-empty string, got {value!r}",
            {**(context or {}), param_name: value},
        )
    return value.strip()


def require_int(
    value: Any,
    param_name: str,
    error_type: type[CombatError],
    context: Optional[dict[str, Any]] = None,
) -> int:
    """
    Validates that a value is an integer, rejecting bools.

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages
        error_type: The CombatError subclass to raise on failure
        context: Additional context attached to the error

    Returns:
        int: The validated value

    Raises:
        CombatError: An instance of error_type if the value is not an int

    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise error_type(
            f"{param_name} must be an integer, got {value!r}",
            {**(context or {}), param_name: value},
        )
    return value
