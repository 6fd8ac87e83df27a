"""
Shared fixtures for the encounter engine tests.
"""

import pytest


class ScriptedRandomSource:
    """RandomSource that replays a fixed sequence of draws."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randint(self, a, b):
        if not self.values:
            raise AssertionError(f"Unexpected draw in [{a}, {b}]")
        value = self.values.pop(0)
        assert a <= value <= b, f"Scripted value {value} outside [{a}, {b}]"
        self.calls.append((a, b))
        return value


@pytest.fixture
def scripted():
    """Factory for a ScriptedRandomSource."""
    return ScriptedRandomSource
