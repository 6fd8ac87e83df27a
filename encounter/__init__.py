"""
Encounter combat engine.

Dice notation parsing and rolling, and the turn-based combat state machine that
runs one live tabletop encounter.
"""
