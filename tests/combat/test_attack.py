"""
Tests for attack resolution: to-hit rolls, critical hits, fumbles and damage.
"""

import pytest
from encounter.combat.attack import resolve_attack_roll, roll_attack_damage
from encounter.combat.combatant import Attack


@pytest.fixture
def longsword():
    return Attack(name="Longsword", attack_bonus=5, damage="1d8+3", damage_type=["slashing"])


def test_normal_hit(scripted, longsword):
    result = resolve_attack_roll(longsword, "Knight", scripted([12, 6]))
    assert result.attack_roll == 12
    assert result.attack_bonus == 5
    assert result.attack_total == 17
    assert not result.is_critical
    assert not result.is_fail
    assert result.damage_rolls == [6]
    assert result.damage_modifier == 3
    assert result.damage_total == 9
    assert result.attack_name == "Longsword"
    assert result.creature_name == "Knight"


def test_natural_twenty_is_critical_and_doubles_dice(scripted, longsword):
    result = resolve_attack_roll(longsword, "Knight", scripted([20, 4, 7]))
    assert result.is_critical
    assert not result.is_fail
    assert result.damage_rolls == [4, 7]
    assert result.damage_total == 4 + 7 + 3


def test_natural_one_is_fumble(scripted, longsword):
    result = resolve_attack_roll(longsword, "Knight", scripted([1, 2]))
    assert result.is_fail
    assert not result.is_critical
    assert result.attack_total == 6
    assert result.damage_total == 5


@pytest.mark.parametrize("natural", [2, 10, 19])
def test_other_rolls_are_neither(scripted, longsword, natural):
    result = resolve_attack_roll(longsword, "Knight", scripted([natural, 1]))
    assert not result.is_critical
    assert not result.is_fail


def test_attack_without_damage(scripted):
    result = resolve_attack_roll(Attack(name="Grapple"), "Bear", scripted([15]))
    assert result.attack_total == 15
    assert result.damage is None
    assert result.damage_rolls is None
    assert result.damage_modifier is None
    assert result.damage_total is None


def test_malformed_damage_still_resolves(scripted, mocker):
    warn = mocker.patch("encounter.combat.attack.log_warning")
    attack = Attack(name="Breath", attack_bonus=2, damage="see description")
    result = resolve_attack_roll(attack, "Dragon", scripted([20]))
    assert result.is_critical
    assert result.attack_total == 22
    assert result.damage is None
    warn.assert_called_once()


def test_roll_attack_damage_uses_critical_roll(scripted, mocker, longsword):
    spy = mocker.patch("encounter.combat.attack.roll_critical")
    roll_attack_damage(longsword, True, scripted([]))
    spy.assert_called_once()
