"""
Tests for the combatant models and the creature record mapping.
"""

import pytest
from encounter.combat.combatant import Attack, Combatant, CombatState


@pytest.fixture
def goblin_record():
    return {
        "Id": "gob-1",
        "name": "Goblin",
        "HP": 7,
        "AC": 15,
        "initiative": 2,
        "statusEffects": ["Hidden"],
        "attack": [
            {
                "name": "Scimitar",
                "attackBonus": 4,
                "damage": "1d6+2",
                "damageType": ["slashing"],
                "range": "5 ft.",
            },
            {"name": "Shortbow", "damage": "1d6+2", "damageType": "piercing"},
        ],
        "resistances": [],
        "traits": ["Nimble Escape"],
    }


def test_from_record_maps_api_fields(goblin_record):
    goblin = Combatant.from_record(goblin_record)
    assert goblin.id == "gob-1"
    assert goblin.current_hp == goblin.max_hp == 7
    assert goblin.armor_class == 15
    assert goblin.initiative == 0
    assert goblin.initiative_bonus == 2
    assert goblin.status_effects == ["Hidden"]
    assert goblin.traits == ["Nimble Escape"]
    assert goblin.weaknesses == []
    assert [a.name for a in goblin.attacks] == ["Scimitar", "Shortbow"]


def test_from_record_attack_defaults(goblin_record):
    goblin = Combatant.from_record(goblin_record)
    shortbow = goblin.attacks[1]
    assert shortbow.attack_bonus == 0
    assert shortbow.damage_type == ["piercing"]
    assert shortbow.range is None


def test_from_record_accepts_lowercase_id():
    combatant = Combatant.from_record({"id": "x", "name": "Wolf", "HP": 11})
    assert combatant.id == "x"
    assert combatant.attacks == []


def test_from_record_does_not_share_lists(goblin_record):
    goblin = Combatant.from_record(goblin_record)
    goblin.status_effects.append("Prone")
    assert goblin_record["statusEffects"] == ["Hidden"]


def test_current_hp_is_clamped_on_construction():
    assert Combatant(id="a", name="A", current_hp=30, max_hp=20).current_hp == 20
    assert Combatant(id="b", name="B", current_hp=-4, max_hp=20).current_hp == 0


def test_max_hp_must_be_positive():
    with pytest.raises(ValueError):
        Combatant(id="a", name="A", current_hp=0, max_hp=0)


def test_id_is_required():
    with pytest.raises(ValueError):
        Combatant(id="", name="A", current_hp=1, max_hp=1)


def test_hp_percentage_and_status_line():
    ogre = Combatant(
        id="o", name="Ogre", current_hp=59, max_hp=59, armor_class=11,
        status_effects=["Poisoned", "Poisoned"],
    )
    assert ogre.hp_percentage == 100
    line = ogre.get_status_line()
    assert "Ogre" in line
    assert "59/59" in line
    assert "Poisoned, Poisoned" in line


def test_is_down():
    assert Combatant(id="a", name="A", current_hp=0, max_hp=5).is_down


def test_combat_state_defaults():
    state = CombatState(encounter_id="e", user_id="u")
    assert state.round == 1
    assert state.current_turn == 0
    assert state.is_active
    assert state.combatants == []


def test_attack_from_record_empty_damage_is_none():
    attack = Attack.from_record({"name": "Slam", "damage": ""})
    assert attack.damage is None
