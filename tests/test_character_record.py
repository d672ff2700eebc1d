import pytest

from roster.components.character_record import CharacterClass, CharacterRecord
from tests.helpers import make_record


def test_defaults_describe_a_valid_new_character():
    record = CharacterRecord()
    assert record.name == "New Character"
    assert record.level == 1
    assert record.health == 100
    assert record.mana == 100
    assert record.abilities == []
    assert record.weapon_type == "Sword"
    assert record.character_class is CharacterClass.WARRIOR
    assert record.armor_type == "Light"


def test_display_label_shows_name_level_and_class():
    record = make_record("Aria", level=5, character_class=CharacterClass.MAGE)
    assert record.display_label() == "Aria - Level 5 Mage"


def test_clone_marks_name_and_does_not_share_abilities():
    original = make_record("Aria")
    clone = original.clone()

    assert clone.name == "Aria (Copy)"
    assert clone.level == original.level
    assert clone.abilities == original.abilities
    assert clone.abilities is not original.abilities

    clone.abilities.append("Teleport")
    assert "Teleport" not in original.abilities


def test_copy_keeps_name():
    original = make_record("Borin")
    duplicate = original.copy()
    assert duplicate == original
    assert duplicate is not original


def test_dict_round_trip_uses_class_display_value():
    record = make_record("Aria")
    payload = record.to_dict()
    assert payload["character_class"] == "Mage"
    assert payload["weapon_type"] == "Staff"
    assert CharacterRecord.from_dict(payload) == record


@pytest.mark.parametrize("text", ["mage", "MAGE", " Mage "])
def test_class_parse_ignores_case_and_whitespace(text):
    assert CharacterClass.parse(text) is CharacterClass.MAGE


def test_class_parse_rejects_unknown_names():
    with pytest.raises(ValueError):
        CharacterClass.parse("Bard")


def test_from_dict_rejects_missing_field():
    payload = make_record().to_dict()
    del payload["mana"]
    with pytest.raises(KeyError):
        CharacterRecord.from_dict(payload)


def test_from_dict_rejects_boolean_stat():
    payload = make_record().to_dict()
    payload["level"] = True
    with pytest.raises(ValueError):
        CharacterRecord.from_dict(payload)


def test_from_dict_rejects_non_string_abilities():
    payload = make_record().to_dict()
    payload["abilities"] = ["Fireball", 3]
    with pytest.raises(TypeError):
        CharacterRecord.from_dict(payload)
