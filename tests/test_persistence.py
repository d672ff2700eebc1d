import json
import xml.etree.ElementTree as ET

import pytest

from roster.components.character_record import CharacterClass
from roster.persistence import (
    PersistenceErrorKind,
    PersistenceFormat,
    load_json,
    load_records,
    load_xml,
    save_json,
    save_records,
    save_xml,
)
from tests.helpers import make_record


def _records():
    return [
        make_record("Aria"),
        make_record("Borin", level=12, health=400, mana=0, abilities=[], weapon_type="Axe",
                    character_class=CharacterClass.WARRIOR, armor_type="Heavy"),
    ]


def test_json_save_then_load_preserves_order_and_fields(tmp_path):
    path = tmp_path / "characters.json"
    records = _records()

    saved = save_json(path, records)
    assert saved.ok
    loaded = load_json(path)

    assert loaded.ok and not loaded.missing
    assert loaded.records == records


def test_json_document_is_a_list_of_snake_case_objects(tmp_path):
    path = tmp_path / "characters.json"
    save_json(path, [make_record("Aria")])

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload == [
        {
            "name": "Aria",
            "level": 5,
            "health": 120,
            "mana": 80,
            "abilities": ["Fireball", "Blink"],
            "weapon_type": "Staff",
            "character_class": "Mage",
            "armor_type": "Magic",
        }
    ]


def test_xml_save_then_load_preserves_order_and_fields(tmp_path):
    path = tmp_path / "characters.xml"
    records = _records()
    records[0].abilities.append("Fire & <Ice>")

    assert save_xml(path, records).ok
    loaded = load_xml(path)

    assert loaded.ok
    assert loaded.records == records


def test_xml_document_layout(tmp_path):
    path = tmp_path / "characters.xml"
    save_xml(path, [make_record("Aria")])

    root = ET.parse(path).getroot()
    assert root.tag == "characters"
    (node,) = root.findall("character")
    assert node.findtext("name") == "Aria"
    assert node.findtext("character_class") == "Mage"
    assert [a.text for a in node.find("abilities").findall("ability")] == ["Fireball", "Blink"]


def test_empty_list_can_be_saved_and_loaded(tmp_path):
    for fmt in PersistenceFormat:
        path = tmp_path / fmt.file_name
        assert save_records(fmt, path, []).ok
        result = load_records(fmt, path)
        assert result.ok
        assert result.records == []


def test_missing_file_is_reported_without_error(tmp_path):
    for fmt in PersistenceFormat:
        result = load_records(fmt, tmp_path / fmt.file_name)
        assert result.ok
        assert result.missing
        assert result.records == []


def test_malformed_json_is_reported(tmp_path):
    path = tmp_path / "characters.json"
    path.write_text("[{\"name\": ", encoding="utf-8")

    result = load_json(path)
    assert not result.ok
    assert result.error is PersistenceErrorKind.MALFORMED
    assert result.records == []


def test_json_with_wrong_top_level_shape_is_malformed(tmp_path):
    path = tmp_path / "characters.json"
    path.write_text(json.dumps({"name": "Aria"}), encoding="utf-8")

    result = load_json(path)
    assert result.error is PersistenceErrorKind.MALFORMED


def test_json_with_unknown_class_is_malformed(tmp_path):
    path = tmp_path / "characters.json"
    payload = make_record().to_dict()
    payload["character_class"] = "Bard"
    path.write_text(json.dumps([payload]), encoding="utf-8")

    result = load_json(path)
    assert not result.ok
    assert result.error is PersistenceErrorKind.MALFORMED
    assert "Bard" in result.message


def test_json_with_missing_field_names_the_field(tmp_path):
    path = tmp_path / "characters.json"
    payload = make_record().to_dict()
    del payload["armor_type"]
    path.write_text(json.dumps([payload]), encoding="utf-8")

    result = load_json(path)
    assert result.error is PersistenceErrorKind.MALFORMED
    assert "armor_type" in result.message


def test_malformed_xml_is_reported(tmp_path):
    path = tmp_path / "characters.xml"
    path.write_text("<characters><character>", encoding="utf-8")

    result = load_xml(path)
    assert not result.ok
    assert result.error is PersistenceErrorKind.MALFORMED


def test_xml_with_wrong_root_or_bad_number_is_malformed(tmp_path):
    path = tmp_path / "characters.xml"
    path.write_text("<heroes />", encoding="utf-8")
    assert load_xml(path).error is PersistenceErrorKind.MALFORMED

    save_xml(path, [make_record()])
    text = path.read_text(encoding="utf-8").replace("<level>5</level>", "<level>five</level>")
    path.write_text(text, encoding="utf-8")
    result = load_xml(path)
    assert result.error is PersistenceErrorKind.MALFORMED
    assert "level" in result.message


def test_write_failure_is_reported(tmp_path):
    # A directory cannot be opened as a file.
    for fmt in PersistenceFormat:
        result = save_records(fmt, tmp_path, [make_record()])
        assert not result.ok
        assert result.error is PersistenceErrorKind.WRITE_FAILED


def test_read_failure_is_reported(tmp_path):
    target = tmp_path / "characters.json"
    target.mkdir()
    result = load_json(target)
    assert not result.ok
    assert result.error is PersistenceErrorKind.READ_FAILED


TRICKY_TEXT = [
    "Élodie Øvergård",
    "雪風",
    "Rune \U0001F5E1 Blade",
    "Line\r\nTwo",
    "tab\there",
    "Fire & <Ice> \"quoted\" 'single'",
    "  padded  ",
]


@pytest.mark.parametrize("fmt", list(PersistenceFormat))
@pytest.mark.parametrize("text", TRICKY_TEXT)
def test_round_trip_preserves_unusual_text(tmp_path, fmt, text):
    path = tmp_path / fmt.file_name
    records = [make_record(text, abilities=[text, "Plain"], weapon_type=text)]

    assert save_records(fmt, path, records).ok
    loaded = load_records(fmt, path)

    assert loaded.ok
    assert loaded.records == records


def test_json_save_of_unencodable_text_fails_and_keeps_file(tmp_path):
    path = tmp_path / "characters.json"
    save_json(path, [make_record("Aria")])
    before = path.read_bytes()

    result = save_json(path, [make_record("A\ud800")])

    assert not result.ok
    assert result.error is PersistenceErrorKind.WRITE_FAILED
    assert path.read_bytes() == before


def test_surrogate_escape_loads_but_cannot_be_saved_again(tmp_path):
    path = tmp_path / "characters.json"
    payload = make_record().to_dict()
    payload["name"] = "A\ud800"
    path.write_text(json.dumps([payload]), encoding="utf-8")

    loaded = load_json(path)
    assert loaded.ok
    result = save_json(path, loaded.records)

    assert result.error is PersistenceErrorKind.WRITE_FAILED
    assert load_json(path).records == loaded.records


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"name": "Bell\x0bX"}, "name"),
        ({"abilities": ["Ok", "Bad\x01"]}, "ability 2"),
        ({"armor_type": "Plate\ud800"}, "armor_type"),
    ],
)
def test_xml_save_refuses_text_xml_cannot_hold(tmp_path, overrides, field):
    path = tmp_path / "characters.xml"
    save_xml(path, [make_record("Aria")])
    before = path.read_bytes()

    result = save_xml(path, [make_record("Good"), make_record(**overrides)])

    assert not result.ok
    assert result.error is PersistenceErrorKind.WRITE_FAILED
    assert f"Character 2 {field}" in result.message
    assert path.read_bytes() == before
    assert load_xml(path).records == [make_record("Aria")]


def test_invalid_utf8_json_is_malformed(tmp_path):
    path = tmp_path / "characters.json"
    path.write_bytes(b'[{"name": "\xff\xfe"}]')

    result = load_json(path)

    assert not result.ok
    assert result.error is PersistenceErrorKind.MALFORMED
