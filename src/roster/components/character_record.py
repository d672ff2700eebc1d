from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping

from roster.constants import CLONE_NAME_SUFFIX


class CharacterClass(Enum):
    """Closed set of character classes offered by the editor."""
    WARRIOR = "Warrior"
    MAGE = "Mage"
    ROGUE = "Rogue"
    PRIEST = "Priest"
    HUNTER = "Hunter"

    @classmethod
    def parse(cls, text: str) -> "CharacterClass":
        """Resolve a class from its display value or member name, ignoring case."""
        if isinstance(text, CharacterClass):
            return text
        if not isinstance(text, str):
            raise ValueError(f"Character class must be text, got {type(text).__name__}")
        wanted = text.strip().lower()
        for member in cls:
            if wanted in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown character class: {text!r}")

    def __str__(self) -> str:
        return self.value


@dataclass
class CharacterRecord:
    """A character's persisted data. Values are not validated here."""
    name: str = "New Character"
    level: int = 1
    health: int = 100
    mana: int = 100
    abilities: List[str] = field(default_factory=list)
    weapon_type: str = "Sword"
    character_class: CharacterClass = CharacterClass.WARRIOR
    armor_type: str = "Light"

    def copy(self) -> "CharacterRecord":
        """Field-by-field duplicate; the abilities list is copied, never shared."""
        return CharacterRecord(
            name=self.name,
            level=self.level,
            health=self.health,
            mana=self.mana,
            abilities=list(self.abilities),
            weapon_type=self.weapon_type,
            character_class=self.character_class,
            armor_type=self.armor_type,
        )

    def clone(self) -> "CharacterRecord":
        """Duplicate used by the clone action, marked with the copy suffix."""
        duplicate = self.copy()
        duplicate.name = f"{self.name}{CLONE_NAME_SUFFIX}"
        return duplicate

    def display_label(self) -> str:
        return f"{self.name} - Level {self.level} {self.character_class}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "level": self.level,
            "health": self.health,
            "mana": self.mana,
            "abilities": list(self.abilities),
            "weapon_type": self.weapon_type,
            "character_class": self.character_class.value,
            "armor_type": self.armor_type,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CharacterRecord":
        """Build a record from plain data.

        Raises KeyError for a missing field, ValueError for an unknown class or a
        non-integer stat and TypeError when the payload or abilities have the
        wrong shape.
        """
        if not isinstance(payload, Mapping):
            raise TypeError(f"Character entry must be an object, got {type(payload).__name__}")
        abilities = payload["abilities"]
        if not isinstance(abilities, list) or not all(isinstance(a, str) for a in abilities):
            raise TypeError("Character abilities must be a list of strings")
        return cls(
            name=_text(payload, "name"),
            level=_integer(payload, "level"),
            health=_integer(payload, "health"),
            mana=_integer(payload, "mana"),
            abilities=list(abilities),
            weapon_type=_text(payload, "weapon_type"),
            character_class=CharacterClass.parse(payload["character_class"]),
            armor_type=_text(payload, "armor_type"),
        )


def _text(payload: Mapping[str, Any], key: str) -> str:
    value = payload[key]
    if not isinstance(value, str):
        raise TypeError(f"Field {key!r} must be text")
    return value


def _integer(payload: Mapping[str, Any], key: str) -> int:
    value = payload[key]
    # bool is an int subclass; a JSON true/false is not a stat.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Field {key!r} must be an integer, got {value!r}")
    return value
