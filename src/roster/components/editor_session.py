"""Components describing the modal character editor."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional, Tuple

from roster.components.character_record import CharacterClass, CharacterRecord
from roster.constants import ARMOR_OPTIONS, WEAPON_OPTIONS


class EditorField(Enum):
    """Text-entry fields that can hold keyboard focus."""
    NAME = auto()
    LEVEL = auto()
    HEALTH = auto()
    MANA = auto()
    NEW_ABILITY = auto()


# Fields whose buffer holds digits only.
STAT_FIELDS = (EditorField.LEVEL, EditorField.HEALTH, EditorField.MANA)


class OptionKind(Enum):
    """Fixed-choice selectors in the editor."""
    CHARACTER_CLASS = auto()
    WEAPON = auto()
    ARMOR = auto()

    def labels(self) -> Tuple[str, ...]:
        if self is OptionKind.CHARACTER_CLASS:
            return tuple(member.value for member in CharacterClass)
        if self is OptionKind.WEAPON:
            return WEAPON_OPTIONS
        return ARMOR_OPTIONS


@dataclass(slots=True)
class EditorSession:
    """Private working state of an open editor dialog.

    ``draft`` is a copy of the record being edited; nothing reaches the roster
    until the session is confirmed. ``target_index`` is None when creating.
    """

    draft: CharacterRecord
    target_index: Optional[int] = None
    title: str = "Character Editor"
    focus: Optional[EditorField] = EditorField.NAME
    buffers: Dict[EditorField, str] = field(default_factory=dict)
    choices: Dict[OptionKind, Optional[int]] = field(default_factory=dict)
    ability_selection: Optional[int] = None
    ability_first_row: int = 0

