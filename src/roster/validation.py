"""Checks applied when the editor is confirmed."""
from __future__ import annotations

from enum import Enum, auto
from typing import List

from roster.components.character_record import CharacterClass, CharacterRecord
from roster.constants import ARMOR_OPTIONS, HEALTH_RANGE, LEVEL_RANGE, MANA_RANGE, WEAPON_OPTIONS


class ValidationIssue(Enum):
    MISSING_NAME = auto()
    MISSING_CLASS = auto()
    MISSING_WEAPON = auto()
    MISSING_ARMOR = auto()
    LEVEL_OUT_OF_RANGE = auto()
    HEALTH_OUT_OF_RANGE = auto()
    MANA_OUT_OF_RANGE = auto()


_RANGES = (
    ("level", LEVEL_RANGE, ValidationIssue.LEVEL_OUT_OF_RANGE),
    ("health", HEALTH_RANGE, ValidationIssue.HEALTH_OUT_OF_RANGE),
    ("mana", MANA_RANGE, ValidationIssue.MANA_OUT_OF_RANGE),
)


def validate_record(record: CharacterRecord) -> List[ValidationIssue]:
    """Return every problem that blocks committing ``record``; empty means valid."""
    issues: List[ValidationIssue] = []
    if not record.name or not record.name.strip():
        issues.append(ValidationIssue.MISSING_NAME)
    if not isinstance(record.character_class, CharacterClass):
        issues.append(ValidationIssue.MISSING_CLASS)
    if record.weapon_type not in WEAPON_OPTIONS:
        issues.append(ValidationIssue.MISSING_WEAPON)
    if record.armor_type not in ARMOR_OPTIONS:
        issues.append(ValidationIssue.MISSING_ARMOR)
    for attr, (low, high), issue in _RANGES:
        value = getattr(record, attr)
        if not low <= value <= high:
            issues.append(issue)
    return issues


def clamp(value: int, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return max(low, min(high, value))
