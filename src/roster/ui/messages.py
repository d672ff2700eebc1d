"""User-facing wording for result and issue kinds."""
from __future__ import annotations

from typing import Iterable

from roster.components.action_button import RosterAction
from roster.constants import HEALTH_RANGE, LEVEL_RANGE, MANA_RANGE
from roster.persistence import PersistenceErrorKind, PersistenceFormat, PersistenceResult
from roster.validation import ValidationIssue

SELECTION_REQUIRED = {
    RosterAction.CLONE: "Please select a character to clone.",
    RosterAction.EDIT: "Please select a character to edit.",
    RosterAction.DELETE: "Please select a character to delete.",
}

_ISSUE_TEXT = {
    ValidationIssue.MISSING_NAME: "Enter the character's name.",
    ValidationIssue.MISSING_CLASS: "Choose a character class.",
    ValidationIssue.MISSING_WEAPON: "Choose a weapon type.",
    ValidationIssue.MISSING_ARMOR: "Choose an armor type.",
    ValidationIssue.LEVEL_OUT_OF_RANGE: "Level must be between {} and {}.".format(*LEVEL_RANGE),
    ValidationIssue.HEALTH_OUT_OF_RANGE: "Health must be between {} and {}.".format(*HEALTH_RANGE),
    ValidationIssue.MANA_OUT_OF_RANGE: "Mana must be between {} and {}.".format(*MANA_RANGE),
}

_ERROR_PREFIX = {
    PersistenceErrorKind.READ_FAILED: "Could not read",
    PersistenceErrorKind.WRITE_FAILED: "Could not write",
    PersistenceErrorKind.MALFORMED: "Could not understand",
}


def describe_issues(issues: Iterable[ValidationIssue]) -> str:
    return "\n".join(_ISSUE_TEXT[issue] for issue in issues)


def describe_save(fmt: PersistenceFormat, result: PersistenceResult) -> str:
    if result.ok:
        return f"Characters saved to {result.path.name}."
    return _describe_error(fmt, "saving", result)


def describe_load(fmt: PersistenceFormat, result: PersistenceResult) -> str:
    if result.missing:
        return f"File {result.path.name} not found."
    if result.ok:
        count = len(result.records)
        noun = "character" if count == 1 else "characters"
        return f"Loaded {count} {noun} from {result.path.name}."
    return _describe_error(fmt, "loading", result)


def _describe_error(fmt: PersistenceFormat, verb: str, result: PersistenceResult) -> str:
    prefix = _ERROR_PREFIX.get(result.error, "Problem with")
    return f"Error {verb} {fmt.label}. {prefix} {result.path.name}: {result.message}"
