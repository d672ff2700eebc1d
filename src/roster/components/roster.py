"""Components holding the in-memory character list and its selection."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from roster.components.character_record import CharacterRecord


@dataclass
class Roster:
    """Singleton component owning the ordered list of character records."""

    records: List[CharacterRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def append(self, record: CharacterRecord) -> int:
        self.records.append(record)
        return len(self.records) - 1

    def replace_at(self, index: int, record: CharacterRecord) -> None:
        if not 0 <= index < len(self.records):
            raise IndexError(f"No character at index {index}")
        self.records[index] = record

    def remove_at(self, index: int) -> CharacterRecord:
        if not 0 <= index < len(self.records):
            raise IndexError(f"No character at index {index}")
        return self.records.pop(index)

    def reload(self, records: Iterable[CharacterRecord]) -> None:
        self.records = list(records)

    def get(self, index: Optional[int]) -> Optional[CharacterRecord]:
        if index is None or not 0 <= index < len(self.records):
            return None
        return self.records[index]

    def index_of(self, record: CharacterRecord) -> Optional[int]:
        """Position of this exact record object (identity, not equality)."""
        for idx, candidate in enumerate(self.records):
            if candidate is record:
                return idx
        return None


@dataclass(slots=True)
class ListSelection:
    """Positional selection in the displayed list; None when nothing is selected.

    ``first_row`` is the index of the topmost visible row when the list scrolls.
    """

    index: Optional[int] = None
    first_row: int = 0
