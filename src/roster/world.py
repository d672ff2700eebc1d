from __future__ import annotations

from typing import Iterable

from esper import World

from roster.components.app_state import AppMode, AppState
from roster.components.character_record import CharacterRecord
from roster.components.roster import ListSelection, Roster


def create_world(
    initial_mode: AppMode = AppMode.LIST,
    *,
    records: Iterable[CharacterRecord] | None = None,
) -> World:
    """Build a world holding the app state, the roster and its selection."""
    world = World()
    world.create_entity(AppState(mode=initial_mode))
    world.create_entity(
        Roster(records=list(records) if records is not None else []),
        ListSelection(),
    )
    return world
