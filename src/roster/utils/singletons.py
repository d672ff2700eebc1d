"""Lookups for the singleton components created by ``create_world``."""
from __future__ import annotations

from esper import World

from roster.components.editor_session import EditorSession
from roster.components.notice import NoticeDialog
from roster.components.roster import ListSelection, Roster


def get_roster(world: World) -> Roster:
    for _, roster in world.get_component(Roster):
        return roster
    raise RuntimeError("Roster component missing; was the world built with create_world()?")


def get_selection(world: World) -> ListSelection:
    for _, selection in world.get_component(ListSelection):
        return selection
    raise RuntimeError("ListSelection component missing; was the world built with create_world()?")


def get_editor_session(world: World) -> tuple[int, EditorSession] | None:
    for entity, session in world.get_component(EditorSession):
        return entity, session
    return None


def active_notice(world: World) -> tuple[int, NoticeDialog] | None:
    """Return the oldest pending notice, which is the one on screen."""
    notices = list(world.get_component(NoticeDialog))
    if not notices:
        return None
    return min(notices, key=lambda pair: pair[1].sequence)


def notice_blocking(world: World) -> bool:
    return any(True for _ in world.get_component(NoticeDialog))
