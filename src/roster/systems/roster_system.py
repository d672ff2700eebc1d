from __future__ import annotations

import logging

from esper import World

from roster.components.action_button import RosterAction
from roster.components.character_record import CharacterRecord
from roster.components.notice import NoticeSeverity
from roster.events.bus import (
    EVENT_EDITOR_CLOSED,
    EVENT_EDITOR_OPEN_REQUEST,
    EVENT_NOTICE,
    EVENT_ROSTER_ACTION,
    EVENT_ROSTER_CHANGED,
    EVENT_SELECTION_CHANGED,
    EventBus,
)
from roster.ui.messages import SELECTION_REQUIRED
from roster.utils.singletons import get_roster, get_selection

logger = logging.getLogger(__name__)


class RosterSystem:
    """Owns every mutation of the character list.

    Create and edit go through the modal editor; the record only reaches the
    list when the editor reports a confirmed close.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_ROSTER_ACTION, self._on_roster_action)
        self.event_bus.subscribe(EVENT_EDITOR_CLOSED, self._on_editor_closed)

    # Actions ------------------------------------------------------------

    def create(self) -> None:
        self.event_bus.emit(EVENT_EDITOR_OPEN_REQUEST, record=CharacterRecord(), target_index=None)

    def clone_selected(self) -> int | None:
        index = self._selected_index(RosterAction.CLONE)
        if index is None:
            return None
        roster = get_roster(self.world)
        new_index = roster.append(roster.records[index].clone())
        logger.debug("Cloned character %d into %d", index, new_index)
        self._select(new_index)
        self._emit_changed("clone", new_index)
        return new_index

    def edit_selected(self) -> None:
        index = self._selected_index(RosterAction.EDIT)
        if index is None:
            return
        record = get_roster(self.world).records[index]
        self.event_bus.emit(EVENT_EDITOR_OPEN_REQUEST, record=record, target_index=index)

    def delete_selected(self) -> CharacterRecord | None:
        index = self._selected_index(RosterAction.DELETE)
        if index is None:
            return None
        removed = get_roster(self.world).remove_at(index)
        logger.debug("Deleted character %d (%s)", index, removed.name)
        self._select(None)
        self._emit_changed("delete", index)
        return removed

    def commit(self, record: CharacterRecord, target_index: int | None) -> int | None:
        """Append a new record or replace exactly the one at ``target_index``."""
        roster = get_roster(self.world)
        if target_index is None:
            index = roster.append(record)
            reason = "create"
        else:
            try:
                roster.replace_at(target_index, record)
            except IndexError:
                logger.warning("Edited character %s no longer exists; edit dropped", target_index)
                self.event_bus.emit(
                    EVENT_NOTICE,
                    message="The character being edited no longer exists.",
                    severity=NoticeSeverity.ERROR,
                )
                return None
            index = target_index
            reason = "edit"
        self._select(index)
        self._emit_changed(reason, index)
        return index

    # Helpers ------------------------------------------------------------

    def _selected_index(self, action: RosterAction) -> int | None:
        selection = get_selection(self.world)
        index = selection.index
        if index is None or not 0 <= index < len(get_roster(self.world)):
            self.event_bus.emit(
                EVENT_NOTICE,
                message=SELECTION_REQUIRED[action],
                severity=NoticeSeverity.INFO,
            )
            return None
        return index

    def _select(self, index: int | None) -> None:
        selection = get_selection(self.world)
        if selection.index == index:
            return
        selection.index = index
        self.event_bus.emit(EVENT_SELECTION_CHANGED, index=index)

    def _emit_changed(self, reason: str, index: int | None) -> None:
        self.event_bus.emit(
            EVENT_ROSTER_CHANGED,
            reason=reason,
            count=len(get_roster(self.world)),
            index=index,
        )

    # Event handlers -----------------------------------------------------

    def _on_roster_action(self, sender, **payload) -> None:
        action = payload.get("action")
        if action == RosterAction.CREATE:
            self.create()
        elif action == RosterAction.CLONE:
            self.clone_selected()
        elif action == RosterAction.EDIT:
            self.edit_selected()
        elif action == RosterAction.DELETE:
            self.delete_selected()

    def _on_editor_closed(self, sender, **payload) -> None:
        if not payload.get("confirmed"):
            return
        record = payload.get("record")
        if not isinstance(record, CharacterRecord):
            return
        self.commit(record, payload.get("target_index"))
