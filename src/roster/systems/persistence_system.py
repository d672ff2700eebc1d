from __future__ import annotations

import logging
from pathlib import Path

from esper import World

from roster.components.action_button import RosterAction
from roster.components.notice import NoticeSeverity
from roster.events.bus import (
    EVENT_NOTICE,
    EVENT_PERSISTENCE_COMPLETED,
    EVENT_ROSTER_ACTION,
    EVENT_ROSTER_CHANGED,
    EVENT_SELECTION_CHANGED,
    EventBus,
)
from roster.persistence import PersistenceFormat, PersistenceResult, load_records, save_records
from roster.ui.messages import describe_load, describe_save
from roster.utils.singletons import get_roster, get_selection

logger = logging.getLogger(__name__)

_SAVE_ACTIONS = {
    RosterAction.SAVE_JSON: PersistenceFormat.JSON,
    RosterAction.SAVE_XML: PersistenceFormat.XML,
}
_LOAD_ACTIONS = {
    RosterAction.LOAD_JSON: PersistenceFormat.JSON,
    RosterAction.LOAD_XML: PersistenceFormat.XML,
}


class PersistenceSystem:
    """Saves the roster to, and reloads it from, the fixed JSON and XML files."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        data_dir: Path | None = None,
        load_on_start: bool = False,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._data_dir = Path(data_dir) if data_dir is not None else self._default_data_dir()
        self.event_bus.subscribe(EVENT_ROSTER_ACTION, self._on_roster_action)
        if load_on_start:
            self.load_startup()

    @staticmethod
    def _default_data_dir() -> Path:
        return Path.cwd()

    def path_for(self, fmt: PersistenceFormat) -> Path:
        return self._data_dir / fmt.file_name

    def save(self, fmt: PersistenceFormat) -> PersistenceResult:
        roster = get_roster(self.world)
        result = save_records(fmt, self.path_for(fmt), roster.records)
        self.event_bus.emit(EVENT_PERSISTENCE_COMPLETED, operation="save", result=result)
        self.event_bus.emit(
            EVENT_NOTICE,
            message=describe_save(fmt, result),
            severity=NoticeSeverity.SUCCESS if result.ok else NoticeSeverity.ERROR,
        )
        return result

    def load(self, fmt: PersistenceFormat, *, quiet: bool = False) -> PersistenceResult:
        """Replace the roster with the file contents.

        The roster is left untouched when the file is missing or cannot be read.
        With ``quiet`` only failures raise a notice.
        """
        result = load_records(fmt, self.path_for(fmt))
        if result.ok and not result.missing:
            self._replace_roster(result)
        self.event_bus.emit(EVENT_PERSISTENCE_COMPLETED, operation="load", result=result)
        if result.ok and quiet:
            return result
        if not result.ok:
            severity = NoticeSeverity.ERROR
        elif result.missing:
            severity = NoticeSeverity.INFO
        else:
            severity = NoticeSeverity.SUCCESS
        self.event_bus.emit(EVENT_NOTICE, message=describe_load(fmt, result), severity=severity)
        return result

    def load_startup(self) -> PersistenceResult:
        return self.load(PersistenceFormat.JSON, quiet=True)

    def _replace_roster(self, result: PersistenceResult) -> None:
        logger.debug("Replacing roster with %d records from %s", len(result.records), result.path)
        get_roster(self.world).reload(result.records)
        selection = get_selection(self.world)
        selection.first_row = 0
        if selection.index is not None:
            selection.index = None
            self.event_bus.emit(EVENT_SELECTION_CHANGED, index=None)
        self.event_bus.emit(
            EVENT_ROSTER_CHANGED,
            reason="load",
            count=len(result.records),
            index=None,
        )

    def _on_roster_action(self, sender, **payload) -> None:
        action = payload.get("action")
        if action in _SAVE_ACTIONS:
            self.save(_SAVE_ACTIONS[action])
        elif action in _LOAD_ACTIONS:
            self.load(_LOAD_ACTIONS[action])
