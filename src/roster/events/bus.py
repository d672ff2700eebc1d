import logging
from typing import Dict

from blinker import Signal

logger = logging.getLogger(__name__)


class EventBus:
    """Named-event dispatcher leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems alive even when nobody holds the system.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            logger.debug("emit %s %s", name, sorted(payload))
            sig.send(self, **payload)


# ============================================================================
# INPUT
# ============================================================================
EVENT_MOUSE_PRESS_RAW = "mouse_press_raw"  # payload: x, y, button, modifiers
EVENT_KEY_PRESS_RAW = "key_press_raw"      # payload: symbol=int, modifiers=int
EVENT_TEXT_INPUT_RAW = "text_input_raw"    # payload: text=str
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button, layer=InputLayer
EVENT_KEY_PRESS = "key_press"              # payload: symbol=int, modifiers=int, layer=InputLayer
EVENT_TEXT_INPUT = "text_input"            # payload: text=str, layer=InputLayer


# ============================================================================
# ROSTER
# ============================================================================
EVENT_ROSTER_ACTION = "roster_action"              # payload: action=RosterAction
EVENT_ROSTER_CHANGED = "roster_changed"            # payload: reason=str, count=int, index=int|None
EVENT_SELECTION_CHANGED = "selection_changed"      # payload: index=int|None


# ============================================================================
# EDITOR
# ============================================================================
EVENT_EDITOR_OPEN_REQUEST = "editor_open_request"  # payload: record=CharacterRecord, target_index=int|None
EVENT_EDITOR_OPENED = "editor_opened"              # payload: session_entity=int, target_index=int|None
EVENT_EDITOR_CLOSED = "editor_closed"              # payload: confirmed=bool, record=CharacterRecord|None, target_index=int|None


# ============================================================================
# PERSISTENCE
# ============================================================================
EVENT_PERSISTENCE_COMPLETED = "persistence_completed"  # payload: operation=str, result=PersistenceResult


# ============================================================================
# APP STATE & NOTICES
# ============================================================================
EVENT_APP_MODE_CHANGED = "app_mode_changed"    # payload: previous_mode=AppMode|None, new_mode=AppMode
EVENT_NOTICE = "notice"                        # payload: message=str, title=str|None, severity=NoticeSeverity
EVENT_NOTICE_DISMISSED = "notice_dismissed"    # payload: notice_entity=int, remaining=int
