"""Modal editor for creating and editing a single character."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Tuple

from esper import World

from roster.components.app_state import AppMode, InputLayer
from roster.components.character_record import CharacterClass, CharacterRecord
from roster.components.editor_session import STAT_FIELDS, EditorField, EditorSession, OptionKind
from roster.components.notice import NoticeSeverity
from roster.constants import (
    EDITOR_ABILITY_ROWS,
    HEALTH_RANGE,
    LEVEL_RANGE,
    MANA_RANGE,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from roster.events.bus import (
    EVENT_EDITOR_CLOSED,
    EVENT_EDITOR_OPEN_REQUEST,
    EVENT_EDITOR_OPENED,
    EVENT_KEY_PRESS,
    EVENT_MOUSE_PRESS,
    EVENT_NOTICE,
    EVENT_TEXT_INPUT,
    EventBus,
)
from roster.ui import keys
from roster.ui.layout import EditorWidget, compute_editor_layout, scroll_to_include
from roster.ui.messages import describe_issues
from roster.utils.app_state import set_app_mode
from roster.utils.singletons import get_editor_session
from roster.validation import clamp, validate_record

logger = logging.getLogger(__name__)

STAT_RANGES: Dict[EditorField, Tuple[int, int]] = {
    EditorField.LEVEL: LEVEL_RANGE,
    EditorField.HEALTH: HEALTH_RANGE,
    EditorField.MANA: MANA_RANGE,
}
# Longest digit string accepted by a stat field.
_STAT_MAX_DIGITS = len(str(max(high for _, high in STAT_RANGES.values())))

# Tab order of the text-entry fields.
_FOCUS_ORDER = (
    EditorField.NAME,
    EditorField.LEVEL,
    EditorField.HEALTH,
    EditorField.MANA,
    EditorField.NEW_ABILITY,
)

_FOCUS_WIDGETS = {
    EditorWidget.NAME_FIELD: EditorField.NAME,
    EditorWidget.LEVEL_FIELD: EditorField.LEVEL,
    EditorWidget.HEALTH_FIELD: EditorField.HEALTH,
    EditorWidget.MANA_FIELD: EditorField.MANA,
    EditorWidget.NEW_ABILITY_FIELD: EditorField.NEW_ABILITY,
}

_STEP_WIDGETS = {
    EditorWidget.LEVEL_DEC: (EditorField.LEVEL, -1),
    EditorWidget.LEVEL_INC: (EditorField.LEVEL, 1),
    EditorWidget.HEALTH_DEC: (EditorField.HEALTH, -1),
    EditorWidget.HEALTH_INC: (EditorField.HEALTH, 1),
    EditorWidget.MANA_DEC: (EditorField.MANA, -1),
    EditorWidget.MANA_INC: (EditorField.MANA, 1),
}

_OPTION_WIDGETS = {
    EditorWidget.CLASS_PREV: (OptionKind.CHARACTER_CLASS, -1),
    EditorWidget.CLASS_VALUE: (OptionKind.CHARACTER_CLASS, 1),
    EditorWidget.CLASS_NEXT: (OptionKind.CHARACTER_CLASS, 1),
    EditorWidget.WEAPON_PREV: (OptionKind.WEAPON, -1),
    EditorWidget.WEAPON_VALUE: (OptionKind.WEAPON, 1),
    EditorWidget.WEAPON_NEXT: (OptionKind.WEAPON, 1),
    EditorWidget.ARMOR_PREV: (OptionKind.ARMOR, -1),
    EditorWidget.ARMOR_VALUE: (OptionKind.ARMOR, 1),
    EditorWidget.ARMOR_NEXT: (OptionKind.ARMOR, 1),
}


def _choice_index(labels: Tuple[str, ...], value: str) -> int | None:
    try:
        return labels.index(value)
    except ValueError:
        return None


class EditorSystem:
    """Runs the editor dialog on a private copy of the record.

    Opening the editor switches the app to ``AppMode.EDITOR``; the dialog ends
    with an ``editor_closed`` event carrying either the edited record
    (confirmed) or nothing (cancelled).
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        size_provider: Callable[[], Tuple[float, float]] | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._size_provider = size_provider or (lambda: (WINDOW_WIDTH, WINDOW_HEIGHT))
        self.event_bus.subscribe(EVENT_EDITOR_OPEN_REQUEST, self._on_open_request)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self._on_mouse_press)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self._on_key_press)
        self.event_bus.subscribe(EVENT_TEXT_INPUT, self._on_text_input)

    # Session lifecycle --------------------------------------------------

    def open(self, record: CharacterRecord, target_index: int | None = None) -> int | None:
        if get_editor_session(self.world) is not None:
            logger.warning("Editor already open; ignoring request for index %s", target_index)
            return None
        draft = record.copy()
        session = EditorSession(
            draft=draft,
            target_index=target_index,
            title="Create Character" if target_index is None else "Edit Character",
            buffers={
                EditorField.NAME: draft.name,
                EditorField.LEVEL: str(draft.level),
                EditorField.HEALTH: str(draft.health),
                EditorField.MANA: str(draft.mana),
                EditorField.NEW_ABILITY: "",
            },
            choices={
                OptionKind.CHARACTER_CLASS: _choice_index(
                    OptionKind.CHARACTER_CLASS.labels(), draft.character_class.value
                ),
                OptionKind.WEAPON: _choice_index(OptionKind.WEAPON.labels(), draft.weapon_type),
                OptionKind.ARMOR: _choice_index(OptionKind.ARMOR.labels(), draft.armor_type),
            },
        )
        entity = self.world.create_entity(session)
        set_app_mode(self.world, self.event_bus, AppMode.EDITOR)
        self.event_bus.emit(EVENT_EDITOR_OPENED, session_entity=entity, target_index=target_index)
        return entity

    def confirm(self) -> CharacterRecord | None:
        """Validate and close; the dialog stays open when validation fails."""
        found = get_editor_session(self.world)
        if found is None:
            return None
        entity, session = found
        record = self.build_record(session)
        issues = validate_record(record)
        if issues:
            logger.debug("Editor confirm rejected: %s", [issue.name for issue in issues])
            self.event_bus.emit(
                EVENT_NOTICE,
                message=describe_issues(issues),
                severity=NoticeSeverity.INFO,
            )
            return None
        self._close(entity)
        self.event_bus.emit(
            EVENT_EDITOR_CLOSED,
            confirmed=True,
            record=record,
            target_index=session.target_index,
        )
        return record

    def cancel(self) -> None:
        found = get_editor_session(self.world)
        if found is None:
            return
        entity, session = found
        self._close(entity)
        self.event_bus.emit(
            EVENT_EDITOR_CLOSED,
            confirmed=False,
            record=None,
            target_index=session.target_index,
        )

    def _close(self, entity: int) -> None:
        self.world.delete_entity(entity, immediate=True)
        set_app_mode(self.world, self.event_bus, AppMode.LIST)

    @staticmethod
    def build_record(session: EditorSession) -> CharacterRecord:
        """Fold the dialog's buffers and selectors into a fresh record."""
        record = session.draft.copy()
        record.name = session.buffers.get(EditorField.NAME, "")
        for stat, bounds in STAT_RANGES.items():
            setattr(record, stat.name.lower(), _parse_stat(session.buffers.get(stat, ""), bounds))
        class_choice = session.choices.get(OptionKind.CHARACTER_CLASS)
        if class_choice is not None:
            record.character_class = list(CharacterClass)[class_choice]
        weapon_choice = session.choices.get(OptionKind.WEAPON)
        record.weapon_type = OptionKind.WEAPON.labels()[weapon_choice] if weapon_choice is not None else ""
        armor_choice = session.choices.get(OptionKind.ARMOR)
        record.armor_type = OptionKind.ARMOR.labels()[armor_choice] if armor_choice is not None else ""
        return record

    # Widget operations --------------------------------------------------

    def set_focus(self, target: EditorField | None) -> None:
        session = self._session()
        if session is None or session.focus == target:
            return
        if session.focus in STAT_FIELDS:
            self._normalize_stat(session, session.focus)
        session.focus = target

    def step_stat(self, stat: EditorField, delta: int) -> None:
        session = self._session()
        if session is None or stat not in STAT_RANGES:
            return
        bounds = STAT_RANGES[stat]
        current = _parse_stat(session.buffers.get(stat, ""), bounds)
        session.buffers[stat] = str(clamp(current + delta, bounds))

    def cycle_option(self, kind: OptionKind, step: int) -> None:
        session = self._session()
        if session is None:
            return
        count = len(kind.labels())
        current = session.choices.get(kind)
        if current is None:
            session.choices[kind] = 0 if step > 0 else count - 1
        else:
            session.choices[kind] = (current + step) % count

    def add_ability(self) -> bool:
        session = self._session()
        if session is None:
            return False
        text = session.buffers.get(EditorField.NEW_ABILITY, "")
        if not text.strip():
            return False
        session.draft.abilities.append(text)
        session.buffers[EditorField.NEW_ABILITY] = ""
        session.ability_selection = len(session.draft.abilities) - 1
        self._keep_ability_visible(session)
        return True

    def remove_selected_ability(self) -> str | None:
        session = self._session()
        if session is None:
            return None
        index = session.ability_selection
        if index is None or not 0 <= index < len(session.draft.abilities):
            return None
        removed = session.draft.abilities.pop(index)
        session.ability_selection = None
        self._keep_ability_visible(session)
        return removed

    def select_ability(self, index: int | None) -> None:
        session = self._session()
        if session is None:
            return
        if index is not None and not 0 <= index < len(session.draft.abilities):
            index = None
        session.ability_selection = index
        self._keep_ability_visible(session)

    def type_text(self, text: str) -> None:
        session = self._session()
        if session is None or session.focus is None:
            return
        current = session.buffers.get(session.focus, "")
        if session.focus in STAT_FIELDS:
            digits = "".join(ch for ch in text if ch.isdigit())
            session.buffers[session.focus] = (current + digits)[:_STAT_MAX_DIGITS]
        else:
            printable = "".join(ch for ch in text if ch.isprintable())
            session.buffers[session.focus] = current + printable

    def backspace(self) -> None:
        session = self._session()
        if session is None or session.focus is None:
            return
        session.buffers[session.focus] = session.buffers.get(session.focus, "")[:-1]

    # Input --------------------------------------------------------------

    def handle_mouse_press(self, x: float, y: float, button: int) -> None:
        session = self._session()
        if button != 1 or session is None:
            return
        layout = compute_editor_layout(*self._size_provider())
        slot = layout.ability_slot_at(x, y)
        if slot is not None:
            # The abilities list takes focus from the text fields.
            self.set_focus(None)
            self.select_ability(session.ability_first_row + slot)
            return
        widget = layout.widget_at(x, y)
        if widget is None:
            return
        if widget in _FOCUS_WIDGETS:
            self.set_focus(_FOCUS_WIDGETS[widget])
        elif widget in _STEP_WIDGETS:
            stat, delta = _STEP_WIDGETS[widget]
            self.step_stat(stat, delta)
        elif widget in _OPTION_WIDGETS:
            kind, step = _OPTION_WIDGETS[widget]
            self.cycle_option(kind, step)
        elif widget == EditorWidget.ADD_ABILITY:
            self.add_ability()
        elif widget == EditorWidget.REMOVE_ABILITY:
            self.remove_selected_ability()
        elif widget == EditorWidget.SAVE:
            self.confirm()
        elif widget == EditorWidget.CANCEL:
            self.cancel()

    def handle_key_press(self, symbol: int, modifiers: int) -> None:
        session = self._session()
        if session is None:
            return
        if symbol == keys.ESCAPE:
            self.cancel()
        elif symbol in keys.CONFIRM_KEYS:
            if session.focus == EditorField.NEW_ABILITY and session.buffers.get(EditorField.NEW_ABILITY, "").strip():
                self.add_ability()
            else:
                self.confirm()
        elif symbol == keys.TAB:
            self._cycle_focus(-1 if modifiers & keys.MOD_SHIFT else 1)
        elif symbol == keys.BACKSPACE:
            self.backspace()
        elif symbol == keys.DELETE and session.focus is None:
            self.remove_selected_ability()
        elif symbol in (keys.UP, keys.DOWN) and session.focus in STAT_FIELDS:
            self.step_stat(session.focus, 1 if symbol == keys.UP else -1)

    def _cycle_focus(self, step: int) -> None:
        session = self._session()
        if session is None:
            return
        if session.focus is None:
            position = 0 if step > 0 else len(_FOCUS_ORDER) - 1
        else:
            position = (_FOCUS_ORDER.index(session.focus) + step) % len(_FOCUS_ORDER)
        self.set_focus(_FOCUS_ORDER[position])

    # Helpers ------------------------------------------------------------

    def _session(self) -> EditorSession | None:
        found = get_editor_session(self.world)
        return found[1] if found is not None else None

    @staticmethod
    def _normalize_stat(session: EditorSession, stat: EditorField) -> None:
        session.buffers[stat] = str(_parse_stat(session.buffers.get(stat, ""), STAT_RANGES[stat]))

    @staticmethod
    def _keep_ability_visible(session: EditorSession) -> None:
        session.ability_first_row = scroll_to_include(
            session.ability_first_row,
            session.ability_selection,
            EDITOR_ABILITY_ROWS,
            len(session.draft.abilities),
        )

    # Event handlers -----------------------------------------------------

    def _on_open_request(self, sender, **payload) -> None:
        record = payload.get("record")
        if not isinstance(record, CharacterRecord):
            return
        self.open(record, payload.get("target_index"))

    def _on_mouse_press(self, sender, **payload) -> None:
        if payload.get("layer") != InputLayer.EDITOR:
            return
        self.handle_mouse_press(payload["x"], payload["y"], payload["button"])

    def _on_key_press(self, sender, **payload) -> None:
        if payload.get("layer") != InputLayer.EDITOR:
            return
        self.handle_key_press(payload["symbol"], payload.get("modifiers", 0))

    def _on_text_input(self, sender, **payload) -> None:
        if payload.get("layer") != InputLayer.EDITOR:
            return
        self.type_text(payload["text"])


def _parse_stat(text: str, bounds: Tuple[int, int]) -> int:
    """Digits to a clamped integer; an empty field falls back to the minimum."""
    try:
        value = int(text.strip())
    except ValueError:
        return bounds[0]
    return clamp(value, bounds)
