"""Input handling for the character list and its action buttons."""
from __future__ import annotations

from typing import Callable, Tuple

from esper import World

from roster.components.action_button import ActionButton, RosterAction
from roster.components.app_state import InputLayer
from roster.constants import WINDOW_HEIGHT, WINDOW_WIDTH
from roster.events.bus import (
    EVENT_KEY_PRESS,
    EVENT_MOUSE_PRESS,
    EVENT_ROSTER_ACTION,
    EVENT_ROSTER_CHANGED,
    EVENT_SELECTION_CHANGED,
    EventBus,
)
from roster.ui import keys
from roster.ui.layout import compute_list_geometry, point_in_rect, row_at_point, scroll_to_include
from roster.utils.singletons import get_roster, get_selection


class ListInputSystem:
    """Turns clicks and keys on the list view into selection changes and actions."""

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
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self._on_mouse_press)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self._on_key_press)
        self.event_bus.subscribe(EVENT_SELECTION_CHANGED, self._on_selection_changed)
        self.event_bus.subscribe(EVENT_ROSTER_CHANGED, self._on_roster_changed)

    def handle_mouse_press(self, x: float, y: float, button: int) -> None:
        if button != 1:
            return
        for _, action_button in self.world.get_component(ActionButton):
            if action_button.enabled and action_button.contains(x, y):
                self.event_bus.emit(EVENT_ROSTER_ACTION, action=action_button.action)
                return
        geometry = compute_list_geometry(*self._size_provider())
        if not point_in_rect(x, y, geometry.list_rect):
            return
        selection = get_selection(self.world)
        index = row_at_point(
            geometry,
            x,
            y,
            first_row=selection.first_row,
            count=len(get_roster(self.world)),
        )
        self.select(index)

    def handle_key_press(self, symbol: int, modifiers: int) -> None:
        if symbol == keys.N and modifiers & keys.MOD_CTRL:
            self.event_bus.emit(EVENT_ROSTER_ACTION, action=RosterAction.CREATE)
        elif symbol in keys.CONFIRM_KEYS:
            self.event_bus.emit(EVENT_ROSTER_ACTION, action=RosterAction.EDIT)
        elif symbol == keys.DELETE:
            self.event_bus.emit(EVENT_ROSTER_ACTION, action=RosterAction.DELETE)
        elif symbol in (keys.UP, keys.DOWN):
            self._move_selection(-1 if symbol == keys.UP else 1)

    def select(self, index: int | None) -> None:
        selection = get_selection(self.world)
        if selection.index == index:
            return
        selection.index = index
        self.event_bus.emit(EVENT_SELECTION_CHANGED, index=index)

    def _move_selection(self, step: int) -> None:
        count = len(get_roster(self.world))
        if count == 0:
            return
        current = get_selection(self.world).index
        if current is None:
            target = 0 if step > 0 else count - 1
        else:
            target = max(0, min(count - 1, current + step))
        self.select(target)

    def _keep_selection_visible(self) -> None:
        selection = get_selection(self.world)
        geometry = compute_list_geometry(*self._size_provider())
        selection.first_row = scroll_to_include(
            selection.first_row,
            selection.index,
            geometry.visible_rows,
            len(get_roster(self.world)),
        )

    # Event handlers -----------------------------------------------------

    def _on_mouse_press(self, sender, **payload) -> None:
        if payload.get("layer") != InputLayer.LIST:
            return
        self.handle_mouse_press(payload["x"], payload["y"], payload["button"])

    def _on_key_press(self, sender, **payload) -> None:
        if payload.get("layer") != InputLayer.LIST:
            return
        self.handle_key_press(payload["symbol"], payload.get("modifiers", 0))

    def _on_selection_changed(self, sender, **payload) -> None:
        self._keep_selection_visible()

    def _on_roster_changed(self, sender, **payload) -> None:
        self._keep_selection_visible()
