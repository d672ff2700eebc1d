from __future__ import annotations

from typing import Any

from esper import World

from roster.components.app_state import AppMode, InputLayer
from roster.events.bus import (
    EVENT_KEY_PRESS,
    EVENT_KEY_PRESS_RAW,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_PRESS_RAW,
    EVENT_TEXT_INPUT,
    EVENT_TEXT_INPUT_RAW,
    EventBus,
)
from roster.utils.app_state import app_mode
from roster.utils.singletons import notice_blocking


class InputRouterSystem:
    """Bridges raw window input to events tagged with the layer that owns it.

    The layer is decided once, before any handler runs, so a click that closes
    a notice is never seen by the list or editor underneath it.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_MOUSE_PRESS_RAW, self._on_mouse_press_raw)
        self.event_bus.subscribe(EVENT_KEY_PRESS_RAW, self._on_key_press_raw)
        self.event_bus.subscribe(EVENT_TEXT_INPUT_RAW, self._on_text_input_raw)

    def active_layer(self) -> InputLayer:
        if notice_blocking(self.world):
            return InputLayer.NOTICE
        if app_mode(self.world) == AppMode.EDITOR:
            return InputLayer.EDITOR
        return InputLayer.LIST

    def _on_mouse_press_raw(self, sender: Any, **payload: Any) -> None:
        x = payload.get("x")
        y = payload.get("y")
        button = payload.get("button")
        if x is None or y is None or button is None:
            return
        try:
            xf = float(x)
            yf = float(y)
            button_int = int(button)
        except (TypeError, ValueError):
            return
        self.event_bus.emit(
            EVENT_MOUSE_PRESS,
            x=xf,
            y=yf,
            button=button_int,
            layer=self.active_layer(),
        )

    def _on_key_press_raw(self, sender: Any, **payload: Any) -> None:
        symbol = payload.get("symbol")
        if symbol is None:
            return
        try:
            symbol_int = int(symbol)
            modifiers_int = int(payload.get("modifiers") or 0)
        except (TypeError, ValueError):
            return
        self.event_bus.emit(
            EVENT_KEY_PRESS,
            symbol=symbol_int,
            modifiers=modifiers_int,
            layer=self.active_layer(),
        )

    def _on_text_input_raw(self, sender: Any, **payload: Any) -> None:
        text = payload.get("text")
        if not isinstance(text, str) or not text:
            return
        self.event_bus.emit(EVENT_TEXT_INPUT, text=text, layer=self.active_layer())
