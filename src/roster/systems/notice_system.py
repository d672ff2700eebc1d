"""Blocking message boxes raised by the other systems."""
from __future__ import annotations

import logging
from typing import Callable, Tuple

from esper import World

from roster.components.app_state import InputLayer
from roster.components.notice import NoticeDialog, NoticeSeverity
from roster.constants import WINDOW_HEIGHT, WINDOW_WIDTH
from roster.events.bus import (
    EVENT_KEY_PRESS,
    EVENT_MOUSE_PRESS,
    EVENT_NOTICE,
    EVENT_NOTICE_DISMISSED,
    EventBus,
)
from roster.ui import keys
from roster.ui.layout import compute_notice_layout, point_in_rect
from roster.utils.singletons import active_notice

logger = logging.getLogger(__name__)

_DEFAULT_TITLES = {
    NoticeSeverity.INFO: "Information",
    NoticeSeverity.SUCCESS: "Success",
    NoticeSeverity.ERROR: "Error",
}


class NoticeSystem:
    """Queues notices and dismisses the visible one on OK, Enter or Escape."""

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
        self._sequence = 0
        self.event_bus.subscribe(EVENT_NOTICE, self._on_notice)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self._on_mouse_press)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self._on_key_press)

    def post(self, message: str, *, title: str | None = None, severity: NoticeSeverity = NoticeSeverity.INFO) -> int:
        self._sequence += 1
        if severity is NoticeSeverity.ERROR:
            logger.warning("Error notice: %s", message)
        else:
            logger.info("Notice: %s", message)
        return self.world.create_entity(
            NoticeDialog(
                message=message,
                title=title or _DEFAULT_TITLES[severity],
                severity=severity,
                sequence=self._sequence,
            )
        )

    def dismiss(self) -> bool:
        """Close the visible notice; returns False when there was none."""
        current = active_notice(self.world)
        if current is None:
            return False
        entity, _ = current
        self.world.delete_entity(entity, immediate=True)
        remaining = len(list(self.world.get_component(NoticeDialog)))
        self.event_bus.emit(EVENT_NOTICE_DISMISSED, notice_entity=entity, remaining=remaining)
        return True

    def handle_mouse_press(self, x: float, y: float, button: int) -> None:
        if button != 1 or active_notice(self.world) is None:
            return
        layout = compute_notice_layout(*self._size_provider())
        if point_in_rect(x, y, layout.ok_button):
            self.dismiss()

    def handle_key_press(self, symbol: int, modifiers: int) -> None:
        if symbol in keys.CONFIRM_KEYS or symbol == keys.ESCAPE:
            self.dismiss()

    def _on_notice(self, sender, **payload) -> None:
        message = payload.get("message")
        if not message:
            return
        severity = payload.get("severity")
        if not isinstance(severity, NoticeSeverity):
            severity = NoticeSeverity.INFO
        self.post(str(message), title=payload.get("title"), severity=severity)

    def _on_mouse_press(self, sender, **payload) -> None:
        if payload.get("layer") != InputLayer.NOTICE:
            return
        self.handle_mouse_press(payload["x"], payload["y"], payload["button"])

    def _on_key_press(self, sender, **payload) -> None:
        if payload.get("layer") != InputLayer.NOTICE:
            return
        self.handle_key_press(payload["symbol"], payload.get("modifiers", 0))
