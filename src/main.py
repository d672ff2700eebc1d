"""Entry point for the game character manager.

Sets up the ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color

from roster.constants import EDITOR_HEIGHT, EDITOR_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from roster.events.bus import (
    EventBus,
    EVENT_KEY_PRESS_RAW,
    EVENT_MOUSE_PRESS_RAW,
    EVENT_TEXT_INPUT_RAW,
)
from roster.rendering.context import BACKGROUND
from roster.systems.editor_system import EditorSystem
from roster.systems.input_router_system import InputRouterSystem
from roster.systems.list_input_system import ListInputSystem
from roster.systems.notice_system import NoticeSystem
from roster.systems.persistence_system import PersistenceSystem
from roster.systems.render import RenderSystem
from roster.systems.roster_system import RosterSystem
from roster.ui.factory import spawn_list_view
from roster.world import create_world


class RosterWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True)
        self.set_minimum_size(EDITOR_WIDTH, EDITOR_HEIGHT)
        self.event_bus = EventBus()
        self.world = create_world()
        size_provider = lambda: (self.width, self.height)

        # Input routing first so routed events exist before their consumers subscribe.
        self.input_router_system = InputRouterSystem(self.world, self.event_bus)
        self.notice_system = NoticeSystem(self.world, self.event_bus, size_provider=size_provider)

        # Roster and editor systems
        self.roster_system = RosterSystem(self.world, self.event_bus)
        self.editor_system = EditorSystem(self.world, self.event_bus, size_provider=size_provider)
        self.list_input_system = ListInputSystem(self.world, self.event_bus, size_provider=size_provider)
        self.persistence_system = PersistenceSystem(self.world, self.event_bus, load_on_start=True)

        spawn_list_view(self.world, self.width, self.height)
        self.render_system = RenderSystem(self.world, self)
        set_background_color(BACKGROUND)

    def on_resize(self, width: int, height: int):
        spawn_list_view(self.world, width, height)
        return super().on_resize(width, height)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(
            EVENT_MOUSE_PRESS_RAW,
            x=x,
            y=y,
            button=button,
            modifiers=modifiers,
        )

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS_RAW, symbol=symbol, modifiers=modifiers)

    def on_text(self, text: str):
        self.event_bus.emit(EVENT_TEXT_INPUT_RAW, text=text)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    RosterWindow()
    run()


if __name__ == "__main__":
    main()
