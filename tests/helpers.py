from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Iterable, List

from roster.components.character_record import CharacterClass, CharacterRecord
from roster.events.bus import EventBus
from roster.systems.editor_system import EditorSystem
from roster.systems.input_router_system import InputRouterSystem
from roster.systems.list_input_system import ListInputSystem
from roster.systems.notice_system import NoticeSystem
from roster.systems.persistence_system import PersistenceSystem
from roster.systems.roster_system import RosterSystem
from roster.ui.factory import spawn_list_view
from roster.world import create_world

WIDTH = 900
HEIGHT = 600


def make_record(name: str = "Aria", **overrides) -> CharacterRecord:
    """A valid record with a couple of abilities; keyword arguments override fields."""

    fields = dict(
        name=name,
        level=5,
        health=120,
        mana=80,
        abilities=["Fireball", "Blink"],
        weapon_type="Staff",
        character_class=CharacterClass.MAGE,
        armor_type="Magic",
    )
    fields.update(overrides)
    return CharacterRecord(**fields)


def build_app(records: Iterable[CharacterRecord] = (), *, data_dir: Path | None = None) -> SimpleNamespace:
    """Wire the world and every non-rendering system the way the window does."""

    bus = EventBus()
    world = create_world(records=list(records))
    size_provider = lambda: (WIDTH, HEIGHT)
    app = SimpleNamespace(world=world, bus=bus)
    app.router = InputRouterSystem(world, bus)
    app.notices = NoticeSystem(world, bus, size_provider=size_provider)
    app.roster = RosterSystem(world, bus)
    app.editor = EditorSystem(world, bus, size_provider=size_provider)
    app.list_input = ListInputSystem(world, bus, size_provider=size_provider)
    app.persistence = PersistenceSystem(world, bus, data_dir=data_dir) if data_dir is not None else None
    spawn_list_view(world, WIDTH, HEIGHT)
    return app


def capture(bus: EventBus, name: str) -> List[dict]:
    """Record the payload of every ``name`` event emitted on ``bus``."""

    received: List[dict] = []

    def handler(sender, **payload):
        received.append(payload)

    bus.subscribe(name, handler)
    return received


def rect_center(rect) -> tuple[float, float]:
    left, bottom, width, height = rect
    return left + width / 2, bottom + height / 2
