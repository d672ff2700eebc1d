from __future__ import annotations

from esper import World

from roster.components.app_state import AppMode, AppState
from roster.events.bus import EVENT_APP_MODE_CHANGED, EventBus


def get_app_state(world: World) -> AppState | None:
    for _, state in world.get_component(AppState):
        return state
    return None


def set_app_mode(world: World, event_bus: EventBus | None, mode: AppMode) -> None:
    """Update the global app mode and emit a change event when it differs."""

    state = get_app_state(world)
    previous_mode: AppMode | None = None
    if state is None:
        state = AppState(mode=mode)
        world.create_entity(state)
    else:
        previous_mode = state.mode
        if previous_mode == mode:
            return
        state.mode = mode
    if event_bus is not None:
        event_bus.emit(
            EVENT_APP_MODE_CHANGED,
            previous_mode=previous_mode,
            new_mode=mode,
        )


def app_mode(world: World) -> AppMode | None:
    state = get_app_state(world)
    return state.mode if state is not None else None
