from roster.components.app_state import InputLayer
from roster.components.action_button import ActionButton, RosterAction
from roster.events.bus import (
    EVENT_KEY_PRESS_RAW,
    EVENT_MOUSE_PRESS_RAW,
    EVENT_ROSTER_ACTION,
    EVENT_TEXT_INPUT_RAW,
)
from roster.components.editor_session import EditorField
from roster.ui import keys
from roster.ui.layout import compute_notice_layout
from roster.utils.singletons import active_notice, get_editor_session, get_roster, get_selection
from tests.helpers import HEIGHT, WIDTH, build_app, capture, make_record, rect_center


def _button_center(world, action):
    for _, button in world.get_component(ActionButton):
        if button.action == action:
            return button.x, button.y
    raise AssertionError(f"No button for {action}")


def test_layer_priority_is_notice_then_editor_then_list():
    app = build_app([make_record("Aria")])
    assert app.router.active_layer() == InputLayer.LIST

    app.roster.create()
    assert app.router.active_layer() == InputLayer.EDITOR

    app.notices.post("hello")
    assert app.router.active_layer() == InputLayer.NOTICE


def test_list_button_click_emits_action():
    app = build_app([make_record("Aria")])
    actions = capture(app.bus, EVENT_ROSTER_ACTION)
    x, y = _button_center(app.world, RosterAction.CREATE)

    app.bus.emit(EVENT_MOUSE_PRESS_RAW, x=x, y=y, button=1, modifiers=0)

    assert actions == [{"action": RosterAction.CREATE}]
    assert get_editor_session(app.world) is not None


def test_notice_click_does_not_reach_the_list():
    app = build_app([make_record("Aria")])
    x, y = _button_center(app.world, RosterAction.CLONE)
    app.bus.emit(EVENT_MOUSE_PRESS_RAW, x=x, y=y, button=1, modifiers=0)
    # Clone without a selection raised a notice.
    assert active_notice(app.world) is not None
    actions = capture(app.bus, EVENT_ROSTER_ACTION)

    x, y = rect_center(compute_notice_layout(WIDTH, HEIGHT).ok_button)
    app.bus.emit(EVENT_MOUSE_PRESS_RAW, x=x, y=y, button=1, modifiers=0)
    x, y = _button_center(app.world, RosterAction.DELETE)
    app.bus.emit(EVENT_MOUSE_PRESS_RAW, x=x, y=y, button=1, modifiers=0)

    assert actions == [{"action": RosterAction.DELETE}]
    assert len(get_roster(app.world)) == 1


def test_enter_on_notice_does_not_confirm_editor():
    app = build_app([make_record("Aria")])
    app.roster.create()
    session = get_editor_session(app.world)[1]
    session.buffers[EditorField.NAME] = ""
    app.bus.emit(EVENT_KEY_PRESS_RAW, symbol=keys.ENTER, modifiers=0)
    # Validation failed, so a notice now sits above the editor.
    assert active_notice(app.world) is not None

    app.bus.emit(EVENT_KEY_PRESS_RAW, symbol=keys.ENTER, modifiers=0)

    assert active_notice(app.world) is None
    assert get_editor_session(app.world) is not None
    assert len(get_roster(app.world)) == 1


def test_text_goes_to_editor_only_while_open():
    app = build_app([make_record("Aria")])
    app.bus.emit(EVENT_TEXT_INPUT_RAW, text="x")
    app.roster.create()
    session = get_editor_session(app.world)[1]
    session.buffers[EditorField.NAME] = ""

    app.bus.emit(EVENT_TEXT_INPUT_RAW, text="Zed")

    assert session.buffers[EditorField.NAME] == "Zed"


def test_list_keys_are_ignored_while_editor_open():
    app = build_app([make_record("Aria"), make_record("Borin")])
    app.roster.create()

    app.bus.emit(EVENT_KEY_PRESS_RAW, symbol=keys.DOWN, modifiers=0)

    assert get_selection(app.world).index is None
