import pytest

from roster.components.action_button import RosterAction
from roster.components.notice import NoticeSeverity
from roster.events.bus import (
    EVENT_EDITOR_OPEN_REQUEST,
    EVENT_NOTICE,
    EVENT_ROSTER_ACTION,
    EVENT_ROSTER_CHANGED,
)
from roster.utils.singletons import get_editor_session, get_roster, get_selection
from tests.helpers import build_app, capture, make_record


@pytest.mark.parametrize(
    "action, message",
    [
        (RosterAction.CLONE, "Please select a character to clone."),
        (RosterAction.EDIT, "Please select a character to edit."),
        (RosterAction.DELETE, "Please select a character to delete."),
    ],
)
def test_actions_needing_a_selection_show_a_notice(action, message):
    app = build_app([make_record("Aria")])
    notices = capture(app.bus, EVENT_NOTICE)

    app.bus.emit(EVENT_ROSTER_ACTION, action=action)

    assert notices == [{"message": message, "severity": NoticeSeverity.INFO}]
    assert [r.name for r in get_roster(app.world).records] == ["Aria"]
    assert get_editor_session(app.world) is None


def test_clone_appends_independent_copy_and_selects_it():
    app = build_app([make_record("Aria"), make_record("Borin")])
    app.list_input.select(0)

    new_index = app.roster.clone_selected()

    records = get_roster(app.world).records
    assert new_index == 2
    assert records[2].name == "Aria (Copy)"
    assert records[2].abilities is not records[0].abilities
    assert get_selection(app.world).index == 2


def test_delete_removes_selected_and_clears_selection():
    app = build_app([make_record("Aria"), make_record("Borin")])
    app.list_input.select(0)
    changes = capture(app.bus, EVENT_ROSTER_CHANGED)

    removed = app.roster.delete_selected()

    assert removed.name == "Aria"
    assert [r.name for r in get_roster(app.world).records] == ["Borin"]
    assert get_selection(app.world).index is None
    assert changes[-1] == {"reason": "delete", "count": 1, "index": 0}


def test_create_requests_editor_with_default_record():
    app = build_app()
    requests = capture(app.bus, EVENT_EDITOR_OPEN_REQUEST)

    app.bus.emit(EVENT_ROSTER_ACTION, action=RosterAction.CREATE)

    assert requests[0]["target_index"] is None
    assert requests[0]["record"].name == "New Character"
    assert get_editor_session(app.world) is not None


def test_edit_requests_editor_for_selected_position():
    app = build_app([make_record("Aria"), make_record("Borin")])
    app.list_input.select(1)
    requests = capture(app.bus, EVENT_EDITOR_OPEN_REQUEST)

    app.roster.edit_selected()

    assert requests[0]["target_index"] == 1
    assert requests[0]["record"].name == "Borin"


def test_commit_replaces_exactly_the_target_among_equal_records():
    twins = [make_record("Twin"), make_record("Twin")]
    app = build_app(twins)

    app.roster.commit(make_record("Renamed"), 1)

    records = get_roster(app.world).records
    assert records[0] is twins[0]
    assert records[1].name == "Renamed"
    assert get_selection(app.world).index == 1


def test_commit_without_target_appends():
    app = build_app([make_record("Aria")])

    index = app.roster.commit(make_record("Borin"), None)

    assert index == 1
    assert [r.name for r in get_roster(app.world).records] == ["Aria", "Borin"]


def test_commit_to_vanished_position_is_dropped_with_error():
    app = build_app([make_record("Aria")])
    notices = capture(app.bus, EVENT_NOTICE)

    assert app.roster.commit(make_record("Ghost"), 4) is None

    assert [r.name for r in get_roster(app.world).records] == ["Aria"]
    assert notices[-1]["severity"] is NoticeSeverity.ERROR
