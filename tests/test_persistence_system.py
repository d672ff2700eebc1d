from roster.components.action_button import RosterAction
from roster.components.notice import NoticeSeverity
from roster.events.bus import EVENT_NOTICE, EVENT_ROSTER_ACTION, EVENT_ROSTER_CHANGED
from roster.persistence import PersistenceFormat, save_json
from roster.systems.persistence_system import PersistenceSystem
from roster.utils.singletons import active_notice, get_roster, get_selection
from tests.helpers import build_app, capture, make_record


def test_save_action_writes_fixed_file_and_reports_success(tmp_path):
    app = build_app([make_record("Aria")], data_dir=tmp_path)
    notices = capture(app.bus, EVENT_NOTICE)

    app.bus.emit(EVENT_ROSTER_ACTION, action=RosterAction.SAVE_JSON)

    assert (tmp_path / "characters.json").exists()
    assert notices[-1]["message"] == "Characters saved to characters.json."
    assert notices[-1]["severity"] is NoticeSeverity.SUCCESS


def test_save_then_load_xml_restores_roster(tmp_path):
    records = [make_record("Aria"), make_record("Borin")]
    app = build_app(records, data_dir=tmp_path)
    app.persistence.save(PersistenceFormat.XML)

    get_roster(app.world).reload([])
    result = app.persistence.load(PersistenceFormat.XML)

    assert result.ok
    assert get_roster(app.world).records == records
    _, notice = active_notice(app.world)
    assert notice.message == "Characters saved to characters.xml."


def test_load_replaces_roster_and_clears_selection(tmp_path):
    save_json(tmp_path / "characters.json", [make_record("Loaded")])
    app = build_app([make_record("A"), make_record("B")], data_dir=tmp_path)
    app.list_input.select(1)
    changes = capture(app.bus, EVENT_ROSTER_CHANGED)
    notices = capture(app.bus, EVENT_NOTICE)

    app.bus.emit(EVENT_ROSTER_ACTION, action=RosterAction.LOAD_JSON)

    assert [r.name for r in get_roster(app.world).records] == ["Loaded"]
    assert get_selection(app.world).index is None
    assert changes[-1]["reason"] == "load"
    assert notices[-1]["message"] == "Loaded 1 character from characters.json."


def test_missing_file_leaves_roster_unchanged(tmp_path):
    app = build_app([make_record("Keep")], data_dir=tmp_path)
    notices = capture(app.bus, EVENT_NOTICE)

    result = app.persistence.load(PersistenceFormat.XML)

    assert result.missing
    assert [r.name for r in get_roster(app.world).records] == ["Keep"]
    assert notices[-1]["message"] == "File characters.xml not found."
    assert notices[-1]["severity"] is NoticeSeverity.INFO


def test_malformed_file_leaves_roster_unchanged(tmp_path):
    (tmp_path / "characters.json").write_text("not json", encoding="utf-8")
    app = build_app([make_record("Keep")], data_dir=tmp_path)
    notices = capture(app.bus, EVENT_NOTICE)

    result = app.persistence.load(PersistenceFormat.JSON)

    assert not result.ok
    assert [r.name for r in get_roster(app.world).records] == ["Keep"]
    assert notices[-1]["severity"] is NoticeSeverity.ERROR
    assert notices[-1]["message"].startswith("Error loading JSON.")


def test_startup_load_is_quiet_when_file_absent(tmp_path):
    app = build_app(data_dir=tmp_path)
    notices = capture(app.bus, EVENT_NOTICE)

    PersistenceSystem(app.world, app.bus, data_dir=tmp_path, load_on_start=True)

    assert notices == []
    assert len(get_roster(app.world)) == 0


def test_startup_load_restores_saved_roster(tmp_path):
    save_json(tmp_path / "characters.json", [make_record("Aria"), make_record("Borin")])
    app = build_app(data_dir=tmp_path)
    notices = capture(app.bus, EVENT_NOTICE)

    app.persistence.load_startup()

    assert [r.name for r in get_roster(app.world).records] == ["Aria", "Borin"]
    assert notices == []


def test_failed_save_reports_error_and_keeps_previous_file(tmp_path):
    app = build_app([make_record("Aria")], data_dir=tmp_path)
    app.persistence.save(PersistenceFormat.JSON)
    before = (tmp_path / "characters.json").read_bytes()
    get_roster(app.world).records[0].name = "A\ud800"
    notices = capture(app.bus, EVENT_NOTICE)

    app.bus.emit(EVENT_ROSTER_ACTION, action=RosterAction.SAVE_JSON)

    assert notices[-1]["severity"] is NoticeSeverity.ERROR
    assert notices[-1]["message"].startswith("Error saving JSON. Could not write characters.json:")
    assert (tmp_path / "characters.json").read_bytes() == before
