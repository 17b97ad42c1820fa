import json
from pathlib import Path

import pytest

from conftest import FakeSession

from frontend import commands
from persistence.config import BlockConfig
from webservice.fieldnames import PreferenceNames as Pn


@pytest.fixture
def config(tmp_path: Path, monkeypatch) -> BlockConfig:
    config = BlockConfig({
        "preferences_file": str(tmp_path / "prefs.json"),
        "highlight_prefix": "CS",
        "default_max_courses": 10,
    })
    monkeypatch.setattr(commands, "load_config", lambda: config)
    return config


@pytest.fixture
def navigation(tmp_path: Path) -> Path:
    tree = {
        "key": "home",
        "type": 1,
        "action": "https://moodle.example.org/",
        "children": [{
            "key": "mycourses",
            "forceopen": True,
            "children": [
                {"key": 1, "type": 20, "text": "Algebra", "shorttext": "MATH-1", "action": "u1"},
                {"key": 2, "type": 20, "text": "Compilers", "shorttext": "CS-2", "action": "u2", "hidden": True},
            ],
        }],
    }
    path = tmp_path / "navigation.json"
    path.write_text(json.dumps(tree))
    return path


def test_courses_prints_sorted_list(config, navigation, capsys) -> None:
    commands.main(["courses", "--navigation", str(navigation)])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("* Compilers")
    assert lines[0].endswith("(hidden)")
    assert lines[1].startswith("  Algebra")
    assert lines[2] == "2 courses"


def test_limit_and_order_are_saved(config, navigation, capsys, tmp_path: Path) -> None:
    commands.main(["order", "1", "2"])
    commands.main(["limit", "1"])
    saved = json.loads((tmp_path / "prefs.json").read_text())
    assert saved == {Pn.course_order: "[1, 2]", Pn.number_of_courses: "1"}

    commands.main(["courses", "-n", str(navigation)])
    course_line, count_line = capsys.readouterr().out.splitlines()[-2:]
    assert course_line.startswith("  Algebra ")
    assert course_line.endswith(" id:    1 short: MATH-1")
    assert count_line == "1 courses"


def test_negative_limit_is_rejected(config) -> None:
    with pytest.raises(SystemExit):
        commands.main(["limit", "-3"])


def test_without_sub_command_help_is_shown(capsys) -> None:
    with pytest.raises(SystemExit):
        commands.main([])
    assert "usage" in capsys.readouterr().out


class SiteInfoSession(FakeSession):
    def __init__(self, moodle_url, token=None):
        super().__init__(enrolled=[{"id": 6, "fullname": "Statistics", "shortname": "STAT", "visible": 1}])
        self.token = token

    def core_webservice_get_site_info(self):
        self.calls.append(("core_webservice_get_site_info",))
        return {"userid": 58, "username": "student", "functions": []}


def test_user_id_is_looked_up_from_site_info(tmp_path: Path, monkeypatch, capsys) -> None:
    sessions = []

    def make_session(moodle_url, token=None):
        sessions.append(SiteInfoSession(moodle_url, token))
        return sessions[-1]

    config = BlockConfig({
        "url": "moodle.example.org",
        "token": "secret",
        "preferences_file": str(tmp_path / "prefs.json"),
    })
    monkeypatch.setattr(commands, "load_config", lambda: config)
    monkeypatch.setattr(commands, "MoodleSession", make_session)

    commands.main(["courses"])

    assert config.user_id == 58
    assert sessions[0].calls == [("core_webservice_get_site_info",), ("core_enrol_get_users_courses", 58)]
    assert capsys.readouterr().out.splitlines()[-1] == "1 courses"


def test_configured_user_id_skips_site_info(tmp_path: Path, monkeypatch) -> None:
    sessions = []

    def make_session(moodle_url, token=None):
        sessions.append(SiteInfoSession(moodle_url, token))
        return sessions[-1]

    config = BlockConfig({"url": "moodle.example.org", "token": "secret", "user_id": 7})
    monkeypatch.setattr(commands, "load_config", lambda: config)
    monkeypatch.setattr(commands, "MoodleSession", make_session)

    commands.main(["limit", "4"])

    assert sessions[0].calls == [("core_user_set_user_preferences", [(Pn.number_of_courses, "4", 7)])]
