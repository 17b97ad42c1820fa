from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from overview.models import Course  # noqa: E402


class FakeResponse:
    def __init__(self, text: str) -> None:
        self.text = text


class FakeSession:
    """Stands in for MoodleSession, records web service calls."""

    url = "https://moodle.example.org"

    def __init__(self, enrolled: list[dict] | None = None, preferences: dict | None = None) -> None:
        self.enrolled = enrolled or []
        self.preferences = dict(preferences or {})
        self.calls: list[tuple] = []

    def core_enrol_get_users_courses(self, user_id):
        self.calls.append(("core_enrol_get_users_courses", user_id))
        return self.enrolled

    def core_user_get_user_preferences(self, name=None, user_id=0):
        self.calls.append(("core_user_get_user_preferences", name, user_id))
        return {
            "preferences": [{"name": name, "value": self.preferences.get(name)}],
            "warnings": [],
        }

    def core_user_set_user_preferences(self, preferences):
        self.calls.append(("core_user_set_user_preferences", preferences))
        for name, value, _user_id in preferences:
            self.preferences[name] = value
        return {"saved": [{"name": name, "userid": user_id} for name, _, user_id in preferences], "warnings": []}


def make_course(course_id, short_name: str = "", full_name: str | None = None, current: bool = False) -> Course:
    course = Course.create(
        course_id,
        full_name or f"Course {course_id}",
        short_name or f"C{course_id}",
        f"https://moodle.example.org/course/view.php?id={course_id}",
    )
    if current:
        return Course(course.raw, current=True)
    return course


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()
