import json
import logging
from pathlib import Path

from conftest import FakeSession

from persistence.preferences import JsonFilePreferenceStore, MemoryPreferenceStore, WebServicePreferenceStore


def test_memory_store() -> None:
    store = MemoryPreferenceStore({"a": "1"})
    assert store.get("a") == "1"
    assert store.get("b") is None
    assert store.get("b", "x") == "x"
    store.set("b", "2")
    assert store.get("b") == "2"
    assert store.order_format == "json"


def test_json_file_store_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "prefs.json"
    store = JsonFilePreferenceStore(path)
    assert store.get("limit") is None

    store.set("limit", "5")
    store.set("order", "[2, 1]")

    assert json.loads(path.read_text()) == {"limit": "5", "order": "[2, 1]"}
    assert JsonFilePreferenceStore(path).get("order") == "[2, 1]"


def test_json_file_store_recovers_from_broken_file(tmp_path: Path, caplog) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("{broken")
    store = JsonFilePreferenceStore(path)
    with caplog.at_level(logging.WARNING, logger="persistence.preferences"):
        assert store.get("limit", "default") == "default"
    store.set("limit", "3")
    assert store.get("limit") == "3"


def test_web_service_store() -> None:
    session = FakeSession(preferences={"limit": "8"})
    store = WebServicePreferenceStore(session, 42)
    assert store.order_format == "php"
    assert store.get("limit") == "8"
    assert store.get("missing", "fallback") == "fallback"

    store.set("limit", "9")
    assert session.calls[-1] == ("core_user_set_user_preferences", [("limit", "9", 42)])
    assert store.get("limit") == "9"
