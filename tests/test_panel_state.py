from __future__ import annotations

import json

import settings
from frontend.state import PanelState


def _write(path, section: dict) -> None:
    path.write_text(json.dumps({"largetextpaste": section}), encoding="utf-8")


def test_missing_file_starts_empty_and_save_creates_it(tmp_path) -> None:
    path = tmp_path / "config.json"
    state = PanelState(path)
    state.load()

    assert state.data == {}
    assert not state.can_save

    state.update_section("largetextpaste", {"apikey": "k", "sniplen": 30})
    assert state.can_save
    assert state.save()

    assert json.loads(path.read_text(encoding="utf-8")) == {"largetextpaste": {"apikey": "k", "sniplen": 30}}
    assert not state.dirty


def test_values_a_rehash_would_reject_block_saving(tmp_path) -> None:
    path = tmp_path / "config.json"
    _write(path, {"apikey": "k"})
    state = PanelState(path)
    state.load()

    state.update_section("largetextpaste", {"apikey": "k", "service_url": "ftp://paste.example"})

    problem, _ = state.check()
    assert "service_url" in problem
    assert not state.can_save
    assert not state.save()
    assert state.save_error.startswith("not saved")
    assert json.loads(path.read_text(encoding="utf-8")) == {"largetextpaste": {"apikey": "k"}}


def test_field_errors_block_until_cleared(tmp_path) -> None:
    state = PanelState(tmp_path / "config.json")
    state.load()
    state.update_section("largetextpaste", {"apikey": "k"})

    state.set_field_error("paste-sniplen", "sniplen must be a non-negative integer")
    assert state.check()[0] == "sniplen must be a non-negative integer"
    assert not state.can_save

    state.set_field_error("paste-sniplen", None)
    assert state.can_save


def test_warnings_match_rehash_warnings(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(settings.API_KEY_ENV, "")
    path = tmp_path / "config.json"
    _write(path, {"sniplen": 400, "cutofflen": 300})
    state = PanelState(path)
    state.load()

    problem, warnings = state.check()

    assert problem is None
    assert any("apikey is not set" in warning for warning in warnings)
    assert any("larger than cutofflen" in warning for warning in warnings)


def test_unreadable_file_is_reported_not_raised(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_bytes(b"\xfe{ broken")
    state = PanelState(path)

    state.load()

    assert state.data is None
    assert "UTF-8" in state.load_error
    assert not state.can_save
