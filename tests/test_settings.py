from __future__ import annotations

import json

import pytest

import settings
from core.config import DEFAULT_SERVICE_URL, OffloadConfig
from core.errors import ConfigError


def test_defaults_when_section_is_missing(monkeypatch) -> None:
    monkeypatch.delenv(settings.API_KEY_ENV, raising=False)
    config = settings.offload_config_from({})
    assert config == OffloadConfig(
        service_url=DEFAULT_SERVICE_URL,
        api_key="",
        snippet_length=60,
        cutoff_length=300,
        timeout_seconds=10.0,
    )


def test_reads_section_values() -> None:
    raw = {
        "largetextpaste": {
            "sniplen": "40",
            "cutofflen": 200,
            "apikey": " abc123 ",
            "service_url": "https://paste.example/api",
            "timeout": 2.5,
        }
    }
    config = settings.offload_config_from(raw)
    assert config.snippet_length == 40
    assert config.cutoff_length == 200
    assert config.api_key == "abc123"
    assert config.service_url == "https://paste.example/api"
    assert config.timeout_seconds == 2.5


def test_api_key_falls_back_to_environment(monkeypatch) -> None:
    monkeypatch.setenv(settings.API_KEY_ENV, "env-key")
    config = settings.offload_config_from({"largetextpaste": {"apikey": ""}})
    assert config.api_key == "env-key"


def test_config_key_wins_over_environment(monkeypatch) -> None:
    monkeypatch.setenv(settings.API_KEY_ENV, "env-key")
    config = settings.offload_config_from({"largetextpaste": {"apikey": "file-key"}})
    assert config.api_key == "file-key"


@pytest.mark.parametrize(
    "section",
    [
        {"sniplen": "sixty"},
        {"cutofflen": True},
        {"timeout": "soon"},
        {"apikey": 123},
    ],
)
def test_invalid_values_raise_config_error(section) -> None:
    with pytest.raises(ConfigError):
        settings.offload_config_from({"largetextpaste": section})


def test_section_must_be_an_object() -> None:
    with pytest.raises(ConfigError):
        settings.offload_config_from({"largetextpaste": ["sniplen", 60]})


def test_json_source_reads_file(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "largetextpaste": {"sniplen": 10, "cutofflen": 20, "apikey": "k"},
                "logging": {"enabled": True, "level": "DEBUG"},
            }
        ),
        encoding="utf-8",
    )
    source = settings.JsonConfigSource(str(path))

    config = source.read_offload_config()

    assert (config.snippet_length, config.cutoff_length, config.api_key) == (10, 20, "k")
    assert source.read_logging() == {"enabled": True, "level": "DEBUG"}


def test_json_source_missing_file_uses_defaults(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv(settings.API_KEY_ENV, raising=False)
    source = settings.JsonConfigSource(str(tmp_path / "absent.json"))

    assert source.read_offload_config() == OffloadConfig()
    assert source.read_logging() == {}


def test_broken_json_is_config_error(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{ not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        settings.JsonConfigSource(str(path)).read_offload_config()


def test_non_utf8_config_is_config_error(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_bytes(b'{"largetextpaste": {"apikey": "\xff"}}')
    source = settings.JsonConfigSource(str(path))

    with pytest.raises(ConfigError, match="UTF-8"):
        source.read_offload_config()
    assert source.read_logging() == {}


def test_directory_in_place_of_config_is_config_error(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.mkdir()

    with pytest.raises(ConfigError, match="cannot read config"):
        settings.load_json_config(str(path))
