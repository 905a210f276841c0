"""Configuration loading for largetextpaste.

All user-editable settings (paste offload, logging) live in a single JSON
file for quick edits without touching Python. The API key may also come
from the environment so it stays out of the repo.
"""

from __future__ import annotations

import json
import os
from typing import Any, Optional

from dotenv import load_dotenv

from core.config import (
    DEFAULT_CUTOFF_LENGTH,
    DEFAULT_SERVICE_URL,
    DEFAULT_SNIPPET_LENGTH,
    DEFAULT_TIMEOUT_SECONDS,
    OffloadConfig,
)
from core.errors import ConfigError

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# The config path can be pointed elsewhere for daemons with their own layout.
CONFIG_PATH = os.getenv("LARGETEXTPASTE_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))

# Name of the config section the offload module reads on every reload.
SECTION = "largetextpaste"

# Environment fallback for the paste API developer key.
API_KEY_ENV = "PASTEBIN_API_KEY"


def load_json_config(path: Optional[str] = None) -> dict:
    """Load config.json with a flat, user-friendly schema."""

    path = path or CONFIG_PATH
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as handle:
            loaded = json.load(handle)
    except FileNotFoundError:
        raise
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: {exc.msg} (line {exc.lineno})") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"{path}: not valid UTF-8 at byte {exc.start}") from exc
    except OSError as exc:
        raise ConfigError(f"{path}: cannot read config ({exc.strerror or exc})") from exc
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path}: config root must be an object")
    return loaded


def _get_int(section: dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    # bool is an int subclass but never a sensible length.
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from exc


def _get_float(section: dict[str, Any], key: str, default: float) -> float:
    value = section.get(key, default)
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be a number, got {value!r}") from exc


def offload_config_from(raw: dict[str, Any]) -> OffloadConfig:
    """Build an OffloadConfig from the raw config mapping.

    Missing keys fall back to the documented defaults; the API key falls back
    to ``PASTEBIN_API_KEY`` from the environment or a ``.env`` file.
    """

    section = raw.get(SECTION) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{SECTION}' must be an object")

    api_key = section.get("apikey") or ""
    if not isinstance(api_key, str):
        raise ConfigError("apikey must be a string")
    if not api_key:
        load_dotenv()
        api_key = os.getenv(API_KEY_ENV, "")

    return OffloadConfig(
        service_url=str(section.get("service_url") or DEFAULT_SERVICE_URL),
        api_key=api_key.strip(),
        snippet_length=_get_int(section, "sniplen", DEFAULT_SNIPPET_LENGTH),
        cutoff_length=_get_int(section, "cutofflen", DEFAULT_CUTOFF_LENGTH),
        timeout_seconds=_get_float(section, "timeout", DEFAULT_TIMEOUT_SECONDS),
    )


class JsonConfigSource:
    """Config source backed by config.json, re-read on every call."""

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or CONFIG_PATH

    def read(self) -> dict:
        return load_json_config(self.path)

    def read_offload_config(self) -> OffloadConfig:
        # A missing file behaves like an empty section: defaults plus env key.
        try:
            raw = self.read()
        except FileNotFoundError:
            raw = {}
        return offload_config_from(raw)

    def read_logging(self) -> dict:
        # Logging is optional. An unreadable file is reported by the rehash
        # that follows, so here it just means "no logging config".
        try:
            section = self.read().get("logging", {})
        except (FileNotFoundError, ConfigError):
            return {}
        return section if isinstance(section, dict) else {}
