"""Shared constants for the Textual UI."""

from __future__ import annotations

from pathlib import Path

import settings

ACCENT_GREEN = "#02A54D"
CONFIG_PATH = Path(settings.CONFIG_PATH)
