"""Edit state for the config panel.

The panel reads and checks the file through the same loader and validator
the daemon uses on rehash, so whatever it lets you save is what the next
rehash will accept.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import settings
from core.config import validate_config
from core.errors import ConfigError


@dataclass
class PanelState:
    path: Path
    data: Optional[dict[str, Any]] = None
    dirty: bool = False
    load_error: Optional[str] = None
    save_error: Optional[str] = None
    # Inputs whose text could not be parsed, keyed by widget id.
    field_errors: dict[str, str] = field(default_factory=dict)

    def load(self) -> None:
        self.dirty = False
        self.save_error = None
        self.field_errors.clear()
        try:
            self.data = settings.load_json_config(str(self.path))
            self.load_error = None
        except FileNotFoundError:
            # Saving creates the file.
            self.data = {}
            self.load_error = None
        except ConfigError as exc:
            self.data = None
            self.load_error = str(exc)

    def save(self) -> bool:
        problem, _ = self.check()
        if problem:
            self.save_error = f"not saved: {problem}"
            return False
        try:
            self.path.write_text(
                json.dumps(self.data, indent=2, ensure_ascii=True) + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            self.save_error = f"save failed: {exc.strerror or exc}"
            return False
        self.dirty = False
        self.save_error = None
        return True

    def update_section(self, name: str, value: dict[str, Any]) -> None:
        if self.data is None:
            self.data = {}
        self.data[name] = value
        self.dirty = True
        self.save_error = None

    def set_field_error(self, field_id: str, message: Optional[str]) -> None:
        if message:
            self.field_errors[field_id] = message
        else:
            self.field_errors.pop(field_id, None)

    def check(self) -> tuple[Optional[str], list[str]]:
        """Return the blocking problem, if any, and the soft warnings."""

        if self.load_error:
            return self.load_error, []
        if self.data is None:
            return "nothing loaded", []
        if self.field_errors:
            return self.field_errors[min(self.field_errors)], []
        try:
            warnings = validate_config(settings.offload_config_from(self.data))
        except ConfigError as exc:
            return str(exc), []
        return None, warnings

    @property
    def can_save(self) -> bool:
        return self.dirty and self.check()[0] is None
