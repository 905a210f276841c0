"""Logging tab implementation."""

from __future__ import annotations

from typing import Any, Optional

from textual import on
from textual.containers import ScrollableContainer
from textual.widgets import Input, Select, Static, Switch, TextArea

DEFAULT_LOG_PATH = "logs/largetextpaste.log"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5


class LoggingTab(ScrollableContainer):
    """Console/file logging and secret redaction."""

    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._loading_form = False

    def compose(self):
        yield Static("Logging", classes="section-title")
        yield Static("enabled", classes="form-label")
        yield Switch(id="logging-enabled")
        yield Static("level", classes="form-label")
        yield Select(
            [(level, level) for level in self.LOG_LEVELS],
            id="logging-level",
            allow_blank=False,
        )
        yield Static("console", classes="form-label")
        yield Switch(id="logging-console")
        yield Static("file.enabled", classes="form-label")
        yield Switch(id="logging-file-enabled")
        yield Static("file.path", classes="form-label")
        yield Input(placeholder=DEFAULT_LOG_PATH, id="logging-file-path")
        yield Static("file.max_bytes", classes="form-label")
        yield Input(placeholder=str(DEFAULT_MAX_BYTES), id="logging-file-max-bytes")
        yield Static("file.backup_count", classes="form-label")
        yield Input(placeholder=str(DEFAULT_BACKUP_COUNT), id="logging-file-backup")
        yield Static("redact.enabled (apikey is always masked)", classes="form-label")
        yield Switch(id="logging-redact-enabled")
        yield Static("redact.patterns (env var names, one per line)", classes="form-label")
        yield TextArea(id="logging-redact-patterns")
        yield Static("", id="logging-error", classes="settings-error")

    def on_mount(self) -> None:
        self.reload_from_config()

    def reload_from_config(self) -> None:
        self._loading_form = True
        logging = self._get_section()
        file_cfg = self._get_subdict(logging, "file")
        redact_cfg = self._get_subdict(logging, "redact")
        file_enabled = bool(file_cfg.get("enabled", False))
        redact_enabled = bool(redact_cfg.get("enabled", False))
        level = logging.get("level", "INFO")

        self.query_one("#logging-enabled", Switch).value = bool(logging.get("enabled", False))
        select = self.query_one("#logging-level", Select)
        if level in self.LOG_LEVELS:
            select.value = level
            self._set_error("")
        else:
            select.value = "INFO"
            self._set_error(f"Invalid value: {level}")
        self.query_one("#logging-console", Switch).value = bool(logging.get("console", True))
        self.query_one("#logging-file-enabled", Switch).value = file_enabled
        self.query_one("#logging-file-path", Input).value = str(file_cfg.get("path", DEFAULT_LOG_PATH))
        self.query_one("#logging-file-max-bytes", Input).value = str(file_cfg.get("max_bytes", DEFAULT_MAX_BYTES))
        self.query_one("#logging-file-backup", Input).value = str(file_cfg.get("backup_count", DEFAULT_BACKUP_COUNT))
        self.query_one("#logging-redact-enabled", Switch).value = redact_enabled
        patterns = redact_cfg.get("patterns", []) or []
        self.query_one("#logging-redact-patterns", TextArea).text = "\n".join(patterns)
        self._apply_state(file_enabled, redact_enabled)
        self._loading_form = False

    def _get_section(self) -> dict[str, Any]:
        data = self.app.config_state.data or {}
        section = data.get("logging")
        if isinstance(section, dict):
            return section
        return {}

    def _update_section(self, section: dict[str, Any]) -> None:
        self.app.update_config_section("logging", section)

    def _set_error(self, message: str) -> None:
        self.query_one("#logging-error", Static).update(message)

    def _apply_state(self, file_enabled: bool, redact_enabled: bool) -> None:
        self.query_one("#logging-file-path", Input).disabled = not file_enabled
        self.query_one("#logging-file-max-bytes", Input).disabled = not file_enabled
        self.query_one("#logging-file-backup", Input).disabled = not file_enabled
        self.query_one("#logging-redact-patterns", TextArea).disabled = not redact_enabled

    @on(Switch.Changed, "#logging-enabled")
    def _on_enabled(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        self._set_top("enabled", bool(event.value), False)

    @on(Select.Changed, "#logging-level")
    def _on_level(self, event: Select.Changed) -> None:
        if self._loading_form or event.value is Select.BLANK:
            return
        self._set_top("level", event.value, "INFO")

    @on(Switch.Changed, "#logging-console")
    def _on_console(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        self._set_top("console", bool(event.value), True)

    @on(Switch.Changed, "#logging-file-enabled")
    def _on_file_enabled(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        self._set_nested("file", "enabled", bool(event.value), False)
        redact_enabled = bool(self._get_subdict(self._get_section(), "redact").get("enabled", False))
        self._apply_state(bool(event.value), redact_enabled)

    @on(Input.Changed, "#logging-file-path")
    def _on_file_path(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        self._set_nested("file", "path", event.value, DEFAULT_LOG_PATH)

    @on(Input.Changed, "#logging-file-max-bytes")
    def _on_file_max(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        parsed = self._parse_int("logging-file-max-bytes", event.value)
        if parsed is not None:
            self._set_nested("file", "max_bytes", parsed, DEFAULT_MAX_BYTES)

    @on(Input.Changed, "#logging-file-backup")
    def _on_file_backup(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        parsed = self._parse_int("logging-file-backup", event.value)
        if parsed is not None:
            self._set_nested("file", "backup_count", parsed, DEFAULT_BACKUP_COUNT)

    @on(Switch.Changed, "#logging-redact-enabled")
    def _on_redact_enabled(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        self._set_nested("redact", "enabled", bool(event.value), False)
        file_enabled = bool(self._get_subdict(self._get_section(), "file").get("enabled", False))
        self._apply_state(file_enabled, bool(event.value))

    @on(TextArea.Changed, "#logging-redact-patterns")
    def _on_redact_patterns(self, event: TextArea.Changed) -> None:
        if self._loading_form:
            return
        patterns = [line.strip() for line in event.text_area.text.splitlines() if line.strip()]
        self._set_nested("redact", "patterns", patterns, [])

    def _set_top(self, key: str, value: Any, default: Any) -> None:
        logging = self._get_section()
        # Widgets echo Changed events after a reload; ignore unchanged values.
        if logging.get(key, default) == value:
            return
        logging[key] = value
        self._update_section(logging)

    def _set_nested(self, key: str, field: str, value: Any, default: Any) -> None:
        logging = self._get_section()
        nested = self._get_subdict(logging, key)
        if nested.get(field, default) == value:
            return
        nested[field] = value
        logging[key] = nested
        self._update_section(logging)

    def _parse_int(self, widget_id: str, value: str) -> Optional[int]:
        stripped = value.strip()
        error = None
        if stripped and not stripped.isdigit():
            error = "Enter a non-negative integer"
        self.app.report_field_error(widget_id, error)
        self._set_error(error or "")
        if error or not stripped:
            return None
        return int(stripped)

    @staticmethod
    def _get_subdict(parent: dict[str, Any], key: str) -> dict[str, Any]:
        value = parent.get(key)
        if isinstance(value, dict):
            return value
        return {}
