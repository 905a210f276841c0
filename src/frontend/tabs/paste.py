"""Paste tab: offload thresholds, API key, and service endpoint."""

from __future__ import annotations

from typing import Any

from textual import on
from textual.containers import Container, Vertical
from textual.widgets import Input, Static

from core.config import (
    DEFAULT_CUTOFF_LENGTH,
    DEFAULT_SERVICE_URL,
    DEFAULT_SNIPPET_LENGTH,
    DEFAULT_TIMEOUT_SECONDS,
)
from settings import API_KEY_ENV, SECTION

from ..validators import FieldCheck, parse_length, parse_service_url, parse_timeout

# Config key, widget id, default, parser.
FIELDS = (
    ("sniplen", "paste-sniplen", DEFAULT_SNIPPET_LENGTH, lambda raw: parse_length(raw, "sniplen")),
    (
        "cutofflen",
        "paste-cutofflen",
        DEFAULT_CUTOFF_LENGTH,
        lambda raw: parse_length(raw, "cutofflen", allow_zero=False),
    ),
    ("service_url", "paste-service-url", DEFAULT_SERVICE_URL, parse_service_url),
    ("timeout", "paste-timeout", DEFAULT_TIMEOUT_SECONDS, parse_timeout),
)


class PasteTab(Container):
    """Form for the largetextpaste config section."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._loading_form = False

    def compose(self):
        with Vertical(id="paste-panel"):
            yield Static("Paste offload", classes="section-title")
            yield Static("sniplen (chars kept in the channel)", classes="form-label")
            yield Input(placeholder=str(DEFAULT_SNIPPET_LENGTH), id="paste-sniplen")
            yield Static("cutofflen (longer messages are offloaded)", classes="form-label")
            yield Input(placeholder=str(DEFAULT_CUTOFF_LENGTH), id="paste-cutofflen")
            yield Static(f"apikey (empty: use {API_KEY_ENV})", classes="form-label")
            yield Input(placeholder="", password=True, id="paste-apikey")
            yield Static("service_url", classes="form-label")
            yield Input(placeholder=DEFAULT_SERVICE_URL, id="paste-service-url")
            yield Static("timeout (seconds)", classes="form-label")
            yield Input(placeholder=str(DEFAULT_TIMEOUT_SECONDS), id="paste-timeout")
            yield Static("", id="paste-error", classes="settings-error")

    def on_mount(self) -> None:
        self.reload_from_config()

    def reload_from_config(self) -> None:
        self._loading_form = True
        section = self._get_section()
        for key, widget_id, default, _ in FIELDS:
            self.query_one(f"#{widget_id}", Input).value = str(section.get(key, default))
        self.query_one("#paste-apikey", Input).value = str(section.get("apikey", ""))
        self.query_one("#paste-error", Static).update("")
        self._loading_form = False

    def _get_section(self) -> dict[str, Any]:
        data = self.app.config_state.data or {}
        section = data.get(SECTION)
        if isinstance(section, dict):
            return section
        return {}

    def _store(self, key: str, widget_id: str, default: Any, check: FieldCheck) -> None:
        self.app.report_field_error(widget_id, check.error)
        self.query_one("#paste-error", Static).update(check.error or "")
        if check.error:
            return
        section = self._get_section()
        # Inputs echo Changed after a reload; an absent key reads as its default.
        if section.get(key, default) == check.value:
            return
        section[key] = check.value
        self.app.update_config_section(SECTION, section)

    @on(Input.Changed)
    def _on_field(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        for key, widget_id, default, parse in FIELDS:
            if event.input.id == widget_id:
                self._store(key, widget_id, default, parse(event.value))
                return

    @on(Input.Changed, "#paste-apikey")
    def _on_apikey(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        section = self._get_section()
        value = event.value.strip()
        if section.get("apikey", "") == value:
            return
        if value:
            section["apikey"] = value
        else:
            section.pop("apikey", None)
        self.app.update_config_section(SECTION, section)
