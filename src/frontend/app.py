"""Main Textual app for the largetextpaste config panel."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Center, Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, ContentSwitcher, Footer, Static, Tab, Tabs

from .constants import ACCENT_GREEN, CONFIG_PATH
from .state import PanelState
from .tabs.guide import GuideTab
from .tabs.log_settings import LoggingTab
from .tabs.paste import PasteTab


class ConfirmScreen(ModalScreen[str]):
    """Yes/no style prompt; dismisses with the id of the chosen action."""

    def __init__(self, title: str, body: str, choices: list[tuple[str, str, str]]) -> None:
        super().__init__()
        self._title = title
        self._body = body
        # (action, label, button variant)
        self._choices = choices

    def compose(self) -> ComposeResult:
        yield Container(
            Static(self._title, classes="section-title"),
            Static(self._body, classes="subtle"),
            Horizontal(
                *(
                    Button(label, id=f"confirm-{action}", variant=variant)
                    for action, label, variant in self._choices
                ),
                Button("Cancel", id="confirm-cancel"),
            ),
            classes="modal-dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss((event.button.id or "confirm-cancel").removeprefix("confirm-"))


class ConfigPanelApp(App):
    """Edits config.json and checks it the way a rehash would."""

    BINDINGS = [
        ("ctrl+s", "save_config", "Save"),
        ("ctrl+r", "reload_config", "Reload"),
        ("q", "request_quit", "Quit"),
        ("ctrl+c", "request_quit", "Quit"),
    ]

    CSS = """
    Screen {
        background: #10181a;
        color: #e8eef5;
    }

    #header {
        height: 8;
        padding: 1 4;
        border-bottom: solid #2a3a46;
    }

    #header-left, #header-right {
        width: 1fr;
    }

    #header-right {
        content-align: right top;
        text-align: right;
    }

    #tabs-bar {
        height: 4;
        padding: 0 4;
        align: center middle;
    }

    #content {
        height: 1fr;
        padding: 1 4;
    }

    .subtle, .form-label {
        color: #c6d2dd;
    }

    .section-title {
        text-style: bold;
    }

    .settings-error, .status-error {
        color: #ff6b6b;
    }

    .status-modified, #header-warnings {
        color: #ffd166;
    }

    .status-loaded {
        color: #06d6a0;
    }

    ConfirmScreen {
        align: center middle;
    }

    .modal-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: round #2a3a46;
        background: #172326;
    }
    """

    def __init__(self, config_path: Optional[Path] = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.config_state = PanelState(Path(config_path or CONFIG_PATH))

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static(f"config: {self.config_state.path}", classes="subtle")
                    yield Static("", id="header-warnings")
                with Vertical(id="header-right"):
                    yield Static("", id="header-status")
                    yield Horizontal(
                        Button("Save", id="save-btn"),
                        Button("Reload", id="reload-btn"),
                        id="header-actions",
                    )

        with Container(id="tabs-bar"):
            with Center(id="tabs-center"):
                yield Tabs(
                    Tab("Paste", id="paste"),
                    Tab("Logging", id="logging"),
                    Tab("Guide", id="guide"),
                    id="tabs",
                )

        with ContentSwitcher(id="content"):
            yield PasteTab(id="paste")
            yield LoggingTab(id="logging")
            yield GuideTab(id="guide")
        yield Footer()

    def on_mount(self) -> None:
        self._load_config()
        self.query_one("#content", ContentSwitcher).current = "paste"

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        if event.tab.id:
            self.query_one("#content", ContentSwitcher).current = event.tab.id

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-btn":
            self.action_save_config()
        elif event.button.id == "reload-btn":
            self.action_reload_config()

    def action_save_config(self) -> bool:
        saved = self.config_state.save()
        self._refresh_header()
        if saved:
            self.notify(f"Saved {self.config_state.path.name}")
        return saved

    def action_reload_config(self) -> None:
        if self.config_state.dirty:
            self.push_screen(
                ConfirmScreen(
                    "Reload config?",
                    "Unsaved changes will be lost.",
                    [("save", "Save", "success"), ("reload", "Reload", "warning")],
                ),
                self._after_reload_prompt,
            )
        else:
            self._load_config()

    def action_request_quit(self) -> None:
        if self.config_state.dirty:
            self.push_screen(
                ConfirmScreen(
                    "Unsaved changes",
                    "Save changes before exit?",
                    [("save", "Save", "success"), ("discard", "Discard", "error")],
                ),
                self._after_quit_prompt,
            )
        else:
            self.exit()

    def _after_quit_prompt(self, choice: Optional[str]) -> None:
        if choice == "discard" or (choice == "save" and self.action_save_config()):
            self.exit()

    def _after_reload_prompt(self, choice: Optional[str]) -> None:
        if choice == "reload" or (choice == "save" and self.action_save_config()):
            self._load_config()

    def _load_config(self) -> None:
        self.config_state.load()
        for tab in (*self.query(PasteTab), *self.query(LoggingTab)):
            tab.reload_from_config()
        self._refresh_header()

    def update_config_section(self, section: str, value: dict[str, Any]) -> None:
        """Update a config section in memory and mark dirty."""
        self.config_state.update_section(section, value)
        self._refresh_header()

    def report_field_error(self, field_id: str, message: Optional[str]) -> None:
        self.config_state.set_field_error(field_id, message)
        self._refresh_header()

    def _refresh_header(self) -> None:
        state = self.config_state
        problem, warnings = state.check()
        status = self.query_one("#header-status", Static)

        status.remove_class("status-loaded", "status-modified", "status-error")
        if state.save_error or problem:
            status.update(state.save_error or problem)
            status.add_class("status-error")
        elif state.dirty:
            status.update("modified *")
            status.add_class("status-modified")
        else:
            status.update("loaded")
            status.add_class("status-loaded")

        self.query_one("#header-warnings", Static).update("\n".join(warnings))
        self.query_one("#save-btn", Button).disabled = not state.can_save

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("LARGETEXT", ACCENT_GREEN),
            ("PASTE > Config Panel", "bold"),
        )
