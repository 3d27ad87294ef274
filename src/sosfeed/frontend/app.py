"""Main Textual app for the S.O.S feed."""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Center, Container, Horizontal, Vertical
from textual.widgets import ContentSwitcher, Footer, Static, Tab, Tabs

from .constants import SOS_RED
from .state import SessionState
from .tabs.feed import FeedTab
from .tabs.post import PostTab


class SosFeedApp(App):
    """Two tabs over one session: the feed and the compose form."""

    BINDINGS = [
        ("ctrl+r", "reload_feed", "Reload feed"),
        ("ctrl+n", "new_post", "New post"),
        ("ctrl+q", "quit", "Quit"),
    ]

    CSS = """
    Screen {
        background: #0f1a21;
        color: #e8eef5;
    }

    #header {
        height: 5;
        padding: 1 4;
        border-bottom: solid #2a3a46;
    }

    #header-left, #header-right {
        width: 1fr;
    }

    #header-right {
        text-align: right;
    }

    #tabs-bar {
        height: 4;
        padding: 0 4;
        align: center middle;
    }

    #content {
        height: 1fr;
        padding: 0 4;
    }

    #feed-title, #post-title, #title {
        text-style: bold;
    }

    .subtle {
        color: #c6d2dd;
    }

    .form-label {
        margin-top: 1;
    }

    .form-error, #feed-status {
        color: #f87171;
    }

    #field-content {
        height: 6;
    }

    #cep-row {
        height: auto;
    }

    #field-cep {
        width: 1fr;
    }

    .modal-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: solid #2a3a46;
        background: #0f1a21;
    }

    .modal-title {
        text-style: bold;
    }

    .modal-actions {
        height: auto;
        margin-top: 1;
    }

    SubmissionSuccessScreen {
        align: center middle;
    }
    """

    def __init__(self, session: SessionState, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.session = session

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                with Vertical(id="header-right"):
                    yield Static("Defesa Civil • Polícia Civil • Corpo de Bombeiros", classes="subtle")

        with Container(id="tabs-bar"):
            with Center(id="tabs-center"):
                yield Tabs(
                    Tab("Feed", id="feed"),
                    Tab("Postar", id="post"),
                    id="tabs",
                )

        with ContentSwitcher(id="content", initial="feed"):
            yield FeedTab(self.session.feed, id="feed")
            yield PostTab(self.session, id="post")
        yield Footer()

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        self._set_active_tab(event.tab.id or "feed")

    def _set_active_tab(self, tab_id: str) -> None:
        self.query_one("#content", ContentSwitcher).current = tab_id
        tabs = self.query_one("#tabs", Tabs)
        if tabs.active != tab_id:
            tabs.active = tab_id

    def show_feed(self, reload: bool = False) -> None:
        self._set_active_tab("feed")
        if reload:
            self.query_one(FeedTab).reload()

    def action_reload_feed(self) -> None:
        self.show_feed(reload=True)

    def action_new_post(self) -> None:
        self._set_active_tab("post")

    async def on_unmount(self) -> None:
        await self.session.aclose()

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("S.O.S", f"bold {SOS_RED}"),
            (" - SP > Feed de Emergências", "bold"),
        )
