"""Feed tab: search, post cards and incremental loading."""

from __future__ import annotations

from typing import Any, Callable, Optional

from rich.console import Group
from rich.text import Text
from textual import on
from textual.containers import Container, Vertical, VerticalScroll
from textual.widgets import Button, Input, Static

from sosfeed.core.feed import FeedStore
from sosfeed.core.feed_filter import filter_posts

from ..render import render_post


class FeedTab(Container):
    """Paginated, filterable list of posts."""

    def __init__(self, feed: FeedStore, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._feed = feed
        self._query = ""
        self._unsubscribe: Optional[Callable[[], None]] = None

    def compose(self):
        with Vertical(id="feed-panel"):
            yield Static("Feed de Publicações", id="feed-title")
            yield Static(
                "Acompanhe as situações de emergência em tempo real e ofertas de ajuda da comunidade.",
                classes="subtle",
            )
            yield Input(
                placeholder="Pesquisar postagens por localização, tipo de emergência...",
                id="feed-search",
            )
            with VerticalScroll(id="feed-scroll"):
                yield Static("", id="feed-posts")
                yield Static("", id="feed-status")
                yield Button("Carregar Mais Publicações", id="feed-more")

    def on_mount(self) -> None:
        self._unsubscribe = self._feed.subscribe(lambda _store: self.refresh_posts())
        self.query_one("#feed-posts", Static).update(Text("Carregando publicações...", style="dim"))
        self.run_worker(self._feed.refresh(), group="feed")

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @on(Input.Changed, "#feed-search")
    def _on_search_changed(self, event: Input.Changed) -> None:
        self._query = event.value
        self.refresh_posts()

    @on(Button.Pressed, "#feed-more")
    def _on_load_more(self) -> None:
        self.query_one("#feed-more", Button).disabled = True
        self.run_worker(self._feed.load_next_page(), group="feed")

    def reload(self) -> None:
        self.run_worker(self._feed.refresh(), group="feed")

    def refresh_posts(self) -> None:
        posts = filter_posts(self._feed.posts, self._query)
        target = self.query_one("#feed-posts", Static)
        if posts:
            target.update(Group(*(render_post(post) for post in posts)))
        elif self._feed.is_loading:
            target.update(Text("Carregando publicações...", style="dim"))
        else:
            target.update(Text("Nenhuma publicação encontrada.", style="dim"))
        self.query_one("#feed-status", Static).update(self._feed.error or "")
        self.query_one("#feed-more", Button).disabled = self._feed.is_loading
