"""Rich renderables for feed posts, shared by the TUI and the CLI."""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

from sosfeed.core.categories import card_tone, category_style
from sosfeed.core.formatting import author_initials, whatsapp_link
from sosfeed.core.models import Post

from .constants import CARD_BORDERS, SOS_RED


def render_post(post: Post) -> Panel:
    style = category_style(post.category)

    body = Text.assemble(
        (f"[{author_initials(post.author)}] ", "bold grey50"),
        (post.author, "bold"),
        (f"  {post.timestamp}", "dim"),
        "\n",
        (f" {style.icon} {style.label} ", f"bold {style.color}"),
    )
    if post.urgent:
        body.append("  ⚠ Urgente", style=f"bold {SOS_RED}")
    body.append("\n\n")
    body.append(post.content)
    if post.image:
        body.append("\n")
        body.append("Imagem da emergência", style=f"underline link {post.image}")
    body.append(f"\n\n{post.address} • CEP: {post.cep}", style="grey62")
    body.append(f"\nContato: {post.phone}  ", style="grey62")
    body.append("Entrar em contato", style=f"bold underline link {whatsapp_link(post.phone)}")

    return Panel(body, border_style=CARD_BORDERS.get(card_tone(post), CARD_BORDERS[""]))
