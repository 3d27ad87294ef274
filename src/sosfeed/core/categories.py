"""Category enumeration and presentation lookup (core domain).

The category set is closed. Unknown tags coming from the server are shown
with the fallback style instead of being rejected.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from sosfeed.core.models import CategoryStyle, Post

HELP_CATEGORY = "help"

CATEGORIES: Tuple[str, ...] = (
    "flood",
    "fire",
    "landslide",
    "help",
    "rescue",
    "structural",
    "traffic",
    "power",
    "storm",
)

CATEGORY_STYLES: Dict[str, CategoryStyle] = {
    "flood": CategoryStyle(label="Alagamento", color="blue", icon="≈"),
    "fire": CategoryStyle(label="Incêndio", color="red", icon="▲"),
    "landslide": CategoryStyle(label="Deslizamento", color="dark_orange", icon="⚠"),
    "help": CategoryStyle(label="Ajuda", color="green", icon="♥"),
    "rescue": CategoryStyle(label="Resgate", color="purple", icon="☺"),
    "structural": CategoryStyle(label="Estrutural", color="yellow", icon="⌂"),
    "traffic": CategoryStyle(label="Trânsito", color="grey50", icon="⇄"),
    "power": CategoryStyle(label="Energia", color="slate_blue1", icon="ϟ"),
    "storm": CategoryStyle(label="Tempestade", color="cyan", icon="≋"),
}

FALLBACK_STYLE = CategoryStyle(label="Emergência", color="grey50", icon="⚠")

# Labels used by the compose form's select; longer than the feed badges.
FORM_CATEGORY_OPTIONS: List[Tuple[str, str]] = [
    ("flood", "Alagamento"),
    ("fire", "Incêndio"),
    ("landslide", "Deslizamento"),
    ("help", "Oferecendo Ajuda"),
    ("rescue", "Resgate Necessário"),
    ("structural", "Problema Estrutural"),
    ("traffic", "Problema de Trânsito"),
    ("power", "Falta de Energia"),
    ("storm", "Vendaval/Tempestade"),
]


def is_known_category(category: str) -> bool:
    return category in CATEGORY_STYLES


def category_style(category: str) -> CategoryStyle:
    return CATEGORY_STYLES.get(category, FALLBACK_STYLE)


def is_urgent(category: str) -> bool:
    """Every category except "help" is flagged urgent, including "traffic"."""

    return category != HELP_CATEGORY


def card_tone(post: Post) -> str:
    if post.urgent:
        return "urgent"
    if post.category == HELP_CATEGORY:
        return "help"
    return ""
