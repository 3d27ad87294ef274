from __future__ import annotations

from sosfeed.core.categories import (
    CATEGORIES,
    CATEGORY_STYLES,
    FALLBACK_STYLE,
    FORM_CATEGORY_OPTIONS,
    card_tone,
    category_style,
    is_urgent,
)
from sosfeed.core.models import Post


def _post(category: str) -> Post:
    return Post(
        id=1,
        author="Ana",
        content="",
        address="",
        cep="",
        phone="",
        timestamp="",
        created_at="",
        category=category,
        urgent=is_urgent(category),
        image=None,
    )


def test_every_category_has_a_style_and_form_option() -> None:
    assert set(CATEGORY_STYLES) == set(CATEGORIES)
    assert [value for value, _label in FORM_CATEGORY_OPTIONS] == list(CATEGORIES)


def test_unknown_category_uses_fallback() -> None:
    assert category_style("earthquake") is FALLBACK_STYLE
    assert category_style("") is FALLBACK_STYLE
    assert category_style("flood").label == "Alagamento"


def test_card_tone() -> None:
    assert card_tone(_post("fire")) == "urgent"
    assert card_tone(_post("help")) == "help"
    assert card_tone(_post("traffic")) == "urgent"
