from __future__ import annotations

from sosfeed.core.formatting import (
    author_initials,
    format_phone,
    format_postal_code,
    postal_code_digits,
    whatsapp_link,
)


def test_format_postal_code_masks_eight_digits() -> None:
    assert format_postal_code("01310100") == "01310-100"
    assert format_postal_code("013") == "013"
    assert format_postal_code("01310") == "01310"
    assert format_postal_code("013101") == "01310-1"


def test_format_postal_code_strips_noise_and_truncates() -> None:
    assert format_postal_code("01.310-100") == "01310-100"
    assert format_postal_code("0131010099") == "01310-100"
    assert format_postal_code("abc") == ""


def test_format_phone_brackets() -> None:
    assert format_phone("") == ""
    assert format_phone("11") == "11"
    assert format_phone("119") == "(11) 9"
    assert format_phone("119999") == "(11) 9999"
    assert format_phone("1199998") == "(11) 9999-8"
    assert format_phone("1199998888") == "(11) 9999-8888"
    assert format_phone("11999998888") == "(11) 99999-8888"


def test_format_phone_truncates_past_eleven_digits() -> None:
    assert format_phone("119999988881234") == "(11) 99999-8888"


def test_format_phone_is_idempotent_for_every_digit_count() -> None:
    digits = "11999998888"
    for count in range(len(digits) + 1):
        once = format_phone(digits[:count])
        assert format_phone(once) == once


def test_format_postal_code_is_idempotent() -> None:
    digits = "01310100"
    for count in range(len(digits) + 1):
        once = format_postal_code(digits[:count])
        assert format_postal_code(once) == once


def test_non_ascii_digits_are_dropped() -> None:
    # Arabic-Indic digits are not valid phone input.
    assert format_phone("١١٩") == ""


def test_contact_helpers() -> None:
    assert postal_code_digits("01310-100") == "01310100"
    assert whatsapp_link("(11) 99999-8888") == "https://wa.me/5511999998888"
    assert author_initials("Maria da  Silva") == "MdS"
    assert author_initials("") == ""
