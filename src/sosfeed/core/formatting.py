"""Input masking helpers (core domain).

All helpers are pure and total: they accept whatever the user typed and
always return a string.
"""

from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"\D", re.ASCII)

WHATSAPP_COUNTRY_CODE = "55"


def _digits(value: str) -> str:
    return _NON_DIGITS.sub("", value)


def format_postal_code(raw: str) -> str:
    """Mask a CEP as ``DDDDD-DDD``, truncating anything past 8 digits."""

    numbers = _digits(raw)
    if len(numbers) <= 5:
        return numbers
    return f"{numbers[:5]}-{numbers[5:8]}"


def format_phone(raw: str) -> str:
    """Progressively mask a Brazilian phone number.

    - 0-2 digits: digits only
    - 3-6 digits: ``(DD) DDDD``
    - 7-10 digits: ``(DD) DDDD-DDDD`` (landline)
    - 11+ digits: ``(DD) DDDDD-DDDD`` (mobile, truncated to 11 digits)
    """

    numbers = _digits(raw)
    if len(numbers) <= 2:
        return numbers
    if len(numbers) <= 6:
        return f"({numbers[:2]}) {numbers[2:]}"
    if len(numbers) <= 10:
        return f"({numbers[:2]}) {numbers[2:6]}-{numbers[6:]}"
    return f"({numbers[:2]}) {numbers[2:7]}-{numbers[7:11]}"


def postal_code_digits(value: str) -> str:
    return _digits(value)


def whatsapp_link(phone: str) -> str:
    """Return the wa.me contact link used by the feed's contact action."""

    return f"https://wa.me/{WHATSAPP_COUNTRY_CODE}{_digits(phone)}"


def author_initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part)
