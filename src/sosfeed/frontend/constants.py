"""Shared constants for the Textual UI."""

from __future__ import annotations

SOS_RED = "#DC2626"
HELP_GREEN = "#16A34A"

# Card border per card_tone(); empty tone falls back to the default border.
CARD_BORDERS = {
    "urgent": SOS_RED,
    "help": HELP_GREEN,
    "": "#2a3a46",
}
