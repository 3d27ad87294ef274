"""Textual terminal UI for the S.O.S feed."""
