"""sosfeed: client for the S.O.S community emergency-reporting feed."""

__version__ = "1.0.0"
