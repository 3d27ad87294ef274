"""Exception hierarchy shared by the core and adapters.

Adapters translate transport-level failures into these types so the core
never has to know about httpx or any other client library.
"""

from __future__ import annotations

from typing import Optional


class SosFeedError(Exception):
    """Base class for every sosfeed failure."""


class PostsApiError(SosFeedError):
    """Posts API answered with a non-2xx status or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PostalLookupError(SosFeedError):
    """Postal lookup service failed (transport or unparseable body)."""


class GeolocationError(SosFeedError):
    """Base for geolocation failures. The message is shown to the user."""


class GeolocationUnsupported(GeolocationError):
    """The platform exposes no geolocation capability."""


class GeolocationDenied(GeolocationError):
    """The user (or platform) refused the position request."""


class LocationFailed(GeolocationError):
    """A location attempt failed after it started."""


class SubmissionError(SosFeedError):
    """Base for submission pipeline misuse."""


class SubmissionInProgress(SubmissionError):
    """A submit was attempted while another one is still in flight."""


class SubmissionClosed(SubmissionError):
    """The compose session already succeeded."""
