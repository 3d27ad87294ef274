"""Static configuration for sosfeed.

User-editable settings (service addresses, geolocation, logging) live in an
optional config.json at the project root. Service addresses can also be
overridden from the environment (or a .env file) without touching the JSON.
"""

from __future__ import annotations

import json
import os

from dotenv import load_dotenv

from sosfeed.core.config import GeolocationConfig, ServiceConfig

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

CONFIG_PATH = os.environ.get("SOSFEED_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))

DEFAULT_POSTS_API_URL = "http://localhost:3001"
DEFAULT_POSTAL_LOOKUP_URL = "https://viacep.com.br/ws"


def _load_json_config(path: str) -> dict:
    """Load config.json; a missing file means "use the defaults"."""

    if not os.path.exists(path):
        return {}

    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _optional_float(value) -> "float | None":
    if value is None or value == "":
        return None
    return float(value)


def build_service_config(raw: dict) -> ServiceConfig:
    services = raw.get("services", {})
    posts_api_url = os.getenv("SOSFEED_API_URL") or services.get("posts_api_url", DEFAULT_POSTS_API_URL)
    # Images are served from the API host unless configured otherwise.
    media_base_url = os.getenv("SOSFEED_MEDIA_URL") or services.get("media_base_url") or posts_api_url
    postal_lookup_url = os.getenv("SOSFEED_POSTAL_LOOKUP_URL") or services.get(
        "postal_lookup_url", DEFAULT_POSTAL_LOOKUP_URL
    )
    return ServiceConfig(
        posts_api_url=posts_api_url,
        media_base_url=media_base_url,
        postal_lookup_url=postal_lookup_url,
        timeout_seconds=float(services.get("timeout_seconds", 10)),
    )


def build_geolocation_config(raw: dict) -> GeolocationConfig:
    geolocation = raw.get("geolocation", {})
    return GeolocationConfig(
        latitude=_optional_float(geolocation.get("latitude")),
        longitude=_optional_float(geolocation.get("longitude")),
        timeout_seconds=float(geolocation.get("timeout_seconds", 10)),
    )


load_dotenv()

_CONFIG = _load_json_config(CONFIG_PATH)

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

SERVICES = build_service_config(_CONFIG)

# Without coordinates the geolocation capability is reported as absent.
GEOLOCATION = build_geolocation_config(_CONFIG)

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
