"""State containers owned by the active UI session."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from sosfeed.adapters.geolocation import FixedAddressGeocoder, build_geolocator
from sosfeed.adapters.posts_api import HttpPostsApi
from sosfeed.adapters.viacep import ViaCepLookup
from sosfeed.core.address import AddressResolver
from sosfeed.core.config import GeolocationConfig, ServiceConfig
from sosfeed.core.draft import DraftForm
from sosfeed.core.feed import FeedStore
from sosfeed.core.preview import ImagePreview
from sosfeed.core.submission import SubmissionPipeline


@dataclass
class SessionState:
    posts_api: HttpPostsApi
    postal_lookup: ViaCepLookup
    feed: FeedStore
    form: DraftForm
    preview: ImagePreview
    resolver: AddressResolver
    pipeline: SubmissionPipeline

    async def aclose(self) -> None:
        await self.posts_api.aclose()
        await self.postal_lookup.aclose()


def build_session(
    services: ServiceConfig,
    geolocation: GeolocationConfig,
    tz: Optional[tzinfo] = None,
) -> SessionState:
    """Wire adapters into the core containers for one UI session."""

    posts_api = HttpPostsApi(services.posts_api_url, timeout=services.timeout_seconds)
    postal_lookup = ViaCepLookup(services.postal_lookup_url, timeout=services.timeout_seconds)
    form = DraftForm()
    preview = ImagePreview()
    return SessionState(
        posts_api=posts_api,
        postal_lookup=postal_lookup,
        feed=FeedStore(posts_api, services.media_base_url, tz=tz),
        form=form,
        preview=preview,
        resolver=AddressResolver(
            form,
            postal_lookup,
            build_geolocator(geolocation),
            FixedAddressGeocoder(),
            geolocation_timeout=geolocation.timeout_seconds,
        ),
        pipeline=SubmissionPipeline(form, posts_api, preview),
    )
