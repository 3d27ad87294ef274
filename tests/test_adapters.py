from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import List

import httpx
import pytest

from sosfeed.adapters.geolocation import FixedAddressGeocoder, REFERENCE_ADDRESS, build_geolocator
from sosfeed.adapters.posts_api import HttpPostsApi
from sosfeed.adapters.viacep import ViaCepLookup
from sosfeed.core.config import GeolocationConfig
from sosfeed.core.errors import PostalLookupError, PostsApiError
from sosfeed.core.models import Attachment, Coordinates


def _posts_api(handler, seen: List[httpx.Request]) -> HttpPostsApi:
    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return HttpPostsApi("https://sos.example", transport=httpx.MockTransport(record))


def test_fetch_page_sends_page_param() -> None:
    seen: List[httpx.Request] = []
    api = _posts_api(lambda request: httpx.Response(200, json=[{"id": 1}]), seen)

    records = asyncio.run(api.fetch_page(3))

    assert records == [{"id": 1}]
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/api/posts"
    assert seen[0].url.params["page"] == "3"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, text="unavailable"),
        httpx.Response(200, text="<html>"),
        httpx.Response(200, json={"posts": []}),
    ],
)
def test_fetch_page_failures_become_posts_api_error(response: httpx.Response) -> None:
    api = _posts_api(lambda request: response, [])

    with pytest.raises(PostsApiError):
        asyncio.run(api.fetch_page(1))


def test_fetch_page_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    api = _posts_api(handler, [])

    with pytest.raises(PostsApiError, match="unreachable"):
        asyncio.run(api.fetch_page(1))


def test_create_post_is_multipart_without_image() -> None:
    seen: List[httpx.Request] = []
    api = _posts_api(lambda request: httpx.Response(201), seen)

    asyncio.run(api.create_post({"title": "Defesa Civil", "content": "Rua alagada"}, None))

    request = seen[0]
    body = request.read()
    assert request.method == "POST"
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert b'name="title"' in body
    assert b"Defesa Civil" in body
    assert b'name="image"' not in body


def test_create_post_attaches_image(tmp_path: Path) -> None:
    image_path = tmp_path / "foto.jpg"
    image_path.write_bytes(b"\xff\xd8\xffjpeg")
    seen: List[httpx.Request] = []
    api = _posts_api(lambda request: httpx.Response(200), seen)

    asyncio.run(api.create_post({"title": "x"}, Attachment.from_path(image_path)))

    body = seen[0].read()
    assert b'name="image"; filename="foto.jpg"' in body
    assert b"Content-Type: image/jpeg" in body
    assert b"\xff\xd8\xffjpeg" in body


def test_create_post_rejected_by_server() -> None:
    api = _posts_api(lambda request: httpx.Response(422, text="bad"), [])

    with pytest.raises(PostsApiError) as excinfo:
        asyncio.run(api.create_post({"title": "x"}, None))
    assert excinfo.value.status_code == 422


def _viacep(handler, seen: List[httpx.Request]) -> ViaCepLookup:
    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return ViaCepLookup(transport=httpx.MockTransport(record))


def test_viacep_maps_address() -> None:
    seen: List[httpx.Request] = []
    body = {
        "cep": "01310-100",
        "logradouro": "Avenida Paulista",
        "bairro": "Bela Vista",
        "localidade": "São Paulo",
        "uf": "SP",
    }
    lookup = _viacep(lambda request: httpx.Response(200, json=body), seen)

    address = asyncio.run(lookup.lookup("01310100"))

    assert str(seen[0].url) == "https://viacep.com.br/ws/01310100/json/"
    assert address is not None
    assert address.street == "Avenida Paulista"
    assert address.city == "São Paulo"
    assert address.number is None


@pytest.mark.parametrize("flag", [True, "true"])
def test_viacep_unknown_code(flag) -> None:
    lookup = _viacep(lambda request: httpx.Response(200, content=json.dumps({"erro": flag})), [])

    assert asyncio.run(lookup.lookup("99999999")) is None


def test_viacep_server_error() -> None:
    lookup = _viacep(lambda request: httpx.Response(500), [])

    with pytest.raises(PostalLookupError):
        asyncio.run(lookup.lookup("01310100"))


def test_geolocator_absent_without_coordinates() -> None:
    assert build_geolocator(GeolocationConfig(latitude=None, longitude=None, timeout_seconds=10.0)) is None

    geolocator = build_geolocator(GeolocationConfig(latitude=-23.56, longitude=-46.65, timeout_seconds=10.0))
    assert geolocator is not None
    position = asyncio.run(geolocator.current_position())
    assert position == Coordinates(-23.56, -46.65)


def test_fixed_geocoder_returns_reference_address() -> None:
    address = asyncio.run(FixedAddressGeocoder().resolve(Coordinates(0.0, 0.0)))
    assert address == REFERENCE_ADDRESS
    assert address.number == "1000"


def test_create_post_missing_attachment(tmp_path: Path) -> None:
    seen: List[httpx.Request] = []
    api = _posts_api(lambda request: httpx.Response(201), seen)
    attachment = Attachment.from_path(tmp_path / "gone.jpg")

    with pytest.raises(PostsApiError, match="gone.jpg"):
        asyncio.run(api.create_post({"title": "x"}, attachment))
    assert seen == []
