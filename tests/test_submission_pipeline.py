from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import httpx
import pytest

from sosfeed.adapters.posts_api import HttpPostsApi
from sosfeed.core.draft import DraftForm
from sosfeed.core.errors import PostsApiError, SubmissionClosed, SubmissionInProgress
from sosfeed.core.models import Attachment
from sosfeed.core.preview import ImagePreview
from sosfeed.core.submission import (
    FAILURE_MESSAGE,
    SubmissionOutcome,
    SubmissionPipeline,
    SubmissionState,
)


class FakePostsApi:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: List[Tuple[Dict[str, str], Optional[Attachment]]] = []
        self.gate: Optional[asyncio.Event] = None

    async def fetch_page(self, page: int) -> list:
        return []

    async def create_post(self, fields: Dict[str, str], image: Optional[Attachment]) -> None:
        self.calls.append((dict(fields), image))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise PostsApiError("Posts API error 500: boom", 500)


def _filled_form() -> DraftForm:
    form = DraftForm()
    form.edit("name", "Defesa Civil")
    form.edit("content", "Rua alagada, água na altura do joelho")
    form.edit("category", "flood")
    form.edit_phone("11999998888")
    form.edit_postal_code("01310100")
    form.edit("address", "Av. Paulista")
    form.edit("number", "1000")
    return form


def test_invalid_draft_never_reaches_the_network() -> None:
    form = DraftForm()
    api = FakePostsApi()
    pipeline = SubmissionPipeline(form, api)

    outcome = asyncio.run(pipeline.submit())

    assert outcome == SubmissionOutcome.INVALID
    assert api.calls == []
    assert set(form.errors) == {"name", "content", "category", "phone", "cep", "address", "number"}
    assert pipeline.state == SubmissionState.EDITING


def test_successful_submission_sends_fields_and_resets() -> None:
    form = _filled_form()
    api = FakePostsApi()
    preview = ImagePreview()
    preview.data_url = "data:image/png;base64,AAAA"
    pipeline = SubmissionPipeline(form, api, preview)
    states: List[SubmissionState] = []
    pipeline.subscribe(states.append)

    outcome = asyncio.run(pipeline.submit())

    assert outcome == SubmissionOutcome.SUCCEEDED
    fields, image = api.calls[0]
    assert fields["title"] == "Defesa Civil"
    assert "name" not in fields
    assert fields["phone"] == "(11) 99999-8888"
    assert fields["cep"] == "01310-100"
    assert fields["neighborhood"] == ""
    assert image is None
    assert form.draft.name == ""
    assert form.errors == {}
    assert preview.data_url is None
    assert states == [SubmissionState.VALIDATING, SubmissionState.SUBMITTING, SubmissionState.SUCCEEDED]


def test_failed_submission_keeps_the_draft() -> None:
    form = _filled_form()
    api = FakePostsApi(fail=True)
    pipeline = SubmissionPipeline(form, api)
    states: List[SubmissionState] = []
    pipeline.subscribe(states.append)

    outcome = asyncio.run(pipeline.submit())

    assert outcome == SubmissionOutcome.FAILED
    assert pipeline.failure_message == FAILURE_MESSAGE
    assert form.draft.name == "Defesa Civil"
    assert form.draft.cep == "01310-100"
    assert pipeline.state == SubmissionState.EDITING
    assert SubmissionState.FAILED in states

    api.fail = False
    assert asyncio.run(pipeline.submit()) == SubmissionOutcome.SUCCEEDED
    assert pipeline.failure_message is None
    assert len(api.calls) == 2


def test_second_submit_while_in_flight_is_rejected() -> None:
    form = _filled_form()
    api = FakePostsApi()
    pipeline = SubmissionPipeline(form, api)

    async def run() -> None:
        api.gate = asyncio.Event()
        first = asyncio.create_task(pipeline.submit())
        await asyncio.sleep(0)
        assert pipeline.is_submitting
        with pytest.raises(SubmissionInProgress):
            await pipeline.submit()
        api.gate.set()
        assert await first == SubmissionOutcome.SUCCEEDED

    asyncio.run(run())
    assert len(api.calls) == 1


def test_succeeded_session_is_closed_until_restarted() -> None:
    form = _filled_form()
    pipeline = SubmissionPipeline(form, FakePostsApi())
    asyncio.run(pipeline.submit())

    with pytest.raises(SubmissionClosed):
        asyncio.run(pipeline.submit())

    pipeline.start_new_session()
    assert pipeline.state == SubmissionState.EDITING
    assert asyncio.run(pipeline.submit()) == SubmissionOutcome.INVALID


def test_attachment_is_forwarded(tmp_path: Path) -> None:
    image_path = tmp_path / "foto.jpg"
    image_path.write_bytes(b"\xff\xd8\xff")
    form = _filled_form()
    form.attach(Attachment.from_path(image_path))
    api = FakePostsApi()

    asyncio.run(SubmissionPipeline(form, api).submit())

    _fields, image = api.calls[0]
    assert image is not None
    assert image.filename == "foto.jpg"
    assert form.draft.file is None


def test_attachment_deleted_before_submit_fails_cleanly(tmp_path: Path) -> None:
    image_path = tmp_path / "foto.png"
    image_path.write_bytes(b"\x89PNG")
    form = _filled_form()
    form.attach(Attachment.from_path(image_path))
    image_path.unlink()
    sent: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(request)
        return httpx.Response(201)

    api = HttpPostsApi("https://sos.example", transport=httpx.MockTransport(handler))
    pipeline = SubmissionPipeline(form, api)

    async def run() -> SubmissionOutcome:
        try:
            return await pipeline.submit()
        finally:
            await api.aclose()

    outcome = asyncio.run(run())

    assert outcome == SubmissionOutcome.FAILED
    assert pipeline.state == SubmissionState.EDITING
    assert pipeline.failure_message == FAILURE_MESSAGE
    assert sent == []
    assert form.draft.name == "Defesa Civil"
    assert form.draft.file is not None


class BrokenPostsApi(FakePostsApi):
    def __init__(self) -> None:
        super().__init__()
        self.broken = True

    async def create_post(self, fields: Dict[str, str], image: Optional[Attachment]) -> None:
        if self.broken:
            raise RuntimeError("unexpected")
        await super().create_post(fields, image)


def test_unexpected_error_returns_to_editing() -> None:
    form = _filled_form()
    api = BrokenPostsApi()
    pipeline = SubmissionPipeline(form, api)

    with pytest.raises(RuntimeError):
        asyncio.run(pipeline.submit())

    assert pipeline.state == SubmissionState.EDITING
    assert pipeline.failure_message == FAILURE_MESSAGE
    assert form.draft.name == "Defesa Civil"

    api.broken = False
    assert asyncio.run(pipeline.submit()) == SubmissionOutcome.SUCCEEDED
