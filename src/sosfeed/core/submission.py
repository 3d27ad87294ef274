"""Submission pipeline for a new post.

The pipeline enforces a strict order:
1) Validate the draft locally (no network on failure)
2) Serialize the draft as multipart fields plus the optional image
3) Submit to the Posts API
4) Reset the draft on success, or keep it intact on failure

A failed submission must never cost the user their draft.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, List, Optional

from sosfeed.core.draft import DraftForm
from sosfeed.core.errors import PostsApiError, SubmissionClosed, SubmissionInProgress
from sosfeed.core.ports import PostsApiPort
from sosfeed.core.preview import ImagePreview
from sosfeed.core.validation import validate_submission

LOGGER = logging.getLogger(__name__)

FAILURE_MESSAGE = "Erro ao enviar publicação"


class SubmissionState(str, enum.Enum):
    EDITING = "editing"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SubmissionOutcome(str, enum.Enum):
    INVALID = "invalid"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


Listener = Callable[[SubmissionState], None]


class SubmissionPipeline:
    """Orchestrates validate, submit and the success/failure transition."""

    def __init__(
        self,
        form: DraftForm,
        posts_api: PostsApiPort,
        preview: Optional[ImagePreview] = None,
    ) -> None:
        self._form = form
        self._posts_api = posts_api
        self._preview = preview
        self._listeners: List[Listener] = []
        self.state = SubmissionState.EDITING
        self.failure_message: Optional[str] = None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _transition(self, state: SubmissionState) -> None:
        self.state = state
        for listener in list(self._listeners):
            listener(state)

    @property
    def is_submitting(self) -> bool:
        return self.state == SubmissionState.SUBMITTING

    async def submit(self) -> SubmissionOutcome:
        if self.state == SubmissionState.SUBMITTING:
            raise SubmissionInProgress("A submission is already in flight")
        if self.state == SubmissionState.SUCCEEDED:
            raise SubmissionClosed("This compose session already succeeded")

        self.failure_message = None
        self._transition(SubmissionState.VALIDATING)
        errors = validate_submission(self._form.draft)
        self._form.set_errors(errors)
        if errors:
            self._transition(SubmissionState.EDITING)
            return SubmissionOutcome.INVALID

        draft = self._form.draft
        self._transition(SubmissionState.SUBMITTING)
        try:
            await self._posts_api.create_post(draft.to_form_fields(), draft.file)
        except PostsApiError:
            LOGGER.exception("Post submission failed")
            self.failure_message = FAILURE_MESSAGE
            self._transition(SubmissionState.FAILED)
            self._transition(SubmissionState.EDITING)
            return SubmissionOutcome.FAILED
        except Exception:
            # Never leave the session stuck in SUBMITTING.
            LOGGER.exception("Unexpected error while submitting post")
            self.failure_message = FAILURE_MESSAGE
            self._transition(SubmissionState.EDITING)
            raise

        self._form.reset()
        if self._preview is not None:
            self._preview.clear()
        self._transition(SubmissionState.SUCCEEDED)
        LOGGER.info("Post submitted")
        return SubmissionOutcome.SUCCEEDED

    def start_new_session(self) -> None:
        """Leave the terminal success state for a fresh compose session."""

        self.failure_message = None
        self._transition(SubmissionState.EDITING)
