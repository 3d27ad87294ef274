"""Compose-form state container."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from sosfeed.core.formatting import format_phone, format_postal_code
from sosfeed.core.models import Attachment, DraftSubmission, FieldErrors, PostalAddress

LOGGER = logging.getLogger(__name__)

Listener = Callable[["DraftForm"], None]


class DraftForm:
    """Holds the draft and its field errors for one compose session.

    Editing a field clears that field's error immediately, so an edited
    field never shows a stale message from the previous validation pass.
    """

    def __init__(self) -> None:
        self.draft = DraftSubmission()
        self.errors: FieldErrors = {}
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def edit(self, field_name: str, value: str) -> None:
        if field_name not in DraftSubmission.text_fields():
            raise ValueError(f"Unknown draft field: {field_name}")
        setattr(self.draft, field_name, value)
        self.errors.pop(field_name, None)
        self._notify()

    def edit_phone(self, raw: str) -> str:
        formatted = format_phone(raw)
        self.edit("phone", formatted)
        return formatted

    def edit_postal_code(self, raw: str) -> str:
        formatted = format_postal_code(raw)
        self.edit("cep", formatted)
        return formatted

    def attach(self, attachment: Optional[Attachment]) -> None:
        self.draft.file = attachment
        self._notify()

    def set_errors(self, errors: FieldErrors) -> None:
        self.errors = dict(errors)
        self._notify()

    def apply_address(self, address: PostalAddress, *, include_postal_code: bool = False) -> None:
        """Overwrite the auto-fillable address fields in one update."""

        self.draft.address = address.street
        self.draft.neighborhood = address.neighborhood
        self.draft.city = address.city
        self.draft.state = address.state
        cleared = ["address"]
        if include_postal_code:
            self.draft.cep = address.cep
            cleared.append("cep")
            if address.number:
                self.draft.number = address.number
        for name in cleared:
            self.errors.pop(name, None)
        LOGGER.debug("Address fields filled for %s", address.cep)
        self._notify()

    def reset(self) -> None:
        self.draft = DraftSubmission()
        self.errors = {}
        self._notify()
