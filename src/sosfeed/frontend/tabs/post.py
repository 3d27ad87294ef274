"""Post tab: the compose form for a new emergency report."""

from __future__ import annotations

import logging
from typing import Any, Callable, List

from textual import on
from textual.containers import Container, Horizontal, VerticalScroll
from textual.widgets import Button, Input, Select, Static, TextArea

from sosfeed.core.categories import FORM_CATEGORY_OPTIONS
from sosfeed.core.draft import DraftForm
from sosfeed.core.errors import GeolocationError, SubmissionError
from sosfeed.core.formatting import format_phone, format_postal_code
from sosfeed.core.models import Attachment
from sosfeed.core.submission import FAILURE_MESSAGE, SubmissionOutcome, SubmissionState

from ..modals import SubmissionSuccessScreen
from ..state import SessionState

LOGGER = logging.getLogger(__name__)

# (field, label, placeholder) for the plain single-line inputs.
TEXT_FIELDS = [
    ("name", "Nome / Organização", "Seu nome ou organização"),
    ("address", "Endereço", "Rua, avenida..."),
    ("number", "Número", "123"),
    ("neighborhood", "Bairro", "Bairro"),
    ("city", "Cidade", "Cidade"),
    ("state", "Estado", "UF"),
]

VALIDATED_FIELDS = ["name", "content", "category", "phone", "cep", "address", "number"]


class PostTab(Container):
    """Compose form bound to the session's DraftForm and pipelines."""

    def __init__(self, session: SessionState, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._session = session
        self._unsubscribers: List[Callable[[], None]] = []

    @property
    def _form(self) -> DraftForm:
        return self._session.form

    def compose(self):
        with VerticalScroll(id="post-panel"):
            yield Static("Nova Publicação", id="post-title")
            yield Static("Nome / Organização", classes="form-label")
            yield Input(placeholder="Seu nome ou organização", id="field-name", classes="draft-field")
            yield Static("", id="error-name", classes="form-error")

            yield Static("Categoria", classes="form-label")
            yield Select(
                [(label, value) for value, label in FORM_CATEGORY_OPTIONS],
                prompt="Selecione o tipo de situação",
                id="field-category",
            )
            yield Static("", id="error-category", classes="form-error")

            yield Static("Descrição da situação", classes="form-label")
            yield TextArea(id="field-content")
            yield Static("", id="error-content", classes="form-error")

            yield Static("Telefone", classes="form-label")
            yield Input(placeholder="(11) 99999-9999", id="field-phone")
            yield Static("", id="error-phone", classes="form-error")

            yield Static("CEP", classes="form-label")
            with Horizontal(id="cep-row"):
                yield Input(placeholder="00000-000", id="field-cep")
                yield Button("Usar minha localização", id="post-locate")
            yield Static("", id="cep-status", classes="subtle")
            yield Static("", id="error-cep", classes="form-error")

            for name, label, placeholder in TEXT_FIELDS[1:]:
                yield Static(label, classes="form-label")
                yield Input(placeholder=placeholder, id=f"field-{name}", classes="draft-field")
                if name in VALIDATED_FIELDS:
                    yield Static("", id=f"error-{name}", classes="form-error")

            yield Static("Imagem (caminho do arquivo, opcional)", classes="form-label")
            yield Input(placeholder="/caminho/para/foto.jpg", id="field-image")
            yield Static("", id="image-status", classes="subtle")

            yield Button("Enviar Publicação", id="post-submit", variant="error")

    def on_mount(self) -> None:
        self._unsubscribers.append(self._form.subscribe(lambda _form: self._sync_from_form()))
        self._unsubscribers.append(self._session.pipeline.subscribe(self._on_state_changed))
        self._sync_from_form()

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    @on(Input.Changed, ".draft-field")
    def _on_text_changed(self, event: Input.Changed) -> None:
        field_name = (event.input.id or "").replace("field-", "", 1)
        if getattr(self._form.draft, field_name) != event.value:
            self._form.edit(field_name, event.value)

    @on(TextArea.Changed, "#field-content")
    def _on_content_changed(self, event: TextArea.Changed) -> None:
        text = event.text_area.text
        if self._form.draft.content != text:
            self._form.edit("content", text)

    @on(Select.Changed, "#field-category")
    def _on_category_changed(self, event: Select.Changed) -> None:
        value = "" if event.value is Select.BLANK else str(event.value)
        if self._form.draft.category != value:
            self._form.edit("category", value)

    @on(Input.Changed, "#field-phone")
    def _on_phone_changed(self, event: Input.Changed) -> None:
        formatted = format_phone(event.value)
        if formatted != event.value:
            # Re-masking fires another Changed with the canonical value.
            event.input.value = formatted
            return
        if self._form.draft.phone != formatted:
            self._form.edit_phone(formatted)

    @on(Input.Changed, "#field-cep")
    def _on_cep_changed(self, event: Input.Changed) -> None:
        formatted = format_postal_code(event.value)
        if formatted != event.value:
            event.input.value = formatted
            return
        if self._form.draft.cep != formatted:
            self.run_worker(self._lookup_postal_code(formatted), group="cep")

    @on(Input.Submitted, "#field-image")
    def _on_image_submitted(self, event: Input.Submitted) -> None:
        raw_path = event.value.strip()
        status = self.query_one("#image-status", Static)
        if not raw_path:
            self._form.attach(None)
            self._session.preview.clear()
            status.update("")
            return
        attachment = Attachment.from_path(raw_path)
        if not attachment.path.is_file():
            status.update(f"Arquivo não encontrado: {attachment.path}")
            return
        self._form.attach(attachment)
        self.run_worker(self._load_preview(attachment), group="preview")

    @on(Button.Pressed, "#post-locate")
    def _on_locate_pressed(self) -> None:
        self.run_worker(self._locate(), group="locate")

    @on(Button.Pressed, "#post-submit")
    def _on_submit_pressed(self) -> None:
        if self._session.pipeline.is_submitting:
            return
        self.run_worker(self._submit(), group="submit")

    async def _lookup_postal_code(self, value: str) -> None:
        status = self.query_one("#cep-status", Static)
        status.update("Buscando CEP..." if len(value) == 9 else "")
        await self._session.resolver.handle_postal_code_input(value)
        if not self._session.resolver.is_loading_postal_code:
            status.update("")

    async def _load_preview(self, attachment: Attachment) -> None:
        status = self.query_one("#image-status", Static)
        try:
            data_url = await self._session.preview.load(attachment)
        except OSError as exc:
            status.update(f"Não foi possível ler a imagem: {exc}")
            return
        if data_url is None:
            status.update(f"Anexo: {attachment.filename} (sem pré-visualização)")
        else:
            status.update(f"Pré-visualização pronta: {attachment.filename}")

    async def _locate(self) -> None:
        button = self.query_one("#post-locate", Button)
        button.disabled = True
        button.label = "Obtendo localização..."
        try:
            await self._session.resolver.locate()
        except GeolocationError as exc:
            self.app.notify(str(exc), severity="error")
        finally:
            button.disabled = False
            button.label = "Usar minha localização"

    async def _submit(self) -> None:
        try:
            outcome = await self._session.pipeline.submit()
        except SubmissionError as exc:
            self.app.notify(str(exc), severity="warning")
            return
        except Exception:
            LOGGER.exception("Submit worker failed")
            self.app.notify(self._session.pipeline.failure_message or FAILURE_MESSAGE, severity="error")
            return
        if outcome == SubmissionOutcome.INVALID:
            self.app.notify("Corrija os campos destacados", severity="warning")
        elif outcome == SubmissionOutcome.FAILED:
            self.app.notify(self._session.pipeline.failure_message or "", severity="error")
        else:
            self.query_one("#image-status", Static).update("")
            self.query_one("#field-image", Input).value = ""
            self.app.push_screen(SubmissionSuccessScreen(), self._handle_success_choice)

    def _handle_success_choice(self, back_to_feed: "bool | None") -> None:
        self._session.pipeline.start_new_session()
        if back_to_feed:
            self.app.show_feed(reload=True)

    def _on_state_changed(self, state: SubmissionState) -> None:
        button = self.query_one("#post-submit", Button)
        submitting = state == SubmissionState.SUBMITTING
        button.disabled = submitting
        button.label = "Enviando..." if submitting else "Enviar Publicação"

    def _sync_from_form(self) -> None:
        draft = self._form.draft
        for name, _label, _placeholder in TEXT_FIELDS:
            widget = self.query_one(f"#field-{name}", Input)
            if widget.value != getattr(draft, name):
                widget.value = getattr(draft, name)
        for name in ("phone", "cep"):
            widget = self.query_one(f"#field-{name}", Input)
            if widget.value != getattr(draft, name):
                widget.value = getattr(draft, name)
        content = self.query_one("#field-content", TextArea)
        if content.text != draft.content:
            content.text = draft.content
        select = self.query_one("#field-category", Select)
        if not draft.category:
            if select.value is not Select.BLANK:
                select.value = Select.BLANK
        elif select.value != draft.category:
            select.value = draft.category
        for name in VALIDATED_FIELDS:
            self.query_one(f"#error-{name}", Static).update(self._form.errors.get(name, ""))
