"""Modal dialogs for the Textual UI."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class SubmissionSuccessScreen(ModalScreen[bool]):
    """Confirmation shown once a post was accepted by the API."""

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Publicação Enviada!", classes="modal-title"),
            Static(
                "Sua publicação foi enviada com sucesso e está sendo analisada "
                "pelas autoridades competentes.",
                classes="modal-body",
            ),
            Horizontal(
                Button("Voltar ao Feed", id="success-back", variant="success"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "success-back")
