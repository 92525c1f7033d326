"""Edit screen — modal for changing a variable's key and value."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label

from nzdeploy.models import EnvVar


class EditScreen(ModalScreen[EnvVar | None]):
    """Modal that lets the user edit both fields of an existing variable.

    Dismisses with the edited EnvVar on save, or None on cancel.
    """

    BINDINGS = [
        Binding("escape", "cancel", show=False),
    ]

    def __init__(self, var: EnvVar) -> None:
        super().__init__()
        self._var = var

    def compose(self) -> ComposeResult:
        with Vertical(id="edit-container"):
            yield Label(f"Edit  {self._var.key}", id="edit-title")
            yield Input(value=self._var.key, placeholder="KEY", id="edit-key")
            yield Input(value=self._var.value, placeholder="VALUE", id="edit-value")
            yield Label("Tab to switch · Enter to save · Escape to cancel", id="edit-hint")

    def on_mount(self) -> None:
        value_input = self.query_one("#edit-value", Input)
        value_input.focus()
        value_input.cursor_position = len(self._var.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        key = self.query_one("#edit-key", Input).value.strip()
        if not key:
            hint = self.query_one("#edit-hint", Label)
            hint.update("[red]Key cannot be blank[/]")
            self.set_timer(2.0, lambda: hint.update("Tab to switch · Enter to save · Escape to cancel"))
            self.query_one("#edit-key", Input).focus()
            return
        value = self.query_one("#edit-value", Input).value.strip()
        self.dismiss(EnvVar(key=key, value=value))

    def action_cancel(self) -> None:
        self.dismiss(None)
