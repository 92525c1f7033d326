"""Add screen — modal for inserting a single variable."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label

from nzdeploy.models import EnvVar


class AddScreen(ModalScreen[EnvVar | None]):
    """Modal that lets the user add a new key/value variable.

    Dismisses with a new EnvVar on save, or None on cancel.  A blank key
    is rejected inline.  Re-using an existing key is allowed; the hint
    warns that the newest value is the one deployed.
    """

    BINDINGS = [
        Binding("escape", "cancel", show=False),
    ]

    def __init__(self, existing_keys: set[str] | None = None) -> None:
        super().__init__()
        self._existing_keys = existing_keys or set()

    def compose(self) -> ComposeResult:
        with Vertical(id="add-container"):
            yield Label("Add variable", id="add-title")
            yield Input(placeholder="KEY", id="add-key")
            yield Input(placeholder="VALUE", id="add-value")
            yield Label("", id="add-error")
            yield Label("Tab · Enter to save · Escape to cancel", id="add-hint")

    def on_mount(self) -> None:
        self.query_one("#add-key", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "add-key":
            return
        error = self.query_one("#add-error", Label)
        if event.value.strip() in self._existing_keys:
            error.update(f"'{event.value.strip()}' is already set; this value will win on deploy")
        else:
            error.update("")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "add-key":
            self.query_one("#add-value", Input).focus()
            return
        self._try_save()

    def _try_save(self) -> None:
        key = self.query_one("#add-key", Input).value.strip()
        if not key:
            self.query_one("#add-error", Label).update("Key cannot be blank")
            self.query_one("#add-key", Input).focus()
            return
        value = self.query_one("#add-value", Input).value.strip()
        self.dismiss(EnvVar(key=key, value=value))

    def action_cancel(self) -> None:
        self.dismiss(None)
