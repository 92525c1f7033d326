"""Remove screen — confirm dropping one variable from the draft."""

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label

from nzdeploy.models import EnvVar


class RemoveScreen(ModalScreen[bool]):
    """Ask before removing ``var`` from the draft.

    When the same key is set by another row, the note says which value will
    be deployed instead; otherwise it warns that the key disappears from the
    request.  "Keep" has focus initially.
    """

    BINDINGS = [
        Binding("escape", "keep", show=False),
        Binding("y", "remove", show=False),
        Binding("n", "keep", show=False),
    ]

    def __init__(self, var: EnvVar, remaining_value: str | None = None) -> None:
        super().__init__()
        self._var = var
        self._remaining_value = remaining_value

    def compose(self) -> ComposeResult:
        with Vertical(id="remove-container"):
            yield Label(Text(f"Remove  {self._var.key}?"), id="remove-message")
            yield Label(Text(self._var.value or "(empty)"), id="remove-value")
            yield Label(Text(self._note()), id="remove-note")
            with Horizontal(id="remove-buttons"):
                yield Button("Remove", variant="error", id="remove-yes")
                yield Button("Keep", variant="primary", id="remove-no")

    def _note(self) -> str:
        if self._remaining_value is None:
            return f"{self._var.key} will not be sent on deploy"
        return f"{self._var.key} stays set to {self._remaining_value!r} by another row"

    def on_mount(self) -> None:
        self.query_one("#remove-no", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "remove-yes")

    def action_remove(self) -> None:
        self.dismiss(True)

    def action_keep(self) -> None:
        self.dismiss(False)
