"""Paste screen — modal text area for ingesting a block of variables."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, TextArea

from nzdeploy.constants import PASTE_HINT
from nzdeploy.domain.ingest import parse


class PasteScreen(ModalScreen[str | None]):
    """Modal where the user pastes ``.env``-style text.

    The label under the text area previews how many variables the text
    will yield as the user types or pastes.  Dismisses with the raw text on
    save (the app ingests it), or None on cancel.  ``ctrl+w`` saves from
    anywhere in the modal.
    """

    BINDINGS = [
        Binding("escape", "cancel", show=False),
        Binding("ctrl+w", "save", show=False, priority=True),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(id="paste-container"):
            yield Label("Paste environment variables", id="paste-title")
            yield TextArea(id="paste-text", show_line_numbers=False)
            yield Label("0 variables detected", id="paste-preview")
            yield Label(PASTE_HINT, id="paste-hint")
            with Horizontal(id="paste-buttons"):
                yield Button("Add", variant="success", id="paste-save")
                yield Button("Cancel", variant="primary", id="paste-cancel")

    def on_mount(self) -> None:
        self.query_one("#paste-text", TextArea).focus()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        count = len(parse(event.text_area.text))
        noun = "variable" if count == 1 else "variables"
        self.query_one("#paste-preview", Label).update(f"{count} {noun} detected")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "paste-save":
            self.action_save()
        elif event.button.id == "paste-cancel":
            self.dismiss(None)

    def action_save(self) -> None:
        text = self.query_one("#paste-text", TextArea).text
        self.dismiss(text if text.strip() else None)

    def action_cancel(self) -> None:
        self.dismiss(None)
