"""Help overlay screen."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from nzdeploy.constants import HELP_TEXT


class HelpScreen(ModalScreen):
    """Keyboard shortcuts plus where the deployment will be sent."""

    BINDINGS = [
        Binding("escape", "dismiss", show=False),
        Binding("?", "dismiss", show=False),
        Binding("q", "dismiss", show=False),
    ]

    def __init__(self, endpoint: str = "") -> None:
        super().__init__()
        self._endpoint = endpoint

    def compose(self) -> ComposeResult:
        with Vertical(id="help-container"):
            yield Static(HELP_TEXT, id="help-text")
            if self._endpoint:
                yield Label(f" Deploys to {self._endpoint}", id="help-endpoint", markup=False)

    def on_click(self) -> None:
        self.dismiss()
