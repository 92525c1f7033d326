"""Deploy-confirm screen — shows exactly what will be submitted before deploying."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, ScrollableContainer, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label

from nzdeploy.domain.ingest import duplicate_keys, to_submission_map
from nzdeploy.models import Category, EnvVar


class DeployConfirmScreen(ModalScreen[bool]):
    """Modal summarising the deployment request.

    Presents the repository and type, then the folded submission map:
      = KEY  value      variables sent as-is
      ~ KEY  value      keys entered more than once (the last value wins)

    Dismisses True on confirm, False on cancel.
    """

    BINDINGS = [
        Binding("escape", "cancel", show=False),
        Binding("n", "cancel", show=False),
        Binding("q", "cancel", show=False),
        Binding("y", "confirm", show=False),
        Binding("h", "focus_no", show=False),
        Binding("left", "focus_no", show=False),
        Binding("l", "focus_yes", show=False),
        Binding("right", "focus_yes", show=False),
    ]

    def __init__(self, repository: str, category: Category, env_vars: list[EnvVar]) -> None:
        super().__init__()
        self._repository = repository
        self._category = category
        self._env_vars = env_vars

    def compose(self) -> ComposeResult:
        with Vertical(id="deploy-confirm-container"):
            yield Label(
                f"Deploy {escape(self._repository)} as {self._category.value}?",
                id="deploy-confirm-title",
            )
            with ScrollableContainer(id="deploy-confirm-vars"):
                for line in self._summary_lines():
                    yield Label(line, markup=True)
            with Horizontal(id="deploy-confirm-buttons"):
                yield Button("Deploy", variant="success", id="deploy-confirm-yes")
                yield Button("Cancel", variant="primary", id="deploy-confirm-no")

    def on_mount(self) -> None:
        self.query_one("#deploy-confirm-no", Button).focus()

    def _summary_lines(self) -> list[str]:
        dupes = set(duplicate_keys(self._env_vars))
        lines: list[str] = []
        for key, value in to_submission_map(self._env_vars).items():
            if key in dupes:
                lines.append(f"[yellow]~  {escape(key)}  {escape(value)}  (last value wins)[/]")
            else:
                lines.append(f"[green]=  {escape(key)}  {escape(value)}[/]")
        return lines or ["[dim](no environment variables)[/]"]

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "deploy-confirm-yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)

    def action_focus_yes(self) -> None:
        self.query_one("#deploy-confirm-yes", Button).focus()

    def action_focus_no(self) -> None:
        self.query_one("#deploy-confirm-no", Button).focus()
