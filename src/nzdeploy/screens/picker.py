"""Picker modal — choose one entry from a list (repository or deployment type)."""

from typing import TypeVar

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import ListItem, ListView, Static

T = TypeVar("T")


class PickerScreen(ModalScreen[T | None]):
    """Modal list of ``(label, value)`` options.

    The option whose value equals ``current`` is pre-highlighted and marked
    with an arrow.  Dismisses with the chosen value on Enter or ``None`` on
    Escape/q.
    """

    BINDINGS = [
        Binding("escape", "cancel", show=False),
        Binding("q", "cancel", show=False),
        Binding("j", "cursor_down", show=False),
        Binding("k", "cursor_up", show=False),
    ]

    DEFAULT_CSS = """
    PickerScreen {
        align: center middle;
    }
    """

    def __init__(self, title: str, options: list[tuple[str, T]], current: T | None = None) -> None:
        super().__init__()
        self._title = title
        self._options = options
        self._current = current

    def compose(self) -> ComposeResult:
        items: list[ListItem] = []
        for label, value in self._options:
            is_current = value == self._current
            text = f"  → {label}" if is_current else f"    {label}"
            classes = "picker-item picker-active" if is_current else "picker-item"
            items.append(ListItem(Static(text, classes="picker-label"), classes=classes))

        yield Static(f"  {self._title}", id="picker-title")
        yield ListView(*items, id="picker-list")
        yield Static("  Enter to select · Esc/q to cancel", id="picker-hint")

    def on_mount(self) -> None:
        list_view = self.query_one("#picker-list", ListView)
        for i, (_, value) in enumerate(self._options):
            if value == self._current:
                list_view.index = i
                break
        list_view.focus()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        index = event.list_view.index
        if index is None or not 0 <= index < len(self._options):
            return
        self.dismiss(self._options[index][1])

    def action_cursor_down(self) -> None:
        self.query_one("#picker-list", ListView).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#picker-list", ListView).action_cursor_up()

    def action_cancel(self) -> None:
        self.dismiss(None)
