"""Environment variable table widget."""

from rich.text import Text
from textual.binding import Binding
from textual.events import Click
from textual.message import Message
from textual.widgets import DataTable

from nzdeploy.constants import TABLE_COLUMNS
from nzdeploy.domain.ingest import duplicate_keys
from nzdeploy.models import EnvVar


class EnvTable(DataTable):
    """Scrollable table of the draft's environment variables.

    Rows are keyed by their position in the collection rather than by the
    variable's key, because a paste may legitimately add the same key twice.
    Keys that occur more than once are rendered in yellow: only the last
    occurrence is sent on deploy.  Cells are plain ``Text`` so pasted
    values are never read as markup.

    Double-clicking a row posts ``EnvTable.RowDoubleClicked`` so the app
    can open the edit modal without any keyboard interaction.
    """

    class RowDoubleClicked(Message):
        """Posted when the user double-clicks a row."""

    BINDINGS = [
        Binding("j", "cursor_down", show=False),
        Binding("k", "cursor_up", show=False),
    ]

    def action_cursor_down(self) -> None:
        """Move down one row, wrapping from the last row to the first."""
        if self.row_count == 0:
            return
        if self.cursor_row == self.row_count - 1:
            self.move_cursor(row=0)
        else:
            super().action_cursor_down()

    def action_cursor_up(self) -> None:
        """Move up one row, wrapping from the first row to the last."""
        if self.row_count == 0:
            return
        if self.cursor_row == 0:
            self.move_cursor(row=self.row_count - 1)
        else:
            super().action_cursor_up()

    def on_mount(self) -> None:
        self.cursor_type = "row"
        self.zebra_stripes = True
        self.add_columns(*TABLE_COLUMNS)

    def load(self, vars: list[EnvVar]) -> None:
        """Replace table contents, keeping the cursor on the same row where possible."""
        row = self.cursor_row
        dupes = set(duplicate_keys(vars))
        self.clear()
        for i, var in enumerate(vars):
            key_style = "bold yellow" if var.key in dupes else ""
            self.add_row(str(i + 1), Text(var.key, style=key_style), Text(var.value), key=str(i))
        if self.row_count:
            self.move_cursor(row=min(row, self.row_count - 1))

    def selected_index(self) -> int | None:
        """Return the collection index of the highlighted row, or None when empty."""
        if self.row_count == 0:
            return None
        return self.cursor_row

    def on_click(self, event: Click) -> None:
        """Post RowDoubleClicked on a double-click (chain == 2)."""
        if event.chain == 2 and self.row_count > 0:
            self.post_message(EnvTable.RowDoubleClicked())
