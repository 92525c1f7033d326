"""Horizontal bar summarising the deployment draft."""

from rich.text import Text
from textual.app import ComposeResult
from textual.events import Click
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Static

from nzdeploy.models import Category, Identity

_UNSET = "–"


class SummaryBar(Widget):
    """A bar showing who is signed in and what will be deployed.

    Renders as:  octocat ▸  type [Backend]  repo [orders-api]  3 vars

    Clicking the type or repository label posts ``CategoryClicked`` or
    ``RepositoryClicked`` for the app to open the matching picker.
    """

    class CategoryClicked(Message):
        """Posted when the user clicks the deployment type."""

    class RepositoryClicked(Message):
        """Posted when the user clicks the repository."""

    can_focus = False

    def compose(self) -> ComposeResult:
        yield Static("signing in…", id="summary-user", classes="summary-user")
        yield Static(f"type {_UNSET}", id="summary-category", classes="summary-item unset")
        yield Static(f"repo {_UNSET}", id="summary-repo", classes="summary-item unset")
        yield Static("0 vars", id="summary-count", classes="summary-count")

    def show_identity(self, identity: Identity | None) -> None:
        label = f"{identity.display_name} ▸" if identity else "not signed in ▸"
        self.query_one("#summary-user", Static).update(Text(label))

    def show_draft(self, category: Category | None, repository: str | None, var_count: int) -> None:
        """Re-render the selection labels from the current draft."""
        category_label = self.query_one("#summary-category", Static)
        category_label.update(Text(f"type [{category.value}]" if category else f"type {_UNSET}"))
        category_label.set_class(category is None, "unset")

        repo_label = self.query_one("#summary-repo", Static)
        repo_label.update(Text(f"repo [{repository}]" if repository else f"repo {_UNSET}"))
        repo_label.set_class(repository is None, "unset")

        noun = "var" if var_count == 1 else "vars"
        self.query_one("#summary-count", Static).update(f"{var_count} {noun}")

    def on_click(self, event: Click) -> None:
        widget = event.widget
        if widget is None or not widget.id:
            return
        if widget.id == "summary-category":
            self.post_message(SummaryBar.CategoryClicked())
        elif widget.id == "summary-repo":
            self.post_message(SummaryBar.RepositoryClicked())
