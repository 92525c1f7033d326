"""Main view: the environment variable table with its placeholder and loading overlay."""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Label, LoadingIndicator

from nzdeploy.widgets.env_table import EnvTable


class MainView(Vertical):
    """Composes the env var table, an empty-state label and a loading indicator."""

    def compose(self) -> ComposeResult:
        yield Label("No environment variables added yet · o to add · p to paste", id="empty-hint")
        yield EnvTable(id="env-table")
        yield LoadingIndicator(id="loading")
