"""Main application entry point."""

import logging
from dataclasses import replace

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.reactive import reactive
from textual.widgets import Footer, Header, Label, LoadingIndicator

from nzdeploy.config import load_theme, save_theme
from nzdeploy.constants import APP_TITLE
from nzdeploy.deploy.client import DeployClientError
from nzdeploy.domain.ingest import format_dotenv, to_submission_map
from nzdeploy.github.client import GitHubClientError
from nzdeploy.models import Category, DeploymentRequest, EnvVar, Identity, Repository
from nzdeploy.providers import AccountProvider, Deployer, MockAccountProvider, MockDeployer
from nzdeploy.screens.add import AddScreen
from nzdeploy.screens.deploy_confirm import DeployConfirmScreen
from nzdeploy.screens.edit import EditScreen
from nzdeploy.screens.help import HelpScreen
from nzdeploy.screens.paste import PasteScreen
from nzdeploy.screens.picker import PickerScreen
from nzdeploy.screens.remove import RemoveScreen
from nzdeploy.session import DeploySession, SessionError
from nzdeploy.widgets.env_table import EnvTable
from nzdeploy.widgets.main_view import MainView
from nzdeploy.widgets.summary_bar import SummaryBar

logger = logging.getLogger(__name__)


class DeployApp(App):
    """Nearzero deploy — assemble and submit a deployment request."""

    CSS_PATH = "app.tcss"
    TITLE = APP_TITLE

    loading: reactive[bool] = reactive(False, init=False)
    deploying: reactive[bool] = reactive(False, init=False)

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("?", "toggle_help", "Help"),
        Binding("c", "pick_category", "Type"),
        Binding("r", "pick_repository", "Repo"),
        Binding("o", "add_var", "Add"),
        Binding("p", "paste_vars", "Paste"),
        Binding("i", "edit_var", "Edit"),
        Binding("enter", "edit_var", show=False),
        Binding("d", "delete_var", "dd Delete"),
        Binding("y", "copy_vars", "Copy"),
        Binding("D", "deploy", "Deploy"),
    ]

    def __init__(
        self,
        account: AccountProvider | None = None,
        deployer: Deployer | None = None,
    ) -> None:
        super().__init__()
        self._account: AccountProvider = account or MockAccountProvider()
        self._deployer: Deployer = deployer or MockDeployer()
        self.session = DeploySession()
        self._identity: Identity | None = None
        self._repositories: list[Repository] = []
        self._d_pressed: bool = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield SummaryBar(id="summary")
        yield MainView(id="main")
        yield Footer()

    def on_mount(self) -> None:
        saved_theme = load_theme()
        if saved_theme:
            self.theme = saved_theme
        self._refresh_table()
        self._get_table().focus()
        self.loading = True
        self._load_account()

    @work(thread=True, exclusive=True, group="account")
    def _load_account(self) -> None:
        """Fetch the signed-in identity and repositories in a background thread."""
        try:
            identity = self._account.identity()
            repos = self._account.list_repositories()
        except GitHubClientError as exc:
            logger.warning("Account load failed: %s", exc)
            self.call_from_thread(self._account_failed, str(exc))
            return
        self.call_from_thread(self._account_loaded, identity, repos)

    def _account_loaded(self, identity: Identity, repos: list[Repository]) -> None:
        self._identity = identity
        self._repositories = repos
        self.loading = False
        self.query_one("#summary", SummaryBar).show_identity(identity)
        if not repos:
            self.notify("No repositories found", severity="warning", timeout=4)

    def _account_failed(self, message: str) -> None:
        self.loading = False
        self.query_one("#summary", SummaryBar).show_identity(None)
        self.notify(f"Error fetching repositories: {message}", severity="error", timeout=8)

    def watch_loading(self, loading: bool) -> None:
        """Show or hide the loading overlay."""
        self.query_one("#loading", LoadingIndicator).display = loading

    def watch_deploying(self, deploying: bool) -> None:
        self.sub_title = "Deploying…" if deploying else self._draft_subtitle()

    def watch_theme(self, theme: str) -> None:
        """Persist theme changes whenever the theme is changed."""
        save_theme(theme)

    def on_summary_bar_category_clicked(self, event: SummaryBar.CategoryClicked) -> None:
        event.stop()
        self.action_pick_category()

    def on_summary_bar_repository_clicked(self, event: SummaryBar.RepositoryClicked) -> None:
        event.stop()
        self.action_pick_repository()

    def on_env_table_row_double_clicked(self, event: EnvTable.RowDoubleClicked) -> None:
        event.stop()
        self.action_edit_var()

    def _get_table(self) -> EnvTable:
        return self.query_one("#env-table", EnvTable)

    def _draft_subtitle(self) -> str:
        return "ready to deploy" if self.session.can_deploy else "choose a type and a repository"

    def _refresh_table(self) -> None:
        """Repopulate the table and summary from the session."""
        vars = self.session.env_vars
        self._get_table().load(vars)
        self.query_one("#empty-hint", Label).display = not vars
        self.query_one("#summary", SummaryBar).show_draft(
            self.session.category, self.session.repository, len(vars)
        )
        if not self.deploying:
            self.sub_title = self._draft_subtitle()

    def action_toggle_help(self) -> None:
        self.push_screen(HelpScreen(endpoint=getattr(self._deployer, "url", "")))

    def action_pick_category(self) -> None:
        """Open the deployment-type picker; coming-soon types are listed but refused."""
        options = [
            (c.value if c.available else f"{c.value}  (coming soon)", c) for c in Category
        ]

        def on_pick(category: Category | None) -> None:
            if category is not None:
                try:
                    self.session.select_category(category)
                except SessionError as exc:
                    self.notify(str(exc), severity="warning", timeout=4)
                self._refresh_table()
            self._get_table().focus()

        self.push_screen(
            PickerScreen("Deployment type", options, current=self.session.category), on_pick
        )

    def action_pick_repository(self) -> None:
        """Open the repository picker populated from the account provider."""
        if self.loading:
            self.notify("Repositories are still loading, please wait", timeout=2)
            return
        if not self._repositories:
            self.notify("No repositories found", severity="warning", timeout=4)
            return

        options = [(self._repo_label(r), r.name) for r in self._repositories]

        def on_pick(name: str | None) -> None:
            if name is not None:
                self.session.select_repository(name)
                self._refresh_table()
            self._get_table().focus()

        self.push_screen(
            PickerScreen("Select repository", options, current=self.session.repository), on_pick
        )

    @staticmethod
    def _repo_label(repo: Repository) -> str:
        parts = [repo.name]
        if repo.language:
            parts.append(f"· {repo.language}")
        if repo.private:
            parts.append("· private")
        return " ".join(parts)

    def action_add_var(self) -> None:
        existing = {v.key for v in self.session.env_vars}

        def on_save(var: EnvVar | None) -> None:
            if var is not None and self.session.add_var(var.key, var.value) is not None:
                self._refresh_table()
                self._get_table().move_cursor(row=len(self.session.env_vars) - 1)
                self.notify(f"Added {var.key}", timeout=2)
            self._get_table().focus()

        self.push_screen(AddScreen(existing_keys=existing), on_save)

    def action_paste_vars(self) -> None:
        def on_paste(text: str | None) -> None:
            if text is not None:
                added = self.session.paste(text)
                self._refresh_table()
                if added:
                    noun = "variable" if len(added) == 1 else "variables"
                    self.notify(f"Added {len(added)} {noun}", timeout=2)
                else:
                    self.notify("No variables found in pasted text", severity="warning", timeout=4)
            self._get_table().focus()

        self.push_screen(PasteScreen(), on_paste)

    def action_edit_var(self) -> None:
        index = self._get_table().selected_index()
        if index is None:
            return
        current = self.session.env_vars[index]

        def on_save(var: EnvVar | None) -> None:
            if var is not None and var != current:
                try:
                    self.session.update_var(index, var.key, var.value)
                except (IndexError, SessionError) as exc:
                    self.notify(f"Update failed: {exc}", severity="error", timeout=8)
                else:
                    self._refresh_table()
                    self.notify(f"Updated {var.key}", timeout=2)
            self._get_table().focus()

        self.push_screen(EditScreen(current), on_save)

    def action_delete_var(self) -> None:
        """Implement vim-style dd: remove the selected variable on second d press."""
        if not self._d_pressed:
            self._d_pressed = True
            self.set_timer(0.5, self._reset_d)
            return

        self._d_pressed = False
        index = self._get_table().selected_index()
        if index is None:
            return
        var = self.session.env_vars[index]
        others = [v for i, v in enumerate(self.session.env_vars) if i != index]
        remaining = to_submission_map(others).get(var.key)

        def on_confirm(confirmed: bool | None) -> None:
            if confirmed:
                self.session.remove_var(index)
                self._refresh_table()
                self.notify(f"Removed {var.key}", timeout=2)
            self._get_table().focus()

        self.push_screen(RemoveScreen(var, remaining_value=remaining), on_confirm)

    def _reset_d(self) -> None:
        self._d_pressed = False

    def action_copy_vars(self) -> None:
        """Copy the whole collection to the clipboard as .env text."""
        if not self.session.env_vars:
            self.notify("Nothing to copy", timeout=2)
            return
        self.copy_to_clipboard(format_dotenv(self.session.env_vars))
        self.notify("Copied variables to clipboard", timeout=2)

    def action_deploy(self) -> None:
        """Confirm and submit the deployment request."""
        if self.deploying:
            self.notify("A deployment is already in progress", timeout=2)
            return
        if not self.session.can_deploy:
            self.notify(
                "Please select both a repository and a deployment type.",
                severity="warning",
                timeout=4,
            )
            return
        if self._identity is None:
            self.notify("Not signed in; cannot deploy", severity="error", timeout=8)
            return

        assert self.session.repository is not None and self.session.category is not None

        def on_confirm(confirmed: bool | None) -> None:
            if not confirmed:
                self._get_table().focus()
                return
            assert self._identity is not None
            try:
                draft = self.session.build_request(self._identity, access_token="")
            except SessionError as exc:
                self.notify(str(exc), severity="warning", timeout=4)
                return
            self.deploying = True
            self._submit(draft)

        self.push_screen(
            DeployConfirmScreen(
                self.session.repository, self.session.category, list(self.session.env_vars)
            ),
            on_confirm,
        )

    @work(thread=True, exclusive=True, group="deploy")
    def _submit(self, draft: DeploymentRequest) -> None:
        """Attach the access token to the confirmed draft and submit it."""
        try:
            request = replace(draft, access_token=self._account.access_token())
            result = self._deployer.submit(request)
        except (GitHubClientError, DeployClientError) as exc:
            logger.warning("Deployment failed: %s", exc)
            self.call_from_thread(self._deploy_failed, str(exc))
            return
        self.call_from_thread(self._deploy_finished, request.repo, result)

    def _deploy_finished(self, repo: str, result: dict) -> None:
        self.deploying = False
        logger.info("Deployment of %s accepted: %s", repo, result)
        self.notify(f"Deployment of {repo} submitted", timeout=4)
        self._get_table().focus()

    def _deploy_failed(self, message: str) -> None:
        self.deploying = False
        self.notify(f"Error deploying repository: {message}", severity="error", timeout=8)
        self._get_table().focus()
