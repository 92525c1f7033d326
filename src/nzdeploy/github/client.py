"""Thin wrapper around the GitHub CLI for identity and repository listing.

All calls shell out to ``gh`` so no OAuth flow lives in this package.  The
caller is responsible for ensuring ``gh`` is authenticated (``gh auth login``).

Raises ``GitHubClientError`` on any failed call.
"""

import json
import logging
import subprocess

from pydantic import ValidationError

from nzdeploy.constants import GH_TIMEOUT_SECONDS
from nzdeploy.models import Identity, Repository

logger = logging.getLogger(__name__)


class GitHubClientError(Exception):
    """Raised when a ``gh`` CLI call fails or returns unexpected output."""


class GitHubClient:
    """Shells out to the GitHub CLI to read the signed-in user's account.

    Args:
        timeout: Seconds to wait for each ``gh`` invocation.
    """

    def __init__(self, timeout: float = GH_TIMEOUT_SECONDS) -> None:
        self._timeout = timeout

    def token(self) -> str:
        """Return the access token of the active ``gh`` session."""
        token = self._run(["gh", "auth", "token"]).strip()
        if not token:
            raise GitHubClientError("gh returned an empty token; run `gh auth login`")
        return token

    def current_user(self) -> Identity:
        """Return the identity of the signed-in user."""
        data = self._run_json(["gh", "api", "user"])
        try:
            return Identity.model_validate(data)
        except ValidationError as exc:
            raise GitHubClientError(f"Unexpected user payload from gh: {exc}") from exc

    def list_repositories(self, per_page: int = 100) -> list[Repository]:
        """Return the user's repositories, most recently updated first.

        A single page is requested; the hosting API caps ``per_page`` at 100.
        """
        data = self._run_json(["gh", "api", f"user/repos?per_page={per_page}&sort=updated"])
        if not isinstance(data, list):
            raise GitHubClientError("Expected a JSON array of repositories from gh")
        try:
            repos = [Repository.model_validate(item) for item in data]
        except ValidationError as exc:
            raise GitHubClientError(f"Unexpected repository payload from gh: {exc}") from exc
        logger.info("Fetched %d repositories", len(repos))
        return repos

    def _run_json(self, cmd: list[str]) -> object:
        output = self._run(cmd)
        try:
            return json.loads(output)
        except json.JSONDecodeError as exc:
            raise GitHubClientError(f"Invalid JSON from gh: {exc}") from exc

    def _run(self, cmd: list[str]) -> str:
        """Run a command, returning stdout. Raises GitHubClientError on failure."""
        logger.debug("Running %s", " ".join(cmd[:3]))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self._timeout)
        except FileNotFoundError as exc:
            raise GitHubClientError("gh CLI not found; install it from https://cli.github.com") from exc
        except subprocess.TimeoutExpired as exc:
            raise GitHubClientError(f"gh timed out after {self._timeout}s") from exc
        if result.returncode != 0:
            raise GitHubClientError(
                f"Command failed (exit {result.returncode}):\n"
                f"  {' '.join(cmd)}\n"
                f"  stderr: {result.stderr.strip()}"
            )
        return result.stdout
