"""Account and deployer protocols with their implementations."""

from typing import Protocol

from nzdeploy.constants import DEFAULT_PER_PAGE, MOCK_ACCESS_TOKEN, MOCK_IDENTITY, MOCK_REPOSITORIES
from nzdeploy.github.client import GitHubClient
from nzdeploy.models import DeploymentRequest, Identity, Repository


class AccountProvider(Protocol):
    """Protocol for the identity provider and repository-hosting API."""

    def identity(self) -> Identity:
        """Return the signed-in user."""
        ...

    def access_token(self) -> str:
        """Return the token forwarded with deployment requests."""
        ...

    def list_repositories(self) -> list[Repository]: ...


class Deployer(Protocol):
    """Protocol for the deployment-submission endpoint."""

    def submit(self, request: DeploymentRequest) -> dict: ...


class MockAccountProvider:
    """In-memory account seeded from MOCK_IDENTITY and MOCK_REPOSITORIES."""

    def __init__(self, repositories: list[dict[str, object]] | None = None) -> None:
        raw = MOCK_REPOSITORIES if repositories is None else repositories
        self._repos = [Repository.model_validate(r) for r in raw]

    def identity(self) -> Identity:
        return Identity.model_validate(MOCK_IDENTITY)

    def access_token(self) -> str:
        return MOCK_ACCESS_TOKEN

    def list_repositories(self) -> list[Repository]:
        return list(self._repos)


class GitHubAccountProvider:
    """AccountProvider backed by the ``gh`` CLI.

    Identity and token are fetched once and cached; repositories are listed
    fresh on every call.
    """

    def __init__(self, client: GitHubClient | None = None, per_page: int = DEFAULT_PER_PAGE) -> None:
        self._client = client or GitHubClient()
        self._per_page = per_page
        self._identity: Identity | None = None
        self._token: str | None = None

    def identity(self) -> Identity:
        if self._identity is None:
            self._identity = self._client.current_user()
        return self._identity

    def access_token(self) -> str:
        if self._token is None:
            self._token = self._client.token()
        return self._token

    def list_repositories(self) -> list[Repository]:
        return self._client.list_repositories(per_page=self._per_page)


class MockDeployer:
    """Deployer that records submitted requests instead of sending them."""

    def __init__(self) -> None:
        self.submitted: list[DeploymentRequest] = []

    def submit(self, request: DeploymentRequest) -> dict:
        self.submitted.append(request)
        return {"status": "queued", "repo": request.repo}
