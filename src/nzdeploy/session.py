"""Session-scoped deployment draft.

``DeploySession`` holds everything the user assembles before deploying: the
ordered env-variable collection, the selected repository and the selected
category.  It is owned by the running app and discarded with it; nothing is
persisted.
"""

import logging

from nzdeploy.domain.ingest import merge, parse, to_submission_map
from nzdeploy.models import Category, DeploymentRequest, EnvVar, Identity

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Raised when the draft cannot accept a selection or is not ready to deploy."""


class DeploySession:
    """Mutable draft of a deployment request.

    Variables are addressed by index because duplicate keys are allowed
    until the collection is folded into a submission map.
    """

    def __init__(self) -> None:
        self.env_vars: list[EnvVar] = []
        self.repository: str | None = None
        self.category: Category | None = None

    def add_var(self, key: str, value: str) -> EnvVar | None:
        """Append a single variable. Returns None (and adds nothing) for a blank key."""
        key = key.strip()
        if not key:
            return None
        var = EnvVar(key=key, value=value.strip())
        self.env_vars.append(var)
        return var

    def remove_var(self, index: int) -> EnvVar:
        """Remove and return the variable at ``index``."""
        self._check_index(index)
        return self.env_vars.pop(index)

    def update_var(self, index: int, key: str, value: str) -> EnvVar:
        """Replace the variable at ``index`` with a new key/value pair.

        Raises SessionError for a blank key and IndexError for a bad index.
        """
        self._check_index(index)
        key = key.strip()
        if not key:
            raise SessionError("Key cannot be blank")
        var = EnvVar(key=key, value=value.strip())
        self.env_vars[index] = var
        return var

    def paste(self, text: str) -> list[EnvVar]:
        """Ingest pasted text and append the parsed variables.

        Returns the newly added variables; blank text adds nothing.
        """
        if not text.strip():
            return []
        parsed = parse(text)
        if parsed:
            self.env_vars = merge(self.env_vars, parsed)
        logger.info("Pasted %d variable(s); collection now has %d", len(parsed), len(self.env_vars))
        return parsed

    def select_repository(self, name: str | None) -> None:
        self.repository = name or None

    def select_category(self, category: Category) -> None:
        if not category.available:
            raise SessionError(f"{category.value} deployments are coming soon")
        self.category = category

    @property
    def can_deploy(self) -> bool:
        return bool(self.repository) and self.category is not None

    def submission_map(self) -> dict[str, str]:
        return to_submission_map(self.env_vars)

    def build_request(self, identity: Identity, access_token: str) -> DeploymentRequest:
        """Assemble the deployment request from the current draft.

        Raises SessionError unless both a repository and a category are selected.
        """
        if not self.can_deploy:
            raise SessionError("Please select both a repository and a deployment type.")
        assert self.repository is not None and self.category is not None
        return DeploymentRequest(
            repo=self.repository,
            category=self.category,
            owner=identity.login,
            access_token=access_token,
            env_variables=self.submission_map(),
        )

    def reset(self) -> None:
        self.env_vars = []
        self.repository = None
        self.category = None

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.env_vars):
            raise IndexError(f"No variable at index {index}")
