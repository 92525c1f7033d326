"""HTTP client for the deployment-submission endpoint.

Sends a finished ``DeploymentRequest`` as JSON to ``POST <api_url>/project``.
A single attempt is made; callers decide whether to retry.
"""

import logging

import requests

from nzdeploy.config import Settings
from nzdeploy.models import DeploymentRequest

logger = logging.getLogger(__name__)


class DeployClientError(Exception):
    """Raised when the deployment endpoint cannot be reached or rejects a request."""


class DeployClient:
    """Submits deployment requests to the configured API.

    With ``dry_run`` enabled nothing is sent: the payload (minus the access
    token) is logged and echoed back.
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self._url = settings.api_url.rstrip("/") + "/project"
        self._timeout = settings.request_timeout
        self._dry_run = settings.dry_run
        self._http = session or requests.Session()

    @property
    def url(self) -> str:
        return self._url

    def submit(self, request: DeploymentRequest) -> dict:
        """Submit a deployment and return the decoded response body."""
        payload = request.to_payload()
        logger.info(
            "Deploying %s (%s) with %d variable(s)",
            request.repo,
            request.category.value,
            len(request.env_variables),
        )

        if self._dry_run:
            logger.info("Dry run, formatted variables: %s", sorted(request.env_variables))
            echoed = {k: v for k, v in payload.items() if k != "accessToken"}
            return {"dry_run": True, **echoed}

        try:
            response = self._http.post(
                self._url,
                json=payload,
                headers={"Authorization": f"Bearer {request.access_token}"},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "?"
            raise DeployClientError(f"Deployment rejected (HTTP {status}): {exc}") from exc
        except requests.RequestException as exc:
            raise DeployClientError(f"Could not reach deployment API: {exc}") from exc

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as exc:
            raise DeployClientError("Deployment API returned invalid JSON") from exc
        return body if isinstance(body, dict) else {"result": body}
