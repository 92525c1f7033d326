"""Unit tests for the deployment HTTP client, with the requests session replaced."""

import pytest
import requests

from nzdeploy.config import Settings
from nzdeploy.deploy.client import DeployClient, DeployClientError
from nzdeploy.models import Category, DeploymentRequest

REQUEST = DeploymentRequest(
    repo="site",
    category=Category.STATIC_SITE,
    owner="octocat",
    access_token="tok",
    env_variables={"A": "1"},
)


def _response(status: int, content: bytes = b"") -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = content
    response.url = "https://deploy.test/api/project"
    return response


class FakeSession:
    """Records POST calls and returns a canned response (or raises)."""

    def __init__(self, response: requests.Response | None = None, error: Exception | None = None):
        self.response = response if response is not None else _response(200, b'{"id": "dep-1"}')
        self.error = error
        self.calls: list[dict] = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


def _client(session: FakeSession, **overrides) -> DeployClient:
    settings = Settings(api_url="https://deploy.test/api/", **overrides)
    return DeployClient(settings, session=session)  # type: ignore[arg-type]


class TestSubmit:
    def test_posts_payload_with_bearer_token(self):
        """
        Given a deployment request
        When submit is called
        Then the payload is POSTed to /project with the bearer token and timeout
        """
        session = FakeSession()
        result = _client(session, request_timeout=5).submit(REQUEST)

        assert result == {"id": "dep-1"}
        [call] = session.calls
        assert call["url"] == "https://deploy.test/api/project"
        assert call["json"] == REQUEST.to_payload()
        assert call["headers"] == {"Authorization": "Bearer tok"}
        assert call["timeout"] == 5

    def test_empty_body_returns_empty_dict(self):
        """
        Given the endpoint answers 204 with no body
        When submit is called
        Then an empty dict is returned
        """
        assert _client(FakeSession(_response(204))).submit(REQUEST) == {}

    def test_non_object_body_is_wrapped(self):
        """
        Given the endpoint answers with a JSON string
        When submit is called
        Then it is wrapped under "result"
        """
        assert _client(FakeSession(_response(200, b'"ok"'))).submit(REQUEST) == {"result": "ok"}

    def test_http_error_raises(self):
        """
        Given the endpoint answers 500
        When submit is called
        Then DeployClientError mentions the status
        """
        with pytest.raises(DeployClientError, match="HTTP 500"):
            _client(FakeSession(_response(500, b"boom"))).submit(REQUEST)

    def test_rejected_token_raises(self):
        """
        Given the endpoint answers 401 for a revoked token
        When submit is called
        Then DeployClientError mentions the status and the request was still sent once
        """
        session = FakeSession(_response(401, b'{"error": "bad token"}'))
        with pytest.raises(DeployClientError, match="HTTP 401"):
            _client(session).submit(REQUEST)
        assert len(session.calls) == 1

    def test_error_response_is_kept_by_fake_session(self):
        """
        Given a FakeSession built with an error response
        When it is asked to post
        Then it returns that response rather than a default success
        """
        response = _response(503)
        assert FakeSession(response).post("https://deploy.test/api/project") is response

    def test_connection_error_raises(self):
        """
        Given the endpoint cannot be reached
        When submit is called
        Then DeployClientError is raised
        """
        session = FakeSession(error=requests.ConnectionError("refused"))
        with pytest.raises(DeployClientError, match="Could not reach"):
            _client(session).submit(REQUEST)

    def test_invalid_json_raises(self):
        """
        Given the endpoint answers 200 with a non-JSON body
        When submit is called
        Then DeployClientError is raised
        """
        with pytest.raises(DeployClientError, match="invalid JSON"):
            _client(FakeSession(_response(200, b"<html>"))).submit(REQUEST)


class TestDryRun:
    def test_dry_run_sends_nothing(self):
        """
        Given dry_run is enabled
        When submit is called
        Then nothing is posted and the payload is echoed without the token
        """
        session = FakeSession()
        result = _client(session, dry_run=True).submit(REQUEST)

        assert session.calls == []
        assert result["dry_run"] is True
        assert result["envVariables"] == {"A": "1"}
        assert "accessToken" not in result

    def test_url_property(self):
        """
        Given an api_url with a trailing slash
        When the client is built
        Then the submission URL has a single slash before project
        """
        assert _client(FakeSession()).url == "https://deploy.test/api/project"
