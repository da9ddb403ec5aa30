from __future__ import annotations

from typing import Any

import pytest
import requests

from i4tow.github_client import CreateRepoResult, GitHubClient, GitHubError, RepoErrorKind, classify_create_response


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture
def calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    recorded: list[dict[str, Any]] = []
    monkeypatch.setattr(requests, "request", lambda *a, **kw: pytest.fail("unexpected request"))
    return recorded


def _respond_with(monkeypatch: pytest.MonkeyPatch, calls: list[dict[str, Any]], response: Any) -> None:
    def fake_request(method: str, url: str, **kwargs: Any) -> FakeResponse:
        calls.append({"method": method, "url": url, **kwargs})
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(requests, "request", fake_request)


def test_requires_token() -> None:
    with pytest.raises(GitHubError):
        GitHubClient("   ")


def test_create_repo_posts_public_repo(monkeypatch: pytest.MonkeyPatch, calls: list[dict[str, Any]]) -> None:
    _respond_with(monkeypatch, calls, FakeResponse(201, {"name": "i4tow-x"}))

    result = GitHubClient("tok").create_repo("i4tow-x")

    assert result == CreateRepoResult(success=True)
    assert calls[0]["method"] == "POST"
    assert calls[0]["url"] == "https://api.github.com/user/repos"
    assert calls[0]["json"] == {"name": "i4tow-x", "private": False}
    assert calls[0]["headers"]["Authorization"] == "Bearer tok"


def test_already_exists_is_success(monkeypatch: pytest.MonkeyPatch, calls: list[dict[str, Any]]) -> None:
    payload = {
        "message": "Repository creation failed.",
        "errors": [{"resource": "Repository", "field": "name", "message": "name already exists on this account"}],
    }
    _respond_with(monkeypatch, calls, FakeResponse(422, payload))

    result = GitHubClient("tok").create_repo("i4tow-x")

    assert result.success
    assert result.already_exists


def test_bad_credentials(monkeypatch: pytest.MonkeyPatch, calls: list[dict[str, Any]]) -> None:
    _respond_with(monkeypatch, calls, FakeResponse(401, {"message": "Bad credentials"}))

    result = GitHubClient("tok").create_repo("i4tow-x")

    assert not result.success
    assert result.kind is RepoErrorKind.BAD_CREDENTIALS
    assert result.error == "Invalid GitHub token. Check your token and try again."


def test_missing_scope(monkeypatch: pytest.MonkeyPatch, calls: list[dict[str, Any]]) -> None:
    _respond_with(monkeypatch, calls, FakeResponse(404, {"message": "Not Found"}))

    result = GitHubClient("tok").create_repo("i4tow-x")

    assert result.kind is RepoErrorKind.MISSING_SCOPE
    assert "repo" in (result.error or "")


def test_network_failure(monkeypatch: pytest.MonkeyPatch, calls: list[dict[str, Any]]) -> None:
    _respond_with(monkeypatch, calls, requests.ConnectionError("connection refused"))

    result = GitHubClient("tok").create_repo("i4tow-x")

    assert result.kind is RepoErrorKind.NETWORK
    assert result.error == "Network error. Check your internet connection."


def test_other_error_uses_remote_message(monkeypatch: pytest.MonkeyPatch, calls: list[dict[str, Any]]) -> None:
    _respond_with(monkeypatch, calls, FakeResponse(422, {"message": "name is too long"}))

    result = GitHubClient("tok").create_repo("i4tow-x")

    assert result.kind is RepoErrorKind.OTHER
    assert result.error == "name is too long"


def test_other_error_without_message_falls_back(monkeypatch: pytest.MonkeyPatch, calls: list[dict[str, Any]]) -> None:
    _respond_with(monkeypatch, calls, FakeResponse(500, None, text=""))

    result = GitHubClient("tok").create_repo("i4tow-x")

    assert result.kind is RepoErrorKind.OTHER
    assert result.error == "Failed to create repository"


def test_create_repo_never_retries(monkeypatch: pytest.MonkeyPatch, calls: list[dict[str, Any]]) -> None:
    _respond_with(monkeypatch, calls, FakeResponse(503, {"message": "Service Unavailable"}))

    GitHubClient("tok").create_repo("i4tow-x")

    assert len(calls) == 1


@pytest.mark.parametrize(
    ("status", "message", "kind"),
    [
        (401, "Requires authentication", RepoErrorKind.BAD_CREDENTIALS),
        (403, "Resource not accessible by personal access token", RepoErrorKind.MISSING_SCOPE),
        (403, "API rate limit exceeded", RepoErrorKind.OTHER),
    ],
)
def test_classify_create_response(status: int, message: str, kind: RepoErrorKind) -> None:
    assert classify_create_response(status, {"message": message}).kind is kind
