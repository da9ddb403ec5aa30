"""
github_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads

Failures are reported as a `CreateRepoResult` carrying a `RepoErrorKind`, so
callers never have to match on message text. Nothing here retries.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

import requests

logger = logging.getLogger(__name__)


class GitHubError(RuntimeError):
    pass


class RepoErrorKind(enum.Enum):
    BAD_CREDENTIALS = "bad_credentials"
    MISSING_SCOPE = "missing_scope"
    NETWORK = "network"
    OTHER = "other"


ERROR_MESSAGES = {
    RepoErrorKind.BAD_CREDENTIALS: "Invalid GitHub token. Check your token and try again.",
    RepoErrorKind.MISSING_SCOPE: 'GitHub API error. Ensure token has "repo" scope.',
    RepoErrorKind.NETWORK: "Network error. Check your internet connection.",
}

FALLBACK_CREATE_ERROR = "Failed to create repository"


@dataclass(frozen=True)
class CreateRepoResult:
    success: bool
    already_exists: bool = False
    kind: RepoErrorKind | None = None
    error: str | None = None

    @classmethod
    def failed(cls, kind: RepoErrorKind, message: str | None = None) -> CreateRepoResult:
        return cls(success=False, kind=kind, error=message or ERROR_MESSAGES.get(kind, FALLBACK_CREATE_ERROR))


def _payload(r: requests.Response) -> dict[str, Any]:
    try:
        payload = r.json()
    except ValueError:
        return {"message": r.text}
    return payload if isinstance(payload, dict) else {"message": str(payload)}


def _is_already_exists(payload: dict[str, Any]) -> bool:
    for err in payload.get("errors") or []:
        if isinstance(err, dict) and "already exists" in str(err.get("message") or ""):
            return True
    return False


def classify_create_response(status_code: int, payload: dict[str, Any]) -> CreateRepoResult:
    """
    Map a failed repo-creation response onto a `CreateRepoResult`.
    """
    message = str(payload.get("message") or "")
    if _is_already_exists(payload):
        return CreateRepoResult(success=True, already_exists=True)
    if status_code == 401 or message == "Bad credentials":
        return CreateRepoResult.failed(RepoErrorKind.BAD_CREDENTIALS)
    if status_code == 404 or message == "Not Found":
        return CreateRepoResult.failed(RepoErrorKind.MISSING_SCOPE)
    if status_code == 403 and "not accessible" in message.lower():
        return CreateRepoResult.failed(RepoErrorKind.MISSING_SCOPE)
    return CreateRepoResult.failed(RepoErrorKind.OTHER, message or FALLBACK_CREATE_ERROR)


class GitHubClient:
    def __init__(self, token: str, api_base: str = "https://api.github.com", timeout: float = 30) -> None:
        if not token.strip():
            raise GitHubError("GitHub token is required.")
        self._token = token
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "i4tow-cli",
        }

    def _request(self, method: str, path: str, *, json_body: dict[str, Any] | None = None) -> requests.Response:
        url = f"{self._api_base}{path}"
        r = requests.request(method, url, headers=self._headers(), json=json_body, timeout=self._timeout)
        logger.debug("%s %s -> %s", method, path, r.status_code)
        return r

    def create_repo(self, name: str) -> CreateRepoResult:
        """
        Create a public repository `name` under the authenticated user.

        An existing repository with the same name counts as success, so re-running
        over the same folders is safe.
        """
        try:
            r = self._request("POST", "/user/repos", json_body={"name": name, "private": False})
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.debug("Network failure creating %s: %s", name, e)
            return CreateRepoResult.failed(RepoErrorKind.NETWORK)
        except requests.RequestException as e:
            return CreateRepoResult.failed(RepoErrorKind.OTHER, str(e))

        if r.status_code < 400:
            return CreateRepoResult(success=True)

        result = classify_create_response(r.status_code, _payload(r))
        if result.already_exists:
            logger.info("Repository %s already exists", name)
        else:
            logger.debug("Create %s failed (%s): %s", name, r.status_code, result.error)
        return result
