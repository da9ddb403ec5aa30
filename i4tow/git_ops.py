"""
git_ops.py

Responsibility: the shell-level git steps of an album build.

- Shallow-clone the album template
- Re-initialize a working copy, commit it and force-push it to a new origin

Git is driven through `subprocess`; a failed command raises `GitError` with
the command output attached.
"""

from __future__ import annotations

import enum
import logging
import os
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"


class GitError(RuntimeError):
    pass


class GitErrorKind(enum.Enum):
    AUTH_FAILED = "auth_failed"
    PERMISSION_DENIED = "permission_denied"
    REPO_NOT_FOUND = "repo_not_found"
    OTHER = "other"


# Output fragments git prints for each failure kind, matched case-insensitively.
_KIND_MARKERS = (
    (GitErrorKind.AUTH_FAILED, ("authentication failed", "invalid username or password")),
    (GitErrorKind.PERMISSION_DENIED, ("permission denied", "permission to", "returned error: 403")),
    (GitErrorKind.REPO_NOT_FOUND, ("repository not found",)),
)


def classify_git_error(message: str) -> GitErrorKind:
    text = message.lower()
    for kind, markers in _KIND_MARKERS:
        if any(marker in text for marker in markers):
            return kind
    return GitErrorKind.OTHER


def redact(text: str, secret: str | None) -> str:
    if not secret:
        return text
    return text.replace(secret, "***")


def _run(cmd: list[str], *, cwd: Path | None = None, env: dict[str, str] | None = None, secret: str | None = None) -> None:
    """
    Run a git command, raising a GitError on failure.

    `secret` is masked in logs and in the raised error.
    """
    shown = redact(" ".join(cmd), secret)
    logger.debug("Running: %s", shown)
    try:
        subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            env=env,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except FileNotFoundError as e:
        raise GitError("git executable not found. Install git and try again.") from e
    except subprocess.CalledProcessError as e:
        raise GitError(f"Command failed: {shown}\n\n{redact(e.stdout or '', secret)}") from e


def _git_env(base_env: dict[str, str]) -> dict[str, str]:
    """
    Commit identity fallback so a commit works on machines without git config.
    """
    env = dict(base_env)
    env.setdefault("GIT_AUTHOR_NAME", "i4tow")
    env.setdefault("GIT_AUTHOR_EMAIL", "i4tow@users.noreply.github.com")
    env.setdefault("GIT_COMMITTER_NAME", "i4tow")
    env.setdefault("GIT_COMMITTER_EMAIL", "i4tow@users.noreply.github.com")
    # Never block on a credential prompt.
    env.setdefault("GIT_TERMINAL_PROMPT", "0")
    return env


def tokenized_https_remote(clone_url: str, token: str) -> str:
    """
    Convert https://github.com/owner/name.git into an HTTPS URL containing a token.

    Note: this stores the token in `.git/config` of the working copy, and the URL is
    visible in process listings while git runs.
    """
    # GitHub supports x-access-token in the username position.
    return clone_url.replace("https://", f"https://x-access-token:{token}@", 1)


def shallow_clone(url: str, destination: Path) -> None:
    _run(["git", "clone", "--depth", "1", url, str(destination)], env=_git_env(os.environ.copy()))


def init_commit_force_push(
    *,
    workdir: Path,
    remote_url: str,
    message: str,
    branch: str = DEFAULT_BRANCH,
    secret: str | None = None,
) -> None:
    """
    Turn `workdir` into a fresh repository with a single commit and force-push it
    to `remote_url`, tracking `branch` upstream.
    """
    env = _git_env(os.environ.copy())

    _run(["git", "init"], cwd=workdir, env=env)
    _run(["git", "checkout", "-B", branch], cwd=workdir, env=env)
    _run(["git", "remote", "add", "origin", remote_url], cwd=workdir, env=env, secret=secret)
    _run(["git", "add", "-A"], cwd=workdir, env=env)
    _run(["git", "commit", "-m", message], cwd=workdir, env=env)
    _run(["git", "push", "--set-upstream", "--force", "origin", branch], cwd=workdir, env=env, secret=secret)
