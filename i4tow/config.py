"""
config.py

Responsibility: run options and credential resolution.

Credentials are looked up in order, first hit wins:
1) explicit values (CLI flags)
2) environment: GITHUB_TOKEN / GITHUB_USERNAME
3) YAML config file with `token` / `username` keys
4) username only: `git config user.name`
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/i4tow/config.yaml")

ProgressCallback = Callable[[str, Optional[str]], None]


class ConfigError(ValueError):
    pass


class MissingCredentialError(ConfigError):
    def __init__(self, credential: str) -> None:
        super().__init__(f"GitHub {credential} required")
        self.credential = credential


@dataclass(frozen=True)
class Options:
    """Settings for one run; read-only while albums are built."""

    token: str
    username: str
    dry_run: bool = False
    single: bool = False
    batch: bool = False
    on_progress: ProgressCallback | None = None

    def progress(self, step: str, detail: str | None = None) -> None:
        if self.on_progress is not None:
            self.on_progress(step, detail)


@dataclass(frozen=True)
class Credentials:
    token: str
    username: str


def load_config_file(path: str | Path) -> dict[str, Any]:
    """
    Load the YAML config file. A missing file is an empty config.
    """
    p = Path(path).expanduser()
    if not p.exists():
        return {}
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {p}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a mapping/object at the top level: {p}")
    return data


def git_config_username() -> str | None:
    try:
        out = subprocess.run(
            ["git", "config", "user.name"],
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
        ).stdout
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.strip() or None


def _first(*values: Any) -> str:
    for v in values:
        if v is not None and str(v).strip():
            return str(v).strip()
    return ""


def resolve_credentials(
    *,
    token: str | None = None,
    username: str | None = None,
    config_path: str | Path | None = None,
) -> Credentials:
    """
    Resolve the GitHub token and username, raising ConfigError if either is missing.
    """
    file_cfg = load_config_file(config_path or DEFAULT_CONFIG_PATH)

    resolved_token = _first(token, os.environ.get("GITHUB_TOKEN"), file_cfg.get("token"))
    if not resolved_token:
        raise MissingCredentialError("token")

    resolved_username = _first(username, os.environ.get("GITHUB_USERNAME"), file_cfg.get("username"))
    if not resolved_username:
        resolved_username = _first(git_config_username())
        if resolved_username:
            logger.debug("Using git config user.name as GitHub username: %s", resolved_username)
    if not resolved_username:
        raise MissingCredentialError("username")

    return Credentials(token=resolved_token, username=resolved_username)
