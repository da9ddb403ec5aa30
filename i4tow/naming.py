"""
naming.py

Responsibility: turn folder names into album repo names and derive the public
URLs for an album. All URLs are computed, never checked.
"""

from __future__ import annotations

import re

ALBUM_PREFIX = "i4tow-"
DEFAULT_ALBUM_NAME = "album"

GITHUB_WEB = "https://github.com"
SITE_BASE = "https://rathnasorg.github.io/i4tow"

_WHITESPACE = re.compile(r"\s+")
_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_repo_name(name: str) -> str:
    """
    Drop whitespace, then every character outside [A-Za-z0-9_-].
    """
    return _UNSAFE.sub("", _WHITESPACE.sub("", name))


def album_name(folder_name: str) -> str:
    """
    Full repo name for an album built from `folder_name`, always carrying the prefix.
    """
    name = sanitize_repo_name(folder_name) or DEFAULT_ALBUM_NAME
    if name.startswith(ALBUM_PREFIX):
        return name
    return f"{ALBUM_PREFIX}{name}"


def repo_url(username: str, name: str) -> str:
    return f"{GITHUB_WEB}/{username}/{name}"


def clone_url(username: str, name: str) -> str:
    return f"{GITHUB_WEB}/{username}/{name}.git"


def album_url(name: str) -> str:
    return f"{SITE_BASE}/a/{name}"


def profile_url(username: str) -> str:
    """URL listing every album published under `username`."""
    return f"{SITE_BASE}/p/{username}"
