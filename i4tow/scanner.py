"""
scanner.py

Responsibility: list the photo files and subdirectories of a folder.

Scanning never raises: a missing folder or a failed listing yields an empty
list, so one unreadable folder cannot stop a batch.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

PHOTO_EXTENSIONS = {".jpg", ".jpeg", ".png", ".heic", ".webp", ".gif"}


def is_photo_file(filename: str) -> bool:
    return Path(filename).suffix.lower() in PHOTO_EXTENSIONS


def _list_entries(path: Path) -> list[Path]:
    try:
        entries = list(path.iterdir())
    except OSError as e:
        logger.debug("Cannot list %s: %s", path, e)
        return []
    entries.sort(key=lambda p: p.name)
    return entries


def list_photos(path: str | Path) -> list[str]:
    """
    Return the names of photo files directly inside `path`, sorted by name.

    Only regular files count; the extension match is case-insensitive.
    """
    photos: list[str] = []
    for entry in _list_entries(Path(path)):
        try:
            if entry.is_file() and is_photo_file(entry.name):
                photos.append(entry.name)
        except OSError:
            # Entry vanished between listing and stat.
            continue
    return photos


def list_subdirectories(path: str | Path) -> list[str]:
    """
    Return the names of non-hidden subdirectories directly inside `path`, sorted.
    """
    subdirs: list[str] = []
    for entry in _list_entries(Path(path)):
        if entry.name.startswith("."):
            continue
        try:
            if entry.is_dir():
                subdirs.append(entry.name)
        except OSError:
            continue
    return subdirs
