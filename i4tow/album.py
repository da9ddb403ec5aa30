"""
album.py

Responsibility: build one album.

validate -> (dry run stops here) -> create repo -> clone template -> strip
template files -> copy photos -> commit + force-push -> remove temp dir

Every failure is turned into a failed `AlbumResult`; nothing raises out of
`build_album`, so a batch always runs to the end.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from i4tow import git_ops
from i4tow.config import Options
from i4tow.git_ops import GitErrorKind
from i4tow.github_client import GitHubClient
from i4tow.naming import album_name, album_url, clone_url, repo_url
from i4tow.scanner import list_photos

logger = logging.getLogger(__name__)

TEMPLATE_REPO = "https://github.com/rathnasorg/i4tow-album.git"
TEMPLATE_LABEL = "rathnasorg/i4tow-album"
TEMPLATE_ONLY_DIRS = (".git", "temp-demo-files")
PHOTOS_SUBDIR = Path("public", "photos", "raw2")

NO_PHOTOS_ERROR = "No photos found in directory"

GIT_ERROR_MESSAGES = {
    GitErrorKind.AUTH_FAILED: "GitHub authentication failed. Check your token.",
    GitErrorKind.PERMISSION_DENIED: 'Permission denied. Ensure token has "repo" scope.',
    GitErrorKind.REPO_NOT_FOUND: "Repository not found. It may still be creating, try again in a moment.",
}


@dataclass(frozen=True)
class AlbumRequest:
    source_dir: Path
    repo_name: str


@dataclass(frozen=True)
class AlbumResult:
    name: str
    repo_url: str
    album_url: str
    success: bool
    photo_count: int
    error: str | None = None


def _result(name: str, username: str, photo_count: int, error: str | None = None) -> AlbumResult:
    return AlbumResult(
        name=name,
        repo_url=repo_url(username, name),
        album_url=album_url(name),
        success=error is None,
        photo_count=photo_count,
        error=error,
    )


def friendly_error(message: str) -> str:
    """
    User-facing text for an error raised while cloning or pushing.
    """
    return GIT_ERROR_MESSAGES.get(git_ops.classify_git_error(message), message)


def _strip_template(workdir: Path) -> None:
    for name in TEMPLATE_ONLY_DIRS:
        path = workdir / name
        if path.exists():
            shutil.rmtree(path)


def _copy_photos(source_dir: Path, photos: list[str], workdir: Path) -> Path:
    photos_dir = workdir / PHOTOS_SUBDIR
    photos_dir.mkdir(parents=True, exist_ok=True)
    for photo in photos:
        shutil.copy2(source_dir / photo, photos_dir / photo)
    return photos_dir


def _publish(request: AlbumRequest, name: str, photos: list[str], options: Options, tmp_root: Path) -> None:
    workdir = tmp_root / "album"

    options.progress("Downloading template", TEMPLATE_LABEL)
    git_ops.shallow_clone(TEMPLATE_REPO, workdir)

    options.progress("Preparing album", "Cleaning template files")
    _strip_template(workdir)

    options.progress("Copying photos", f"{len(photos)} files")
    _copy_photos(request.source_dir, photos, workdir)

    options.progress("Uploading to GitHub", f"Pushing to {options.username}/{name}")
    git_ops.init_commit_force_push(
        workdir=workdir,
        remote_url=git_ops.tokenized_https_remote(clone_url(options.username, name), options.token),
        message=f"{len(photos)} photos added via i4tow",
        secret=options.token,
    )


def build_album(request: AlbumRequest, options: Options, *, client: GitHubClient | None = None) -> AlbumResult:
    """
    Build and publish the album for `request`.

    The photo count on the result is the number of photos found when the build
    started, whatever the outcome.
    """
    name = album_name(request.repo_name)
    photos = list_photos(request.source_dir)

    if not photos:
        return _result(name, options.username, 0, NO_PHOTOS_ERROR)

    if options.dry_run:
        return _result(name, options.username, len(photos))

    options.progress("Creating repository", name)
    gh = client or GitHubClient(options.token)
    created = gh.create_repo(name)
    if not created.success:
        return _result(name, options.username, len(photos), created.error)
    if created.already_exists:
        options.progress("Repository exists", "Using existing repository")

    tmp_root: Path | None = None
    try:
        tmp_root = Path(tempfile.mkdtemp(prefix="i4tow-"))
        _publish(request, name, photos, options, tmp_root)
    except Exception as e:  # noqa: BLE001
        message = git_ops.redact(str(e), options.token)
        logger.debug("Album %s failed: %s", name, message)
        return _result(name, options.username, len(photos), friendly_error(message))
    finally:
        if tmp_root is not None:
            shutil.rmtree(tmp_root, ignore_errors=True)

    logger.info("Published %s (%d photos)", name, len(photos))
    return _result(name, options.username, len(photos))
