"""
processor.py

Responsibility: decide which albums a directory turns into, then build them.

The decision is made once by `plan_albums` and returns either a `SingleAlbum`
or a `BatchAlbums`; the CLI shows the same plan that `run_plan` executes.

| single | root photos | subdirs | batch | plan                |
|--------|-------------|---------|-------|---------------------|
| yes    | -           | -       | -     | SingleAlbum(root)   |
| no     | yes         | none    | -     | SingleAlbum(root)   |
| no     | yes         | some    | no    | SingleAlbum(root)   |
| no     | yes         | some    | yes   | BatchAlbums         |
| no     | no          | -       | -     | BatchAlbums         |
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from i4tow.album import AlbumRequest, AlbumResult, build_album
from i4tow.config import Options
from i4tow.github_client import GitHubClient
from i4tow.scanner import list_photos, list_subdirectories

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SingleAlbum:
    """One album from the root folder's own photos."""

    request: AlbumRequest

    @property
    def requests(self) -> list[AlbumRequest]:
        return [self.request]


@dataclass(frozen=True)
class BatchAlbums:
    """One album per immediate subfolder holding at least one photo."""

    requests: list[AlbumRequest] = field(default_factory=list)


AlbumPlan = Union[SingleAlbum, BatchAlbums]


def _root_name(root: Path) -> str:
    return root.name or "album"


def plan_albums(root: str | Path, *, single: bool = False, batch: bool = False) -> AlbumPlan:
    root_path = Path(root).resolve()
    has_photos = bool(list_photos(root_path))
    subdirs = list_subdirectories(root_path)

    if single or (has_photos and not subdirs) or (has_photos and not batch):
        return SingleAlbum(AlbumRequest(source_dir=root_path, repo_name=_root_name(root_path)))

    requests: list[AlbumRequest] = []
    for subdir in subdirs:
        path = root_path / subdir
        if list_photos(path):
            requests.append(AlbumRequest(source_dir=path, repo_name=subdir))
        else:
            logger.debug("Skipping %s: no photos", path)
    return BatchAlbums(requests)


def run_plan(plan: AlbumPlan, options: Options, *, client: GitHubClient | None = None) -> list[AlbumResult]:
    """
    Build every planned album in order, one at a time.

    Returns one result per planned album, failures included.
    """
    if client is None and not options.dry_run:
        client = GitHubClient(options.token)

    results: list[AlbumResult] = []
    for request in plan.requests:
        logger.debug("Building album from %s", request.source_dir)
        results.append(build_album(request, options, client=client))
    return results


def process_directory(root: str | Path, options: Options, *, client: GitHubClient | None = None) -> list[AlbumResult]:
    plan = plan_albums(root, single=options.single, batch=options.batch)
    return run_plan(plan, options, client=client)
