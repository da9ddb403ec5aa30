"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from i4tow import git_ops
from i4tow.config import Options
from i4tow.github_client import CreateRepoResult


def make_files(directory: Path, *names: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_bytes(b"fake image bytes")
    return directory


@pytest.fixture
def photo_tree(tmp_path: Path) -> Path:
    """Create a root folder without root-level photos.

    Structure:
        photos/
            Summer Trip/
                a.jpg
                b.PNG
            party!/
                c.heic
            empty/
                notes.txt
            .hidden/
                x.jpg
            readme.txt
    """
    root = tmp_path / "photos"
    make_files(root / "Summer Trip", "a.jpg", "b.PNG")
    make_files(root / "party!", "c.heic")
    make_files(root / "empty", "notes.txt")
    make_files(root / ".hidden", "x.jpg")
    make_files(root, "readme.txt")
    return root


@pytest.fixture
def options() -> Options:
    return Options(token="ghp_test_token_123", username="octocat")


class FakeGitHubClient:
    def __init__(self, result: CreateRepoResult | None = None) -> None:
        self.result = result or CreateRepoResult(success=True)
        self.created: list[str] = []

    def create_repo(self, name: str) -> CreateRepoResult:
        self.created.append(name)
        return self.result


@pytest.fixture
def fake_client() -> FakeGitHubClient:
    return FakeGitHubClient()


class FakeGit:
    """Stands in for the clone/push steps and records what was pushed."""

    def __init__(self) -> None:
        self.cloned: list[tuple[str, Path]] = []
        self.pushed: list[dict] = []
        self.push_error: Exception | None = None
        self.clone_error: Exception | None = None

    def shallow_clone(self, url: str, destination: Path) -> None:
        if self.clone_error is not None:
            raise self.clone_error
        self.cloned.append((url, destination))
        make_files(destination / ".git", "HEAD")
        make_files(destination / "temp-demo-files", "demo.jpg")
        make_files(destination, "index.html")
        make_files(destination / "public" / "photos" / "raw2")

    def init_commit_force_push(self, *, workdir: Path, remote_url: str, message: str, branch: str = "main", secret: str | None = None) -> None:
        if self.push_error is not None:
            raise self.push_error
        photos_dir = workdir / "public" / "photos" / "raw2"
        self.pushed.append(
            {
                "workdir": workdir,
                "remote_url": remote_url,
                "message": message,
                "branch": branch,
                "photos": sorted(p.name for p in photos_dir.iterdir()),
                "top_level": sorted(p.name for p in workdir.iterdir()),
            }
        )


@pytest.fixture
def fake_git(monkeypatch: pytest.MonkeyPatch) -> FakeGit:
    fake = FakeGit()
    monkeypatch.setattr(git_ops, "shallow_clone", fake.shallow_clone)
    monkeypatch.setattr(git_ops, "init_commit_force_push", fake.init_commit_force_push)
    return fake
