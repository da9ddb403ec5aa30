from pathlib import Path

from i4tow import report
from i4tow.album import AlbumResult


def _result(name: str, success: bool, error: str | None = None) -> AlbumResult:
    return AlbumResult(
        name=name,
        repo_url=f"https://github.com/octocat/{name}",
        album_url=f"https://rathnasorg.github.io/i4tow/a/{name}",
        success=success,
        photo_count=4,
        error=error,
    )


def test_scan_summary_mode() -> None:
    text = report.scan_summary(location=Path("/pics"), photo_count=0, subdir_count=3, batch=True)
    assert "Subfolders: 3" in text
    assert "batch (one album per subfolder)" in text
    assert "single album" in report.scan_summary(location=Path("/pics"), photo_count=2, subdir_count=0, batch=False)


def test_plan_lists_albums() -> None:
    text = report.plan([{"name": "i4tow-a", "photo_count": 2}, {"name": "i4tow-b", "photo_count": 5}])
    assert "Albums to create: 2" in text
    assert "i4tow-b (5 photos)" in text


def test_results_split_success_and_failure() -> None:
    text = report.results([_result("i4tow-a", True), _result("i4tow-b", False, "Network error [retry]")])
    assert "Created 1 album[" in text
    assert "Failed: 1 album[" in text
    assert "https://rathnasorg.github.io/i4tow/a/i4tow-a" in text
    # Error text is escaped so it cannot open a markup tag.
    assert "\\[retry]" in text


def test_results_pluralize() -> None:
    text = report.results([_result("i4tow-a", True), _result("i4tow-b", True)])
    assert "Created 2 albums" in text
    assert "Failed" not in text


def test_next_steps_links_profile() -> None:
    text = report.next_steps([_result("i4tow-a", True), _result("i4tow-b", False, "x")], "octocat")
    assert "https://rathnasorg.github.io/i4tow/p/octocat" in text
    assert "i4tow/a/i4tow-a" in text
    assert "i4tow/a/i4tow-b" not in text


def test_missing_credential_hint() -> None:
    text = report.missing_credential("token", "~/.config/i4tow/config.yaml")
    assert "GITHUB_TOKEN" in text
    assert "config.yaml" in text
