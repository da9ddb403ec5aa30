"""
report.py

Responsibility: render the text the CLI prints.

Templates produce rich console markup; every dynamic value passes through the
`esc` filter so folder names and error text cannot inject markup.
This module does NOT print, scan or talk to GitHub.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined
from rich.markup import escape

from i4tow.album import AlbumResult
from i4tow.naming import profile_url
from i4tow.scanner import PHOTO_EXTENSIONS

_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["esc"] = lambda value: escape(str(value))
_env.filters["plural"] = lambda n: "" if n == 1 else "s"

BANNER = _env.from_string(
    """
  [bold blue]i4tow[/bold blue][grey50] - Photo Album Creator[/grey50]
  [grey50]Turn folders into shareable galleries[/grey50]
"""
)

SCAN_SUMMARY = _env.from_string(
    """
  Scanning directory...

  [grey50]Location:   {{ location | esc }}[/grey50]
  [grey50]Photos:     {{ photo_count }} in root[/grey50]
  [grey50]Subfolders: {{ subdir_count }}[/grey50]
  [grey50]Mode:       {{ "batch (one album per subfolder)" if batch else "single album" }}[/grey50]
"""
)

PLAN = _env.from_string(
    """
  Albums to create: {{ albums | length }}

{% for album in albums %}
  [grey50]  {{ album.name | esc }} ({{ album.photo_count }} photos)[/grey50]
{% endfor %}
"""
)

NOTHING_TO_UPLOAD = _env.from_string(
    """
  [yellow]No photos found to upload.[/yellow]

  [grey50]Make sure your directory contains:[/grey50]
  [grey50]  - Photos ({{ extensions | join(", ") }})[/grey50]
  [grey50]  - Or subfolders with photos (use --batch)[/grey50]
"""
)

DRY_RUN = _env.from_string(
    """
  [yellow]DRY RUN - No changes made[/yellow]

  [grey50]Remove --dry-run to create albums[/grey50]
"""
)

RESULTS = _env.from_string(
    """
{% if successful %}
  [bold green]✓ Created {{ successful | length }} album{{ successful | length | plural }}[/bold green]

{% for r in successful %}
  [green]  ✓ {{ r.name | esc }}[/green]
  [grey50]    {{ r.photo_count }} photos uploaded[/grey50]
  [cyan]    {{ r.album_url | esc }}[/cyan]

{% endfor %}
{% endif %}
{% if failed %}
  [bold red]✗ Failed: {{ failed | length }} album{{ failed | length | plural }}[/bold red]

{% for r in failed %}
  [red]  ✗ {{ r.name | esc }}[/red]
  [grey50]    Error: {{ r.error | esc }}[/grey50]

{% endfor %}
{% endif %}
"""
)

NEXT_STEPS = _env.from_string(
    """
  Next steps:

  [grey50]  1. Wait 2-5 minutes for GitHub Actions to process photos[/grey50]
  [grey50]  2. View your albums:[/grey50]

{% for r in successful %}
  [cyan]     {{ r.album_url | esc }}[/cyan]
{% endfor %}

  [grey50]  3. View all your albums at:[/grey50]
  [cyan]     {{ profile | esc }}[/cyan]
"""
)

MISSING_CREDENTIAL = {
    "token": _env.from_string(
        """
  [red]Error: GitHub token required[/red]

  [grey50]Options:[/grey50]
  [grey50]  1. Use --token flag: i4tow . --token ghp_xxxx[/grey50]
  [grey50]  2. Set environment variable: export GITHUB_TOKEN=ghp_xxxx[/grey50]
  [grey50]  3. Add `token:` to {{ config_path | esc }}[/grey50]

  [grey50]Get a token at: https://github.com/settings/tokens[/grey50]
"""
    ),
    "username": _env.from_string(
        """
  [red]Error: GitHub username required[/red]

  [grey50]Options:[/grey50]
  [grey50]  1. Use --username flag: i4tow . --username myuser[/grey50]
  [grey50]  2. Set environment variable: export GITHUB_USERNAME=myuser[/grey50]
  [grey50]  3. Add `username:` to {{ config_path | esc }}[/grey50]
"""
    ),
}


def divider() -> str:
    return "  [grey50]" + "─" * 50 + "[/grey50]"


def banner() -> str:
    return BANNER.render()


def scan_summary(*, location: Path, photo_count: int, subdir_count: int, batch: bool) -> str:
    return SCAN_SUMMARY.render(location=location, photo_count=photo_count, subdir_count=subdir_count, batch=batch)


def plan(albums: list[dict[str, Any]]) -> str:
    """`albums` items carry `name` and `photo_count`."""
    return PLAN.render(albums=albums)


def nothing_to_upload() -> str:
    return NOTHING_TO_UPLOAD.render(extensions=sorted(PHOTO_EXTENSIONS))


def dry_run() -> str:
    return DRY_RUN.render()


def results(album_results: list[AlbumResult]) -> str:
    return RESULTS.render(
        successful=[r for r in album_results if r.success],
        failed=[r for r in album_results if not r.success],
    )


def next_steps(album_results: list[AlbumResult], username: str) -> str:
    return NEXT_STEPS.render(successful=[r for r in album_results if r.success], profile=profile_url(username))


def missing_credential(which: str, config_path: str | Path) -> str:
    return MISSING_CREDENTIAL[which].render(config_path=config_path)
