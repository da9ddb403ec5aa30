"""
cli.py

Responsibility: CLI entrypoint for i4tow.

High-level flow (single command):
1) Resolve the directory and GitHub credentials
2) Plan albums (single vs. batch) and show the plan
3) Build each album: create repo -> clone template -> copy photos -> push
4) Report results; exit non-zero if any album failed

This module should orchestrate behavior but keep concerns isolated:
- Planning/building: `processor.py`, `album.py`
- Credentials: `config.py`
- Output text: `report.py`
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from i4tow import __version__, report
from i4tow.config import DEFAULT_CONFIG_PATH, ConfigError, MissingCredentialError, Options, resolve_credentials
from i4tow.naming import album_name
from i4tow.processor import BatchAlbums, plan_albums, run_plan
from i4tow.scanner import list_photos, list_subdirectories

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def build_cmd(args: argparse.Namespace) -> int:
    console.print(report.banner())

    root = Path(args.directory).resolve()
    if not root.is_dir():
        console.print("  [red]Error: Directory not found[/red]")
        console.print(f"  [grey50]Path: {escape(str(root))}[/grey50]")
        return 1

    config_path = args.config or DEFAULT_CONFIG_PATH
    try:
        creds = resolve_credentials(token=args.token, username=args.username, config_path=config_path)
    except MissingCredentialError as e:
        console.print(report.missing_credential(e.credential, config_path))
        return 1
    except ConfigError as e:
        console.print(f"  [red]Error: {escape(str(e))}[/red]")
        return 1

    plan = plan_albums(root, single=bool(args.single), batch=bool(args.batch))
    planned = [{"name": album_name(r.repo_name), "photo_count": len(list_photos(r.source_dir))} for r in plan.requests]

    console.print(
        report.scan_summary(
            location=root,
            photo_count=len(list_photos(root)),
            subdir_count=len(list_subdirectories(root)),
            batch=isinstance(plan, BatchAlbums),
        )
    )

    if not any(album["photo_count"] for album in planned):
        console.print(report.nothing_to_upload())
        return 0

    console.print(report.plan(planned))
    console.print(report.divider())

    options = Options(
        token=creds.token,
        username=creds.username,
        dry_run=bool(args.dry_run),
        single=bool(args.single),
        batch=bool(args.batch),
    )

    with console.status("  Preparing...") as status:

        def on_progress(step: str, detail: str | None = None) -> None:
            status.update(f"  {step}: {detail}" if detail else f"  {step}")

        results = run_plan(plan, dataclasses.replace(options, on_progress=on_progress))

    if options.dry_run:
        console.print(report.dry_run())
        return 0

    console.print(report.results(results))
    if any(r.success for r in results):
        console.print(report.divider())
        console.print(report.next_steps(results, creds.username))

    return 1 if any(not r.success for r in results) else 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="i4tow", description="Create photo albums backed by GitHub repos")
    p.add_argument("directory", nargs="?", default=".", help="Directory containing photos (default: .)")
    p.add_argument("-t", "--token", default=None, help="GitHub token (or set env GITHUB_TOKEN)")
    p.add_argument("-u", "--username", default=None, help="GitHub username (or set env GITHUB_USERNAME)")
    p.add_argument("-d", "--dry-run", action="store_true", help="Preview without making changes")

    p.add_argument("-s", "--single", action="store_true", help="Create one album from the directory (wins over --batch)")
    p.add_argument("-b", "--batch", action="store_true", help="Create an album for each subdirectory")

    p.add_argument("--config", default=None, help=f"YAML config file with token/username (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    p.set_defaults(func=build_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(bool(args.verbose))
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
