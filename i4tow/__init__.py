"""
i4tow package

Turn folders of photos into shareable gallery albums backed by GitHub repos.

Key responsibilities are split across modules:
- `scanner.py`: list photo files and subdirectories of a folder
- `naming.py`: repo-name sanitizing and derived album/repo URLs
- `github_client.py`: isolated GitHub REST API interactions (repo creation)
- `git_ops.py`: shallow template clone and the init/commit/force-push sequence
- `album.py`: build one album (validate -> create repo -> clone -> copy -> push)
- `processor.py`: plan single vs. batch albums for a directory and run them
- `config.py`: run options and credential resolution
- `report.py`: terminal report text
- `cli.py`: CLI entrypoint
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
