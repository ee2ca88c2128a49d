"""
Where relative paths live.

Settings name the catalog and the lookups directory relative to the checkout
(`data/addresses/addresses.json`, `data/radius_lookups`). Those paths must mean the
same file whether the server is started by uvicorn, the CLI or pytest, from any cwd.

The checkout root is, in order:
1. `CITYRADIUS_PROJECT_ROOT`, when set;
2. the nearest directory (from cwd, then from this package) holding a
   `pyproject.toml` next to a `data/` directory, or a `.git`;
3. the current working directory.

A `.env` file at that root (or at `CITYRADIUS_ENV_FILE`) is loaded once, without
overriding variables already in the environment.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Iterator

from dotenv import load_dotenv


def _ancestors(start: Path) -> Iterator[Path]:
    start = start.resolve()
    yield start
    yield from start.parents


def _is_checkout_root(path: Path) -> bool:
    if (path / "pyproject.toml").is_file() and (path / "data").is_dir():
        return True
    return (path / ".git").exists()


@lru_cache
def get_project_root() -> Path:
    """Return the checkout root (cached for the process lifetime)."""
    override = os.getenv("CITYRADIUS_PROJECT_ROOT")
    if override:
        return Path(override).expanduser().resolve()

    for start in (Path.cwd(), Path(__file__).parent):
        root = next((p for p in _ancestors(start) if _is_checkout_root(p)), None)
        if root is not None:
            return root
    return Path.cwd().resolve()


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load the `.env` file once; return its path, or None when there is none."""
    explicit = os.getenv("CITYRADIUS_ENV_FILE")
    env_path = Path(explicit).expanduser().resolve() if explicit else get_project_root() / ".env"
    if not env_path.is_file():
        return None
    load_dotenv(dotenv_path=env_path, override=False)
    return env_path


def resolve_project_path(path: str | Path) -> Path:
    """Absolute paths pass through; relative ones are anchored at the checkout root."""
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    return (get_project_root() / p).resolve()
