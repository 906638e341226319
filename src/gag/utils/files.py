"""Utility helpers for locating document sources."""

from __future__ import annotations

import glob as globlib
from pathlib import Path
from typing import IO, List, Optional


def iter_glob_paths(pattern: str) -> List[str]:
    """Expand a glob pattern into a sorted list of file paths, skipping directories."""
    return sorted(path for path in globlib.glob(pattern) if not Path(path).is_dir())


def is_stdin_loaded(stream: IO[str]) -> bool:
    """True when the stream is piped or redirected rather than a terminal."""
    try:
        return not stream.isatty()
    except (AttributeError, ValueError):
        return False


def read_stdin_paths(stream: IO[str]) -> Optional[List[str]]:
    """Read a newline-delimited file list, or ``None`` if stdin is interactive."""
    if not is_stdin_loaded(stream):
        return None
    paths = [line.strip() for line in stream.read().splitlines()]
    return [path for path in paths if path]


def resolve_sources(pattern: str, stream: Optional[IO[str]] = None) -> List[str]:
    """Return the file list from stdin when it provides one, else from the glob."""
    if stream is not None:
        paths = read_stdin_paths(stream)
        if paths:
            return paths
    return iter_glob_paths(pattern)
