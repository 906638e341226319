"""Exceptions raised by gag."""

from __future__ import annotations

from pathlib import Path


class GagError(Exception):
    """Base class for gag errors."""


class SourceReadError(GagError):
    """A declared document source could not be read."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to read {self.path}: {reason}")
