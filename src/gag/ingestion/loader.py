"""Loading document sources into parsed entries."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from gag.errors import SourceReadError
from gag.ingestion.header import parse_content
from gag.models import Entry

LOGGER = logging.getLogger(__name__)


def read_source(path: Path) -> str:
    """Read a source as text; any I/O failure is fatal for the run."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceReadError(path, exc.strerror or str(exc)) from exc


def load_entries(sources: Iterable[str | Path]) -> List[Entry]:
    """Read and parse every source, in the order given."""
    entries: List[Entry] = []
    for source in sources:
        path = Path(source)
        entries.append(parse_content(path.name, read_source(path)))
    LOGGER.debug("Loaded %d entries", len(entries))
    return entries
