"""Tag and adjacency indexing, plus date-window filtering."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from typing import AbstractSet, Dict, List, Optional, Sequence, Set, Tuple

from gag.ingestion.header import parse_date_string
from gag.models import Entry

LOGGER = logging.getLogger(__name__)

Tagmap = Dict[str, Set[str]]
Adjacencies = Dict[str, Set[str]]

# Stand-in for an unparseable range bound.
ZERO_DATE = date.min


def build_tagmap(entries: Sequence[Entry]) -> Tagmap:
    """Map each tag to the filenames carrying it."""
    tagmap: Tagmap = {}
    for entry in entries:
        for tag in entry.tags:
            tagmap.setdefault(tag, set()).add(entry.filename)
    return tagmap


def build_adjacencies(
    entries: Sequence[Entry], restrict_to: Optional[AbstractSet[str]] = None
) -> Adjacencies:
    """Map each tag to the other tags it shares a document with.

    When ``restrict_to`` is given only entries whose filename is a member
    contribute. A tag present in scope always gets a key, even when it has
    no neighbours.
    """
    adjacencies: Adjacencies = {}
    for entry in entries:
        if restrict_to is not None and entry.filename not in restrict_to:
            continue
        for position, tag in enumerate(entry.tags):
            others = adjacencies.setdefault(tag, set())
            others.update(
                other for index, other in enumerate(entry.tags) if index != position
            )
            # a repeated tag is never its own neighbour
            others.discard(tag)
    return adjacencies


def parse_date_range(expression: str) -> Tuple[date, date]:
    """Parse ``YYYY.MM.DD`` or ``YYYY.MM.DD-YYYY.MM.DD`` into inclusive bounds.

    Bounds that fail to parse become ``ZERO_DATE`` instead of raising, so a
    bad start opens the window to the beginning of time and a bad end
    usually empties it.
    """
    start_text, separator, end_text = expression.partition("-")
    if not separator:
        end_text = start_text
    bounds = []
    for text in (start_text, end_text):
        parsed = parse_date_string(text)
        if parsed is None:
            LOGGER.warning("Unparseable date bound %r, using %s", text, ZERO_DATE)
            parsed = ZERO_DATE
        bounds.append(parsed)
    return bounds[0], bounds[1]


def filter_by_date(entries: Sequence[Entry], expression: str) -> List[Entry]:
    """Keep entries dated within the range; undated entries never match."""
    start, end = parse_date_range(expression)
    ranged = [
        entry for entry in entries if entry.date is not None and start <= entry.date <= end
    ]
    LOGGER.debug("Date filter %s..%s kept %d of %d entries", start, end, len(ranged), len(entries))
    return ranged


@dataclass(slots=True)
class TagIndex:
    tagmap: Tagmap = field(default_factory=dict)
    adjacencies: Adjacencies = field(default_factory=dict)

    @property
    def tags(self) -> List[str]:
        return sorted(self.tagmap)


class Indexer:
    """Builds the tag index and corpus-wide adjacencies side by side."""

    def __init__(self, *, max_workers: int = 2) -> None:
        self.max_workers = max_workers

    def index(self, entries: Sequence[Entry]) -> TagIndex:
        """Run both passes over the same entries and wait for both."""
        snapshot = tuple(entries)
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            tagmap_future = executor.submit(build_tagmap, snapshot)
            adjacency_future = executor.submit(build_adjacencies, snapshot)
            tagmap = tagmap_future.result()
            adjacencies = adjacency_future.result()
        LOGGER.debug("Indexed %d entries: %d tags", len(snapshot), len(tagmap))
        return TagIndex(tagmap=tagmap, adjacencies=adjacencies)
