"""Boolean tag queries over a built index."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from gag.index.indexer import (
    Adjacencies,
    Indexer,
    Tagmap,
    TagIndex,
    build_adjacencies,
    filter_by_date,
)
from gag.models import Entry, Operator, Query

LOGGER = logging.getLogger(__name__)

OR_SEPARATOR = ","
AND_SEPARATOR = "+"


def parse_query(raw: str) -> Query:
    """Split a query on ``,`` (OR) or else ``+`` (AND).

    OR wins when both separators are present, so ``a+b,c`` is the OR of the
    literal terms ``a+b`` and ``c``.
    """
    if not raw:
        return Query(Operator.IDENTITY, (), raw)
    if OR_SEPARATOR in raw:
        return Query(Operator.OR, tuple(raw.split(OR_SEPARATOR)), raw)
    if AND_SEPARATOR in raw:
        return Query(Operator.AND, tuple(raw.split(AND_SEPARATOR)), raw)
    return Query(Operator.IDENTITY, (raw,), raw)


def evaluate(tagmap: Tagmap, query: Query) -> Set[str]:
    """Combine the tagmap entries of every term, left to right.

    Unknown terms count as empty sets.
    """
    if not query.terms:
        return set()
    first, *rest = query.terms
    result = set(tagmap.get(first, ()))
    for term in rest:
        files = tagmap.get(term, set())
        if query.operator is Operator.OR:
            result |= files
        else:
            result &= files
    return result


def _copy(tagmap: Tagmap) -> Tagmap:
    return {tag: set(files) for tag, files in tagmap.items()}


def grep(entries: Sequence[Entry], tagmap: Tagmap, terms: Iterable[str]) -> Tagmap:
    """Add files whose body contains a term, ignoring case, under that term."""
    widened = _copy(tagmap)
    terms = list(terms)
    for entry in entries:
        body = entry.body.casefold()
        for term in terms:
            if term.casefold() in body:
                widened.setdefault(term, set()).add(entry.filename)
    return widened


def find(entries: Sequence[Entry], tagmap: Tagmap, terms: Iterable[str]) -> Tagmap:
    """Add files whose name contains a term, case-sensitively, under that term."""
    widened = _copy(tagmap)
    terms = list(terms)
    for entry in entries:
        for term in terms:
            if term in entry.filename:
                widened.setdefault(term, set()).add(entry.filename)
    return widened


def diff(entries: Sequence[Entry], tagmap: Tagmap, terms: Iterable[str]) -> Tagmap:
    """Drop files formally tagged with a term from that term's entry."""
    narrowed = _copy(tagmap)
    terms = list(terms)
    for entry in entries:
        for term in terms:
            if term in entry.tags and term in narrowed:
                narrowed[term].discard(entry.filename)
    return narrowed


def invert(entries: Sequence[Entry], files: AbstractSet[str]) -> Set[str]:
    """Every filename in the corpus that is not in ``files``."""
    return {entry.filename for entry in entries if entry.filename not in files}


def reduce_adjacencies(
    adjacencies: Adjacencies, terms: Sequence[str], inverted: bool = False
) -> Set[str]:
    """Collapse adjacencies into the tags related to the query.

    After an inversion the query terms say nothing about the result, so every
    tag present in the map is returned instead.
    """
    if inverted:
        return set(adjacencies)
    reduced: Set[str] = set()
    for term in terms:
        reduced.update(tag for tag in adjacencies.get(term, ()) if tag not in terms)
    return reduced


@dataclass(slots=True)
class SearchOptions:
    date: Optional[str] = None
    grep: bool = False
    find: bool = False
    diff: bool = False
    invert: bool = False
    all_adjacencies: bool = False


@dataclass(slots=True)
class SearchResult:
    files: FrozenSet[str]
    query: Query
    adjacencies: FrozenSet[str]
    tag_counts: Dict[str, int] = field(default_factory=dict)
    adjacency_counts: Dict[str, Tuple[int, int]] = field(default_factory=dict)
    corpus_size: int = 0
    corpus_tags: int = 0


class Searcher:
    """Runs a query through filtering, indexing, widening and evaluation."""

    def __init__(self, entries: Sequence[Entry], indexer: Indexer | None = None) -> None:
        self.entries = list(entries)
        self.indexer = indexer or Indexer()

    def corpus(self, options: SearchOptions | None = None) -> Tuple[List[Entry], TagIndex]:
        """Entries surviving the date filter, and their index."""
        options = options or SearchOptions()
        entries = self.entries
        if options.date:
            entries = filter_by_date(entries, options.date)
        return entries, self.indexer.index(entries)

    def search(self, query: Query, options: SearchOptions | None = None) -> SearchResult:
        options = options or SearchOptions()
        entries, index = self.corpus(options)
        LOGGER.debug("Query %r parsed as %s %s", query.raw, query.operator.value, query.terms)

        # widening and narrowing must happen before terms are combined
        tagmap = index.tagmap
        if options.grep:
            tagmap = grep(entries, tagmap, query.terms)
        if options.find:
            tagmap = find(entries, tagmap, query.terms)
        if options.diff:
            tagmap = diff(entries, tagmap, query.terms)

        files = evaluate(tagmap, query)
        if options.invert:
            files = invert(entries, files)
            LOGGER.debug("Inverted result holds %d files", len(files))

        if options.all_adjacencies:
            adjacencies = index.adjacencies
        else:
            adjacencies = build_adjacencies(entries, files)
        reduced = reduce_adjacencies(adjacencies, query.terms, options.invert)

        return SearchResult(
            files=frozenset(files),
            query=query,
            adjacencies=frozenset(reduced),
            tag_counts={term: len(tagmap.get(term, ())) for term in query.terms},
            adjacency_counts=_adjacency_counts(entries, index.tagmap, files, reduced),
            corpus_size=len(entries),
            corpus_tags=len(index.tagmap),
        )


def _adjacency_counts(
    entries: Sequence[Entry], tagmap: Tagmap, files: AbstractSet[str], tags: AbstractSet[str]
) -> Dict[str, Tuple[int, int]]:
    """For each tag: (result files carrying it, corpus files carrying it)."""
    counts: Dict[str, Tuple[int, int]] = {}
    for tag in tags:
        in_result = sum(1 for entry in entries if entry.filename in files and tag in entry.tags)
        counts[tag] = (in_result, len(tagmap.get(tag, ())))
    return counts
