"""Plain-text reports for search results.

The verbose layout is TOML-like so it can be consumed by other tools::

    [files]
    01.foo.md

    [tags]
    foo                 = 1

    [adjacencies]
    bar                 = 1   : 3

    [sums]
    files               = 1   : 6
    adjacencies         = 1   : 4

"""

from __future__ import annotations

from typing import AbstractSet, List

from gag.config import AppConfig
from gag.index.search import SearchResult


def render_files(files: AbstractSet[str]) -> str:
    """Sorted filenames, one per line; empty for an empty set."""
    return "".join(f"{name}\n" for name in sorted(files))


def _line(name: str, value: object, config: AppConfig) -> str:
    return f"{name:<{config.column_width}}= {value}\n"


def _pair(first: int, second: int, config: AppConfig) -> str:
    return f"{first:<{config.count_width}}: {second}"


def render_report(result: SearchResult, config: AppConfig | None = None) -> str:
    config = config or AppConfig()
    sections: List[str] = []

    sections.append("[files]\n" + render_files(result.files))

    tags = "[tags]\n"
    for term in result.query.terms:
        tags += _line(term, result.tag_counts.get(term, 0), config)
    sections.append(tags)

    adjacencies = "[adjacencies]\n"
    for tag in sorted(result.adjacencies):
        in_result, in_corpus = result.adjacency_counts.get(tag, (0, 0))
        adjacencies += _line(tag, _pair(in_result, in_corpus, config), config)
    sections.append(adjacencies)

    sums = "[sums]\n"
    sums += _line("files", _pair(len(result.files), result.corpus_size, config), config)
    sums += _line(
        "adjacencies", _pair(len(result.adjacencies), result.corpus_tags, config), config
    )
    sections.append(sums)

    return "".join(section + "\n" for section in sections)


def render(result: SearchResult, *, verbose: bool = False, config: AppConfig | None = None) -> str:
    """Compact file list, or the sectioned report when ``verbose``."""
    if verbose:
        return render_report(result, config)
    return render_files(result.files)
