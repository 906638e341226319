"""Command line interface for gag."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gag.config import AppConfig
from gag.errors import SourceReadError
from gag.index.indexer import TagIndex
from gag.index.search import SearchOptions, Searcher, parse_query
from gag.ingestion.loader import load_entries
from gag.report import render
from gag.utils.files import resolve_sources

LOGGER = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(help="gag - query a journal of tagged notes", add_completion=False)


def _setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def normalize_args(argv: Sequence[str]) -> List[str]:
    """Treat a leading positional argument as ``--query``; later flags still apply."""
    args = list(argv)
    if args and not args[0].startswith("-"):
        return ["--query", *args]
    return args


def _print_tag_summary(index: TagIndex) -> None:
    if not index.tagmap:
        console.print("[yellow]No tags found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Tag")
    table.add_column("Files", justify="right")
    table.add_column("Adjacent", justify="right")

    for tag in index.tags:
        table.add_row(
            escape(tag),
            str(len(index.tagmap[tag])),
            str(len(index.adjacencies.get(tag, ()))),
        )

    console.print(table)


@app.command()
def run(
    ctx: typer.Context,
    query: Optional[str] = typer.Option(
        None,
        "--query",
        "-q",
        help="Tags to match: 'a+b' for all of them, 'a,b' for any. May be given as the first argument.",
    ),
    glob: str = typer.Option(
        AppConfig().glob, "--glob", "-g", envvar="GAG_GLOB", help="Glob pattern for documents"
    ),
    date: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date YYYY.MM.DD or range YYYY.MM.DD-YYYY.MM.DD"
    ),
    grep: bool = typer.Option(False, "--grep", help="Also match files containing the query text"),
    find: bool = typer.Option(False, "--find", help="Also match files whose name contains the query"),
    diff: bool = typer.Option(
        False, "--diff", help="Omit files tagged with the query (use with --grep or --find)"
    ),
    invert: bool = typer.Option(False, "--invert", help="Show files that do not match"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print a sectioned summary"),
    pipe: bool = typer.Option(False, "--pipe", "-p", help="Print matching filenames only"),
    all_adjacencies: bool = typer.Option(
        False, "--all-adjacencies", help="Report adjacencies from the whole corpus"
    ),
    tags: bool = typer.Option(False, "--tags", help="Summarise every tag in the corpus"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
) -> None:
    """Find documents by tag, content, filename and date."""
    _setup_logging(debug)
    if not query and not tags:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    sources = resolve_sources(AppConfig(glob=glob).resolve_glob(Path.cwd()), sys.stdin)
    LOGGER.debug("Reading %d sources", len(sources))
    try:
        entries = load_entries(sources)
    except SourceReadError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if not entries:
        LOGGER.warning("No documents found for %s", glob)

    searcher = Searcher(entries)
    options = SearchOptions(
        date=date,
        grep=grep,
        find=find,
        diff=diff,
        invert=invert,
        all_adjacencies=all_adjacencies,
    )

    if tags:
        _, index = searcher.corpus(options)
        _print_tag_summary(index)
        return

    result = searcher.search(parse_query(query or ""), options)
    typer.echo(render(result, verbose=verbose and not pipe), nl=False)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = normalize_args(sys.argv[1:] if argv is None else argv)
    app(args=args, prog_name="gag")
