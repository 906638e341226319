"""Shared pytest fixtures for gag tests."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from gag.ingestion.loader import load_entries
from gag.models import Entry
from gag.utils.files import iter_glob_paths

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture
def pattern() -> str:
    """Glob matching the six sample journal documents."""
    return str(TESTDATA / "*.md")


@pytest.fixture
def entries(pattern: str) -> List[Entry]:
    return load_entries(iter_glob_paths(pattern))


@pytest.fixture
def bar_report() -> str:
    """Verbose report for the query ``bar`` over the sample corpus."""
    return (
        "[files]\n"
        "01.foo.md\n"
        "02.foo.md\n"
        "03.bar.md\n"
        "\n"
        "[tags]\n"
        "bar                 = 3\n"
        "\n"
        "[adjacencies]\n"
        "foo                 = 1   : 1\n"
        "science             = 2   : 3\n"
        "\n"
        "[sums]\n"
        "files               = 3   : 6\n"
        "adjacencies         = 2   : 4\n"
        "\n"
    )
