"""Header parsing for journal documents.

A document header is everything up to the first blank line::

    # title
    : 2024.09.25
    + tag-one
    + tag-two

    body text...

The first ``: `` line holding digits and periods is the date, and every
``+ `` line is a tag.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from gag.config import DATE_FORMAT
from gag.models import Entry

LOGGER = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"^: ([.0-9]+?)$", re.MULTILINE)
TAG_PATTERN = re.compile(r"^\+ (.+)$", re.MULTILINE)
STRICT_DATE = re.compile(r"\d{4}\.\d{2}\.\d{2}")


def parse_header(content: str) -> str:
    """Return the text before the first blank line, or all of it."""
    header, _, _ = content.partition("\n\n")
    return header


def parse_date_string(value: str, *, date_format: str = DATE_FORMAT) -> Optional[date]:
    """Parse ``YYYY.MM.DD`` strictly; anything else yields ``None``."""
    if not STRICT_DATE.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, date_format).date()
    except ValueError:
        return None


def parse_date(header: str) -> Optional[date]:
    """Parse the first date line of a header.

    Only the first candidate line is considered; if it is malformed the
    document has no date.
    """
    match = DATE_PATTERN.search(header)
    if match is None:
        return None
    return parse_date_string(match.group(1))


def parse_tags(header: str) -> List[str]:
    """Return tags in order of appearance, duplicates kept."""
    return TAG_PATTERN.findall(header)


def parse_content(filename: str | Path, content: str) -> Entry:
    """Build an :class:`Entry` from a source name and its raw text."""
    base = Path(filename).name
    header = parse_header(content)
    parsed = parse_date(header)
    if parsed is None:
        LOGGER.debug("No usable date in %s", base)
    return Entry(filename=base, date=parsed, body=content, tags=tuple(parse_tags(header)))
