"""Core gag data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as Date
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class Entry:
    """A parsed document: base filename, header date, full text and tags."""

    filename: str
    date: Optional[Date]
    body: str
    tags: Tuple[str, ...] = ()


class Operator(str, Enum):
    """How the terms of a query are combined."""

    IDENTITY = "identity"
    AND = "and"
    OR = "or"


@dataclass(frozen=True, slots=True)
class Query:
    """A parsed query expression."""

    operator: Operator
    terms: Tuple[str, ...]
    raw: str = ""
