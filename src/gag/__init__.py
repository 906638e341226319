"""gag - tag and date queries over a journal of plain-text notes."""

__version__ = "0.1.0"
