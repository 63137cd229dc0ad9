"""
Parsers for structured data embedded in Google Scholar free text.

Both parsers follow the conventions of the Scholar summary and the
Vancouver-style citation snippet. Neither raises on unexpected input:
each returns its best-effort result together with a success flag so callers
can detect degraded data.
"""

from __future__ import annotations

import re
from typing import Optional

YEAR_DELIMITER = " -"
AUTHOR_SEPARATOR = ", "

_YEAR_PATTERN = re.compile(r"[0-9]{4}")


def parse_published_year(summary: str) -> Optional[int]:
    """
    Read the publication year from a Scholar summary line.

    Scholar summaries look like ``"J Smith, A Doe - Journal, 2019 - site.com"``.
    The year is the four characters immediately before the last ``" -"``.

    Returns:
        The year, or None when there is no delimiter, too little text
        before it, or the four characters are not digits.
    """
    last_index = summary.rfind(YEAR_DELIMITER)
    if last_index < 4:
        return None

    chunk = summary[last_index - 4 : last_index]
    if not _YEAR_PATTERN.fullmatch(chunk):
        return None
    return int(chunk)


def parse_authors(snippet: str) -> tuple[list[str], bool]:
    """
    Split the author list off a Vancouver-style citation snippet.

    ``"Smith J, Doe A. Title of paper. Journal, 2020."`` yields
    ``["Smith J", "Doe A"]``: the text before the first ``.`` split on
    ``", "``.

    When the snippet has no ``.`` the whole snippet is used, producing
    malformed names, reported through the returned flag.

    Returns:
        (authors, parsed) where parsed is False for a snippet without a
        period or one that yields no non-empty names.
    """
    end = snippet.find(".")
    prefix = snippet if end == -1 else snippet[:end]
    authors = prefix.split(AUTHOR_SEPARATOR)

    parsed = end != -1 and any(name.strip() for name in authors)
    return authors, parsed


def normalize_title(title: str) -> str:
    """Cache key for a title: case-folded with whitespace collapsed."""
    return " ".join(title.split()).casefold()
