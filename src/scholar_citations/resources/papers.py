"""
Paper list loading.

A paper list is a plain text file with one title per line.
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiofiles

logger = logging.getLogger("scholar-citations")


async def read_paper_titles(path: Path) -> list[str]:
    """
    Read paper titles from a newline-delimited file.

    Trailing whitespace is stripped and blank lines are skipped.

    Raises:
        OSError: If the file cannot be read.
    """
    async with aiofiles.open(path, "r", encoding="utf-8") as f:
        content = await f.read()

    titles = [line.rstrip() for line in content.splitlines()]
    titles = [title for title in titles if title.strip()]
    logger.info(f"Read {len(titles)} paper titles from {path}")
    return titles
