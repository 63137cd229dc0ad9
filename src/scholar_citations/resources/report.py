"""
Citation report output.

Formats per-paper console lines and accumulates CSV rows:

    Title,Total,Average,Organic
    "Attention Is All You Need",120000,13333.33,119870
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiofiles

from ..core.models import CitationCounts

logger = logging.getLogger("scholar-citations")

CSV_HEADER = "Title,Total,Average,Organic"


def format_progress(title: str) -> str:
    """Line announcing the paper being processed."""
    return f'> Obtaining citation counts for "{title}"'


def format_counts(counts: CitationCounts) -> str:
    """Console summary line, average to one decimal."""
    average = "n/a" if counts.average is None else f"{counts.average:.1f}"
    return f"  Total: {counts.total}, Average: {average}, Organic: {counts.organic}"


def format_csv_row(counts: CitationCounts) -> str:
    """CSV row with a quoted title and the average to two decimals."""
    title = counts.title.replace('"', '""')
    average = "" if counts.average is None else f"{counts.average:.2f}"
    return f'"{title}",{counts.total},{average},{counts.organic}'


class CitationReport:
    """
    Collects CitationCounts rows for the CSV export.

    Rows keep insertion order, which is the order papers were processed.
    """

    def __init__(self):
        self.rows: list[CitationCounts] = []

    def add(self, counts: CitationCounts) -> None:
        self.rows.append(counts)

    def to_csv(self) -> str:
        """Render the header plus one line per row, newline terminated."""
        lines = [CSV_HEADER]
        lines.extend(format_csv_row(counts) for counts in self.rows)
        return "\n".join(lines) + "\n"

    async def write_csv(self, path: Path) -> Path:
        """
        Write the report to `path`, replacing any existing file.

        Returns:
            Path to the written file.
        """
        async with aiofiles.open(path, "w", encoding="utf-8", newline="") as f:
            await f.write(self.to_csv())

        logger.info(f"Wrote {len(self.rows)} rows to {path}")
        return path
