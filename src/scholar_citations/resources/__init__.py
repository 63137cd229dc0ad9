"""
Resources layer for input and output files.

Reads paper title lists and writes citation reports.
"""

from .papers import read_paper_titles
from .report import CitationReport, format_counts, format_csv_row, format_progress

__all__ = [
    "read_paper_titles",
    "CitationReport",
    "format_counts",
    "format_csv_row",
    "format_progress",
]
