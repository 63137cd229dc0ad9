"""
Scholar Citations
=================

Citation statistics for paper titles using Google Scholar via SerpApi.

This package provides:
- core: Pure Python lookup and aggregation service (no console output)
- resources: Paper list loading and CSV report output
- cli: The scholar-citations command line
"""

from .cli import main

__version__ = "0.1.0"
__all__ = ["main"]
