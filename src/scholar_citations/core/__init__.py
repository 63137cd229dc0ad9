"""
Core citation statistics module.

This module contains the pure Python business logic with no console
or file output. It can be used directly by other Python code.

Example usage:
    from scholar_citations.core import CitationService

    service = CitationService(api_key="...")
    counts = await service.citation_counts("Attention Is All You Need")
"""

from .errors import (
    ConfigurationError,
    ResponseShapeError,
    ScholarCitationsError,
    UpstreamError,
)
from .models import CitationCounts, PublicationRecord
from .parsing import normalize_title, parse_authors, parse_published_year
from .client import ScholarClient
from .lookup import PublicationLookup
from .self_citations import SelfCitationScanner, shares_author
from .service import CitationService, average_per_year

__all__ = [
    # Errors
    "ScholarCitationsError",
    "ConfigurationError",
    "UpstreamError",
    "ResponseShapeError",
    # Models
    "PublicationRecord",
    "CitationCounts",
    # Parsing
    "parse_published_year",
    "parse_authors",
    "normalize_title",
    # Lookup and aggregation
    "ScholarClient",
    "PublicationLookup",
    "SelfCitationScanner",
    "shares_author",
    "CitationService",
    "average_per_year",
]
