"""
Exceptions raised by the citation lookup pipeline.

Upstream and decoding failures are fatal for a run; text-parsing
fragility is reported through flags on PublicationRecord instead.
"""

from __future__ import annotations

from typing import Optional


class ScholarCitationsError(Exception):
    """Base exception for scholar-citations failures."""


class ConfigurationError(ScholarCitationsError):
    """Raised when required configuration (the API key) is missing."""


class UpstreamError(ScholarCitationsError):
    """Raised when an upstream request fails or the API reports an error."""

    def __init__(self, source: str, message: str, status_code: Optional[int] = None):
        self.source = source
        self.status_code = status_code
        super().__init__(f"[{source}] {message}")


class ResponseShapeError(UpstreamError):
    """Raised when an upstream response lacks a field the lookup depends on."""
