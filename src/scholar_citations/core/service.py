"""
Citation service - main business logic.

Aggregates the three per-paper statistics (total, average per year,
organic) from publication lookups. It has no console or file I/O.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from .client import BASE_URL, ScholarClient
from .lookup import PublicationLookup
from .models import CitationCounts, PublicationRecord
from .self_citations import SelfCitationScanner

logger = logging.getLogger("scholar-citations")


def average_per_year(
    citation_count: int,
    start_year: int,
    current_year: int,
) -> float:
    """
    Citations per elapsed year since `start_year`.

    Elapsed years are clamped to at least 1, so a paper published this
    year (or dated in the future) averages its raw total.
    """
    elapsed = max(current_year - start_year, 1)
    return citation_count / elapsed


class CitationService:
    """
    Core citation statistics service.

    Example usage:
        service = CitationService(api_key="...")
        counts = await service.citation_counts("Attention Is All You Need")
        print(counts.total, counts.average, counts.organic)
        await service.close()
    """

    def __init__(
        self,
        api_key: str = "",
        timeout: int = 60,
        language: str = "en",
        cache: bool = True,
        citing_concurrency: int = 1,
        base_url: str = BASE_URL,
        client: Optional[ScholarClient] = None,
    ):
        """
        Initialize the citation service.

        Args:
            api_key: SerpApi API key.
            timeout: Request timeout in seconds.
            language: Scholar interface language (``hl``).
            cache: Memoize publication lookups for the life of the service.
            citing_concurrency: Concurrent lookups when scanning citing works.
            base_url: SerpApi service root.
            client: Pre-built client; overrides api_key/timeout/language/base_url.
        """
        self.client = client or ScholarClient(
            api_key=api_key, base_url=base_url, language=language, timeout=timeout
        )
        self.lookup = PublicationLookup(self.client, cache=cache)
        self.scanner = SelfCitationScanner(self.lookup, max_concurrency=citing_concurrency)

    async def get_publication(self, title: str) -> PublicationRecord:
        """Look up the publication record for a title."""
        return await self.lookup.lookup(title)

    async def total_citations(self, title: str) -> int:
        """Total number of times the paper is cited."""
        publication = await self.lookup.lookup(title)
        return publication.citation_count

    async def average_citations(
        self,
        title: str,
        baseline_year: Optional[int] = None,
        current_year: Optional[int] = None,
    ) -> Optional[float]:
        """
        Average citations per year since publication.

        Args:
            title: Paper title.
            baseline_year: Count years from this year instead of the
                parsed publication year.
            current_year: Defaults to the current calendar year.

        Returns:
            The average, or None when the publication year is unknown
            and no baseline year was given.
        """
        publication = await self.lookup.lookup(title)
        return self._average(publication, baseline_year, current_year)

    async def organic_citations(self, title: str) -> int:
        """Total citations minus citations by works sharing an author."""
        publication = await self.lookup.lookup(title)
        self_citations, _ = await self._self_citations(publication)
        return publication.citation_count - self_citations

    async def citation_counts(
        self,
        title: str,
        baseline_year: Optional[int] = None,
        current_year: Optional[int] = None,
    ) -> CitationCounts:
        """
        Compute total, average and organic citations from one root lookup.

        Args:
            title: Paper title.
            baseline_year: See average_citations.
            current_year: See average_citations.

        Returns:
            CitationCounts for the paper.
        """
        publication = await self.lookup.lookup(title)
        self_citations, scanned = await self._self_citations(publication)

        return CitationCounts(
            title=title,
            total=publication.citation_count,
            average=self._average(publication, baseline_year, current_year),
            organic=publication.citation_count - self_citations,
            self_citations=self_citations,
            citing_works_scanned=scanned,
        )

    def _average(
        self,
        publication: PublicationRecord,
        baseline_year: Optional[int],
        current_year: Optional[int],
    ) -> Optional[float]:
        start_year = baseline_year if baseline_year is not None else publication.published_year
        if start_year is None:
            logger.warning(f"No publication year for {publication.title!r}; average unavailable")
            return None

        return average_per_year(
            publication.citation_count,
            start_year,
            current_year if current_year is not None else date.today().year,
        )

    async def _self_citations(self, publication: PublicationRecord) -> tuple[int, int]:
        """Return (self-citation count, citing works scanned)."""
        if not publication.has_citing_works:
            return 0, 0

        citing_titles = await self.client.cited_by(publication.cites_id)
        count = await self.scanner.count(publication.authors, citing_titles)
        logger.info(
            f"{publication.title!r}: {count} self-citations "
            f"among {len(citing_titles)} citing works"
        )
        return count, len(citing_titles)

    async def close(self) -> None:
        """Clean up resources."""
        await self.client.close()
