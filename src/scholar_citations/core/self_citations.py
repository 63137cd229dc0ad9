"""
Self-citation detection.

A citing work is a self-citation when it shares at least one author
with the cited paper. Names are compared by exact string equality.
Empty names and the Vancouver ``et al`` marker are not author names and
never match.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from .lookup import PublicationLookup

logger = logging.getLogger("scholar-citations")

PLACEHOLDER_NAMES = frozenset({"", "et al"})


def shares_author(authors: Sequence[str], other_authors: Sequence[str]) -> bool:
    """Whether any real name appears verbatim in both author lists."""
    others = set(other_authors) - PLACEHOLDER_NAMES
    return any(
        author in others
        for author in authors
        if author.strip() not in PLACEHOLDER_NAMES
    )


class SelfCitationScanner:
    """
    For each citing work: fetch its authors, then test for overlap.

    With max_concurrency=1 citing works are looked up one after another
    in listing order. Higher values look them up concurrently, bounded
    by a semaphore; the count is the same either way.
    """

    def __init__(self, lookup: PublicationLookup, max_concurrency: int = 1):
        self.lookup = lookup
        self.max_concurrency = max(1, max_concurrency)

    async def count(self, authors: Sequence[str], citing_titles: Sequence[str]) -> int:
        """
        Count citing works sharing an author with `authors`.

        Each citing work counts at most once. In the concurrent scan the
        first failure cancels the lookups still in flight.

        Raises:
            UpstreamError: If any citing-work lookup fails.
        """
        if self.max_concurrency == 1:
            matches = [await self._is_self_citation(authors, t) for t in citing_titles]
        else:
            semaphore = asyncio.Semaphore(self.max_concurrency)

            async def bounded(title: str) -> bool:
                async with semaphore:
                    return await self._is_self_citation(authors, title)

            tasks = [asyncio.ensure_future(bounded(t)) for t in citing_titles]
            try:
                matches = await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        return sum(matches)

    async def _is_self_citation(self, authors: Sequence[str], citing_title: str) -> bool:
        citing = await self.lookup.lookup(citing_title)
        if shares_author(authors, citing.authors):
            logger.info(f"Self-citation: {citing_title!r}")
            return True
        return False
