"""
Publication lookup: turns a title into a PublicationRecord.

Each lookup costs two upstream requests (search + cite). Lookups are
memoized per run by normalized title, so a paper that shows up both as
a root and as a citing work is only fetched once.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from .client import SOURCE, ScholarClient
from .errors import ResponseShapeError
from .models import PublicationRecord
from .parsing import normalize_title, parse_authors, parse_published_year

logger = logging.getLogger("scholar-citations")


class PublicationLookup:
    """
    Looks up publications on Google Scholar, with a run-scoped cache.

    Concurrent lookups of the same title share a single in-flight task.
    """

    def __init__(self, client: ScholarClient, cache: bool = True):
        """
        Initialize the lookup.

        Args:
            client: SerpApi client used for the search and cite queries.
            cache: Memoize records by normalized title for this instance.
        """
        self.client = client
        self.cache_enabled = cache
        self._cache: dict[str, asyncio.Task[PublicationRecord]] = {}

    async def lookup(self, title: str) -> PublicationRecord:
        """
        Get the publication record for a title.

        Raises:
            UpstreamError: If a request fails.
            ResponseShapeError: If a response lacks a required field.
        """
        if not self.cache_enabled:
            return await self.fetch(title)

        key = normalize_title(title)
        task = self._cache.get(key)
        if task is None:
            task = asyncio.ensure_future(self.fetch(title))
            self._cache[key] = task
        else:
            logger.debug(f"Lookup cache hit: {title}")

        try:
            return await task
        except (Exception, asyncio.CancelledError):
            # Failed or cancelled lookups are not memoized
            if self._cache.get(key) is task:
                del self._cache[key]
            raise

    async def fetch(self, title: str) -> PublicationRecord:
        """Fetch a record from upstream, bypassing the cache."""
        result = await self.client.search(title)

        result_id = result.get("result_id")
        if not isinstance(result_id, str) or not result_id:
            raise ResponseShapeError(SOURCE, f"Search result has no result_id: {title}")

        summary = _summary(result)
        published_year = parse_published_year(summary)
        if published_year is None:
            logger.warning(f"Could not parse year from summary {summary!r} for: {title}")

        citation_count, cites_id = _cited_by(result)

        citations = await self.client.cite(result_id)
        # The last format offered is Vancouver: full surnames, comma separated
        snippet = citations[-1].get("snippet") if isinstance(citations[-1], dict) else None
        if not isinstance(snippet, str):
            raise ResponseShapeError(SOURCE, f"Citation format has no snippet: {title}")

        authors, authors_parsed = parse_authors(snippet)
        if not authors_parsed:
            logger.warning(f"Could not parse authors from snippet {snippet!r} for: {title}")

        record = PublicationRecord(
            title=title,
            result_id=result_id,
            published_year=published_year,
            citation_count=citation_count,
            cites_id=cites_id,
            authors=authors,
            year_parsed=published_year is not None,
            authors_parsed=authors_parsed,
        )
        logger.info(
            f"Looked up {title!r}: year={record.published_year} "
            f"citations={record.citation_count} authors={len(record.authors)}"
        )
        return record

    def clear(self) -> None:
        """Forget every memoized record."""
        self._cache.clear()


def _summary(result: dict[str, Any]) -> str:
    info = result.get("publication_info")
    summary = info.get("summary") if isinstance(info, dict) else None
    if not isinstance(summary, str):
        raise ResponseShapeError(SOURCE, "Search result has no publication_info.summary")
    return summary


def _cited_by(result: dict[str, Any]) -> tuple[int, str]:
    """Return (total, cites_id); (0, "") when the result has no cited-by link."""
    links = result.get("inline_links") or {}
    cited_by = links.get("cited_by") if isinstance(links, dict) else None
    if cited_by is None:
        return 0, ""
    if not isinstance(cited_by, dict):
        raise ResponseShapeError(SOURCE, "inline_links.cited_by is not an object")

    total = cited_by.get("total")
    if isinstance(total, bool) or not isinstance(total, (int, float)) or total < 0:
        raise ResponseShapeError(SOURCE, f"Invalid cited_by.total: {total!r}")

    cites_id = cited_by.get("cites_id") or ""
    if not isinstance(cites_id, str):
        raise ResponseShapeError(SOURCE, f"Invalid cited_by.cites_id: {cites_id!r}")
    return int(total), cites_id
