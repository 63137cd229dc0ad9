"""
SerpApi Google Scholar client.

Direct HTTP client for the SerpApi search endpoint using httpx.
Three query shapes are used:

- search: ``engine=google_scholar`` with a quoted title
- cite: ``engine=google_scholar_cite`` keyed by a result id
- cited by: ``engine=google_scholar`` with ``cites=<cites_id>``

Every failure is raised; nothing is retried.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from .errors import ResponseShapeError, UpstreamError

logger = logging.getLogger("scholar-citations")

# SerpApi base URL
BASE_URL = "https://serpapi.com"
SEARCH_PATH = "/search"

SOURCE = "serpapi"


def quote_title(title: str) -> str:
    """Wrap a title in double quotes for an exact-phrase Scholar query."""
    return json.dumps(title, ensure_ascii=False)


class ScholarClient:
    """
    Async client for SerpApi's Google Scholar engines.

    Returns the raw JSON fragments the lookup depends on and raises
    ResponseShapeError when one of them is missing.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        language: str = "en",
        timeout: int = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the SerpApi client.

        Args:
            api_key: SerpApi API key.
            base_url: Service root, overridable for testing.
            language: Interface language sent as ``hl``.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.api_key = api_key
        self.base_url = base_url
        self.language = language
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def _get_json(self, params: dict[str, str]) -> dict[str, Any]:
        """
        Run one search request and return the decoded JSON body.

        Raises:
            UpstreamError: On transport failure, an HTTP error status,
                a non-JSON body, or an ``error`` field in the response.
        """
        client = await self._get_client()
        query = {**params, "api_key": self.api_key, "hl": self.language}
        logger.info(f"Request engine={params.get('engine')} params={params}")

        try:
            response = await client.get(SEARCH_PATH, params=query)
        except httpx.HTTPError as e:
            raise UpstreamError(SOURCE, f"Connection error: {e}") from e

        if response.status_code >= 400:
            raise UpstreamError(
                SOURCE,
                f"HTTP {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(SOURCE, f"Invalid JSON response: {e}") from e

        if not isinstance(data, dict):
            raise ResponseShapeError(SOURCE, "Expected a JSON object response")
        if "error" in data:
            raise UpstreamError(SOURCE, str(data["error"]))
        return data

    async def search(self, title: str) -> dict[str, Any]:
        """
        Search Scholar for an exact title and return the first organic result.

        No disambiguation is done: the first hit is taken as the paper.

        Raises:
            ResponseShapeError: If there are no organic results.
        """
        data = await self._get_json({"engine": "google_scholar", "q": quote_title(title)})
        results = _organic_results(data)
        if not results:
            raise ResponseShapeError(SOURCE, f"No organic results for title: {title}")

        first = results[0]
        if not isinstance(first, dict):
            raise ResponseShapeError(SOURCE, "Organic result is not an object")
        return first

    async def cite(self, result_id: str) -> list[dict[str, Any]]:
        """
        Fetch the "Cite" formats (MLA, APA, ... Vancouver) for a search hit.

        Raises:
            ResponseShapeError: If the citation list is missing or empty.
        """
        data = await self._get_json({"engine": "google_scholar_cite", "q": result_id})
        citations = data.get("citations")
        if not isinstance(citations, list) or not citations:
            raise ResponseShapeError(
                SOURCE, f"No citation formats for result_id: {result_id}"
            )
        return citations

    async def cited_by(self, cites_id: str) -> list[str]:
        """
        List the titles of works citing the given cites group.

        Only the first results page is read, so the list can be shorter
        than the cited-by total.
        """
        data = await self._get_json({"engine": "google_scholar", "cites": cites_id})
        titles = []
        for result in _organic_results(data):
            title = result.get("title") if isinstance(result, dict) else None
            if not isinstance(title, str):
                raise ResponseShapeError(SOURCE, "Citing result has no title")
            titles.append(title)

        logger.info(f"Found {len(titles)} citing works for cites_id={cites_id}")
        return titles

    async def close(self) -> None:
        """Close the client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def _organic_results(data: dict[str, Any]) -> list[Any]:
    results = data.get("organic_results")
    if not isinstance(results, list):
        raise ResponseShapeError(SOURCE, "Response has no organic_results array")
    return results


def _error_message(response: httpx.Response) -> str:
    """Best-effort error text from a failed SerpApi response."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return response.text[:200]
