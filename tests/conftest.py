"""
Shared test fixtures for scholar-citations tests.
"""

from typing import Any, Optional
from unittest.mock import AsyncMock

import pytest

from scholar_citations.core.client import ScholarClient
from scholar_citations.core.errors import ResponseShapeError
from scholar_citations.core.models import PublicationRecord


def make_search_result(
    title: str,
    summary: str,
    total: Optional[int] = None,
    cites_id: Optional[str] = None,
) -> dict[str, Any]:
    """Build one SerpApi organic result as returned by engine=google_scholar."""
    result: dict[str, Any] = {
        "position": 0,
        "title": title,
        "result_id": f"rid-{title.lower().replace(' ', '-')}",
        "publication_info": {"summary": summary},
        "inline_links": {},
    }
    if total is not None:
        result["inline_links"]["cited_by"] = {
            "total": total,
            "cites_id": cites_id,
            "link": f"https://scholar.google.com/scholar?cites={cites_id}",
        }
    return result


def make_cite_formats(vancouver: str) -> list[dict[str, str]]:
    """Build the engine=google_scholar_cite `citations` list, Vancouver last."""
    return [
        {"title": "MLA", "snippet": "Smith, John. \"Some Title.\" Journal (2019)."},
        {"title": "APA", "snippet": "Smith, J. (2019). Some Title. Journal."},
        {"title": "Vancouver", "snippet": vancouver},
    ]


class FakeScholar:
    """
    In-memory Scholar catalog behind AsyncMock client methods.

    Counts calls per title so tests can check how often lookups hit upstream.
    """

    def __init__(self):
        self.results: dict[str, dict[str, Any]] = {}
        self.snippets: dict[str, str] = {}
        self.citing: dict[str, list[str]] = {}

    def add(
        self,
        title: str,
        authors: list[str],
        summary: str = "A Author - Journal, 2019 - example.com",
        total: Optional[int] = None,
        cites_id: Optional[str] = None,
        citing: Optional[list[str]] = None,
    ) -> None:
        result = make_search_result(title, summary, total=total, cites_id=cites_id)
        self.results[title] = result
        self.snippets[result["result_id"]] = f"{', '.join(authors)}. {title}. Journal. 2019;1:1-2."
        if cites_id is not None:
            self.citing[cites_id] = citing or []

    async def search(self, title: str) -> dict[str, Any]:
        if title not in self.results:
            raise ResponseShapeError("serpapi", f"No organic results for title: {title}")
        return self.results[title]

    async def cite(self, result_id: str) -> list[dict[str, str]]:
        return make_cite_formats(self.snippets[result_id])

    async def cited_by(self, cites_id: str) -> list[str]:
        return list(self.citing[cites_id])

    def client(self) -> AsyncMock:
        client = AsyncMock(spec=ScholarClient)
        client.search.side_effect = self.search
        client.cite.side_effect = self.cite
        client.cited_by.side_effect = self.cited_by
        return client


@pytest.fixture
def scholar() -> FakeScholar:
    """
    Catalog with one root paper cited by three works, one a self-citation.

    Root Paper: Smith J, Doe A; 10 citations.
    Citing One: Smith J, Lee K (self-citation).
    Citing Two: Chen Y.
    Citing Three: Doe AB (not an exact match for Doe A).
    """
    fake = FakeScholar()
    fake.add(
        "Root Paper",
        ["Smith J", "Doe A"],
        summary="J Smith, A Doe - Journal of Things, 2019 - publisher.com",
        total=10,
        cites_id="cites-root",
        citing=["Citing One", "Citing Two", "Citing Three"],
    )
    fake.add("Citing One", ["Smith J", "Lee K"], total=2, cites_id="cites-one")
    fake.add("Citing Two", ["Chen Y"])
    fake.add("Citing Three", ["Doe AB", "Park S"])
    fake.add(
        "Uncited Paper",
        ["Smith J"],
        summary="J Smith - arXiv preprint arXiv:2401.00001, 2024 - arxiv.org",
    )
    return fake


@pytest.fixture
def mock_scholar_client(scholar: FakeScholar) -> AsyncMock:
    """AsyncMock ScholarClient backed by the sample catalog."""
    return scholar.client()


@pytest.fixture
def sample_publication() -> PublicationRecord:
    """Create a sample publication record for testing."""
    return PublicationRecord(
        title="Attention Is All You Need",
        result_id="5Gohgn6QFikJ",
        published_year=2017,
        citation_count=120000,
        cites_id="2960712678066186980",
        authors=["Vaswani A", "Shazeer N", "Parmar N"],
        year_parsed=True,
        authors_parsed=True,
    )
