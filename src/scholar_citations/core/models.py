"""
Data models for citation lookups.

These models are pure Pydantic with no I/O, so the same records flow
through the client, the aggregation service and the report sinks.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class PublicationRecord(BaseModel):
    """
    One Google Scholar hit for a queried title.

    Built fresh for each upstream lookup. `result_id` is only valid
    for the current run and is never persisted.

    The two `*_parsed` flags mark values recovered from free text
    (the publication summary and the citation snippet). When a flag is
    False the value is either missing or a best-effort parse.
    """

    title: str = Field(..., description="Queried title, echoed back")
    result_id: str = Field(..., description="Upstream identifier of the search hit")
    published_year: Optional[int] = Field(
        default=None, description="Year parsed from the publication summary"
    )
    citation_count: int = Field(default=0, ge=0, description="Cited-by total")
    cites_id: str = Field(
        default="", description="Group id of citing works, empty when uncited"
    )
    authors: list[str] = Field(
        default_factory=list, description="Author names from the citation snippet"
    )

    year_parsed: bool = Field(default=False, description="Year parse succeeded")
    authors_parsed: bool = Field(default=False, description="Author parse succeeded")

    class Config:
        frozen = True

    @property
    def has_citing_works(self) -> bool:
        """Whether the cited-by listing can be queried for this record."""
        return bool(self.cites_id)


class CitationCounts(BaseModel):
    """
    Citation statistics for one paper, as reported to the console and CSV.

    `average` is None when the publication year could not be parsed and
    no baseline year was supplied.
    """

    title: str
    total: int = Field(default=0, ge=0)
    average: Optional[float] = None
    organic: int = 0
    self_citations: int = Field(default=0, ge=0)
    citing_works_scanned: int = Field(default=0, ge=0)
