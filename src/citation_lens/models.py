"""Store record models for Citation Lens."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from citation_lens.utils import parse_date

CitationType = Literal["direct", "methodological", "contradictory", "supportive", "indirect"]
Sentiment = Literal["positive", "negative", "neutral"]

CITATION_TYPES: tuple[str, ...] = ("direct", "methodological", "contradictory", "supportive", "indirect")
SENTIMENTS: tuple[str, ...] = ("positive", "negative", "neutral")


class Author(BaseModel):
    """An author of a paper."""

    name: str
    affiliation: str | None = None


class PaperRecord(BaseModel):
    """A paper as persisted in the paper/citation store."""

    id: str = Field(validation_alias=AliasChoices("id", "_id", "paper_id"))
    title: str | None = None
    authors: list[Author] = Field(default_factory=list)
    published_date: date | None = None
    citation_count: int = 0
    impact_score: float = 0.0
    categories: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    doi: str | None = None
    is_seminal: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("authors", mode="before")
    @classmethod
    def _coerce_authors(cls, value: Any) -> Any:
        # Raw data often stores authors as plain names
        if value is None:
            return []
        if isinstance(value, list):
            return [{"name": a} if isinstance(a, str) else a for a in value]
        return value

    @field_validator("categories", "keywords", mode="before")
    @classmethod
    def _coerce_terms(cls, value: Any) -> Any:
        if value is None:
            return []
        return value

    @field_validator("published_date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Any:
        if value is None or isinstance(value, (date, datetime)):
            return value.date() if isinstance(value, datetime) else value
        return parse_date(value)

    @property
    def year(self) -> int | None:
        """Publication year, if known."""
        return self.published_date.year if self.published_date else None


class CitationRecord(BaseModel):
    """A citation between two papers as persisted in the store."""

    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    citing_paper: str = Field(validation_alias=AliasChoices("citing_paper", "citingPaper", "source"))
    cited_paper: str | None = Field(
        default=None, validation_alias=AliasChoices("cited_paper", "citedPaper", "target")
    )
    citation_type: CitationType = Field(
        default="direct", validation_alias=AliasChoices("citation_type", "citationType")
    )
    sentiment: Sentiment = "neutral"
    strength: float = Field(default=0.5, ge=0.0, le=1.0)
    context: str = ""
    section: str | None = None

    @field_validator("id", "citing_paper", "cited_paper", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("sentiment", mode="before")
    @classmethod
    def _default_sentiment(cls, value: Any) -> Any:
        return value or "neutral"

    @field_validator("context", mode="before")
    @classmethod
    def _default_context(cls, value: Any) -> Any:
        return value or ""


class DateRange(BaseModel):
    """An inclusive publication date range."""

    start: date
    end: date

    @field_validator("start", "end", mode="before")
    @classmethod
    def _coerce_bounds(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        return parse_date(value)

    @model_validator(mode="after")
    def _check_order(self) -> DateRange:
        if self.start > self.end:
            raise ValueError(f"Date range start {self.start} is after end {self.end}")
        return self

    def contains(self, value: date) -> bool:
        """Check whether a date falls within the range."""
        return self.start <= value <= self.end


class NetworkFilter(BaseModel):
    """Options selecting which papers enter a citation network."""

    categories: list[str] = Field(default_factory=list)
    date_range: DateRange | None = None
    min_citations: int = Field(default=0, ge=0)
    max_nodes: int = Field(default=10000, gt=0)

    def matches(self, paper: PaperRecord) -> bool:
        """Check whether a paper passes the category, date and citation filters.

        Args:
            paper: Paper record to test.

        Returns:
            True if the paper should be selected.
        """
        if self.categories and not set(self.categories) & set(paper.categories):
            return False
        if self.date_range is not None:
            if paper.published_date is None or not self.date_range.contains(paper.published_date):
                return False
        return paper.citation_count >= self.min_citations
