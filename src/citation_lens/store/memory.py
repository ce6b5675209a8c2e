"""In-memory paper/citation store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from citation_lens.store.base import PaperStore

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from citation_lens.models import CitationRecord, NetworkFilter, PaperRecord

logger = logging.getLogger(__name__)


class InMemoryPaperStore(PaperStore):
    """Store holding paper and citation records in lists.

    Record order is the store's native order, used to break citation count ties.
    """

    name = "memory"

    def __init__(
        self,
        papers: Iterable[PaperRecord] | None = None,
        citations: Iterable[CitationRecord] | None = None,
    ):
        """Initialize the store.

        Args:
            papers: Paper records.
            citations: Citation records.
        """
        self.papers: list[PaperRecord] = list(papers or [])
        self.citations: list[CitationRecord] = list(citations or [])

    async def find_papers(self, filter: NetworkFilter) -> list[PaperRecord]:
        matching = [p for p in self.papers if filter.matches(p)]
        # sort is stable, so ties keep insertion order
        matching.sort(key=lambda p: p.citation_count, reverse=True)
        return matching[: filter.max_nodes]

    async def find_citations(
        self,
        source_ids: Collection[str],
        target_ids: Collection[str],
    ) -> list[CitationRecord]:
        sources = set(source_ids)
        targets = set(target_ids)
        return [c for c in self.citations if c.citing_paper in sources and c.cited_paper in targets]

    async def update_seminal_flag(self, paper_ids: Collection[str]) -> None:
        ids = set(paper_ids)
        updated = 0
        for paper in self.papers:
            if paper.id in ids:
                paper.is_seminal = True
                updated += 1
        logger.info(f"Marked {updated} papers as seminal")
