"""Abstract base class for paper/citation stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Collection

    from citation_lens.models import CitationRecord, NetworkFilter, PaperRecord


class PaperStore(ABC):
    """Source of paper and citation records for network building.

    Implementations raise StoreUnavailableError when the backing store cannot
    be reached. Apart from update_seminal_flag, every method is read-only.
    """

    name: str = "base"

    @abstractmethod
    async def find_papers(self, filter: NetworkFilter) -> list[PaperRecord]:
        """Find papers matching a filter.

        Args:
            filter: Category, date range and minimum citation filters.

        Returns:
            At most filter.max_nodes papers, sorted by citation count
            descending. Ties keep the store's native order.
        """
        ...

    @abstractmethod
    async def find_citations(
        self,
        source_ids: Collection[str],
        target_ids: Collection[str],
    ) -> list[CitationRecord]:
        """Find citations whose citing paper is in source_ids and cited paper in target_ids.

        Args:
            source_ids: Allowed citing paper ids.
            target_ids: Allowed cited paper ids.

        Returns:
            Matching citation records, duplicates included.
        """
        ...

    @abstractmethod
    async def update_seminal_flag(self, paper_ids: Collection[str]) -> None:
        """Mark the given papers as seminal.

        Args:
            paper_ids: IDs of the papers to flag.
        """
        ...
