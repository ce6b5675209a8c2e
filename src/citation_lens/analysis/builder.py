"""Citation network construction for Citation Lens.

Builds a CitationGraph from the papers and citations held by a PaperStore.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from citation_lens.analysis.graph import CitationEdge, CitationGraph, PaperNode
from citation_lens.exceptions import MalformedRecordError, StoreUnavailableError
from citation_lens.models import NetworkFilter

if TYPE_CHECKING:
    from citation_lens.store.base import PaperStore

logger = logging.getLogger(__name__)


class NetworkBuilder:
    """Builds citation networks from a paper/citation store."""

    def __init__(self, store: PaperStore, default_max_nodes: int = 10000):
        """Initialize the builder.

        Args:
            store: Store providing paper and citation records.
            default_max_nodes: Node limit used when build() is called without
                a filter.
        """
        self.store = store
        self.default_max_nodes = default_max_nodes

    async def build(self, filter: NetworkFilter | None = None) -> CitationGraph:
        """Build a citation graph from the papers selected by a filter.

        Every call returns a new graph owned by the caller. Malformed records
        are skipped; citations to papers outside the selection are dropped.

        Args:
            filter: Paper selection. Defaults to all papers up to
                default_max_nodes.

        Returns:
            CitationGraph with the selected papers and the citations among
            them. Empty if no paper matches.

        Raises:
            StoreUnavailableError: If the store fails. No partial graph is
                returned.
        """
        filter = filter or NetworkFilter(max_nodes=self.default_max_nodes)
        graph = CitationGraph()

        try:
            papers = await self.store.find_papers(filter)
        except (OSError, ConnectionError) as e:
            raise StoreUnavailableError(f"Paper store '{self.store.name}' failed: {e}") from e

        skipped = 0
        for record in papers:
            try:
                graph.add_node(PaperNode.from_record(record))
            except MalformedRecordError as e:
                skipped += 1
                logger.warning(f"Skipping paper: {e}")

        if graph.is_empty():
            logger.info("No papers matched the network filter")
            return graph

        paper_ids = list(graph.nodes)
        try:
            citations = await self.store.find_citations(paper_ids, paper_ids)
        except (OSError, ConnectionError) as e:
            raise StoreUnavailableError(f"Citation store '{self.store.name}' failed: {e}") from e

        dropped = 0
        for record in citations:
            try:
                edge = CitationEdge.from_record(record)
            except MalformedRecordError as e:
                skipped += 1
                logger.warning(f"Skipping citation: {e}")
                continue
            if not graph.add_edge(edge):
                dropped += 1

        logger.info(
            f"Built citation network: {graph.node_count} nodes, {graph.edge_count} edges "
            f"({skipped} malformed records skipped, {dropped} edges dropped)"
        )
        return graph


async def build_citation_network(
    store: PaperStore,
    filter: NetworkFilter | None = None,
    **filter_options: Any,
) -> CitationGraph:
    """Convenience function to build a citation network.

    Args:
        store: Paper/citation store.
        filter: Paper selection. If None, one is made from filter_options.
        **filter_options: NetworkFilter fields (categories, date_range,
            min_citations, max_nodes).

    Returns:
        CitationGraph with the citation network.
    """
    if filter is None:
        filter = NetworkFilter(**filter_options)
    return await NetworkBuilder(store).build(filter)
