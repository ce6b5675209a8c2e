"""Caller-facing citation network analysis for Citation Lens."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from citation_lens.analysis.builder import NetworkBuilder
from citation_lens.analysis.communities import (
    CommunityReport,
    ComponentReport,
    detect_communities,
    find_connected_components,
)
from citation_lens.analysis.metrics import (
    BasicMetrics,
    MetricsSnapshot,
    NetworkMetrics,
    NodeMetrics,
    calculate_metrics,
    paper_influence,
)
from citation_lens.analysis.patterns import PatternReport, analyze_citation_patterns
from citation_lens.analysis.seminal import SeminalPaper, identify_seminal_papers
from citation_lens.config import Config, get_config
from citation_lens.export.formats import export_network
from citation_lens.models import NetworkFilter

if TYPE_CHECKING:
    from citation_lens.analysis.graph import CitationGraph
    from citation_lens.store.base import PaperStore

logger = logging.getLogger(__name__)


@dataclass
class NetworkReport:
    """Combined structural analysis of one graph."""

    basic: BasicMetrics
    metrics: MetricsSnapshot
    components: ComponentReport
    communities: CommunityReport


class CitationNetworkAnalyzer:
    """Builds citation networks from a store and analyzes them.

    The analyzer keeps no graph of its own: build() returns a new graph for
    every call and each analysis takes the graph it should work on.
    """

    def __init__(self, store: PaperStore, config: Config | None = None):
        """Initialize the analyzer.

        Args:
            store: Paper/citation store.
            config: Configuration object. If None, loads from default location.
        """
        self.store = store
        self.config = config or get_config()
        self.builder = NetworkBuilder(store, default_max_nodes=self.config.default_max_nodes)

    async def build(self, filter: NetworkFilter | None = None, **filter_options: Any) -> CitationGraph:
        """Build a citation network.

        Args:
            filter: Paper selection. If None, one is made from filter_options.
            **filter_options: NetworkFilter fields.

        Returns:
            New CitationGraph owned by the caller.
        """
        if filter is None:
            filter_options.setdefault("max_nodes", self.config.default_max_nodes)
            filter = NetworkFilter(**filter_options)
        return await self.builder.build(filter)

    def metrics(self, graph: CitationGraph) -> MetricsSnapshot:
        """Per-node degree, authority, betweenness and clustering."""
        return calculate_metrics(graph, self.config.analysis)

    def basic_metrics(self, graph: CitationGraph) -> BasicMetrics:
        """Node and edge counts, density and degree statistics."""
        graph.require_built()
        return NetworkMetrics.basic_metrics(graph)

    def influence(self, graph: CitationGraph, paper_id: str) -> NodeMetrics:
        """Network metrics of a single paper."""
        return paper_influence(graph, paper_id, self.config.analysis)

    def components(self, graph: CitationGraph) -> ComponentReport:
        return find_connected_components(graph)

    def communities(self, graph: CitationGraph) -> CommunityReport:
        return detect_communities(
            graph,
            threshold=self.config.analysis.similarity_threshold,
            min_size=self.config.analysis.min_community_size,
        )

    def patterns(self, graph: CitationGraph) -> PatternReport:
        return analyze_citation_patterns(graph)

    async def identify_seminal(
        self,
        graph: CitationGraph,
        min_citations: int | None = None,
        min_age: int | None = None,
        top_n: int | None = None,
        current_year: int | None = None,
    ) -> list[SeminalPaper]:
        """Identify seminal papers and flag them in the store.

        Thresholds default to the seminal section of the configuration.

        Args:
            graph: Citation graph to analyze.
            min_citations: Minimum citation count.
            min_age: Minimum years since publication.
            top_n: Maximum number of papers to select.
            current_year: Reference year (defaults to this year).

        Returns:
            Selected papers sorted by score descending.
        """
        seminal = self.config.seminal
        return await identify_seminal_papers(
            graph,
            self.store,
            min_citations=seminal.min_citations if min_citations is None else min_citations,
            min_age=seminal.min_age if min_age is None else min_age,
            top_n=seminal.top_n if top_n is None else top_n,
            current_year=current_year,
            config=self.config.analysis,
        )

    def view(self, graph: CitationGraph, max_nodes: int) -> CitationGraph:
        """The first max_nodes papers in build order with the citations among them.

        Raises:
            NotBuiltError: If the graph has no nodes.
            ValueError: If max_nodes is not positive.
        """
        graph.require_built()
        if max_nodes < 1:
            raise ValueError(f"max_nodes must be positive, got {max_nodes}")
        return graph.head(max_nodes)

    def export(self, graph: CitationGraph, format: str = "json", max_nodes: int | None = None) -> str:
        """Serialize a graph as json, gexf or graphml (unknown formats give json).

        With max_nodes, only the view of the first max_nodes papers is exported.
        """
        if max_nodes is not None:
            graph = self.view(graph, max_nodes)
        return export_network(graph, format)

    def report(self, graph: CitationGraph) -> NetworkReport:
        """Run the basic, per-node, component and community analyses.

        Raises:
            NotBuiltError: If the graph has no nodes.
        """
        return NetworkReport(
            basic=self.basic_metrics(graph),
            metrics=self.metrics(graph),
            components=self.components(graph),
            communities=self.communities(graph),
        )
