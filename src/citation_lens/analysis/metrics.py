"""Structural metrics for citation network analysis.

Authority and betweenness scores are approximations: authority runs a fixed
number of PageRank iterations without redistributing the mass of papers that
cite nothing, and betweenness counts at most a few breadth-first paths of
bounded length per node pair. Both are deterministic for a given graph and
configuration.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from citation_lens.config import AnalysisConfig
from citation_lens.utils import count_values

if TYPE_CHECKING:
    from citation_lens.analysis.graph import CitationGraph

logger = logging.getLogger(__name__)

RANKING_METHODS = ("in_degree", "out_degree", "authority", "betweenness", "clustering")


@dataclass
class NodeMetrics:
    """Metrics of a single paper."""

    paper_id: str
    in_degree: int = 0
    out_degree: int = 0
    authority: float = 0.0
    betweenness: float = 0.0
    clustering: float = 0.0


@dataclass
class MetricsSnapshot:
    """Per-node metrics of one graph, keyed by paper id."""

    in_degree: dict[str, int] = field(default_factory=dict)
    out_degree: dict[str, int] = field(default_factory=dict)
    authority: dict[str, float] = field(default_factory=dict)
    betweenness: dict[str, float] = field(default_factory=dict)
    clustering: dict[str, float] = field(default_factory=dict)

    @property
    def global_clustering(self) -> float:
        """Mean of the local clustering coefficients."""
        if not self.clustering:
            return 0.0
        return sum(self.clustering.values()) / len(self.clustering)

    def for_node(self, paper_id: str) -> NodeMetrics:
        """Collect the metrics of one paper.

        Raises:
            ValueError: If the paper is not part of the snapshot.
        """
        if paper_id not in self.in_degree:
            raise ValueError(f"Paper not in network: {paper_id}")
        return NodeMetrics(
            paper_id=paper_id,
            in_degree=self.in_degree[paper_id],
            out_degree=self.out_degree[paper_id],
            authority=self.authority[paper_id],
            betweenness=self.betweenness[paper_id],
            clustering=self.clustering[paper_id],
        )


@dataclass
class BasicMetrics:
    """Graph-level counts and degree statistics."""

    node_count: int
    edge_count: int
    density: float
    avg_in_degree: float
    avg_out_degree: float
    max_in_degree: int
    max_out_degree: int
    in_degree_distribution: dict[int, int] = field(default_factory=dict)
    out_degree_distribution: dict[int, int] = field(default_factory=dict)


@dataclass
class InfluenceScore:
    """Ranking entry with paper information."""

    paper_id: str
    title: str
    score: float
    year: int | None = None
    metric: str = "unknown"


class NetworkMetrics:
    """Static methods for calculating citation network metrics."""

    @staticmethod
    def degree_centrality(graph: CitationGraph) -> tuple[dict[str, int], dict[str, int]]:
        """Count in- and out-degree of every paper in one pass over the edges.

        Parallel citations each count.

        Args:
            graph: Citation graph to analyze.

        Returns:
            Tuple of (in_degree, out_degree) mappings.
        """
        in_degree = dict.fromkeys(graph.nodes, 0)
        out_degree = dict.fromkeys(graph.nodes, 0)
        for edge in graph.edges:
            out_degree[edge.source_id] += 1
            in_degree[edge.target_id] += 1
        return in_degree, out_degree

    @staticmethod
    def authority_score(
        graph: CitationGraph,
        iterations: int = 10,
        damping: float = 0.85,
    ) -> dict[str, float]:
        """Calculate PageRank-style authority scores.

        Every paper starts at 1/N. Each iteration sets a paper's score to
        (1 - d)/N plus d times the sum, over citations it receives, of the
        citing paper's score divided by that paper's out-degree. Papers that
        cite nothing pass nothing on, so scores sum to less than one when such
        papers exist. Exactly `iterations` rounds run; there is no convergence
        check.

        Args:
            graph: Citation graph to analyze.
            iterations: Number of power iterations.
            damping: Damping factor.

        Returns:
            Dictionary mapping paper IDs to authority scores.
        """
        nodes = list(graph.nodes)
        n = len(nodes)

        if n == 0:
            return {}

        scores = dict.fromkeys(nodes, 1.0 / n)
        _, out_degree = NetworkMetrics.degree_centrality(graph)
        base = (1 - damping) / n

        for _ in range(iterations):
            new_scores = dict.fromkeys(nodes, base)
            for edge in graph.edges:
                new_scores[edge.target_id] += damping * scores[edge.source_id] / out_degree[edge.source_id]
            scores = new_scores

        return scores

    @staticmethod
    def find_shortest_paths(
        graph: CitationGraph,
        source: str,
        target: str,
        max_paths: int = 3,
        max_length: int = 5,
        distance_to_target: dict[str, int] | None = None,
    ) -> list[tuple[str, ...]]:
        """Enumerate up to max_paths simple paths from source to target, breadth-first.

        Paths come out in order of non-decreasing length and never exceed
        max_length edges. This is a bounded search, not an exhaustive
        enumeration of all shortest paths.

        Args:
            graph: Citation graph to search.
            source: Start paper id.
            target: End paper id.
            max_paths: Maximum number of paths to return.
            max_length: Maximum path length in edges.
            distance_to_target: Optional precomputed distances from each node
                to target, used to prune branches that cannot reach it.

        Returns:
            List of paths, each a tuple of paper ids from source to target.
        """
        if distance_to_target is None:
            distance_to_target = _distances_to(graph, target, max_length)
        if distance_to_target.get(source, max_length + 1) > max_length:
            return []

        paths: list[tuple[str, ...]] = []
        queue: deque[tuple[str, ...]] = deque([(source,)])

        while queue and len(paths) < max_paths:
            path = queue.popleft()
            current = path[-1]

            if current == target:
                paths.append(path)
                continue

            length = len(path) - 1
            if length >= max_length:
                continue

            for neighbor in graph.successors(current):
                if neighbor in path:
                    continue
                remaining = distance_to_target.get(neighbor)
                if remaining is None or length + 1 + remaining > max_length:
                    continue
                queue.append((*path, neighbor))

        return paths

    @staticmethod
    def betweenness_centrality(
        graph: CitationGraph,
        max_paths: int = 3,
        max_length: int = 5,
    ) -> dict[str, float]:
        """Calculate approximate betweenness centrality.

        For every ordered pair of distinct papers, up to max_paths paths of at
        most max_length edges are found (see find_shortest_paths) and every
        interior paper on each path gets one count. Counts are divided by the
        largest count. Graphs with many equally short paths are undercounted.

        Args:
            graph: Citation graph to analyze.
            max_paths: Paths enumerated per pair.
            max_length: Maximum path length in edges.

        Returns:
            Dictionary mapping paper IDs to scores in [0, 1].
        """
        nodes = list(graph.nodes)
        counts = dict.fromkeys(nodes, 0)

        for target in nodes:
            distances = _distances_to(graph, target, max_length)
            for source in nodes:
                if source == target or source not in distances:
                    continue
                paths = NetworkMetrics.find_shortest_paths(
                    graph,
                    source,
                    target,
                    max_paths=max_paths,
                    max_length=max_length,
                    distance_to_target=distances,
                )
                for path in paths:
                    for interior in path[1:-1]:
                        counts[interior] += 1

        max_count = max(counts.values(), default=0)
        if max_count == 0:
            return {pid: 0.0 for pid in nodes}
        return {pid: count / max_count for pid, count in counts.items()}

    @staticmethod
    def clustering_coefficients(graph: CitationGraph) -> dict[str, float]:
        """Calculate local clustering coefficients over outgoing neighbours.

        For a paper whose outgoing citations reach k distinct papers (itself
        included when it cites itself), the coefficient is the number of pairs
        among them connected in either direction divided by k(k-1)/2. Papers
        reaching fewer than two papers score 0.

        Args:
            graph: Citation graph to analyze.

        Returns:
            Dictionary mapping paper IDs to coefficients in [0, 1].
        """
        clustering = {}
        for paper_id in graph.nodes:
            neighbors = graph.successors(paper_id)
            k = len(neighbors)
            if k < 2:
                clustering[paper_id] = 0.0
                continue

            connected = 0
            for i in range(k):
                for j in range(i + 1, k):
                    if graph.has_edge(neighbors[i], neighbors[j]) or graph.has_edge(neighbors[j], neighbors[i]):
                        connected += 1

            clustering[paper_id] = connected / (k * (k - 1) / 2)

        return clustering

    @staticmethod
    def density(graph: CitationGraph) -> float:
        """Directed density E / (N(N-1)); 0 for graphs with fewer than two nodes."""
        n = graph.node_count
        if n <= 1:
            return 0.0
        return graph.edge_count / (n * (n - 1))

    @staticmethod
    def basic_metrics(graph: CitationGraph) -> BasicMetrics:
        """Calculate graph-level counts and degree statistics.

        Args:
            graph: Citation graph to analyze.

        Returns:
            BasicMetrics for the graph.
        """
        in_degree, out_degree = NetworkMetrics.degree_centrality(graph)
        n = graph.node_count
        return BasicMetrics(
            node_count=n,
            edge_count=graph.edge_count,
            density=NetworkMetrics.density(graph),
            avg_in_degree=sum(in_degree.values()) / n if n else 0.0,
            avg_out_degree=sum(out_degree.values()) / n if n else 0.0,
            max_in_degree=max(in_degree.values(), default=0),
            max_out_degree=max(out_degree.values(), default=0),
            in_degree_distribution=dict(sorted(count_values(in_degree.values()).items())),
            out_degree_distribution=dict(sorted(count_values(out_degree.values()).items())),
        )


def _distances_to(graph: CitationGraph, target: str, max_length: int) -> dict[str, int]:
    """Breadth-first distances from every node to target, up to max_length edges."""
    distances = {target: 0}
    queue = deque([target])
    while queue:
        current = queue.popleft()
        if distances[current] >= max_length:
            continue
        for predecessor in graph.predecessors(current):
            if predecessor not in distances:
                distances[predecessor] = distances[current] + 1
                queue.append(predecessor)
    return distances


def calculate_metrics(graph: CitationGraph, config: AnalysisConfig | None = None) -> MetricsSnapshot:
    """Calculate the per-node metrics of a graph.

    The snapshot is cached on the graph until the graph changes.

    Args:
        graph: Citation graph to analyze.
        config: Iteration counts and path caps. Defaults to AnalysisConfig().

    Returns:
        MetricsSnapshot for the graph.

    Raises:
        NotBuiltError: If the graph has no nodes.
    """
    graph.require_built()
    config = config or AnalysisConfig()

    cached = graph.cached_metrics(config)
    if cached is not None:
        logger.debug("Using cached metrics snapshot")
        return cached

    in_degree, out_degree = NetworkMetrics.degree_centrality(graph)
    snapshot = MetricsSnapshot(
        in_degree=in_degree,
        out_degree=out_degree,
        authority=NetworkMetrics.authority_score(
            graph,
            iterations=config.authority_iterations,
            damping=config.damping,
        ),
        betweenness=NetworkMetrics.betweenness_centrality(
            graph,
            max_paths=config.max_shortest_paths,
            max_length=config.max_path_length,
        ),
        clustering=NetworkMetrics.clustering_coefficients(graph),
    )

    graph.cache_metrics(config.model_copy(), snapshot)
    logger.debug(f"Calculated metrics for {graph.node_count} nodes")
    return snapshot


def paper_influence(
    graph: CitationGraph,
    paper_id: str,
    config: AnalysisConfig | None = None,
) -> NodeMetrics:
    """Get the network metrics of a single paper.

    Args:
        graph: Citation graph to analyze.
        paper_id: ID of the paper.
        config: Metric parameters.

    Returns:
        NodeMetrics for the paper.

    Raises:
        NotBuiltError: If the graph has no nodes.
        ValueError: If the paper is not in the graph.
    """
    return calculate_metrics(graph, config).for_node(paper_id)


def rank_papers(
    graph: CitationGraph,
    method: str = "authority",
    top_k: int | None = None,
    config: AnalysisConfig | None = None,
) -> list[InfluenceScore]:
    """Rank papers by one of the network metrics.

    Args:
        graph: Citation graph to analyze.
        method: Ranking method:
            - "authority": PageRank-style authority score
            - "in_degree": Citations received within the network
            - "out_degree": References made within the network
            - "betweenness": Approximate betweenness centrality
            - "clustering": Local clustering coefficient
        top_k: Number of top papers to return (None for all).
        config: Metric parameters.

    Returns:
        List of InfluenceScore objects, sorted by score descending.

    Raises:
        ValueError: If the method is unknown.
    """
    if method not in RANKING_METHODS:
        raise ValueError(f"Unknown method: {method}")

    snapshot = calculate_metrics(graph, config)
    scores: dict[str, float] = getattr(snapshot, method)

    results = [
        InfluenceScore(
            paper_id=paper_id,
            title=graph.nodes[paper_id].title,
            score=float(score),
            year=graph.nodes[paper_id].year,
            metric=method,
        )
        for paper_id, score in scores.items()
    ]

    results.sort(key=lambda x: x.score, reverse=True)

    if top_k:
        results = results[:top_k]

    return results
