"""Connected components and research community detection."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from citation_lens.utils import jaccard, mean, top_counts

if TYPE_CHECKING:
    from citation_lens.analysis.graph import CitationGraph, PaperNode

logger = logging.getLogger(__name__)

CATEGORY_WEIGHT = 0.4
KEYWORD_WEIGHT = 0.3
AUTHOR_WEIGHT = 0.3

TOP_CATEGORIES = 5
TOP_KEYWORDS = 10
TOP_PAPERS = 5


@dataclass
class ComponentReport:
    """Weakly connected components of a citation graph."""

    count: int
    sizes: list[int]
    largest: int
    components: list[list[str]] = field(default_factory=list)  # Largest first


@dataclass
class YearSpan:
    """Range of publication years."""

    start: int
    end: int

    @property
    def span(self) -> int:
        return self.end - self.start


@dataclass
class Community:
    """A group of similar papers with aggregate statistics."""

    id: int
    members: list[str]
    top_categories: list[tuple[str, int]]
    top_keywords: list[tuple[str, int]]
    avg_citation_count: float
    avg_impact_score: float
    time_span: YearSpan
    top_papers: list[PaperNode]

    @property
    def size(self) -> int:
        return len(self.members)


@dataclass
class CommunityReport:
    """Communities found in one detection pass, largest first."""

    communities: list[Community] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.communities)


def find_connected_components(graph: CitationGraph) -> ComponentReport:
    """Find connected components, ignoring citation direction.

    Args:
        graph: Citation graph to analyze.

    Returns:
        ComponentReport with components sorted by size descending.

    Raises:
        NotBuiltError: If the graph has no nodes.
    """
    graph.require_built()

    visited: set[str] = set()
    components: list[list[str]] = []

    for start in graph.nodes:
        if start in visited:
            continue

        component = []
        stack = [start]
        visited.add(start)
        while stack:
            node = stack.pop()
            component.append(node)
            for neighbor in graph.neighbors(node):
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append(neighbor)

        components.append(component)

    components.sort(key=len, reverse=True)
    sizes = [len(c) for c in components]

    return ComponentReport(
        count=len(components),
        sizes=sizes,
        largest=sizes[0] if sizes else 0,
        components=components,
    )


def paper_similarity(first: PaperNode, second: PaperNode) -> float:
    """Weighted Jaccard similarity of two papers' categories, keywords and authors.

    Args:
        first: First paper.
        second: Second paper.

    Returns:
        Similarity in [0, 1].
    """
    return (
        CATEGORY_WEIGHT * jaccard(first.categories, second.categories)
        + KEYWORD_WEIGHT * jaccard(first.keywords, second.keywords)
        + AUTHOR_WEIGHT * jaccard(first.author_names, second.author_names)
    )


def detect_communities(
    graph: CitationGraph,
    threshold: float = 0.3,
    min_size: int = 3,
) -> CommunityReport:
    """Detect research communities by greedy similarity expansion.

    From each paper not yet visited, a breadth-first search follows outgoing
    citations to papers whose similarity to the current paper exceeds the
    threshold. Groups smaller than min_size are discarded; their papers stay
    visited and belong to no community.

    Args:
        graph: Citation graph to analyze.
        threshold: Minimum similarity (exclusive) for joining a group.
        min_size: Minimum number of members of a community.

    Returns:
        CommunityReport with communities sorted by size descending.

    Raises:
        NotBuiltError: If the graph has no nodes.
    """
    graph.require_built()

    visited: set[str] = set()
    groups: list[list[str]] = []

    for start in graph.nodes:
        if start in visited:
            continue

        group = [start]
        visited.add(start)
        queue = deque([start])

        while queue:
            current = queue.popleft()
            current_paper = graph.nodes[current]
            for neighbor in graph.successors(current):
                if neighbor in visited:
                    continue
                if paper_similarity(current_paper, graph.nodes[neighbor]) > threshold:
                    group.append(neighbor)
                    visited.add(neighbor)
                    queue.append(neighbor)

        if len(group) >= min_size:
            groups.append(group)

    communities = [_describe_community(graph, community_id, members) for community_id, members in enumerate(groups)]
    communities.sort(key=lambda c: c.size, reverse=True)

    logger.debug(f"Detected {len(communities)} communities in {graph.node_count} papers")
    return CommunityReport(communities=communities)


def _describe_community(graph: CitationGraph, community_id: int, members: list[str]) -> Community:
    papers = [graph.nodes[pid] for pid in members]
    years = [p.year for p in papers]

    return Community(
        id=community_id,
        members=members,
        top_categories=top_counts((c for p in papers for c in p.categories), TOP_CATEGORIES),
        top_keywords=top_counts((k for p in papers for k in p.keywords), TOP_KEYWORDS),
        avg_citation_count=mean(p.citation_count for p in papers) or 0.0,
        avg_impact_score=mean(p.impact_score for p in papers) or 0.0,
        time_span=YearSpan(start=min(years), end=max(years)),
        top_papers=sorted(papers, key=lambda p: p.impact_score, reverse=True)[:TOP_PAPERS],
    )
