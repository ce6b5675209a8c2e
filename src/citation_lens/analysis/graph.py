"""Citation graph model for Citation Lens.

A directed multigraph of papers keyed by paper id. Parallel citations between
the same pair of papers are kept as separate edges and counted separately by
every metric.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any

from citation_lens.exceptions import MalformedRecordError, NotBuiltError
from citation_lens.utils import parse_date

if TYPE_CHECKING:
    from collections.abc import Iterable

    from citation_lens.models import CitationRecord, PaperRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaperAuthor:
    """Author snapshot held by a paper node."""

    name: str
    affiliation: str | None = None


@dataclass(frozen=True)
class PaperNode:
    """A node in the citation network representing a paper."""

    paper_id: str
    title: str
    published_date: date
    authors: tuple[PaperAuthor, ...] = ()
    citation_count: int = 0
    impact_score: float = 0.0
    categories: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()

    @property
    def year(self) -> int:
        """Publication year."""
        return self.published_date.year

    @property
    def author_names(self) -> tuple[str, ...]:
        """Names of the paper's authors."""
        return tuple(a.name for a in self.authors)

    @classmethod
    def from_record(cls, record: PaperRecord) -> PaperNode:
        """Create a PaperNode from a store record.

        Args:
            record: Paper record from the store.

        Returns:
            PaperNode instance.

        Raises:
            MalformedRecordError: If the record has no id, title or
                publication date.
        """
        if not record.id:
            raise MalformedRecordError("Paper record has no id")
        if not record.title:
            raise MalformedRecordError(f"Paper {record.id} has no title", record_id=record.id)
        if record.published_date is None:
            raise MalformedRecordError(f"Paper {record.id} has no publication date", record_id=record.id)

        return cls(
            paper_id=record.id,
            title=record.title,
            published_date=record.published_date,
            authors=tuple(PaperAuthor(name=a.name, affiliation=a.affiliation) for a in record.authors),
            citation_count=record.citation_count,
            impact_score=record.impact_score,
            categories=tuple(record.categories),
            keywords=tuple(record.keywords),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the node to a dictionary."""
        return {
            "id": self.paper_id,
            "title": self.title,
            "authors": [{"name": a.name, "affiliation": a.affiliation} for a in self.authors],
            "published_date": self.published_date.isoformat(),
            "citation_count": self.citation_count,
            "impact_score": self.impact_score,
            "categories": list(self.categories),
            "keywords": list(self.keywords),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaperNode:
        """Deserialize a node from a dictionary produced by to_dict."""
        published = parse_date(data.get("published_date"))
        if published is None:
            raise MalformedRecordError(f"Node {data.get('id')} has no publication date", record_id=data.get("id"))

        return cls(
            paper_id=data["id"],
            title=data["title"],
            published_date=published,
            authors=tuple(
                PaperAuthor(name=a["name"], affiliation=a.get("affiliation")) for a in data.get("authors", [])
            ),
            citation_count=data.get("citation_count", 0),
            impact_score=data.get("impact_score", 0.0),
            categories=tuple(data.get("categories", [])),
            keywords=tuple(data.get("keywords", [])),
        )


@dataclass(frozen=True)
class CitationEdge:
    """An edge in the citation network: source cites target."""

    source_id: str  # Citing paper
    target_id: str  # Cited paper
    citation_type: str = "direct"
    sentiment: str = "neutral"
    strength: float = 0.5
    context: str = ""

    @classmethod
    def from_record(cls, record: CitationRecord) -> CitationEdge:
        """Create a CitationEdge from a store record.

        Args:
            record: Citation record from the store.

        Returns:
            CitationEdge instance.

        Raises:
            MalformedRecordError: If the citation was never matched to a
                cited paper.
        """
        if not record.cited_paper:
            raise MalformedRecordError(
                f"Citation from {record.citing_paper} has no cited paper", record_id=record.id
            )

        return cls(
            source_id=record.citing_paper,
            target_id=record.cited_paper,
            citation_type=record.citation_type,
            sentiment=record.sentiment,
            strength=record.strength,
            context=record.context,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the edge to a dictionary."""
        return {
            "source": self.source_id,
            "target": self.target_id,
            "citation_type": self.citation_type,
            "sentiment": self.sentiment,
            "strength": self.strength,
            "context": self.context,
        }


@dataclass
class CitationGraph:
    """A citation network graph.

    Each build produces its own instance; analyses must run against the
    instance built for their session.
    """

    nodes: dict[str, PaperNode] = field(default_factory=dict)
    edges: list[CitationEdge] = field(default_factory=list)

    _successors: dict[str, list[str]] = field(
        default_factory=lambda: defaultdict(list), init=False, repr=False, compare=False
    )
    _predecessors: dict[str, list[str]] = field(
        default_factory=lambda: defaultdict(list), init=False, repr=False, compare=False
    )
    _pairs: Counter = field(default_factory=Counter, init=False, repr=False, compare=False)
    _metrics_cache: Any = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Index edges passed to the constructor
        initial = self.edges
        self.edges = []
        for edge in initial:
            self.add_edge(edge)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def is_empty(self) -> bool:
        """Check whether the graph has no nodes."""
        return not self.nodes

    def require_built(self) -> None:
        """Raise NotBuiltError if the graph has no nodes."""
        if not self.nodes:
            raise NotBuiltError()

    def add_node(self, node: PaperNode) -> None:
        """Add a node to the graph. The first node added for an id is kept.

        Args:
            node: PaperNode to add.
        """
        if node.paper_id not in self.nodes:
            self.nodes[node.paper_id] = node
            self._metrics_cache = None

    def add_edge(self, edge: CitationEdge) -> bool:
        """Add an edge to the graph.

        Edges whose endpoints are not both nodes of this graph are dropped.

        Args:
            edge: CitationEdge to add.

        Returns:
            True if the edge was added.
        """
        if edge.source_id not in self.nodes or edge.target_id not in self.nodes:
            logger.debug(f"Dropping edge {edge.source_id} -> {edge.target_id}: endpoint not in graph")
            return False

        self.edges.append(edge)
        self._successors[edge.source_id].append(edge.target_id)
        self._predecessors[edge.target_id].append(edge.source_id)
        self._pairs[(edge.source_id, edge.target_id)] += 1
        self._metrics_cache = None
        return True

    def cached_metrics(self, config: Any) -> Any:
        """Metrics snapshot cached for the given analysis config, or None."""
        if self._metrics_cache is None or self._metrics_cache[0] != config:
            return None
        return self._metrics_cache[1]

    def cache_metrics(self, config: Any, snapshot: Any) -> None:
        """Cache a metrics snapshot until the graph next changes."""
        self._metrics_cache = (config, snapshot)

    def has_node(self, paper_id: str) -> bool:
        return paper_id in self.nodes

    def has_edge(self, source_id: str, target_id: str) -> bool:
        """Check whether source cites target at least once."""
        return self._pairs[(source_id, target_id)] > 0

    def successors(self, paper_id: str) -> list[str]:
        """Distinct papers cited by the given paper, in first-citation order."""
        return list(dict.fromkeys(self._successors.get(paper_id, ())))

    def predecessors(self, paper_id: str) -> list[str]:
        """Distinct papers citing the given paper, in first-citation order."""
        return list(dict.fromkeys(self._predecessors.get(paper_id, ())))

    def neighbors(self, paper_id: str) -> list[str]:
        """Distinct papers connected to the given paper in either direction."""
        return list(dict.fromkeys([*self._successors.get(paper_id, ()), *self._predecessors.get(paper_id, ())]))

    def get_citing_papers(self, paper_id: str) -> list[PaperNode]:
        """Get papers that cite the given paper.

        Args:
            paper_id: ID of the paper.

        Returns:
            List of PaperNodes that cite this paper.
        """
        return [self.nodes[pid] for pid in self.predecessors(paper_id)]

    def get_cited_papers(self, paper_id: str) -> list[PaperNode]:
        """Get papers cited by the given paper.

        Args:
            paper_id: ID of the paper.

        Returns:
            List of PaperNodes cited by this paper.
        """
        return [self.nodes[pid] for pid in self.successors(paper_id)]

    def in_degree(self, paper_id: str) -> int:
        """Number of citation edges pointing at the paper, parallel edges included."""
        return len(self._predecessors.get(paper_id, ()))

    def out_degree(self, paper_id: str) -> int:
        """Number of citation edges leaving the paper, parallel edges included."""
        return len(self._successors.get(paper_id, ()))

    def subgraph(self, paper_ids: Iterable[str]) -> CitationGraph:
        """Build a new graph induced by the given paper ids.

        Args:
            paper_ids: IDs to keep. Unknown ids are ignored.

        Returns:
            New CitationGraph with the kept nodes and the edges between them.
        """
        keep = set(paper_ids)
        graph = CitationGraph()
        for pid, node in self.nodes.items():
            if pid in keep:
                graph.add_node(node)
        for edge in self.edges:
            graph.add_edge(edge)
        return graph

    def head(self, max_nodes: int) -> CitationGraph:
        """Graph of the first max_nodes nodes in build order and their edges."""
        return self.subgraph(list(self.nodes)[:max_nodes])

    def to_dict(self) -> dict[str, Any]:
        """Serialize the graph to a dictionary.

        Returns:
            Dictionary with nodes, edges and stats.
        """
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges],
            "stats": {
                "node_count": self.node_count,
                "edge_count": self.edge_count,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CitationGraph:
        """Deserialize a graph from a dictionary.

        Args:
            data: Dictionary with "nodes" and "edges" lists, as produced by
                to_dict or the JSON exporter.

        Returns:
            CitationGraph instance.
        """
        graph = cls()

        for node_data in data.get("nodes", []):
            graph.add_node(PaperNode.from_dict(node_data))

        for edge_data in data.get("edges", []):
            graph.add_edge(
                CitationEdge(
                    source_id=edge_data["source"],
                    target_id=edge_data["target"],
                    citation_type=edge_data.get("citation_type", "direct"),
                    sentiment=edge_data.get("sentiment", "neutral"),
                    strength=edge_data.get("strength", 0.5),
                    context=edge_data.get("context", ""),
                )
            )

        return graph
