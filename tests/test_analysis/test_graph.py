"""Tests for the citation graph model."""

from datetime import date

import pytest

from citation_lens.analysis.graph import CitationEdge, CitationGraph, PaperAuthor, PaperNode
from citation_lens.exceptions import MalformedRecordError, NotBuiltError
from citation_lens.models import CitationRecord, PaperRecord


class TestPaperNode:
    """Tests for PaperNode."""

    def test_from_record(self):
        """Test creating a node from a store record."""
        record = PaperRecord.model_validate(
            {
                "_id": "p1",
                "title": "Attention Is All You Need",
                "authors": [{"name": "Ashish Vaswani", "affiliation": "Google"}, "Noam Shazeer"],
                "published_date": "2017-06-12",
                "citation_count": 120000,
                "impact_score": 9.8,
                "categories": ["cs.CL"],
                "keywords": ["attention"],
            }
        )
        node = PaperNode.from_record(record)

        assert node.paper_id == "p1"
        assert node.year == 2017
        assert node.author_names == ("Ashish Vaswani", "Noam Shazeer")
        assert node.authors[0].affiliation == "Google"
        assert node.categories == ("cs.CL",)
        assert node.citation_count == 120000

    def test_from_record_without_date(self):
        """Test that a record without a publication date is rejected."""
        record = PaperRecord(id="p1", title="Undated")

        with pytest.raises(MalformedRecordError) as exc_info:
            PaperNode.from_record(record)

        assert exc_info.value.record_id == "p1"

    def test_from_record_without_title(self):
        """Test that a record without a title is rejected."""
        record = PaperRecord(id="p1", published_date="2020-01-01")

        with pytest.raises(MalformedRecordError):
            PaperNode.from_record(record)

    def test_to_dict_round_trip(self, node_factory):
        """Test serializing and deserializing a node."""
        node = node_factory("p1", year=2019, authors=("Jane Doe",), keywords=("graphs",))
        data = node.to_dict()

        assert data["id"] == "p1"
        assert data["published_date"] == "2019-01-01"
        assert data["authors"] == [{"name": "Jane Doe", "affiliation": None}]
        assert PaperNode.from_dict(data) == node


class TestCitationEdge:
    """Tests for CitationEdge."""

    def test_defaults(self):
        """Test default edge attributes."""
        edge = CitationEdge(source_id="a", target_id="b")

        assert edge.citation_type == "direct"
        assert edge.sentiment == "neutral"
        assert edge.strength == 0.5

    def test_from_record(self):
        """Test creating an edge from a citation record."""
        record = CitationRecord(
            citing_paper="p2",
            cited_paper="p1",
            citation_type="methodological",
            sentiment="positive",
            strength=0.8,
        )
        edge = CitationEdge.from_record(record)

        assert edge.source_id == "p2"
        assert edge.target_id == "p1"
        assert edge.citation_type == "methodological"
        assert edge.strength == 0.8

    def test_from_unmatched_record(self):
        """Test that a citation without a cited paper is rejected."""
        record = CitationRecord(citing_paper="p2", cited_paper=None)

        with pytest.raises(MalformedRecordError):
            CitationEdge.from_record(record)

    def test_to_dict(self):
        """Test edge serialization."""
        data = CitationEdge("a", "b", sentiment="negative").to_dict()

        assert data["source"] == "a"
        assert data["target"] == "b"
        assert data["sentiment"] == "negative"


class TestCitationGraph:
    """Tests for CitationGraph."""

    def test_empty_graph(self, empty_graph):
        """Test an empty graph."""
        assert empty_graph.node_count == 0
        assert empty_graph.edge_count == 0
        assert empty_graph.is_empty()

    def test_require_built(self, empty_graph, triangle_graph):
        """Test that analyses reject empty graphs."""
        with pytest.raises(NotBuiltError):
            empty_graph.require_built()

        triangle_graph.require_built()

    def test_add_node_keeps_first(self, node_factory):
        """Test that a second node with the same id is ignored."""
        graph = CitationGraph()
        graph.add_node(node_factory("p1", title="First"))
        graph.add_node(node_factory("p1", title="Second"))

        assert graph.node_count == 1
        assert graph.nodes["p1"].title == "First"

    def test_add_edge_requires_endpoints(self, graph_factory):
        """Test that edges to unknown papers are dropped."""
        graph = graph_factory(["a"], [])

        assert graph.add_edge(CitationEdge("a", "missing")) is False
        assert graph.add_edge(CitationEdge("missing", "a")) is False
        assert graph.edge_count == 0

    def test_parallel_edges(self, sample_citation_graph):
        """Test that repeated citations are kept as separate edges."""
        graph = sample_citation_graph

        assert graph.edge_count == 5
        assert graph.in_degree("p1") == 3
        assert graph.out_degree("p3") == 4
        # Neighbour lists stay distinct
        assert graph.successors("p3") == ["p1", "p2", "p4"]
        assert graph.predecessors("p1") == ["p2", "p3"]

    def test_has_edge(self, triangle_graph):
        """Test edge lookup is directional."""
        assert triangle_graph.has_edge("A", "B")
        assert not triangle_graph.has_edge("B", "A")

    def test_neighbors(self, triangle_graph):
        """Test neighbours in either direction."""
        assert set(triangle_graph.neighbors("B")) == {"A", "C"}

    def test_citing_and_cited_papers(self, sample_citation_graph):
        """Test getting citing and cited papers."""
        citing = sample_citation_graph.get_citing_papers("p1")
        cited = sample_citation_graph.get_cited_papers("p2")

        assert [n.paper_id for n in citing] == ["p2", "p3"]
        assert [n.paper_id for n in cited] == ["p1"]

    def test_subgraph(self, sample_citation_graph):
        """Test inducing a subgraph."""
        sub = sample_citation_graph.subgraph(["p1", "p3", "unknown"])

        assert set(sub.nodes) == {"p1", "p3"}
        assert sub.edge_count == 2
        # The source graph is untouched
        assert sample_citation_graph.edge_count == 5

    def test_head(self, sample_citation_graph):
        """Test keeping the first nodes in build order."""
        head = sample_citation_graph.head(2)

        assert list(head.nodes) == ["p1", "p2"]
        assert head.edge_count == 1

    def test_constructor_indexes_edges(self, node_factory):
        """Test that edges passed to the constructor are indexed."""
        nodes = {pid: node_factory(pid) for pid in ("a", "b")}
        graph = CitationGraph(nodes=nodes, edges=[CitationEdge("a", "b"), CitationEdge("a", "x")])

        assert graph.edge_count == 1
        assert graph.successors("a") == ["b"]

    def test_to_dict_and_from_dict(self, sample_citation_graph):
        """Test graph serialization round trip."""
        data = sample_citation_graph.to_dict()

        assert data["stats"] == {"node_count": 4, "edge_count": 5}

        restored = CitationGraph.from_dict(data)
        assert restored.nodes == sample_citation_graph.nodes
        assert restored.edges == sample_citation_graph.edges

    def test_metrics_cache(self, triangle_graph):
        """Test that a cached snapshot is returned only for the same config."""
        triangle_graph.cache_metrics("config", "snapshot")

        assert triangle_graph.cached_metrics("config") == "snapshot"
        assert triangle_graph.cached_metrics("other") is None

    def test_mutation_clears_metrics_cache(self, triangle_graph, node_factory):
        """Test that adding nodes or edges invalidates cached metrics."""
        triangle_graph.cache_metrics("config", "snapshot")
        triangle_graph.add_node(node_factory("D"))
        assert triangle_graph.cached_metrics("config") is None

        triangle_graph.cache_metrics("config", "snapshot")
        triangle_graph.add_edge(CitationEdge("D", "A"))
        assert triangle_graph.cached_metrics("config") is None


def test_paper_author_is_hashable():
    """Test that author snapshots can be used in sets."""
    authors = {PaperAuthor("Jane Doe"), PaperAuthor("Jane Doe")}

    assert len(authors) == 1
    assert PaperNode("p", "T", date(2020, 1, 1), authors=tuple(authors)).author_names == ("Jane Doe",)
