"""Shared test fixtures for Citation Lens tests."""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest

from citation_lens.analysis.graph import CitationEdge, CitationGraph, PaperAuthor, PaperNode
from citation_lens.models import CitationRecord, PaperRecord
from citation_lens.store.memory import InMemoryPaperStore


# ============================================================================
# Graph Helpers
# ============================================================================


def make_node(
    paper_id: str,
    year: int = 2020,
    categories: tuple[str, ...] = ("cs.LG",),
    keywords: tuple[str, ...] = (),
    authors: tuple[str, ...] = (),
    citation_count: int = 0,
    impact_score: float = 0.0,
    title: str | None = None,
) -> PaperNode:
    """Create a PaperNode with sensible defaults."""
    return PaperNode(
        paper_id=paper_id,
        title=title or f"Paper {paper_id}",
        published_date=date(year, 1, 1),
        authors=tuple(PaperAuthor(name=a) for a in authors),
        citation_count=citation_count,
        impact_score=impact_score,
        categories=categories,
        keywords=keywords,
    )


def make_graph(nodes: list[PaperNode] | list[str], edges: list[tuple[str, str]]) -> CitationGraph:
    """Create a graph from nodes (or bare ids) and (source, target) pairs."""
    graph = CitationGraph()
    for node in nodes:
        graph.add_node(make_node(node) if isinstance(node, str) else node)
    for source, target in edges:
        graph.add_edge(CitationEdge(source_id=source, target_id=target))
    return graph


# ============================================================================
# Graph Fixtures
# ============================================================================


@pytest.fixture
def triangle_graph() -> CitationGraph:
    """A -> B, B -> C, A -> C, all in the same category."""
    return make_graph(["A", "B", "C"], [("A", "B"), ("B", "C"), ("A", "C")])


@pytest.fixture
def cycle_graph() -> CitationGraph:
    """A -> B -> C -> A; no paper without references."""
    return make_graph(["A", "B", "C"], [("A", "B"), ("B", "C"), ("C", "A")])


@pytest.fixture
def empty_graph() -> CitationGraph:
    return CitationGraph()


@pytest.fixture
def sample_citation_graph() -> CitationGraph:
    """A small transformer-era citation network with one parallel citation."""
    graph = CitationGraph()
    graph.add_node(
        make_node(
            "p1",
            year=2017,
            categories=("cs.CL", "cs.LG"),
            keywords=("transformers", "attention"),
            authors=("Ashish Vaswani", "Noam Shazeer"),
            citation_count=120000,
            impact_score=9.8,
            title="Attention Is All You Need",
        )
    )
    graph.add_node(
        make_node(
            "p2",
            year=2018,
            categories=("cs.CL",),
            keywords=("transformers", "pretraining"),
            authors=("Jacob Devlin", "Ming-Wei Chang"),
            citation_count=80000,
            impact_score=9.0,
            title="BERT",
        )
    )
    graph.add_node(
        make_node(
            "p3",
            year=2020,
            categories=("cs.CL", "cs.LG"),
            keywords=("transformers", "language models"),
            authors=("Tom Brown",),
            citation_count=30000,
            impact_score=8.5,
            title="Language Models are Few-Shot Learners",
        )
    )
    graph.add_node(
        make_node(
            "p4",
            year=2015,
            categories=("cs.CV",),
            keywords=("cnn", "residual"),
            authors=("Kaiming He", "Xiangyu Zhang"),
            citation_count=150000,
            impact_score=9.5,
            title="Deep Residual Learning",
        )
    )
    graph.add_edge(CitationEdge("p2", "p1", citation_type="methodological", sentiment="positive"))
    graph.add_edge(CitationEdge("p3", "p1", sentiment="positive"))
    graph.add_edge(CitationEdge("p3", "p2"))
    graph.add_edge(CitationEdge("p3", "p4", citation_type="contradictory", sentiment="negative"))
    graph.add_edge(CitationEdge("p3", "p1"))
    return graph


# ============================================================================
# Store Fixtures
# ============================================================================


SAMPLE_PAPERS: list[dict[str, Any]] = [
    {
        "id": "p1",
        "title": "Attention Is All You Need",
        "authors": ["Ashish Vaswani", "Noam Shazeer"],
        "published_date": "2017-06-12",
        "citation_count": 120000,
        "impact_score": 9.8,
        "categories": ["cs.CL", "cs.LG"],
        "keywords": ["transformers", "attention"],
    },
    {
        "id": "p2",
        "title": "BERT: Pre-training of Deep Bidirectional Transformers",
        "authors": [{"name": "Jacob Devlin", "affiliation": "Google"}, "Ming-Wei Chang"],
        "published_date": "2018-10-11",
        "citation_count": 80000,
        "impact_score": 9.0,
        "categories": ["cs.CL"],
        "keywords": ["transformers", "pretraining"],
    },
    {
        "id": "p3",
        "title": "Language Models are Few-Shot Learners",
        "authors": ["Tom Brown"],
        "published_date": "2020-05-28",
        "citation_count": 30000,
        "impact_score": 8.5,
        "categories": ["cs.CL", "cs.LG"],
        "keywords": ["transformers", "language models"],
    },
    {
        "id": "p4",
        "title": "Deep Residual Learning for Image Recognition",
        "authors": ["Kaiming He", "Xiangyu Zhang"],
        "published_date": "2015-12-10",
        "citation_count": 150000,
        "impact_score": 9.5,
        "categories": ["cs.CV"],
        "keywords": ["cnn", "residual"],
    },
    {
        "id": "p5",
        "title": "An Image is Worth 16x16 Words",
        "authors": ["Alexey Dosovitskiy"],
        "published_date": "2020-10-22",
        "citation_count": 25000,
        "impact_score": 8.0,
        "categories": ["cs.CV", "cs.LG"],
        "keywords": ["transformers", "vision"],
    },
    {
        "id": "p6",
        "title": "A Recent Preprint",
        "published_date": "2023-01-01",
        "citation_count": 3,
        "impact_score": 1.0,
        "categories": ["q-bio"],
    },
]

SAMPLE_CITATIONS: list[dict[str, Any]] = [
    {"citing_paper": "p2", "cited_paper": "p1", "citation_type": "methodological", "sentiment": "positive"},
    {"citing_paper": "p3", "cited_paper": "p1", "sentiment": "positive", "strength": 0.9},
    {"citing_paper": "p3", "cited_paper": "p2"},
    {"citing_paper": "p5", "cited_paper": "p1", "citation_type": "supportive"},
    {"citing_paper": "p5", "cited_paper": "p4", "citation_type": "contradictory", "sentiment": "negative"},
    {"citing_paper": "p3", "cited_paper": "p1", "context": "as shown in [12]"},
    {"citing_paper": "p1", "cited_paper": None, "context": "unmatched reference"},
]


@pytest.fixture
def paper_records() -> list[PaperRecord]:
    return [PaperRecord.model_validate(p) for p in SAMPLE_PAPERS]


@pytest.fixture
def citation_records() -> list[CitationRecord]:
    return [CitationRecord.model_validate(c) for c in SAMPLE_CITATIONS]


@pytest.fixture
def sample_store(paper_records, citation_records) -> InMemoryPaperStore:
    """An in-memory store with six papers and seven citation records."""
    return InMemoryPaperStore(paper_records, citation_records)


@pytest.fixture
def sample_dataset() -> dict[str, Any]:
    """Raw dataset as stored in a dataset file."""
    return {
        "papers": [dict(p) for p in SAMPLE_PAPERS],
        "citations": [dict(c) for c in SAMPLE_CITATIONS],
    }


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def test_config():
    """Create a test configuration."""
    from citation_lens.config import Config

    return Config(
        default_max_nodes=100,
        seminal={"min_citations": 50000, "min_age": 2, "top_n": 2},
    )


@pytest.fixture(autouse=True)
def _reset_config(monkeypatch, tmp_path):
    """Keep tests independent of any config file on the machine."""
    from citation_lens.config import reset_config

    monkeypatch.delenv("CITATION_LENS_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


# ============================================================================
# Factory Fixtures
# ============================================================================


@pytest.fixture
def node_factory():
    """Factory for PaperNode objects (see make_node)."""
    return make_node


@pytest.fixture
def graph_factory():
    """Factory for CitationGraph objects (see make_graph)."""
    return make_graph
