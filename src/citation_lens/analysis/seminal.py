"""Seminal paper identification."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from citation_lens.analysis.metrics import calculate_metrics

if TYPE_CHECKING:
    from citation_lens.analysis.graph import CitationGraph, PaperNode
    from citation_lens.analysis.metrics import MetricsSnapshot
    from citation_lens.config import AnalysisConfig
    from citation_lens.store.base import PaperStore

logger = logging.getLogger(__name__)


@dataclass
class SeminalPaper:
    """A seminal paper candidate with its score and network metrics."""

    paper: PaperNode
    score: float
    in_degree: int
    authority: float
    betweenness: float


def seminal_score(paper: PaperNode, in_degree: int, authority: float, betweenness: float) -> float:
    """Composite score of citation count, impact and network centrality."""
    return (
        paper.citation_count * 0.3
        + paper.impact_score * 0.2
        + in_degree * 0.2
        + authority * 100 * 0.2
        + betweenness * 100 * 0.1
    )


def find_seminal_candidates(
    graph: CitationGraph,
    metrics: MetricsSnapshot,
    min_citations: int = 50,
    min_age: int = 2,
    top_n: int = 50,
    current_year: int | None = None,
) -> list[SeminalPaper]:
    """Score and rank the papers that pass the seminal thresholds.

    Args:
        graph: Citation graph to analyze.
        metrics: Metrics of the same graph.
        min_citations: Minimum citation count.
        min_age: Minimum years since publication.
        top_n: Maximum number of papers to return.
        current_year: Reference year (defaults to this year).

    Returns:
        Up to top_n candidates sorted by score descending.
    """
    current_year = current_year or date.today().year

    candidates = []
    for paper_id, paper in graph.nodes.items():
        if paper.citation_count < min_citations or current_year - paper.year < min_age:
            continue

        in_degree = metrics.in_degree[paper_id]
        authority = metrics.authority[paper_id]
        betweenness = metrics.betweenness[paper_id]
        candidates.append(
            SeminalPaper(
                paper=paper,
                score=seminal_score(paper, in_degree, authority, betweenness),
                in_degree=in_degree,
                authority=authority,
                betweenness=betweenness,
            )
        )

    candidates.sort(key=lambda c: c.score, reverse=True)
    return candidates[:top_n]


async def identify_seminal_papers(
    graph: CitationGraph,
    store: PaperStore,
    min_citations: int = 50,
    min_age: int = 2,
    top_n: int = 50,
    current_year: int | None = None,
    config: AnalysisConfig | None = None,
) -> list[SeminalPaper]:
    """Identify seminal papers and flag them in the store.

    The store is written once with the ids of all selected papers, and not
    at all when nothing qualifies.

    Args:
        graph: Citation graph to analyze.
        store: Store receiving the seminal flags.
        min_citations: Minimum citation count.
        min_age: Minimum years since publication.
        top_n: Maximum number of papers to select.
        current_year: Reference year (defaults to this year).
        config: Metric parameters.

    Returns:
        Selected papers sorted by score descending.

    Raises:
        NotBuiltError: If the graph has no nodes.
    """
    metrics = calculate_metrics(graph, config)
    seminal = find_seminal_candidates(
        graph,
        metrics,
        min_citations=min_citations,
        min_age=min_age,
        top_n=top_n,
        current_year=current_year,
    )

    if seminal:
        await store.update_seminal_flag([s.paper.paper_id for s in seminal])

    logger.info(f"Identified {len(seminal)} seminal papers")
    return seminal
