"""Temporal, categorical and sentiment patterns of citations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from citation_lens.models import SENTIMENTS
from citation_lens.utils import count_values, mean

if TYPE_CHECKING:
    from citation_lens.analysis.graph import CitationGraph

logger = logging.getLogger(__name__)


@dataclass
class YearCounts:
    """Citations made and received by papers published in one year."""

    citing: int = 0
    cited: int = 0


@dataclass
class TemporalPatterns:
    """Citation activity per year and the lag between citing and cited paper."""

    yearly: dict[int, YearCounts] = field(default_factory=dict)
    lags: list[int] = field(default_factory=list)
    lag_distribution: dict[int, int] = field(default_factory=dict)
    avg_citation_lag: float | None = None  # None when there is no lag sample
    negative_lag_count: int = 0
    # (citing, cited) pairs where the citing paper predates the cited one
    anomalies: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class CrossDisciplinaryCitation:
    """A category pair of a citation whose source and target category differ."""

    from_category: str
    to_category: str
    source_paper: str
    target_paper: str


@dataclass
class CategoricalPatterns:
    """Category-to-category citation counts."""

    matrix: dict[str, dict[str, int]] = field(default_factory=dict)
    cross_disciplinary: list[CrossDisciplinaryCitation] = field(default_factory=list)
    disjoint_edge_count: int = 0  # Edges whose papers share no category

    @property
    def cross_disciplinary_count(self) -> int:
        return len(self.cross_disciplinary)


@dataclass
class SentimentPatterns:
    """Citation sentiment tallies."""

    overall: dict[str, int] = field(default_factory=lambda: dict.fromkeys(SENTIMENTS, 0))
    by_category: dict[str, dict[str, int]] = field(default_factory=dict)


@dataclass
class PatternReport:
    """All citation pattern analyses of one graph."""

    temporal: TemporalPatterns
    categorical: CategoricalPatterns
    sentiment: SentimentPatterns


def analyze_temporal_patterns(graph: CitationGraph) -> TemporalPatterns:
    """Count citations per publication year and measure citation lags.

    A lag is the citing paper's year minus the cited paper's year. Negative
    lags are not part of the sample; they are counted and listed as
    anomalies instead.

    Args:
        graph: Citation graph to analyze.

    Returns:
        TemporalPatterns with years in ascending order.
    """
    yearly: dict[int, YearCounts] = {}
    lags: list[int] = []
    anomalies: list[tuple[str, str]] = []

    for edge in graph.edges:
        source_year = graph.nodes[edge.source_id].year
        target_year = graph.nodes[edge.target_id].year

        yearly.setdefault(source_year, YearCounts()).citing += 1
        yearly.setdefault(target_year, YearCounts()).cited += 1

        lag = source_year - target_year
        if lag >= 0:
            lags.append(lag)
        else:
            anomalies.append((edge.source_id, edge.target_id))

    if anomalies:
        logger.warning(f"{len(anomalies)} citations point to papers published after the citing paper")

    return TemporalPatterns(
        yearly=dict(sorted(yearly.items())),
        lags=lags,
        lag_distribution=dict(sorted(count_values(lags).items())),
        avg_citation_lag=mean(lags),
        negative_lag_count=len(anomalies),
        anomalies=anomalies,
    )


def analyze_categorical_patterns(graph: CitationGraph) -> CategoricalPatterns:
    """Build the source category x target category citation matrix.

    An edge adds one count for every (source category, target category)
    pair; pairs of differing categories are listed as cross-disciplinary.

    Args:
        graph: Citation graph to analyze.

    Returns:
        CategoricalPatterns for the graph.
    """
    patterns = CategoricalPatterns()

    for edge in graph.edges:
        source = graph.nodes[edge.source_id]
        target = graph.nodes[edge.target_id]

        if not set(source.categories) & set(target.categories):
            patterns.disjoint_edge_count += 1

        for source_category in source.categories:
            row = patterns.matrix.setdefault(source_category, {})
            for target_category in target.categories:
                row[target_category] = row.get(target_category, 0) + 1
                if source_category != target_category:
                    patterns.cross_disciplinary.append(
                        CrossDisciplinaryCitation(
                            from_category=source_category,
                            to_category=target_category,
                            source_paper=source.paper_id,
                            target_paper=target.paper_id,
                        )
                    )

    return patterns


def analyze_sentiment_patterns(graph: CitationGraph) -> SentimentPatterns:
    """Tally citation sentiment overall and per citing-paper category.

    Args:
        graph: Citation graph to analyze.

    Returns:
        SentimentPatterns for the graph.
    """
    patterns = SentimentPatterns()

    for edge in graph.edges:
        sentiment = edge.sentiment or "neutral"
        patterns.overall[sentiment] = patterns.overall.get(sentiment, 0) + 1

        for category in graph.nodes[edge.source_id].categories:
            counts = patterns.by_category.setdefault(category, dict.fromkeys(SENTIMENTS, 0))
            counts[sentiment] = counts.get(sentiment, 0) + 1

    return patterns


def analyze_citation_patterns(graph: CitationGraph) -> PatternReport:
    """Run the temporal, categorical and sentiment analyses.

    Args:
        graph: Citation graph to analyze.

    Returns:
        PatternReport for the graph.
    """
    return PatternReport(
        temporal=analyze_temporal_patterns(graph),
        categorical=analyze_categorical_patterns(graph),
        sentiment=analyze_sentiment_patterns(graph),
    )
