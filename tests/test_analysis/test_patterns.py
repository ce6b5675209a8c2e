"""Tests for citation pattern analysis."""

import logging

import pytest

from citation_lens.analysis.patterns import (
    analyze_categorical_patterns,
    analyze_citation_patterns,
    analyze_sentiment_patterns,
    analyze_temporal_patterns,
)


class TestTemporalPatterns:
    """Tests for analyze_temporal_patterns."""

    def test_yearly_counts(self, sample_citation_graph):
        """Test citations made and received per year."""
        patterns = analyze_temporal_patterns(sample_citation_graph)

        assert list(patterns.yearly) == [2015, 2017, 2018, 2020]
        assert patterns.yearly[2020].citing == 4
        assert patterns.yearly[2020].cited == 0
        assert patterns.yearly[2017].cited == 3
        assert patterns.yearly[2018].citing == 1
        assert patterns.yearly[2018].cited == 1

    def test_citation_lags(self, sample_citation_graph):
        """Test the lag distribution and average."""
        patterns = analyze_temporal_patterns(sample_citation_graph)

        assert sorted(patterns.lags) == [1, 2, 3, 3, 5]
        assert patterns.lag_distribution == {1: 1, 2: 1, 3: 2, 5: 1}
        assert patterns.avg_citation_lag == pytest.approx(2.8)
        assert patterns.negative_lag_count == 0

    def test_negative_lag(self, graph_factory, node_factory, caplog):
        """Test that citations to later papers are reported, not averaged."""
        graph = graph_factory(
            [node_factory("old", year=2010), node_factory("new", year=2020)],
            [("old", "new"), ("new", "old")],
        )

        with caplog.at_level(logging.WARNING):
            patterns = analyze_temporal_patterns(graph)

        assert patterns.lags == [10]
        assert patterns.avg_citation_lag == 10
        assert patterns.negative_lag_count == 1
        assert patterns.anomalies == [("old", "new")]
        assert "published after" in caplog.text

    def test_no_edges(self, graph_factory):
        """Test that a graph without citations has no lag average."""
        patterns = analyze_temporal_patterns(graph_factory(["a"], []))

        assert patterns.yearly == {}
        assert patterns.avg_citation_lag is None


class TestCategoricalPatterns:
    """Tests for analyze_categorical_patterns."""

    def test_matrix(self, sample_citation_graph):
        """Test the category citation matrix."""
        patterns = analyze_categorical_patterns(sample_citation_graph)

        assert patterns.matrix["cs.CL"] == {"cs.CL": 4, "cs.LG": 3, "cs.CV": 1}
        assert patterns.matrix["cs.LG"] == {"cs.CL": 3, "cs.LG": 2, "cs.CV": 1}

    def test_cross_disciplinary(self, sample_citation_graph):
        """Test that every differing category pair is listed."""
        patterns = analyze_categorical_patterns(sample_citation_graph)

        assert patterns.cross_disciplinary_count == 8
        first = patterns.cross_disciplinary[0]
        assert (first.from_category, first.to_category) == ("cs.CL", "cs.LG")
        assert (first.source_paper, first.target_paper) == ("p2", "p1")
        # Only p3 -> p4 links papers without a shared category
        assert patterns.disjoint_edge_count == 1

    def test_same_category(self, triangle_graph):
        """Test a network within a single category."""
        patterns = analyze_categorical_patterns(triangle_graph)

        assert patterns.matrix == {"cs.LG": {"cs.LG": 3}}
        assert patterns.cross_disciplinary == []


class TestSentimentPatterns:
    """Tests for analyze_sentiment_patterns."""

    def test_overall(self, sample_citation_graph):
        """Test overall sentiment tallies."""
        patterns = analyze_sentiment_patterns(sample_citation_graph)

        assert patterns.overall == {"positive": 2, "negative": 1, "neutral": 2}

    def test_by_category(self, sample_citation_graph):
        """Test sentiment by citing paper category."""
        patterns = analyze_sentiment_patterns(sample_citation_graph)

        assert patterns.by_category["cs.CL"] == {"positive": 2, "negative": 1, "neutral": 2}
        assert patterns.by_category["cs.LG"] == {"positive": 1, "negative": 1, "neutral": 2}
        assert "cs.CV" not in patterns.by_category


def test_citation_patterns_empty_graph(empty_graph):
    """Test that pattern analysis of an empty graph gives empty results."""
    report = analyze_citation_patterns(empty_graph)

    assert report.temporal.yearly == {}
    assert report.categorical.matrix == {}
    assert report.sentiment.overall == {"positive": 0, "negative": 0, "neutral": 0}
