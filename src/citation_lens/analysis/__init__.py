"""Citation network analysis for Citation Lens."""

from citation_lens.analysis.builder import NetworkBuilder, build_citation_network
from citation_lens.analysis.communities import (
    Community,
    CommunityReport,
    ComponentReport,
    detect_communities,
    find_connected_components,
    paper_similarity,
)
from citation_lens.analysis.graph import CitationEdge, CitationGraph, PaperAuthor, PaperNode
from citation_lens.analysis.metrics import (
    BasicMetrics,
    InfluenceScore,
    MetricsSnapshot,
    NetworkMetrics,
    NodeMetrics,
    calculate_metrics,
    paper_influence,
    rank_papers,
)
from citation_lens.analysis.patterns import PatternReport, analyze_citation_patterns
from citation_lens.analysis.seminal import SeminalPaper, identify_seminal_papers

__all__ = [
    "BasicMetrics",
    "CitationEdge",
    "CitationGraph",
    "Community",
    "CommunityReport",
    "ComponentReport",
    "InfluenceScore",
    "MetricsSnapshot",
    "NetworkBuilder",
    "NetworkMetrics",
    "NodeMetrics",
    "PaperAuthor",
    "PaperNode",
    "PatternReport",
    "SeminalPaper",
    "analyze_citation_patterns",
    "build_citation_network",
    "calculate_metrics",
    "detect_communities",
    "find_connected_components",
    "identify_seminal_papers",
    "paper_influence",
    "paper_similarity",
    "rank_papers",
]
