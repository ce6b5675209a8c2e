"""Graph export for Citation Lens.

Supports JSON, GEXF (Gephi) and GraphML. The XML formats are generated from
templates; every attribute value and text node is entity-escaped.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from citation_lens.analysis.graph import CitationGraph

logger = logging.getLogger(__name__)


def _escape_xml(text: Any) -> str:
    """Escape special characters for XML.

    Args:
        text: Value to escape. Non-strings are converted with str().

    Returns:
        Escaped text.
    """
    text = str(text)
    replacements = [
        ("&", "&amp;"),
        ("<", "&lt;"),
        (">", "&gt;"),
        ('"', "&quot;"),
        ("'", "&apos;"),
    ]
    for old, new in replacements:
        text = text.replace(old, new)
    return text


def network_data(graph: CitationGraph, generated_at: datetime | None = None) -> dict[str, Any]:
    """Build the node/edge/metadata triple of a graph.

    Args:
        graph: Graph to describe.
        generated_at: Timestamp recorded in the metadata (defaults to now).

    Returns:
        Dictionary with "nodes", "edges" and "metadata".
    """
    generated_at = generated_at or datetime.now(timezone.utc)
    return {
        "nodes": [n.to_dict() for n in graph.nodes.values()],
        "edges": [e.to_dict() for e in graph.edges],
        "metadata": {
            "node_count": graph.node_count,
            "edge_count": graph.edge_count,
            "generated_at": generated_at.isoformat(),
        },
    }


class GraphExporter(ABC):
    """Abstract base class for graph exporters."""

    name: str = "base"
    file_extension: str = ".txt"
    media_type: str = "text/plain"

    @abstractmethod
    def format(self, graph: CitationGraph) -> str:
        """Serialize a graph.

        Args:
            graph: Graph to export.

        Returns:
            Serialized graph.
        """
        ...

    def export(self, graph: CitationGraph) -> str:
        """Serialize a graph that has at least one node.

        Raises:
            NotBuiltError: If the graph has no nodes.
        """
        graph.require_built()
        return self.format(graph)

    def to_file(self, graph: CitationGraph, path: str | Path) -> Path:
        """Write a graph to a file.

        Args:
            graph: Graph to export.
            path: Output file path.

        Returns:
            Path to the written file.
        """
        path = Path(path)
        path.write_text(self.export(graph), encoding="utf-8")
        return path


class JSONExporter(GraphExporter):
    """Export the node/edge/metadata triple as JSON."""

    name = "json"
    file_extension = ".json"
    media_type = "application/json"

    def __init__(self, indent: int | None = 2, generated_at: datetime | None = None):
        """Initialize the exporter.

        Args:
            indent: JSON indentation (None for compact output).
            generated_at: Fixed metadata timestamp, for reproducible output.
        """
        self.indent = indent
        self.generated_at = generated_at

    def format(self, graph: CitationGraph) -> str:
        return json.dumps(network_data(graph, self.generated_at), indent=self.indent, ensure_ascii=False)


class GEXFExporter(GraphExporter):
    """Export in GEXF 1.2 format, as read by Gephi.

    Example output:
        <node id="p1" label="Deep learning">
          <attvalues>
            <attvalue for="citation_count" value="77000"/>
            <attvalue for="impact_score" value="9.5"/>
          </attvalues>
        </node>
    """

    name = "gexf"
    file_extension = ".gexf"
    media_type = "application/xml"

    def format(self, graph: CitationGraph) -> str:
        lines = ['<?xml version="1.0" encoding="UTF-8"?>']
        lines.append('<gexf xmlns="http://www.gexf.net/1.2draft" version="1.2">')
        lines.append('  <graph mode="static" defaultedgetype="directed">')

        lines.append('    <attributes class="node">')
        lines.append('      <attribute id="citation_count" title="citation_count" type="integer"/>')
        lines.append('      <attribute id="impact_score" title="impact_score" type="double"/>')
        lines.append("    </attributes>")

        lines.append("    <nodes>")
        for node in graph.nodes.values():
            lines.append(f'      <node id="{_escape_xml(node.paper_id)}" label="{_escape_xml(node.title)}">')
            lines.append("        <attvalues>")
            lines.append(f'          <attvalue for="citation_count" value="{node.citation_count}"/>')
            lines.append(f'          <attvalue for="impact_score" value="{node.impact_score}"/>')
            lines.append("        </attvalues>")
            lines.append("      </node>")
        lines.append("    </nodes>")

        lines.append("    <edges>")
        for index, edge in enumerate(graph.edges):
            lines.append(
                f'      <edge id="{index}" source="{_escape_xml(edge.source_id)}" '
                f'target="{_escape_xml(edge.target_id)}" weight="{edge.strength}"/>'
            )
        lines.append("    </edges>")

        lines.append("  </graph>")
        lines.append("</gexf>")
        return "\n".join(lines)


class GraphMLExporter(GraphExporter):
    """Export in GraphML format."""

    name = "graphml"
    file_extension = ".graphml"
    media_type = "application/xml"

    NODE_KEYS = (
        ("label", "string"),
        ("citation_count", "int"),
        ("impact_score", "double"),
    )
    EDGE_KEYS = (
        ("citation_type", "string"),
        ("sentiment", "string"),
        ("strength", "double"),
    )

    def format(self, graph: CitationGraph) -> str:
        lines = ['<?xml version="1.0" encoding="UTF-8"?>']
        lines.append('<graphml xmlns="http://graphml.graphdrawing.org/xmlns">')

        for key, attr_type in self.NODE_KEYS:
            lines.append(f'  <key id="{key}" for="node" attr.name="{key}" attr.type="{attr_type}"/>')
        for key, attr_type in self.EDGE_KEYS:
            lines.append(f'  <key id="{key}" for="edge" attr.name="{key}" attr.type="{attr_type}"/>')

        lines.append('  <graph id="CitationNetwork" edgedefault="directed">')

        for node in graph.nodes.values():
            lines.append(f'    <node id="{_escape_xml(node.paper_id)}">')
            lines.append(f'      <data key="label">{_escape_xml(node.title)}</data>')
            lines.append(f'      <data key="citation_count">{node.citation_count}</data>')
            lines.append(f'      <data key="impact_score">{node.impact_score}</data>')
            lines.append("    </node>")

        for index, edge in enumerate(graph.edges):
            lines.append(
                f'    <edge id="e{index}" source="{_escape_xml(edge.source_id)}" '
                f'target="{_escape_xml(edge.target_id)}">'
            )
            lines.append(f'      <data key="citation_type">{_escape_xml(edge.citation_type)}</data>')
            lines.append(f'      <data key="sentiment">{_escape_xml(edge.sentiment)}</data>')
            lines.append(f'      <data key="strength">{edge.strength}</data>')
            lines.append("    </edge>")

        lines.append("  </graph>")
        lines.append("</graphml>")
        return "\n".join(lines)


# Registry of available exporters
EXPORTERS: dict[str, type[GraphExporter]] = {
    "json": JSONExporter,
    "gexf": GEXFExporter,
    "graphml": GraphMLExporter,
}


def get_exporter(format: str) -> GraphExporter:
    """Get an exporter instance by name.

    Unknown formats fall back to JSON.

    Args:
        format: Format name (json, gexf, graphml).

    Returns:
        Exporter instance.
    """
    format_lower = (format or "").lower()
    if format_lower not in EXPORTERS:
        logger.warning(f"Unknown export format: {format}. Falling back to json")
        format_lower = "json"

    return EXPORTERS[format_lower]()


def export_network(
    graph: CitationGraph,
    format: str = "json",
    output_path: str | Path | None = None,
) -> str:
    """Export a graph in the specified format.

    Args:
        graph: Graph to export.
        format: Output format (json, gexf, graphml). Unknown formats fall
            back to json.
        output_path: Optional file path. If provided, writes to file.

    Returns:
        Serialized graph.

    Raises:
        NotBuiltError: If the graph has no nodes.
    """
    result = get_exporter(format).export(graph)

    if output_path:
        Path(output_path).write_text(result, encoding="utf-8")

    return result
