"""Graph export for Citation Lens."""

from citation_lens.export.formats import (
    EXPORTERS,
    GEXFExporter,
    GraphExporter,
    GraphMLExporter,
    JSONExporter,
    export_network,
    get_exporter,
    network_data,
)

__all__ = [
    "EXPORTERS",
    "GEXFExporter",
    "GraphExporter",
    "GraphMLExporter",
    "JSONExporter",
    "export_network",
    "get_exporter",
    "network_data",
]
