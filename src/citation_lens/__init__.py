"""Citation Lens: Citation network analysis for research paper collections."""

from citation_lens.analysis import (
    CitationEdge,
    CitationGraph,
    NetworkBuilder,
    PaperNode,
    build_citation_network,
    calculate_metrics,
)
from citation_lens.analyzer import CitationNetworkAnalyzer, NetworkReport
from citation_lens.config import Config, get_config, load_config
from citation_lens.exceptions import (
    CitationLensError,
    MalformedRecordError,
    NotBuiltError,
    StoreUnavailableError,
)
from citation_lens.export import export_network
from citation_lens.models import Author, CitationRecord, DateRange, NetworkFilter, PaperRecord
from citation_lens.store import FilePaperStore, InMemoryPaperStore, PaperStore

__version__ = "0.1.0"

__all__ = [
    # Core functions
    "build_citation_network",
    "calculate_metrics",
    "export_network",
    # Classes
    "CitationNetworkAnalyzer",
    "NetworkBuilder",
    "NetworkReport",
    "CitationGraph",
    "CitationEdge",
    "PaperNode",
    # Records
    "Author",
    "CitationRecord",
    "DateRange",
    "NetworkFilter",
    "PaperRecord",
    # Stores
    "PaperStore",
    "InMemoryPaperStore",
    "FilePaperStore",
    # Errors
    "CitationLensError",
    "MalformedRecordError",
    "NotBuiltError",
    "StoreUnavailableError",
    # Config
    "Config",
    "get_config",
    "load_config",
    # Version
    "__version__",
]
