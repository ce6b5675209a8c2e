"""Paper/citation stores for Citation Lens."""

from citation_lens.store.base import PaperStore
from citation_lens.store.file import FilePaperStore
from citation_lens.store.memory import InMemoryPaperStore

__all__ = [
    "FilePaperStore",
    "InMemoryPaperStore",
    "PaperStore",
]
