"""Paper/citation store backed by a JSON or YAML dataset file.

The dataset is a mapping with two lists::

    papers:
      - id: p1
        title: Deep learning
        published_date: 2015-05-28
        citation_count: 77000
        categories: [cs.LG]
    citations:
      - citing_paper: p2
        cited_paper: p1
        sentiment: positive
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError

from citation_lens.exceptions import StoreUnavailableError
from citation_lens.models import CitationRecord, PaperRecord
from citation_lens.store.memory import InMemoryPaperStore

if TYPE_CHECKING:
    from collections.abc import Collection

    from citation_lens.models import NetworkFilter

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class FilePaperStore(InMemoryPaperStore):
    """Store that reads its records from a dataset file.

    Records failing validation are logged and skipped. Seminal flags are
    written back to the same file.
    """

    name = "file"

    def __init__(self, path: str | Path):
        """Initialize the store.

        Args:
            path: Path to a .json, .yaml or .yml dataset.
        """
        super().__init__()
        self.path = Path(path).expanduser()
        self._raw: dict[str, Any] | None = None

    @property
    def is_yaml(self) -> bool:
        return self.path.suffix.lower() in YAML_SUFFIXES

    def _load(self) -> dict[str, Any]:
        """Read and validate the dataset once; return the raw mapping."""
        if self._raw is not None:
            return self._raw

        try:
            text = self.path.read_text(encoding="utf-8")
            data = yaml.safe_load(text) if self.is_yaml else json.loads(text)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise StoreUnavailableError(f"Cannot read dataset {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StoreUnavailableError(f"Dataset {self.path} must be a mapping with 'papers' and 'citations'")

        for key in ("papers", "citations"):
            # An empty YAML section loads as null
            if data.get(key) is None:
                data[key] = []
            elif not isinstance(data[key], list):
                raise StoreUnavailableError(f"Dataset {self.path}: '{key}' must be a list")

        papers = []
        for i, doc in enumerate(data["papers"]):
            try:
                papers.append(PaperRecord.model_validate(doc))
            except ValidationError as e:
                logger.warning(f"Skipping malformed paper record #{i} in {self.path.name}: {e.error_count()} errors")

        citations = []
        for i, doc in enumerate(data["citations"]):
            try:
                citations.append(CitationRecord.model_validate(doc))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed citation record #{i} in {self.path.name}: {e.error_count()} errors"
                )

        self._raw = data
        self.papers = papers
        self.citations = citations
        logger.debug(f"Loaded {len(papers)} papers and {len(citations)} citations from {self.path}")
        return data

    async def find_papers(self, filter: NetworkFilter) -> list[PaperRecord]:
        self._load()
        return await super().find_papers(filter)

    async def find_citations(
        self,
        source_ids: Collection[str],
        target_ids: Collection[str],
    ) -> list[CitationRecord]:
        self._load()
        return await super().find_citations(source_ids, target_ids)

    async def update_seminal_flag(self, paper_ids: Collection[str]) -> None:
        raw = self._load()
        await super().update_seminal_flag(paper_ids)

        ids = set(paper_ids)
        for doc in raw["papers"]:
            if isinstance(doc, dict) and str(doc.get("id", doc.get("_id", doc.get("paper_id")))) in ids:
                doc["is_seminal"] = True

        try:
            if self.is_yaml:
                text = yaml.safe_dump(raw, sort_keys=False, allow_unicode=True)
            else:
                text = json.dumps(raw, indent=2, default=str, ensure_ascii=False)
            self.path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise StoreUnavailableError(f"Cannot write dataset {self.path}: {e}") from e
