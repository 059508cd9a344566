"""In-memory section index."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Tuple

from instructfinder.index.scoring import KeywordBoosts
from instructfinder.index.search import rank
from instructfinder.ingestion.markdown_loader import build_sections, segment
from instructfinder.models import ScoredSection, Section

LOGGER = logging.getLogger(__name__)


class InstructionsIndex:
    """Read-only collection of document sections built once at startup.

    Nothing is mutated after construction, so a single instance can serve
    concurrent queries.
    """

    def __init__(
        self,
        sections: Iterable[Section],
        *,
        boosts: KeywordBoosts | None = None,
    ) -> None:
        self._sections: Tuple[Section, ...] = tuple(sections)
        self._boosts = boosts if boosts is not None else KeywordBoosts()
        LOGGER.debug("Index ready with %d sections", len(self._sections))

    @classmethod
    def from_text(cls, text: str, *, boosts: KeywordBoosts | None = None) -> InstructionsIndex:
        return cls(segment(text), boosts=boosts)

    @classmethod
    def from_path(
        cls, path: Path | None = None, *, boosts: KeywordBoosts | None = None
    ) -> InstructionsIndex:
        """Build the index from a document on disk or the bundled document."""
        return cls(build_sections(path), boosts=boosts)

    @property
    def sections(self) -> Tuple[Section, ...]:
        return self._sections

    @property
    def boosts(self) -> KeywordBoosts:
        return self._boosts

    def __len__(self) -> int:
        return len(self._sections)

    def search(self, query: str, *, max_sections: int = 3) -> List[ScoredSection]:
        return rank(query, self._sections, max_sections=max_sections, boosts=self._boosts)
