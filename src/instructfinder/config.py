"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from instructfinder.index.scoring import KeywordBoosts, load_keyword_boosts

DEFAULT_TRIGGER_PHRASES: Tuple[str, ...] = (
    "using the gke mcp instructions",
    "use the gke mcp instructions",
    "gke mcp instructions",
    "with gke mcp instructions",
    "from gke mcp instructions",
)


@dataclass(slots=True)
class AppConfig:
    document_path: Path | None = None
    boosts_path: Path | None = None
    default_max_sections: int = 3
    max_sections_limit: int = 10
    document_label: str = "GKE MCP"
    trigger_phrases: Tuple[str, ...] = DEFAULT_TRIGGER_PHRASES

    def resolve_document_path(self, base_dir: Path | None = None) -> Path | None:
        """Resolve the document path; ``None`` selects the bundled document."""
        if self.document_path is None:
            return None
        if Path(self.document_path).is_absolute() or base_dir is None:
            return Path(self.document_path)
        return base_dir / self.document_path

    def keyword_boosts(self) -> KeywordBoosts:
        if self.boosts_path is None:
            return KeywordBoosts()
        return load_keyword_boosts(Path(self.boosts_path))
