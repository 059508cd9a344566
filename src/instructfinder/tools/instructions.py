"""The ``get_instructions`` tool: query preprocessing, search and formatting."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence

from pydantic import BaseModel, StrictStr, ValidationError, field_validator

from instructfinder.config import DEFAULT_TRIGGER_PHRASES, AppConfig
from instructfinder.index.indexer import InstructionsIndex
from instructfinder.models import ScoredSection

LOGGER = logging.getLogger(__name__)

TOOL_NAME = "get_instructions"

GUIDANCE_MESSAGE = (
    "Please specify what aspect of GKE you need instructions for "
    "(e.g., 'logging', 'cost analysis', 'authentication', 'cluster management')."
)
NO_RESULTS_MESSAGE = (
    "No relevant instructions found for your query. "
    "You may want to try different keywords or check the full documentation."
)
MISSING_QUERY_MESSAGE = 'required argument "query" not found or not a string'

SECTION_SEPARATOR = "\n---\n\n"

TOOL_DEFINITION: Dict[str, Any] = {
    "name": TOOL_NAME,
    "description": (
        "Retrieve specific instructions from the GKE MCP server documentation. "
        "ONLY use this tool when the user explicitly requests GKE MCP instructions by "
        "saying 'Using the GKE MCP Instructions', 'Use the GKE MCP Instructions', "
        "or similar phrases."
    ),
    "annotations": {"readOnlyHint": True, "idempotentHint": True},
    "inputSchema": {
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": (
                    "The user's question or topic after they've requested "
                    "GKE MCP instructions"
                ),
            },
            "max_sections": {
                "type": "number",
                "description": (
                    "Maximum number of relevant sections to return (default: 3, max: 10)"
                ),
            },
        },
        "required": ["query"],
    },
}


def coerce_max_sections(value: Any) -> int | None:
    """Truncate a finite number toward zero; anything else means "use the default"."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


class InstructionsRequest(BaseModel):
    """Arguments accepted by the ``get_instructions`` tool."""

    query: StrictStr
    max_sections: int | None = None

    @field_validator("max_sections", mode="before")
    @classmethod
    def _coerce_max_sections(cls, value: Any) -> int | None:
        return coerce_max_sections(value)


@dataclass(frozen=True, slots=True)
class ToolResult:
    text: str
    is_error: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {"content": [{"type": "text", "text": self.text}], "isError": self.is_error}


@dataclass(frozen=True, slots=True)
class PreparedQuery:
    query: str
    max_sections: int


def strip_trigger_phrases(
    query: str, trigger_phrases: Sequence[str] = DEFAULT_TRIGGER_PHRASES
) -> str:
    """Remove the first trigger phrase found in the query.

    When a phrase matches, the remainder comes from the lowercased query, so
    the original casing is lost.
    """
    lowered = query.lower()
    for phrase in trigger_phrases:
        if phrase in lowered:
            return lowered.replace(phrase, "").strip()
    return query


def resolve_max_sections(value: int | None, *, default: int = 3, limit: int = 10) -> int:
    if value is None:
        return default
    return max(1, min(value, limit))


def preprocess(
    query: str,
    max_sections: int | None = None,
    *,
    config: AppConfig | None = None,
) -> PreparedQuery | None:
    """Clean the raw query and bound the section count.

    Returns ``None`` when nothing is left to search for.
    """
    config = config or AppConfig()
    cleaned = strip_trigger_phrases(query, config.trigger_phrases)
    if not cleaned:
        return None
    return PreparedQuery(
        query=cleaned,
        max_sections=resolve_max_sections(
            max_sections,
            default=config.default_max_sections,
            limit=config.max_sections_limit,
        ),
    )


def format_sections(query: str, sections: Sequence[ScoredSection], *, label: str = "GKE MCP") -> str:
    parts = [f'# Relevant {label} Instructions for: "{query}"\n\n']
    for position, item in enumerate(sections):
        if position > 0:
            parts.append(SECTION_SEPARATOR)
        parts.append(f"{'#' * item.level} {item.title}\n\n")
        parts.append(item.content)
        parts.append("\n")
    return "".join(parts)


class InstructionsTool:
    """Answers ``get_instructions`` calls against a prebuilt index."""

    def __init__(self, index: InstructionsIndex, config: AppConfig | None = None) -> None:
        self.index = index
        self.config = config or AppConfig()

    @property
    def definition(self) -> Dict[str, Any]:
        return TOOL_DEFINITION

    def handle(self, arguments: Mapping[str, Any] | None) -> ToolResult:
        try:
            request = InstructionsRequest.model_validate(dict(arguments or {}))
        except ValidationError as exc:
            LOGGER.warning("Rejected %s call: %s", TOOL_NAME, exc.errors())
            return ToolResult(text=MISSING_QUERY_MESSAGE, is_error=True)

        prepared = preprocess(request.query, request.max_sections, config=self.config)
        if prepared is None:
            return ToolResult(text=GUIDANCE_MESSAGE)

        results = self.index.search(prepared.query, max_sections=prepared.max_sections)
        LOGGER.info("Query %r returned %d sections", prepared.query, len(results))
        if not results:
            return ToolResult(text=NO_RESULTS_MESSAGE)

        return ToolResult(
            text=format_sections(prepared.query, results, label=self.config.document_label)
        )
