"""Ranking of sections against a free-text query."""

from __future__ import annotations

import logging
from typing import List, Sequence

from instructfinder.index.scoring import KeywordBoosts, score_section
from instructfinder.models import ScoredSection, Section
from instructfinder.utils.text import tokenize

LOGGER = logging.getLogger(__name__)


def rank(
    query: str,
    sections: Sequence[Section],
    *,
    max_sections: int,
    boosts: KeywordBoosts | None = None,
) -> List[ScoredSection]:
    """Return the best ``max_sections`` sections with a positive score.

    Sections with equal scores keep their document order.
    """
    query_terms = tokenize(query.lower())
    LOGGER.debug("Query terms: %s", query_terms)

    scored: List[ScoredSection] = []
    for section in sections:
        score = score_section(query_terms, section, boosts)
        if score > 0:
            scored.append(ScoredSection(section=section, score=score))

    # sorted() is stable, including with reverse=True
    scored = sorted(scored, key=lambda item: item.score, reverse=True)
    LOGGER.debug("%d of %d sections matched %r", len(scored), len(sections), query)
    return scored[: max(max_sections, 0)]
