"""Heuristic lexical relevance scoring."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Sequence

from instructfinder.models import Section
from instructfinder.utils.text import tokenize

TITLE_EXACT_WEIGHT = 10.0
TITLE_PARTIAL_WEIGHT = 5.0
CONTENT_FREQUENCY_WEIGHT = 2.0
CONTENT_PARTIAL_WEIGHT = 1.0
CONTENT_PARTIAL_MIN_LENGTH = 4
LENGTH_NORMALIZATION_SCALE = 10.0

DEFAULT_KEYWORD_BOOSTS: Dict[str, float] = {
    "log": 2.0,
    "logs": 2.0,
    "logging": 2.0,
    "query": 2.0,
    "cost": 2.0,
    "cluster": 1.5,
    "auth": 2.0,
    "authentication": 2.0,
    "giq": 2.0,
    "monitoring": 1.5,
    "kubectl": 1.5,
    "gcloud": 1.5,
}


@dataclass(frozen=True, slots=True)
class KeywordBoosts:
    """Multipliers applied when a query term names a high-value keyword."""

    multipliers: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_KEYWORD_BOOSTS)
    )

    def __post_init__(self) -> None:
        for keyword, multiplier in self.multipliers.items():
            if isinstance(multiplier, bool) or not isinstance(multiplier, (int, float)):
                raise ValueError(f"Boost for {keyword!r} must be a number")
            if not math.isfinite(multiplier) or not multiplier > 0:
                raise ValueError(f"Boost for {keyword!r} must be a positive finite number")

    def get(self, term: str) -> float | None:
        return self.multipliers.get(term)

    def apply(self, score: float, query_terms: Sequence[str], text: str) -> float:
        """Multiply ``score`` once per query term that is a boosted keyword in ``text``."""
        for term in query_terms:
            multiplier = self.get(term)
            if multiplier is not None and term in text:
                score *= multiplier
        return score


def load_keyword_boosts(path: Path) -> KeywordBoosts:
    """Load a keyword boost table from a JSON object file."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Boost table in {path} must be a JSON object")
    return KeywordBoosts({str(key).lower(): value for key, value in data.items()})


def _partial_match(left: str, right: str) -> bool:
    return left in right or right in left


def score_section(
    query_terms: Sequence[str],
    section: Section,
    boosts: KeywordBoosts | None = None,
) -> float:
    """Score one section against already lowercased query terms.

    Title hits weigh the most, content hits are damped logarithmically and the
    total is divided by the square root of the section's token count so long
    sections do not win on incidental matches.
    """
    if not query_terms:
        return 0.0
    if boosts is None:
        boosts = KeywordBoosts()

    title_text = section.title.lower()
    content_text = section.content.lower()
    all_text = f"{title_text} {content_text}"

    title_terms = tokenize(title_text)
    content_terms = tokenize(content_text)
    word_count = len(title_terms) + len(content_terms)

    score = 0.0
    for term in query_terms:
        if term in title_text:
            score += TITLE_EXACT_WEIGHT

        for title_term in title_terms:
            if _partial_match(term, title_term):
                score += TITLE_PARTIAL_WEIGHT

        matches = content_text.count(term)
        if matches > 0:
            score += math.log(matches + 1) * CONTENT_FREQUENCY_WEIGHT

        if len(term) >= CONTENT_PARTIAL_MIN_LENGTH:
            for content_term in content_terms:
                if len(content_term) >= CONTENT_PARTIAL_MIN_LENGTH and _partial_match(
                    term, content_term
                ):
                    score += CONTENT_PARTIAL_WEIGHT

    score = boosts.apply(score, query_terms, all_text)

    if word_count > 0:
        score = score / math.sqrt(word_count) * LENGTH_NORMALIZATION_SCALE

    return score
