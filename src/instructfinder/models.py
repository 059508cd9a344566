"""Core InstructFinder data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Section:
    """Heading-delimited unit of the reference document."""

    title: str
    content: str
    level: int


@dataclass(frozen=True, slots=True)
class ScoredSection:
    """Section paired with its relevance score for one query."""

    section: Section
    score: float

    @property
    def title(self) -> str:
        return self.section.title

    @property
    def content(self) -> str:
        return self.section.content

    @property
    def level(self) -> int:
        return self.section.level
