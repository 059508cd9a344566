"""Markdown loading and section segmentation.

The reference document is split on heading lines (lines starting with one or
more ``#`` once surrounding whitespace is removed). Each heading opens a
section that collects every following line up to the next heading.
"""

from __future__ import annotations

import logging
from importlib.resources import files
from pathlib import Path
from typing import List

from instructfinder.models import Section

LOGGER = logging.getLogger(__name__)

HEADING_MARKER = "#"
BUNDLED_DOCUMENT = "instructions.md"


def _heading_level(line: str) -> int:
    """Count the leading heading markers of an already trimmed line."""
    level = 0
    for char in line:
        if char != HEADING_MARKER:
            break
        level += 1
    return level


def _close_section(title: str, level: int, body: List[str]) -> Section | None:
    if not title:
        return None
    content = "\n".join(body).strip()
    if not content:
        return None
    return Section(title=title, content=content, level=level)


def segment(text: str) -> List[Section]:
    """Split a markdown document into sections in document order.

    Lines before the first heading are discarded and headings without body
    text are dropped.
    """
    sections: List[Section] = []
    title = ""
    level = 0
    body: List[str] = []

    for line in text.split("\n"):
        trimmed = line.strip()
        if trimmed.startswith(HEADING_MARKER):
            section = _close_section(title, level, body)
            if section is not None:
                sections.append(section)
            level = _heading_level(trimmed)
            title = trimmed[level:].strip()
            body = []
        elif title:
            body.append(line)

    section = _close_section(title, level, body)
    if section is not None:
        sections.append(section)

    return sections


def load_document(path: Path | None = None) -> str:
    """Read the reference document, falling back to the bundled copy."""
    if path is None:
        resource = files("instructfinder.data").joinpath(BUNDLED_DOCUMENT)
        return resource.read_text(encoding="utf-8")
    return Path(path).read_text(encoding="utf-8")


def build_sections(path: Path | None = None) -> List[Section]:
    """Load and segment the reference document."""
    sections = segment(load_document(path))
    LOGGER.info("Segmented %s into %d sections", path or BUNDLED_DOCUMENT, len(sections))
    return sections
