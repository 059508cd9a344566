"""Tests for markdown loading and segmentation."""

from __future__ import annotations

from pathlib import Path

import pytest

from instructfinder.ingestion.markdown_loader import build_sections, load_document, segment
from instructfinder.models import Section


class TestSegment:
    """Test segment function."""

    def test_heading_level_and_title(self) -> None:
        """Level counts the markers and the title is trimmed."""
        sections = segment("### Title\ncontent")

        assert sections == [Section(title="Title", content="content", level=3)]

    def test_drops_heading_without_body(self) -> None:
        """A heading directly followed by another heading is dropped."""
        sections = segment("# A\n# B\nbody")

        assert sections == [Section(title="B", content="body", level=1)]

    def test_no_headings(self) -> None:
        """Documents without headings have no sections."""
        assert segment("just some text\nwith lines") == []
        assert segment("") == []

    def test_preamble_discarded(self) -> None:
        """Lines before the first heading are ignored."""
        sections = segment("intro\n\n# First\nbody")

        assert len(sections) == 1
        assert "intro" not in sections[0].content

    def test_document_order(self, sample_text: str) -> None:
        """Sections keep the order they appear in."""
        titles = [section.title for section in segment(sample_text)]

        assert titles == ["GKE Guide", "Logging", "Cost Analysis", "Authentication"]

    def test_body_lines_kept_raw(self) -> None:
        """Inner indentation survives, only the ends are trimmed."""
        sections = segment("# Steps\n\nfirst\n    indented\n\n")

        assert sections[0].content == "first\n    indented"

    def test_indented_heading(self) -> None:
        """Leading whitespace before the markers is allowed."""
        sections = segment("   ## Sub heading  \nbody")

        assert sections == [Section(title="Sub heading", content="body", level=2)]

    def test_heading_without_space(self) -> None:
        """Markers do not need a space before the title."""
        sections = segment("#Compact\nbody")

        assert sections[0].title == "Compact"
        assert sections[0].level == 1

    def test_marker_only_heading_closes_section(self) -> None:
        """A bare marker line leaves no open section until the next heading."""
        sections = segment("# Kept\nbody\n##\norphan\n# Real\ntext")

        assert sections == [
            Section(title="Kept", content="body", level=1),
            Section(title="Real", content="text", level=1),
        ]

    def test_windows_line_endings(self) -> None:
        """Carriage returns are trimmed away."""
        sections = segment("# A\r\nbody\r\n")

        assert sections == [Section(title="A", content="body", level=1)]

    @pytest.mark.parametrize(
        "text",
        [
            "#",
            "####",
            "\n\n\n",
            "# \n   \n#  \n",
            "# Title\n\t\n",
            "## ünïcödé\n✓ done\n# ",
            "#a\n#b\n#c\nd",
        ],
    )
    def test_sections_always_have_title_and_content(self, text: str) -> None:
        """Segmentation never fails and never yields empty sections."""
        for section in segment(text):
            assert section.title
            assert section.content
            assert section.level >= 1


class TestLoadDocument:
    """Test load_document and build_sections."""

    def test_load_from_path(self, sample_document: Path, sample_text: str) -> None:
        """Reads the document from disk."""
        assert load_document(sample_document) == sample_text

    def test_load_bundled_document(self) -> None:
        """Falls back to the packaged instructions."""
        text = load_document()

        assert text.startswith("# GKE MCP Server Instructions")

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing documents raise instead of yielding an empty index."""
        with pytest.raises(FileNotFoundError):
            load_document(tmp_path / "missing.md")

    def test_build_sections_bundled(self) -> None:
        """The bundled document has searchable sections."""
        titles = [section.title for section in build_sections()]

        assert "Authentication" in titles
        assert "Querying Logs" in titles

    def test_build_sections_from_path(self, sample_document: Path) -> None:
        """Builds sections from a document on disk."""
        assert len(build_sections(sample_document)) == 4
