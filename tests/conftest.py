"""Shared fixtures for InstructFinder tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from instructfinder.index.indexer import InstructionsIndex

SAMPLE_DOCUMENT = """Preamble text that belongs to no section.

# GKE Guide
intro text about clusters

## Logging
Use query_logs to read cluster logs. Logging is useful.

## Cost Analysis
Billing export data for cost.

## Empty Heading
## Authentication
Run gcloud auth login.
"""


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_DOCUMENT


@pytest.fixture
def sample_document(tmp_path: Path) -> Path:
    path = tmp_path / "instructions.md"
    path.write_text(SAMPLE_DOCUMENT, encoding="utf-8")
    return path


@pytest.fixture
def sample_index() -> InstructionsIndex:
    return InstructionsIndex.from_text(SAMPLE_DOCUMENT)
