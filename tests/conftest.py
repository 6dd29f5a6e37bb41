"""Shared test fixtures for Claude HUD."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def tools_transcript_path(fixtures_dir) -> Path:
    return fixtures_dir / "transcript_with_tools.jsonl"


@pytest.fixture
def malformed_transcript_path(fixtures_dir) -> Path:
    return fixtures_dir / "malformed_transcript.jsonl"


@pytest.fixture
def events_path(fixtures_dir) -> Path:
    return fixtures_dir / "events.jsonl"


@pytest.fixture
def now() -> datetime:
    """Fixed 'now' for deterministic tests: Feb 13, 2026, a few seconds after the fixture transcript."""
    return datetime(2026, 2, 13, 12, 0, 11, tzinfo=timezone.utc)
