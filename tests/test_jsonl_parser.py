"""Tests for claude_hud.services.jsonl_parser."""

from datetime import datetime, timezone

import orjson
import pytest

from claude_hud.services.activity_classifier import detect_activity_state
from claude_hud.services.jsonl_parser import (
    _parse_timestamp,
    build_snapshot,
    parse_transcript,
)
from claude_hud.types import ActivityState, EntryStatus, TodoStatus, TranscriptData


# ---------------------------------------------------------------------------
# 1. Tools, agents and todos
# ---------------------------------------------------------------------------

def test_parse_tools(tools_transcript_path):
    data = parse_transcript(tools_transcript_path)

    assert [t.name for t in data.tools] == ["Read", "Bash", "Grep"]

    read, bash, grep = data.tools
    assert read.status == EntryStatus.COMPLETED
    assert read.target == "/home/wiz/app/src/main.py"
    assert read.end_time == datetime(2026, 2, 13, 12, 0, 3, tzinfo=timezone.utc)

    assert bash.status == EntryStatus.RUNNING
    assert bash.end_time is None
    assert bash.target == "pytest tests/test_parser.py..."

    assert grep.target == "def parse_"


def test_parse_agents(tools_transcript_path):
    data = parse_transcript(tools_transcript_path)

    assert len(data.agents) == 1
    agent = data.agents[0]
    assert agent.type == "Explore"
    assert agent.description == "Explore parser edge cases"
    assert agent.status == EntryStatus.COMPLETED
    assert agent.end_time == datetime(2026, 2, 13, 12, 0, 9, tzinfo=timezone.utc)


def test_parse_todos(tools_transcript_path):
    data = parse_transcript(tools_transcript_path)

    assert [t.content for t in data.todos] == ["Reproduce failure", "Fix the parser", "Run the suite"]
    assert [t.status for t in data.todos] == [
        TodoStatus.COMPLETED, TodoStatus.IN_PROGRESS, TodoStatus.PENDING,
    ]


def test_session_metadata(tools_transcript_path):
    data = parse_transcript(tools_transcript_path)
    assert data.session_start == datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)
    assert data.model == "claude-sonnet-4-5-20250929"


# ---------------------------------------------------------------------------
# 2. Malformed and missing input
# ---------------------------------------------------------------------------

def test_parse_malformed(malformed_transcript_path):
    """Bad lines are skipped; the valid Glob call still completes."""
    data = parse_transcript(malformed_transcript_path)

    assert len(data.tools) == 1
    assert data.tools[0].name == "Glob"
    assert data.tools[0].target == "**/*.py"
    assert data.tools[0].status == EntryStatus.COMPLETED


@pytest.mark.parametrize("path", [None, "", 5, ["a.jsonl"]])
def test_no_path(path):
    assert parse_transcript(path) == TranscriptData()


def test_missing_file(tmp_path):
    assert parse_transcript(tmp_path / "missing.jsonl") == TranscriptData()


def test_unhashable_ids_skipped(tmp_path):
    path = tmp_path / "t.jsonl"
    path.write_bytes(b"\n".join(orjson.dumps(entry) for entry in [
        {"type": "assistant", "timestamp": "2026-02-13T12:00:00Z", "message": {"content": [
            {"type": "tool_use", "id": ["toolu_1"], "name": "Read", "input": {}},
            {"type": "tool_use", "id": "toolu_2", "name": "Grep", "input": {"pattern": "x"}},
        ]}},
        {"type": "user", "timestamp": "2026-02-13T12:00:01Z", "message": {"content": [
            {"type": "tool_result", "tool_use_id": {"id": "toolu_2"}},
        ]}},
    ]))
    data = parse_transcript(path)
    assert [t.id for t in data.tools] == ["toolu_2"]
    assert data.tools[0].status == EntryStatus.RUNNING


def test_todo_write_replaces_list(tmp_path):
    def todo_line(uuid, todos):
        return orjson.dumps({
            "type": "assistant", "uuid": uuid, "timestamp": "2026-02-13T12:00:00Z",
            "message": {"role": "assistant", "content": [
                {"type": "tool_use", "id": f"toolu_{uuid}", "name": "TodoWrite", "input": {"todos": todos}},
            ]},
        }).decode()

    path = tmp_path / "todos.jsonl"
    path.write_text("\n".join([
        todo_line("a", [{"content": "old", "status": "pending"}]),
        todo_line("b", [{"content": "new", "status": "weird-status"}]),
    ]))
    data = parse_transcript(path)
    assert len(data.todos) == 1
    assert data.todos[0].content == "new"
    assert data.todos[0].status == TodoStatus.PENDING
    assert data.tools == []


# ---------------------------------------------------------------------------
# 3. Snapshot assembly
# ---------------------------------------------------------------------------

def test_build_snapshot_context(tools_transcript_path):
    payload = {
        "model": {"id": "claude-opus-4-6", "display_name": "Opus"},
        "context_window": {
            "context_window_size": 200_000,
            "current_usage": {
                "input_tokens": 40_000,
                "cache_creation_input_tokens": 5_000,
                "cache_read_input_tokens": 15_000,
            },
        },
    }
    snapshot = build_snapshot(parse_transcript(tools_transcript_path), payload)
    assert snapshot.context_percent == 30
    assert snapshot.model == "claude-opus-4-6"
    assert len(snapshot.tools) == 3


def test_build_snapshot_without_payload():
    snapshot = build_snapshot(TranscriptData(model="claude-haiku-4-5"), None)
    assert snapshot.context_usage is None
    assert snapshot.context_window_size is None
    assert snapshot.context_percent == 0
    assert snapshot.model == "claude-haiku-4-5"


def test_build_snapshot_bad_window_size():
    payload = {"context_window": {"context_window_size": 0, "current_usage": {"input_tokens": 10}}}
    snapshot = build_snapshot(TranscriptData(), payload)
    assert snapshot.context_window_size is None
    assert snapshot.context_percent == 0


def test_fixture_classifies_as_searching(tools_transcript_path, now):
    snapshot = build_snapshot(parse_transcript(tools_transcript_path), {})
    result = detect_activity_state(snapshot, now=now)
    assert result.state == ActivityState.SEARCHING
    assert result.detail == "def parse_"


# ---------------------------------------------------------------------------
# 4. Timestamps
# ---------------------------------------------------------------------------

class TestParseTimestamp:
    def test_iso_z(self):
        assert _parse_timestamp("2026-02-13T12:00:00.000Z") == datetime(2026, 2, 13, 12, tzinfo=timezone.utc)

    def test_epoch_seconds_and_millis(self):
        expected = datetime(2026, 2, 13, 12, tzinfo=timezone.utc)
        assert _parse_timestamp(expected.timestamp()) == expected
        assert _parse_timestamp(expected.timestamp() * 1000) == expected

    def test_garbage_falls_back_to_aware_now(self):
        parsed = _parse_timestamp("yesterday-ish")
        assert parsed.tzinfo is not None
