"""Streaming JSONL parser for Claude Code transcripts.

Builds the tool, agent and todo history the activity classifier needs:

- assistant ``tool_use`` blocks start tool entries (``Task`` starts an agent,
  ``TodoWrite`` replaces the todo list)
- user ``tool_result`` blocks complete the entry with the matching id
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import orjson

from claude_hud.types.transcript import (
    AgentEntry,
    ContextUsage,
    SessionSnapshot,
    TodoItem,
    TodoStatus,
    ToolEntry,
    TranscriptData,
)
from claude_hud.utils.formatting import truncate

logger = logging.getLogger(__name__)

# Max size for a single JSONL line (10MB)
MAX_LINE_SIZE = 10 * 1024 * 1024

COMMAND_TARGET_MAX_LEN = 30

AGENT_TOOL_NAMES = frozenset({"Task", "Agent"})
TODO_TOOL_NAME = "TodoWrite"


def parse_transcript(file_path: str | Path | None) -> TranscriptData:
    """Parse a whole transcript file. Missing or unreadable files give empty data."""
    data = TranscriptData()
    if not file_path or not isinstance(file_path, (str, Path)):
        return data

    path = Path(file_path)
    if not path.exists():
        logger.debug("Transcript not found: %s", path)
        return data

    tools: dict[str, ToolEntry] = {}
    agents: dict[str, AgentEntry] = {}

    line_num = 0
    try:
        with open(path, "rb") as f:
            for line in f:
                line_num += 1
                line = line.strip()
                if not line:
                    continue

                if len(line) > MAX_LINE_SIZE:
                    logger.warning(
                        "Line %d in %s exceeds %dMB, skipping",
                        line_num, path.name, MAX_LINE_SIZE // (1024 * 1024),
                    )
                    continue

                try:
                    raw = orjson.loads(line)
                except orjson.JSONDecodeError as e:
                    logger.debug("Malformed JSON at line %d in %s: %s", line_num, path.name, e)
                    continue

                if not isinstance(raw, dict):
                    continue

                _apply_entry(raw, data, tools, agents)
    except OSError as e:
        logger.debug("Failed to read transcript %s: %s", path, e)

    data.tools = list(tools.values())
    data.agents = list(agents.values())
    return data


def build_snapshot(transcript: TranscriptData, payload: Optional[dict] = None) -> SessionSnapshot:
    """Combine transcript history with the statusline stdin payload."""
    payload = payload if isinstance(payload, dict) else {}

    context_window = payload.get("context_window")
    if not isinstance(context_window, dict):
        context_window = {}

    usage = None
    raw_usage = context_window.get("current_usage")
    if isinstance(raw_usage, dict):
        usage = ContextUsage(
            input_tokens=_int(raw_usage.get("input_tokens")),
            cache_creation_tokens=_int(raw_usage.get("cache_creation_input_tokens")),
            cache_read_tokens=_int(raw_usage.get("cache_read_input_tokens")),
        )

    size = context_window.get("context_window_size")
    window_size = size if isinstance(size, int) and not isinstance(size, bool) and size > 0 else None

    model = payload.get("model")
    model_id = ""
    if isinstance(model, dict):
        model_id = model.get("id") or model.get("display_name") or ""
    elif isinstance(model, str):
        model_id = model

    return SessionSnapshot(
        tools=transcript.tools,
        agents=transcript.agents,
        todos=transcript.todos,
        context_usage=usage,
        context_window_size=window_size,
        model=model_id or transcript.model,
    )


def _apply_entry(
    raw: dict,
    data: TranscriptData,
    tools: dict[str, ToolEntry],
    agents: dict[str, AgentEntry],
) -> None:
    timestamp = _parse_timestamp(raw.get("timestamp"))
    if data.session_start is None and raw.get("timestamp"):
        data.session_start = timestamp

    message = raw.get("message")
    if not isinstance(message, dict):
        return

    if raw.get("type") == "assistant" and isinstance(message.get("model"), str):
        data.model = message["model"]

    content = message.get("content")
    if not isinstance(content, list):
        return

    for block in content:
        if not isinstance(block, dict):
            continue
        block_type = block.get("type")
        if block_type == "tool_use":
            _start_tool(block, timestamp, data, tools, agents)
        elif block_type == "tool_result":
            tool_use_id = _str(block.get("tool_use_id"))
            if tool_use_id in tools:
                tools[tool_use_id].complete(timestamp)
            elif tool_use_id in agents:
                agents[tool_use_id].complete(timestamp)


def _start_tool(
    block: dict,
    timestamp: datetime,
    data: TranscriptData,
    tools: dict[str, ToolEntry],
    agents: dict[str, AgentEntry],
) -> None:
    tool_id = _str(block.get("id"))
    name = block.get("name", "")
    if not tool_id or not isinstance(name, str) or not name:
        return

    tool_input = block.get("input")
    if not isinstance(tool_input, dict):
        tool_input = {}

    if name in AGENT_TOOL_NAMES:
        agents[tool_id] = AgentEntry(
            id=tool_id,
            type=_str(tool_input.get("subagent_type")) or "unknown",
            description=_str(tool_input.get("description")) or None,
            model=_str(tool_input.get("model")) or None,
            start_time=timestamp,
        )
    elif name == TODO_TOOL_NAME:
        todos = tool_input.get("todos")
        if isinstance(todos, list):
            data.todos = [_parse_todo(t) for t in todos if isinstance(t, dict)]
    else:
        tools[tool_id] = ToolEntry(
            id=tool_id,
            name=name,
            target=_extract_target(name, tool_input),
            start_time=timestamp,
        )


def _parse_todo(raw: dict) -> TodoItem:
    try:
        status = TodoStatus(raw.get("status", "pending"))
    except ValueError:
        status = TodoStatus.PENDING
    return TodoItem(content=_str(raw.get("content")), status=status)


def _extract_target(name: str, tool_input: dict[str, Any]) -> Optional[str]:
    """Pick the most descriptive input field for display."""
    if name == "Bash":
        command = _str(tool_input.get("command"))
        return truncate(command, COMMAND_TARGET_MAX_LEN) if command else None
    for key in ("file_path", "notebook_path", "path", "pattern", "url", "query"):
        value = _str(tool_input.get(key))
        if value:
            return value
    return None


def _parse_timestamp(ts_value) -> datetime:
    """Parse a timestamp from various formats. Always timezone-aware."""
    if isinstance(ts_value, (int, float)) and not isinstance(ts_value, bool):
        seconds = ts_value / 1000 if ts_value > 1e12 else ts_value
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    if isinstance(ts_value, str) and ts_value:
        try:
            # ISO 8601 format: "2026-02-13T12:00:00.000Z"
            parsed = datetime.fromisoformat(ts_value.replace("Z", "+00:00"))
            return parsed if parsed.tzinfo else parsed.astimezone()
        except ValueError:
            pass
    return datetime.now(timezone.utc)


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)
