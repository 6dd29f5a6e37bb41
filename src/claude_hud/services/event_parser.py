"""Parse the append-only hook event log (one JSON object per line)."""

import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator, Optional

import orjson

from claude_hud.types.events import HudEvent

if TYPE_CHECKING:
    from claude_hud.services.cost_tracker import CostTracker

logger = logging.getLogger(__name__)

# Sentinel for "key not present", distinct from an explicit null
_MISSING = object()
_INVALID = object()


def parse_hud_event(line: str | bytes) -> Optional[HudEvent]:
    """Parse a single event line, returning None if it is not a valid event.

    Required: string ``event``, string ``session``, finite number ``ts``.
    ``tool``, ``input`` and ``response`` may be missing or null, but a
    present value of the wrong type rejects the whole line.
    """
    try:
        raw = orjson.loads(line)
    except orjson.JSONDecodeError:
        return None
    if not isinstance(raw, dict):
        return None

    event = _read_string(raw.get("event"))
    session = _read_string(raw.get("session"))
    ts = _read_number(raw.get("ts"))
    tool = _read_nullable(raw, "tool", str)
    tool_input = _read_nullable(raw, "input", dict)
    response = _read_nullable(raw, "response", dict)

    if not event or not session or ts is None:
        return None
    if _INVALID in (tool, tool_input, response):
        return None

    return HudEvent(
        event=event,
        session=session,
        ts=ts,
        tool=tool,
        tool_use_id=_read_string(raw.get("toolUseId")),
        input=tool_input,
        response=response,
        prompt=_read_string(raw.get("prompt")) or None,
        permission_mode=_read_string(raw.get("permissionMode")) or None,
        transcript_path=_read_string(raw.get("transcriptPath")) or None,
        cwd=_read_string(raw.get("cwd")) or None,
    )


def stream_events(file_path: str | Path, byte_offset: int = 0) -> Iterator[HudEvent]:
    """Yield events from an event log, optionally starting at a byte offset.

    Blank and malformed lines are skipped.
    """
    path = Path(file_path)
    if not path.exists():
        logger.debug("Event log not found: %s", path)
        return

    with open(path, "rb") as f:
        f.seek(byte_offset)
        line_num = 0
        for line in f:
            line_num += 1
            line = line.strip()
            if not line:
                continue
            event = parse_hud_event(line)
            if event is None:
                logger.debug("Skipping invalid event at line %d in %s", line_num, path.name)
                continue
            yield event


def replay_events(
    file_path: str | Path,
    tracker: "CostTracker",
    session: Optional[str] = None,
) -> int:
    """Feed every event in the log to tracker; returns the number applied.

    When session is given, events from other sessions are skipped.
    """
    applied = 0
    for event in stream_events(file_path):
        if session and event.session != session:
            continue
        tracker.process_event(event)
        applied += 1
    return applied


def _read_string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _read_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _read_nullable(raw: dict, key: str, expected: type) -> Any:
    value = raw.get(key, _MISSING)
    if value is _MISSING or value is None:
        return None
    if not isinstance(value, expected):
        return _INVALID
    return value
