"""Infer what Claude is doing right now from a session snapshot.

Signals are checked in a fixed priority order and the first match wins:

1. context pressure (>= 90% of the window used)
2. a running subagent
3. the most recent running tool, classified by name
4. a tool that completed in the last few seconds
5. a todo list with every item completed
6. an in-progress todo
7. recent tool/agent history (thinking) or older history (idle)
8. no history at all (sleeping)

The function keeps no state between calls; the snapshot and ``now`` are the
only inputs.
"""

from datetime import datetime, timedelta
from typing import Optional

from claude_hud.types.activity import (
    ActivityResult,
    ActivityState,
    ToolCategory,
    VisualMode,
)
from claude_hud.types.transcript import (
    EntryStatus,
    SessionSnapshot,
    TodoStatus,
    ToolEntry,
)
from claude_hud.utils.formatting import truncate

PRESSURE_THRESHOLD = 90
DETAIL_MAX_LEN = 25
SUCCESS_WINDOW = timedelta(seconds=3)
THINKING_WINDOW = timedelta(seconds=10)

# Ordered (category, substrings, exact names). First match wins, so "readme_grep"
# is READING, not SEARCHING.
TOOL_KEYWORDS: tuple[tuple[ToolCategory, tuple[str, ...], tuple[str, ...]], ...] = (
    (ToolCategory.READING, ("read", "glob"), ("ls",)),
    (ToolCategory.WRITING, ("write", "edit", "multiedit", "notebook"), ()),
    (ToolCategory.SEARCHING, ("grep", "search", "find"), ()),
    (ToolCategory.BASH, ("bash", "shell", "exec"), ()),
    (ToolCategory.FETCH, ("fetch", "web", "http"), ()),
    (ToolCategory.AGENT, ("task", "agent"), ()),
)

_CATEGORY_STATES: dict[ToolCategory, tuple[ActivityState, VisualMode]] = {
    ToolCategory.READING: (ActivityState.READING, VisualMode.SCAN),
    ToolCategory.WRITING: (ActivityState.WRITING, VisualMode.BUILD),
    ToolCategory.SEARCHING: (ActivityState.SEARCHING, VisualMode.SCAN),
    ToolCategory.BASH: (ActivityState.BASH, VisualMode.CRUNCH),
    ToolCategory.FETCH: (ActivityState.FETCH, VisualMode.SCAN),
    ToolCategory.AGENT: (ActivityState.AGENT, VisualMode.CRUNCH),
    ToolCategory.OTHER: (ActivityState.THINKING, VisualMode.BUILD),
}


def classify_tool_name(name: str) -> ToolCategory:
    """Map a tool name to its category (case-insensitive)."""
    lowered = (name or "").lower()
    for category, substrings, exact in TOOL_KEYWORDS:
        if lowered in exact or any(s in lowered for s in substrings):
            return category
    return ToolCategory.OTHER


def detect_activity_state(
    snapshot: SessionSnapshot,
    now: Optional[datetime] = None,
) -> ActivityResult:
    """Classify the snapshot into a single ActivityResult."""
    if now is None:
        now = datetime.now().astimezone()

    tools = snapshot.tools or []
    agents = snapshot.agents or []
    todos = snapshot.todos or []

    percent = snapshot.context_percent
    if percent >= PRESSURE_THRESHOLD:
        return ActivityResult(
            ActivityState.PRESSURE, VisualMode.PRESSURE, f"{percent}% context used",
        )

    running_agent = next((a for a in agents if a.status == EntryStatus.RUNNING), None)
    if running_agent is not None:
        label = running_agent.description or running_agent.type
        return ActivityResult(
            ActivityState.AGENT,
            VisualMode.CRUNCH,
            truncate(label, DETAIL_MAX_LEN),
            running_agent.start_time,
        )

    running_tools = [t for t in tools if t.status == EntryStatus.RUNNING]
    if running_tools:
        tool = running_tools[-1]
        state, mode = _CATEGORY_STATES[classify_tool_name(tool.name)]
        return ActivityResult(state, mode, _tool_detail(tool), tool.start_time)

    completed = [t for t in tools if t.status == EntryStatus.COMPLETED]
    if completed:
        latest = completed[-1]
        if latest.end_time is not None and _within(latest.end_time, now, SUCCESS_WINDOW):
            return ActivityResult(
                ActivityState.SUCCESS, VisualMode.SUCCESS, f"{latest.name} done!",
            )

    if todos and all(t.status == TodoStatus.COMPLETED for t in todos):
        return ActivityResult(
            ActivityState.SUCCESS, VisualMode.SUCCESS, "All tasks complete!",
        )

    # More than one in_progress item is possible; the first one wins.
    current = next((t for t in todos if t.status == TodoStatus.IN_PROGRESS), None)
    if current is not None:
        return ActivityResult(
            ActivityState.PROGRESS, VisualMode.BUILD, truncate(current.content, DETAIL_MAX_LEN),
        )

    if tools or agents:
        last_tool = tools[-1] if tools else None
        if (
            last_tool is not None
            and last_tool.end_time is not None
            and _within(last_tool.end_time, now, THINKING_WINDOW)
        ):
            return ActivityResult(ActivityState.THINKING, VisualMode.IDLE, "Thinking...")
        return ActivityResult(ActivityState.IDLE, VisualMode.IDLE, "Ready")

    return ActivityResult(ActivityState.SLEEPING, VisualMode.SLEEP, "Waiting for input")


def todo_progress(snapshot: SessionSnapshot) -> tuple[int, int]:
    """Return (completed, total) for the todo list."""
    todos = snapshot.todos or []
    done = sum(1 for t in todos if t.status == TodoStatus.COMPLETED)
    return done, len(todos)


def _tool_detail(tool: ToolEntry) -> str:
    if tool.target:
        return truncate(tool.target, DETAIL_MAX_LEN)
    return tool.name


def _within(moment: datetime, now: datetime, window: timedelta) -> bool:
    # Naive datetimes are local time.
    if (moment.tzinfo is None) != (now.tzinfo is None):
        moment, now = moment.astimezone(), now.astimezone()
    # A completion stamped slightly in the future (clock skew) still counts as recent.
    return now - moment < window
