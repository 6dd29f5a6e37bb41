"""Individual statusline lines."""

from datetime import datetime, timedelta
from typing import Optional, Sequence

from claude_hud.render.colors import (
    CYAN,
    DIM,
    GREEN,
    MAGENTA,
    RED,
    YELLOW,
    color_for_percent,
    paint,
)
from claude_hud.services.activity_classifier import todo_progress
from claude_hud.types.activity import ActivityResult, ActivityState
from claude_hud.types.pricing import CostSnapshot
from claude_hud.types.transcript import EntryStatus, SessionSnapshot, TodoStatus
from claude_hud.utils.formatting import format_cost, format_elapsed, format_tokens, truncate

SPINNER_FRAMES = ("◐", "◓", "◑", "◒")
SPINNER_FRAME_MS = 75

STATE_COLORS = {
    ActivityState.PRESSURE: RED,
    ActivityState.READING: CYAN,
    ActivityState.WRITING: YELLOW,
    ActivityState.SEARCHING: MAGENTA,
    ActivityState.AGENT: MAGENTA,
    ActivityState.BASH: GREEN,
    ActivityState.SUCCESS: GREEN,
}

MAX_RECENT_TOOLS = 4


def spinner_frame(start: datetime, now: datetime) -> str:
    ticks = max(0, (now - start) // timedelta(milliseconds=SPINNER_FRAME_MS))
    return SPINNER_FRAMES[ticks % len(SPINNER_FRAMES)]


def render_session_line(
    snapshot: SessionSnapshot,
    color: bool = True,
    panels: Sequence[str] = ("status", "context"),
) -> Optional[str]:
    """Model name and context percent, in the order given by panels."""
    parts = []
    for panel in panels:
        if panel == "status" and snapshot.model:
            parts.append(paint(CYAN, f"[{snapshot.model}]", color))
        elif panel == "context" and snapshot.context_window_size:
            percent = snapshot.context_percent
            parts.append(paint(color_for_percent(percent), f"{percent}% ctx", color))
    return " ".join(parts) if parts else None


def render_context_info_line(snapshot: SessionSnapshot, color: bool = True) -> Optional[str]:
    usage = snapshot.context_usage
    if usage is None:
        return None
    line = (
        f"ctx in {format_tokens(usage.input_tokens)}"
        f" · cache write {format_tokens(usage.cache_creation_tokens)}"
        f" · cache read {format_tokens(usage.cache_read_tokens)}"
    )
    return paint(DIM, line, color)


def render_activity_line(result: ActivityResult, now: datetime, color: bool = True) -> str:
    parts = [paint(DIM, f"[{result.state.value}]", color)]
    if result.start_time is not None and result.state.is_active:
        parts.append(paint(YELLOW, spinner_frame(result.start_time, now), color))
    if result.detail:
        parts.append(paint(STATE_COLORS.get(result.state, DIM), result.detail, color))
    if result.start_time is not None:
        parts.append(paint(DIM, f"({format_elapsed(result.start_time, now)})", color))
    return " ".join(parts)


def render_tools_line(snapshot: SessionSnapshot, color: bool = True) -> Optional[str]:
    if not snapshot.tools:
        return None
    parts = []
    for tool in snapshot.tools:
        if tool.status == EntryStatus.RUNNING:
            label = tool.name if not tool.target else f"{tool.name}: {truncate(tool.target, 20)}"
            parts.append(paint(YELLOW, f"◐ {label}", color))

    counts: dict[str, int] = {}
    for tool in snapshot.tools:
        if tool.status == EntryStatus.COMPLETED:
            counts[tool.name] = counts.get(tool.name, 0) + 1
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:MAX_RECENT_TOOLS]
    for name, count in ranked:
        parts.append(paint(GREEN, "✓", color) + f" {name} ×{count}")
    return " | ".join(parts) if parts else None


def render_agents_line(snapshot: SessionSnapshot, now: datetime, color: bool = True) -> Optional[str]:
    running = [a for a in snapshot.agents if a.status == EntryStatus.RUNNING]
    if not running:
        return None
    parts = []
    for agent in running:
        label = agent.type
        if agent.description:
            label = f"{agent.type}: {truncate(agent.description, 30)}"
        elapsed = format_elapsed(agent.start_time, now)
        parts.append(paint(MAGENTA, label, color) + " " + paint(DIM, f"({elapsed})", color))
    return " | ".join(parts)


def render_todos_line(snapshot: SessionSnapshot, color: bool = True) -> Optional[str]:
    if not snapshot.todos:
        return None
    done, total = todo_progress(snapshot)
    current = next((t for t in snapshot.todos if t.status == TodoStatus.IN_PROGRESS), None)
    counter = paint(DIM, f"({done}/{total})", color)
    if current is not None:
        return f"{paint(YELLOW, '▸', color)} {truncate(current.content, 50)} {counter}"
    if done == total:
        return f"{paint(GREEN, '✓', color)} All todos complete {counter}"
    return None


def render_cost_line(cost: CostSnapshot, color: bool = True) -> str:
    line = (
        f"in {format_tokens(cost.input_tokens)} / out {format_tokens(cost.output_tokens)}"
        f" · {format_cost(cost.total_cost)}"
    )
    if cost.pricing_stale:
        line += " " + paint(YELLOW, "(pricing may be outdated)", color)
    return line
