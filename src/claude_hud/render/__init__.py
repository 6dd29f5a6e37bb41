"""Assemble the statusline from the snapshot, activity and cost."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from claude_hud.render.colors import fit_width
from claude_hud.render.lines import (
    render_activity_line,
    render_agents_line,
    render_context_info_line,
    render_cost_line,
    render_session_line,
    render_todos_line,
    render_tools_line,
)
from claude_hud.services.activity_classifier import detect_activity_state
from claude_hud.services.config_manager import PANEL_IDS
from claude_hud.types.pricing import CostSnapshot
from claude_hud.types.transcript import SessionSnapshot

# Non-breaking spaces keep the host terminal from collapsing padding
NBSP = "\u00a0"

# Panels that share the first line
SESSION_PANELS = frozenset({"status", "context"})


@dataclass
class RenderContext:
    snapshot: SessionSnapshot
    now: datetime
    cost: Optional[CostSnapshot] = None
    animate: bool = False
    color: bool = True
    hidden_panels: list[str] = field(default_factory=list)
    panel_order: list[str] = field(default_factory=lambda: list(PANEL_IDS))
    width: Optional[int] = None


def resolve_panels(panel_order: list[str], hidden_panels: list[str]) -> list[str]:
    """Visible panels in display order.

    Panels left out of panel_order follow it in their default order.
    """
    hidden = set(hidden_panels)
    order = [p for p in dict.fromkeys(panel_order) if p in PANEL_IDS]
    order += [p for p in PANEL_IDS if p not in order]
    return [p for p in order if p not in hidden]


def render(ctx: RenderContext) -> list[str]:
    """Return the statusline as a list of lines (no trailing newlines).

    The session line sits where its first panel appears in the order, and
    the activity line (when animated) directly below it.
    """
    panels = resolve_panels(ctx.panel_order, ctx.hidden_panels)
    session_panels = [p for p in panels if p in SESSION_PANELS]
    lines: list[Optional[str]] = []
    session_placed = False

    for panel in panels:
        if panel in SESSION_PANELS:
            if session_placed:
                continue
            session_placed = True
            lines.append(render_session_line(ctx.snapshot, ctx.color, session_panels))
            if ctx.animate:
                lines.append(_activity_line(ctx))
        elif panel == "cost":
            if ctx.cost is not None:
                lines.append(render_cost_line(ctx.cost, ctx.color))
        elif panel == "contextInfo":
            lines.append(render_context_info_line(ctx.snapshot, ctx.color))
        elif panel == "tools":
            lines.append(render_tools_line(ctx.snapshot, ctx.color))
        elif panel == "agents":
            lines.append(render_agents_line(ctx.snapshot, ctx.now, ctx.color))
        elif panel == "todos":
            lines.append(render_todos_line(ctx.snapshot, ctx.color))

    if ctx.animate and not session_placed:
        lines.insert(0, _activity_line(ctx))

    return [fit_width(line, ctx.width).replace(" ", NBSP) for line in lines if line]


def _activity_line(ctx: RenderContext) -> str:
    result = detect_activity_state(ctx.snapshot, now=ctx.now)
    return render_activity_line(result, ctx.now, ctx.color)


__all__ = ["RenderContext", "render", "resolve_panels"]
