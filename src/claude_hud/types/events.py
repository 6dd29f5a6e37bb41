"""Hook event records written by the HUD hook scripts."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class EventKind(str, Enum):
    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"
    USER_PROMPT_SUBMIT = "UserPromptSubmit"
    STOP = "Stop"
    PRE_COMPACT = "PreCompact"
    SUBAGENT_STOP = "SubagentStop"


@dataclass
class HudEvent:
    """One line of the hook event log, already structurally validated.

    event is kept as a plain string: unknown kinds are legal and ignored
    downstream.
    """
    event: str
    session: str
    ts: float
    tool: Optional[str] = None
    tool_use_id: Optional[str] = None
    input: Optional[dict[str, Any]] = None
    response: Optional[dict[str, Any]] = None
    prompt: Optional[str] = None
    permission_mode: Optional[str] = None
    transcript_path: Optional[str] = None
    cwd: Optional[str] = None
