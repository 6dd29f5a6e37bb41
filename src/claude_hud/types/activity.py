"""Activity state types shared by the classifier and the renderers."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class VisualMode(str, Enum):
    """Coarse mode used by the wave/face renderers."""
    IDLE = "IDLE"
    SCAN = "SCAN"
    BUILD = "BUILD"
    CRUNCH = "CRUNCH"
    SUCCESS = "SUCCESS"
    SLEEP = "SLEEP"
    PRESSURE = "PRESSURE"


class ToolCategory(str, Enum):
    READING = "reading"
    WRITING = "writing"
    SEARCHING = "searching"
    BASH = "bash"
    FETCH = "fetch"
    AGENT = "agent"
    OTHER = "other"


class ActivityState(str, Enum):
    PRESSURE = "pressure"
    AGENT = "agent"
    READING = "reading"
    WRITING = "writing"
    SEARCHING = "searching"
    BASH = "bash"
    FETCH = "fetch"
    THINKING = "thinking"
    SUCCESS = "success"
    PROGRESS = "progress"
    IDLE = "idle"
    SLEEPING = "sleeping"

    @property
    def is_active(self) -> bool:
        """True while something is running (spinner-worthy)."""
        return self not in (
            ActivityState.SUCCESS,
            ActivityState.IDLE,
            ActivityState.SLEEPING,
            ActivityState.PRESSURE,
        )


@dataclass(frozen=True)
class ActivityResult:
    state: ActivityState
    mode: VisualMode
    detail: str
    start_time: Optional[datetime] = None
