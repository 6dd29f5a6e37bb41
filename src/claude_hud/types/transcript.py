"""Session snapshot types built from the transcript and statusline payload."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class EntryStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"


class TodoStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class ToolEntry:
    """One tool invocation. end_time is set exactly when status is COMPLETED."""
    id: str
    name: str
    start_time: datetime
    target: Optional[str] = None
    status: EntryStatus = EntryStatus.RUNNING
    end_time: Optional[datetime] = None

    def complete(self, end_time: datetime) -> None:
        self.status = EntryStatus.COMPLETED
        self.end_time = end_time


@dataclass
class AgentEntry:
    """A delegated subagent (Task tool call)."""
    id: str
    type: str
    start_time: datetime
    description: Optional[str] = None
    model: Optional[str] = None
    status: EntryStatus = EntryStatus.RUNNING
    end_time: Optional[datetime] = None

    def complete(self, end_time: datetime) -> None:
        self.status = EntryStatus.COMPLETED
        self.end_time = end_time


@dataclass
class TodoItem:
    content: str
    status: TodoStatus = TodoStatus.PENDING


@dataclass
class ContextUsage:
    input_tokens: int = 0
    cache_creation_tokens: int = 0
    cache_read_tokens: int = 0

    @property
    def total(self) -> int:
        return self.input_tokens + self.cache_creation_tokens + self.cache_read_tokens


@dataclass
class TranscriptData:
    """Everything extracted from one transcript file."""
    tools: list[ToolEntry] = field(default_factory=list)
    agents: list[AgentEntry] = field(default_factory=list)
    todos: list[TodoItem] = field(default_factory=list)
    session_start: Optional[datetime] = None
    model: str = ""


@dataclass
class SessionSnapshot:
    """Point-in-time view consumed by the activity classifier."""
    tools: list[ToolEntry] = field(default_factory=list)
    agents: list[AgentEntry] = field(default_factory=list)
    todos: list[TodoItem] = field(default_factory=list)
    context_usage: Optional[ContextUsage] = None
    context_window_size: Optional[int] = None
    model: str = ""

    @property
    def context_percent(self) -> int:
        if not self.context_usage or not self.context_window_size:
            return 0
        return round(self.context_usage.total / self.context_window_size * 100)
