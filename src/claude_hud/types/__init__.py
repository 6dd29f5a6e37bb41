"""Type definitions for Claude HUD."""

from claude_hud.types.transcript import (
    EntryStatus,
    TodoStatus,
    ToolEntry,
    AgentEntry,
    TodoItem,
    ContextUsage,
    TranscriptData,
    SessionSnapshot,
)
from claude_hud.types.activity import (
    ActivityResult,
    ActivityState,
    ToolCategory,
    VisualMode,
)
from claude_hud.types.events import EventKind, HudEvent
from claude_hud.types.pricing import (
    DEFAULT_PRICING,
    CostSnapshot,
    ModelPricing,
    PricingConfig,
)

__all__ = [
    "EntryStatus",
    "TodoStatus",
    "ToolEntry",
    "AgentEntry",
    "TodoItem",
    "ContextUsage",
    "TranscriptData",
    "SessionSnapshot",
    "ActivityResult",
    "ActivityState",
    "ToolCategory",
    "VisualMode",
    "EventKind",
    "HudEvent",
    "DEFAULT_PRICING",
    "CostSnapshot",
    "ModelPricing",
    "PricingConfig",
]
