"""Services for Claude HUD."""

from claude_hud.services.activity_classifier import classify_tool_name, detect_activity_state
from claude_hud.services.cost_tracker import CostTracker, is_pricing_stale, merge_pricing
from claude_hud.services.config_manager import ConfigManager
from claude_hud.services.event_parser import parse_hud_event, replay_events, stream_events
from claude_hud.services.jsonl_parser import build_snapshot, parse_transcript

__all__ = [
    "classify_tool_name",
    "detect_activity_state",
    "CostTracker",
    "is_pricing_stale",
    "merge_pricing",
    "ConfigManager",
    "parse_hud_event",
    "replay_events",
    "stream_events",
    "build_snapshot",
    "parse_transcript",
]
