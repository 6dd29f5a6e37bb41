"""Statusline entry point: stdin payload in, rendered lines out."""

import argparse
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional, TextIO

import orjson

from claude_hud.render import RenderContext, render
from claude_hud.services.config_manager import HUD_CONFIG_PATH, ConfigManager
from claude_hud.services.cost_tracker import CostTracker
from claude_hud.services.event_parser import replay_events
from claude_hud.services.jsonl_parser import build_snapshot, parse_transcript

logger = logging.getLogger(__name__)

INITIALIZING_LINE = "[claude-hud] Initializing..."


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").lower() in ("1", "true", "on")


def configure_logging(debug: bool) -> None:
    """Log to stderr only; stdout belongs to the statusline."""
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if debug else logging.WARNING,
        format="[%(levelname)s] [%(name)s] %(message)s",
    )


def build_parser(environ: Mapping[str, str]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="claude-hud", description=__doc__)
    parser.add_argument(
        "--animate", action=argparse.BooleanOptionalAction, default=None,
        help="Show the activity line (default: $CLAUDE_HUD_ANIMATE or config)",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    parser.add_argument("--config", type=Path, default=HUD_CONFIG_PATH, help="Config file path")
    parser.add_argument("--events", type=Path, default=None, help="Hook event log for cost tracking")
    parser.add_argument(
        "--debug", action="store_true", default=_env_flag(environ, "CLAUDE_HUD_DEBUG"),
        help="Debug logging to stderr (or CLAUDE_HUD_DEBUG=1)",
    )
    return parser


def read_payload(stream: TextIO) -> Optional[dict]:
    if stream.isatty():
        return None
    try:
        raw = orjson.loads(stream.read())
    except orjson.JSONDecodeError as e:
        logger.debug("Invalid statusline payload: %s", e)
        return None
    return raw if isinstance(raw, dict) else None


def run(
    argv: Optional[list[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Render one statusline frame."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    environ = os.environ if environ is None else environ

    args = build_parser(environ).parse_args(argv)
    configure_logging(args.debug)

    payload = read_payload(stdin)
    if payload is None:
        print(INITIALIZING_LINE, file=stdout)
        return 0

    config = ConfigManager(args.config)
    config.refresh()
    if config.error:
        logger.warning("%s (%s)", config.error, args.config)

    transcript = parse_transcript(payload.get("transcript_path"))
    snapshot = build_snapshot(transcript, payload)

    cost = None
    if args.events is not None and config.get_bool("showCost"):
        tracker = CostTracker(model=snapshot.model)
        tracker.set_pricing(config.pricing)
        session_id = payload.get("session_id") if isinstance(payload.get("session_id"), str) else None
        applied = replay_events(args.events, tracker, session=session_id)
        logger.debug("Applied %d events from %s", applied, args.events)
        cost = tracker.get_cost()

    if args.animate is not None:
        animate = args.animate
    else:
        animate = _env_flag(environ, "CLAUDE_HUD_ANIMATE") or config.get_bool("animate")

    ctx = RenderContext(
        snapshot=snapshot,
        now=datetime.now(timezone.utc),
        cost=cost,
        animate=animate,
        color=not args.no_color and config.get_bool("color"),
        hidden_panels=config.hidden_panels,
        panel_order=config.panel_order,
        width=config.width,
    )
    for line in render(ctx):
        print(line, file=stdout)
    return 0
