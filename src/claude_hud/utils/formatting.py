"""Small text helpers shared by the classifier and the line renderers."""

from datetime import datetime


def truncate(text: str, max_len: int) -> str:
    """Cut text to max_len characters, marking the cut with '...'."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def format_elapsed(start: datetime, now: datetime) -> str:
    """Format the time since start as '<1s', '42s' or '3m 5s'."""
    ms = (now - start).total_seconds() * 1000
    if ms < 1000:
        return "<1s"
    if ms < 60_000:
        return f"{round(ms / 1000)}s"
    mins = int(ms // 60_000)
    secs = round((ms % 60_000) / 1000)
    return f"{mins}m {secs}s"


def format_tokens(n: int) -> str:
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1000:
        return f"{n / 1000:.1f}k"
    return str(max(0, n))


def format_cost(usd: float) -> str:
    if usd <= 0:
        return "$0.00"
    if usd < 0.01:
        return "<$0.01"
    return f"${usd:.2f}"
