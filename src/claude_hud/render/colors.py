"""ANSI color helpers. Every helper is a no-op when color is disabled."""

import re
from typing import Optional

RESET = "\033[0m"
DIM = "\033[2m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"

# Split keeps the escape sequences as separate parts
ANSI_SPLIT_RE = re.compile(r"(\x1b\[[0-9;]*m)")


def paint(code: str, text: str, enabled: bool = True) -> str:
    if not enabled or not text:
        return text
    return f"{code}{text}{RESET}"


def color_for_percent(percent: int) -> str:
    """Green below 70%, yellow below 85%, red above."""
    if percent >= 85:
        return RED
    if percent >= 70:
        return YELLOW
    return GREEN


def visible_len(text: str) -> int:
    return sum(len(part) for i, part in enumerate(ANSI_SPLIT_RE.split(text)) if i % 2 == 0)


def fit_width(text: str, width: Optional[int]) -> str:
    """Clip text to width visible characters, ending with '...' when cut."""
    if not width or visible_len(text) <= width:
        return text
    keep = max(0, width - 3)
    out = []
    count = 0
    colored = False
    for i, part in enumerate(ANSI_SPLIT_RE.split(text)):
        if i % 2:
            colored = True
            out.append(part)
            continue
        taken = part[: keep - count]
        out.append(taken)
        count += len(taken)
        if count >= keep:
            break
    out.append("...")
    if colored:
        out.append(RESET)
    return "".join(out)
