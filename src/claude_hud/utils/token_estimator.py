"""Token estimation from text size."""

import logging
import math
from typing import Any

import orjson

logger = logging.getLogger(__name__)

# Rough average for English text and JSON payloads
CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Estimate token count from text using ~4 chars per token heuristic."""
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def serialize_for_estimate(value: Any) -> str:
    """Canonical JSON text for a structured value (sorted keys, compact)."""
    return orjson.dumps(
        value,
        default=str,
        option=orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS,
    ).decode("utf-8")


def estimate_tokens_for_value(value: Any) -> int:
    """Estimate tokens for a tool input/response object.

    Values orjson refuses to encode (nesting past its recursion limit) are
    sized by their repr instead.
    """
    if value is None:
        return 0
    try:
        text = serialize_for_estimate(value)
    except orjson.JSONEncodeError as e:
        logger.debug("Falling back to repr for token estimate: %s", e)
        try:
            text = str(value)
        except RecursionError:
            return 0
    return estimate_tokens(text)
