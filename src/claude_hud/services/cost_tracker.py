"""Running token and cost estimate built from hook events.

Token counts are estimated from the serialized size of tool inputs, tool
responses and user prompts. Cost is always computed at read time from the
cumulative counts and the currently selected model, so switching models
reprices everything seen so far.

Events are not deduplicated: feeding the same event twice counts it twice.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from claude_hud.types.events import EventKind, HudEvent
from claude_hud.types.pricing import (
    DEFAULT_PRICING,
    MODEL_FAMILIES,
    CostSnapshot,
    ModelPricing,
    PricingConfig,
)
from claude_hud.utils.token_estimator import estimate_tokens, estimate_tokens_for_value

logger = logging.getLogger(__name__)

STALE_AFTER_DAYS = 90
TOKENS_PER_UNIT = 1_000_000


def is_pricing_stale(
    last_updated: Optional[str],
    now: Optional[datetime] = None,
    threshold_days: int = STALE_AFTER_DAYS,
) -> bool:
    """True when last_updated is more than threshold_days before now.

    Accepts "YYYY-MM-DD" or a full ISO timestamp. Anything unparsable is
    reported as stale so the user gets a warning rather than silence.
    """
    if now is None:
        now = datetime.now()
    if not isinstance(last_updated, str) or not last_updated.strip():
        return True
    try:
        parsed = datetime.fromisoformat(last_updated.strip().replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparsable pricing date: %r", last_updated)
        return True
    age = now.date() - parsed.date()
    return age.days > threshold_days


def merge_pricing(
    base: PricingConfig,
    override: Optional[Mapping[str, Any]] = None,
) -> PricingConfig:
    """Apply a partial pricing override on top of base.

    With no override, base itself is returned. A family's rates are replaced
    as a whole and only when both input and output are given; lastUpdated
    is replaced when present.
    """
    if override is None:
        return base

    changes: dict[str, Any] = {}
    for family in MODEL_FAMILIES:
        rates = _coerce_rates(override.get(family))
        if rates is not None:
            changes[family] = rates

    last_updated = override.get("lastUpdated", override.get("last_updated"))
    if isinstance(last_updated, str):
        changes["last_updated"] = last_updated

    return replace(base, **changes)


def _coerce_rates(value: Any) -> Optional[ModelPricing]:
    if isinstance(value, ModelPricing):
        return value
    if not isinstance(value, Mapping):
        return None
    price_in = value.get("input")
    price_out = value.get("output")
    if not _is_number(price_in) or not _is_number(price_out):
        return None
    return ModelPricing(input=float(price_in), output=float(price_out))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class CostTracker:
    """Accumulates estimated tokens for one session.

    Not thread-safe: a single reader loop should own the instance.
    """

    def __init__(
        self,
        model: str = "",
        pricing: PricingConfig = DEFAULT_PRICING,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._model = model
        self._pricing = pricing
        self._clock = clock
        self._input_tokens = 0
        self._output_tokens = 0

    @property
    def model(self) -> str:
        return self._model

    @property
    def pricing(self) -> PricingConfig:
        return self._pricing

    def process_event(self, event: HudEvent) -> None:
        if event.event == EventKind.POST_TOOL_USE.value:
            if event.input is not None:
                self._input_tokens += estimate_tokens_for_value(event.input)
            if event.response is not None:
                self._output_tokens += estimate_tokens_for_value(event.response)
        elif event.event == EventKind.USER_PROMPT_SUBMIT.value:
            if event.prompt:
                self._input_tokens += estimate_tokens(event.prompt)

    def get_cost(self) -> CostSnapshot:
        rates = self._pricing.rates_for(self._model)
        input_cost = self._input_tokens / TOKENS_PER_UNIT * rates.input
        output_cost = self._output_tokens / TOKENS_PER_UNIT * rates.output
        return CostSnapshot(
            input_tokens=self._input_tokens,
            output_tokens=self._output_tokens,
            input_cost=input_cost,
            output_cost=output_cost,
            total_cost=input_cost + output_cost,
            pricing_stale=is_pricing_stale(self._pricing.last_updated, now=self._clock()),
        )

    def set_model(self, model: str) -> None:
        self._model = model

    def set_pricing(self, override: Optional[Mapping[str, Any]]) -> None:
        self._pricing = merge_pricing(self._pricing, override)

    def reset(self) -> None:
        self._input_tokens = 0
        self._output_tokens = 0
