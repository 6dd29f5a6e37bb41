"""Pricing table and cost snapshot types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelPricing:
    input: float   # USD per 1M input tokens
    output: float  # USD per 1M output tokens


@dataclass(frozen=True)
class PricingConfig:
    sonnet: ModelPricing
    opus: ModelPricing
    haiku: ModelPricing
    last_updated: str  # ISO date, e.g. "2025-01-01"

    def rates_for(self, model: str) -> ModelPricing:
        """Pick the family rate by substring match on the model id."""
        name = (model or "").lower()
        if "opus" in name:
            return self.opus
        if "haiku" in name:
            return self.haiku
        return self.sonnet


MODEL_FAMILIES = ("sonnet", "opus", "haiku")

DEFAULT_PRICING = PricingConfig(
    sonnet=ModelPricing(input=3.00, output=15.00),
    opus=ModelPricing(input=15.00, output=75.00),
    haiku=ModelPricing(input=0.25, output=1.25),
    last_updated="2025-01-01",
)


@dataclass(frozen=True)
class CostSnapshot:
    input_tokens: int = 0
    output_tokens: int = 0
    input_cost: float = 0.0
    output_cost: float = 0.0
    total_cost: float = 0.0
    pricing_stale: bool = False

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens
