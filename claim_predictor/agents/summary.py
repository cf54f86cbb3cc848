"""Narrative summary agent."""

from typing import Any

from .base import BasePredictionAgent
from ..models.claim import PredictionInput
from ..models.prediction import CarrierBehavior, Probabilities


def templated_summary(probabilities: Probabilities) -> str:
    """Deterministic summary built from the distribution alone."""
    outlook = (
        "High denial risk detected - prepare appeal documentation immediately."
        if probabilities.deny > 50
        else "Strong approval indicators present."
    )
    return (
        f"Based on current data, the claim has a {probabilities.full}% "
        f"chance of full approval. {outlook}"
    )


class ClaimSummaryAgent(BasePredictionAgent):
    """Writes a two to three sentence narrative of the prediction."""

    def build_prompt(
        self,
        prediction_input: PredictionInput,
        probabilities: Probabilities,
        carrier_behavior: CarrierBehavior
    ) -> str:
        return f"""You are analyzing a roofing insurance claim. Provide a brief 2-3 sentence summary of what the carrier is likely thinking and what the contractor should do.

Probabilities:
- Full: {probabilities.full}%
- Partial: {probabilities.partial}%
- Deny: {probabilities.deny}%

Carrier Strategy: {carrier_behavior.likely_strategy}

Be direct and tactical. Start with "The carrier will likely..." """.rstrip()

    def parse_response(self, response_text: str, *args: Any) -> str:
        return response_text.strip()

    def fallback(
        self,
        prediction_input: PredictionInput,
        probabilities: Probabilities,
        carrier_behavior: CarrierBehavior
    ) -> str:
        return templated_summary(probabilities)
