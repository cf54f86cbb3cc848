"""Carrier behavior predictor agent."""

import logging
from typing import Any, List, Optional

from .base import BasePredictionAgent
from ..models.claim import PredictionInput
from ..models.prediction import CarrierBehavior, Probabilities
from ..utils.response_formatter import ResponseFormatter

logger = logging.getLogger(__name__)

MAX_TACTICS = 3
DEFAULT_TIMELINE = "2-4 weeks for initial response"

FALLBACK_BEHAVIOR = CarrierBehavior(
    likely_strategy="Standard review process with documentation requests",
    common_tactics=(
        "Request additional photos",
        "Question storm proximity",
        "Negotiate on material costs",
    ),
    timeline="2-4 weeks for response",
)


def _metric(value: Optional[float]) -> str:
    return "unknown" if value is None else f"{value:g}"


class CarrierBehaviorAgent(BasePredictionAgent):
    """
    Predicts the carrier's strategy, tactics and response timeline.

    The model is asked for a JSON object. A JSON object without a string
    ``likelyStrategy`` or with non-list ``commonTactics`` is rejected and the
    fallback is used. Replies with no JSON object at all are read line by
    line instead: first line is the strategy, the next up to three lines are
    tactics, and the last line is the timeline.
    """

    def build_prompt(self, prediction_input: PredictionInput, probabilities: Probabilities) -> str:
        storm = prediction_input.storm_impact
        return f"""You are a claims prediction expert. Based on this data, predict the carrier's likely strategy and behavior:

Storm Data:
- Hail: {_metric(storm.hail_size if storm else None)} inches
- Wind: {_metric(storm.wind_speed if storm else None)} mph
- Distance: {_metric(storm.distance if storm else None)} miles
- Severity: {_metric(storm.severity_score if storm else None)} / 10

Claim Data:
- Stage: {prediction_input.stage or 'unknown'}
- Photos: {prediction_input.photo_count or 0}
- Video: {'Yes' if prediction_input.has_video else 'No'}
- Days Old: {prediction_input.days_since_creation or 0}
- Denial Letter: {'Yes' if prediction_input.has_denial_letter else 'No'}

Probabilities:
- Full Approval: {probabilities.full}%
- Partial: {probabilities.partial}%
- Denial: {probabilities.deny}%

Predict:
1. The carrier's likely strategy (1-2 sentences)
2. Common tactics they'll use (3 items)
3. Expected timeline (1 sentence)

Be specific and tactical. Respond with only a JSON object of this shape:
{{"likelyStrategy": "...", "commonTactics": ["...", "...", "..."], "timeline": "..."}}"""

    def parse_response(self, response_text: str, *args: Any) -> CarrierBehavior:
        data = ResponseFormatter.extract_json_from_response(response_text)
        if data is None:
            logger.debug("No JSON object in carrier behavior reply, reading it line by line")
            return self._from_lines(response_text)

        behavior = None
        if ResponseFormatter.validate_json_structure(data, ["likelyStrategy"]):
            behavior = self._from_json(data)
        if behavior is None:
            raise ValueError(f"carrier behavior JSON is malformed: {sorted(data)}")
        return behavior

    def fallback(self, *args: Any) -> CarrierBehavior:
        return FALLBACK_BEHAVIOR

    @staticmethod
    def _from_json(data: dict) -> Optional[CarrierBehavior]:
        strategy = data.get("likelyStrategy")
        if not isinstance(strategy, str) or not strategy.strip():
            return None

        raw_tactics = data.get("commonTactics") or []
        if not isinstance(raw_tactics, list):
            return None
        tactics: List[str] = [
            str(tactic).strip() for tactic in raw_tactics if str(tactic).strip()
        ][:MAX_TACTICS]

        timeline = data.get("timeline")
        if not isinstance(timeline, str) or not timeline.strip():
            timeline = DEFAULT_TIMELINE

        return CarrierBehavior(
            likely_strategy=strategy.strip(),
            common_tactics=tuple(tactics),
            timeline=timeline.strip(),
        )

    @staticmethod
    def _from_lines(response_text: str) -> CarrierBehavior:
        lines = ResponseFormatter.non_empty_lines(response_text)
        if not lines:
            raise ValueError("carrier behavior reply has no content")

        return CarrierBehavior(
            likely_strategy=lines[0],
            common_tactics=tuple(lines[1:1 + MAX_TACTICS]),
            timeline=lines[-1],
        )
