"""Deterministic prediction of the carrier's next action."""

from ..models.claim import PredictionInput
from ..models.prediction import Probabilities

LIKELY_DENIAL = "Likely to request additional documentation or deny claim"
LIKELY_PARTIAL = "Likely to offer partial approval with reduced scope"
LIKELY_APPROVAL = "Likely to approve claim with minor adjustments"
REQUEST_VIDEO = "May request video evidence or additional photos"
QUESTION_CAUSATION = "May question storm causation due to distance"
STANDARD_REVIEW = "Standard review process - expect response in 2-3 weeks"


def predict_next_move(prediction_input: PredictionInput, probabilities: Probabilities) -> str:
    """Return the first matching carrier action, strongest signal first."""
    if probabilities.deny > 60:
        return LIKELY_DENIAL

    if probabilities.partial > probabilities.full:
        return LIKELY_PARTIAL

    if probabilities.full > 70:
        return LIKELY_APPROVAL

    if not prediction_input.has_video:
        return REQUEST_VIDEO

    distance = prediction_input.storm_distance
    if distance is not None and distance > 10:
        return QUESTION_CAUSATION

    return STANDARD_REVIEW
