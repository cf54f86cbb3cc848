"""Confidence scoring: how much evidence backs a prediction."""

from ..models.claim import PredictionInput
from ..models.prediction import Probabilities

BASE_CONFIDENCE = 50
STORM_DATA_BONUS = 15
DAMAGE_ANALYSIS_BONUS = 15
VIDEO_BONUS = 10
PHOTO_SET_BONUS = 10
PHOTO_SET_SIZE = 10

# (threshold, bonus) pairs; every threshold the leading outcome reaches adds its bonus
CERTAINTY_BONUSES = ((70, 10), (80, 10))


def calculate_confidence_score(
    prediction_input: PredictionInput,
    probabilities: Probabilities
) -> int:
    """Score evidence coverage and distribution certainty on a 0-100 scale."""
    confidence = BASE_CONFIDENCE

    if prediction_input.storm_impact is not None:
        confidence += STORM_DATA_BONUS
    if prediction_input.dominus_analysis is not None:
        confidence += DAMAGE_ANALYSIS_BONUS
    if prediction_input.has_video:
        confidence += VIDEO_BONUS
    if prediction_input.photo_count and prediction_input.photo_count >= PHOTO_SET_SIZE:
        confidence += PHOTO_SET_BONUS

    leading = probabilities.maximum
    for threshold, bonus in CERTAINTY_BONUSES:
        if leading >= threshold:
            confidence += bonus

    return max(0, min(100, confidence))
