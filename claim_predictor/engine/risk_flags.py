"""Risk flag generation for claim predictions."""

from typing import List

from ..models.claim import DamageFlag, PredictionInput
from ..models.prediction import Probabilities

HIGH_DENIAL_RISK = "High denial risk detected"
FAR_FROM_STORM = "Property located far from storm center"
INSUFFICIENT_PHOTOS = "Insufficient documentation - add more photos"
NO_VIDEO = "No video evidence - carrier may request more proof"
MISSING_DOCUMENTATION = "Missing critical documentation"
PRIOR_DENIAL = "Claim previously denied - appeal required"
AGED_CLAIM = "Aged claim - carrier may scrutinize heavily"
SMALL_HAIL = "Small hail size - carrier may argue insufficient damage"

DENIAL_RISK_THRESHOLD = 50
FAR_DISTANCE_MILES = 10
MIN_PHOTOS = 5
AGED_CLAIM_DAYS = 90
SMALL_HAIL_INCHES = 1.0


def generate_risk_flags(
    prediction_input: PredictionInput,
    probabilities: Probabilities
) -> List[str]:
    """
    Derive warnings from the claim signals and computed distribution.

    Flags are emitted in a fixed order: denial risk, then data quality,
    then history and storm size. Every matching condition contributes.
    A missing signal never raises a flag on its own; video is flagged only
    when the claim explicitly reports having none.

    Args:
        prediction_input: Claim signals
        probabilities: Output of the probability model

    Returns:
        Ordered list of flag strings
    """
    flags: List[str] = []

    if probabilities.deny > DENIAL_RISK_THRESHOLD:
        flags.append(HIGH_DENIAL_RISK)

    distance = prediction_input.storm_distance
    if distance is not None and distance > FAR_DISTANCE_MILES:
        flags.append(FAR_FROM_STORM)

    if prediction_input.photo_count and prediction_input.photo_count < MIN_PHOTOS:
        flags.append(INSUFFICIENT_PHOTOS)

    if prediction_input.has_video is False:
        flags.append(NO_VIDEO)

    if prediction_input.has_damage_flag(DamageFlag.MISSING_DOCUMENTATION):
        flags.append(MISSING_DOCUMENTATION)

    if prediction_input.has_denial_letter:
        flags.append(PRIOR_DENIAL)

    days = prediction_input.days_since_creation
    if days and days > AGED_CLAIM_DAYS:
        flags.append(AGED_CLAIM)

    hail = prediction_input.hail_size
    if hail is not None and hail < SMALL_HAIL_INCHES:
        flags.append(SMALL_HAIL)

    return flags
