"""Recommended next steps for a claim."""

from typing import List, Sequence

from ..models.claim import PredictionInput
from ..models.prediction import Priority, Probabilities, RecommendedStep

PHOTO_TARGET = 10
FAR_DISTANCE_MILES = 10
DENIAL_RISK_THRESHOLD = 50
STRONG_APPROVAL_THRESHOLD = 70

ADD_PHOTOS = RecommendedStep(
    title="Add more photo documentation",
    description="Upload at least 10-15 clear photos showing damage from multiple angles.",
    priority=Priority.HIGH,
    reasoning="Insufficient photo evidence weakens claim strength.",
)

CREATE_VIDEO = RecommendedStep(
    title="Create video presentation",
    description="Generate an AI-powered video walkthrough of the damage.",
    priority=Priority.MEDIUM,
    reasoning="Video evidence significantly increases approval likelihood.",
)

STRENGTHEN_STORM_CORRELATION = RecommendedStep(
    title="Strengthen storm correlation",
    description="Run detailed storm impact analysis to prove damage correlation.",
    priority=Priority.HIGH,
    reasoning="Property distance from storm center may be questioned by carrier.",
)


def generate_recommended_steps(
    prediction_input: PredictionInput,
    probabilities: Probabilities,
    risk_flags: Sequence[str] = ()
) -> List[RecommendedStep]:
    """
    Map the distribution and claim signals to prioritized actions.

    Conditions are independent and evaluated in a fixed order. A missing
    video counts as no video here, so a bare claim still gets the video
    recommendation.

    Args:
        prediction_input: Claim signals
        probabilities: Output of the probability model
        risk_flags: Flags already raised for the claim (not consulted yet)

    Returns:
        Ordered list of recommended steps (possibly empty)
    """
    steps: List[RecommendedStep] = []

    if probabilities.deny > DENIAL_RISK_THRESHOLD:
        steps.append(RecommendedStep(
            title="Prepare denial rebuttal",
            description="High denial risk detected. Start preparing appeal documentation now.",
            priority=Priority.HIGH,
            reasoning=f"Denial probability is {probabilities.deny}%. Proactive preparation critical.",
        ))

    if prediction_input.photo_count and prediction_input.photo_count < PHOTO_TARGET:
        steps.append(ADD_PHOTOS)

    if not prediction_input.has_video:
        steps.append(CREATE_VIDEO)

    distance = prediction_input.storm_distance
    if distance is not None and distance > FAR_DISTANCE_MILES:
        steps.append(STRENGTHEN_STORM_CORRELATION)

    if probabilities.full > STRONG_APPROVAL_THRESHOLD:
        steps.append(RecommendedStep(
            title="Proceed with confidence",
            description="Strong approval indicators. Push for full settlement immediately.",
            priority=Priority.MEDIUM,
            reasoning=f"Full approval probability is {probabilities.full}%. Don't settle for less.",
        ))

    return steps
