"""Outcome probability model for claim lifecycle prediction.

Starts from a fixed full/partial/deny baseline, applies additive point
deltas for every signal present on the input, and normalizes the result
to whole percentages that sum to exactly 100.
"""

import logging
import math
from dataclasses import dataclass

from ..models.claim import DamageFlag, PredictionInput, StormImpact
from ..models.prediction import Probabilities
from ..utils.errors import PredictionInvariantError

logger = logging.getLogger(__name__)

BASELINE_FULL = 50
BASELINE_PARTIAL = 30
BASELINE_DENY = 20

HIGH_URGENCY_LEVELS = frozenset({"critical", "high"})

LARGE_PHOTO_SET = 20
SMALL_PHOTO_SET = 5
AGED_CLAIM_DAYS = 90


@dataclass
class _Accumulator:
    """Running point totals before normalization."""
    full: float = BASELINE_FULL
    partial: float = BASELINE_PARTIAL
    deny: float = BASELINE_DENY

    def adjust(self, full: float = 0, partial: float = 0, deny: float = 0) -> None:
        self.full += full
        self.partial += partial
        self.deny += deny


def _round_half_up(value: float) -> int:
    # round() is banker's rounding; x.5 must always go up here
    return int(math.floor(value + 0.5))


def _apply_storm(acc: _Accumulator, storm: StormImpact) -> None:
    hail = storm.hail_size
    if hail is not None:
        if hail >= 2.0:
            acc.adjust(full=20, deny=-15)
        elif hail >= 1.5:
            acc.adjust(full=10, deny=-5)
        elif hail < 1.0:
            acc.adjust(full=-10, deny=15)

    wind = storm.wind_speed
    if wind is not None:
        if wind >= 80:
            acc.adjust(full=15, deny=-10)
        elif wind >= 60:
            acc.adjust(full=5)
        elif wind < 40:
            acc.adjust(full=-5, deny=10)

    distance = storm.distance
    if distance is not None:
        if distance <= 2:
            acc.adjust(full=10, deny=-5)
        elif distance > 10:
            acc.adjust(full=-10, deny=15)

    severity = storm.severity_score
    if severity is not None:
        if severity >= 7.0:
            acc.adjust(full=15, deny=-10)
        elif severity < 4.0:
            acc.adjust(full=-15, deny=20)


def _apply_damage_analysis(acc: _Accumulator, prediction_input: PredictionInput) -> None:
    analysis = prediction_input.dominus_analysis
    if analysis.urgency in HIGH_URGENCY_LEVELS:
        acc.adjust(full=10, deny=-5)
    if analysis.has_flag(DamageFlag.COMPREHENSIVE_DAMAGE):
        acc.adjust(full=5)
    if analysis.has_flag(DamageFlag.MINIMAL_DAMAGE):
        acc.adjust(full=-10, deny=15)
    if analysis.has_flag(DamageFlag.MISSING_DOCUMENTATION):
        acc.adjust(full=-15, partial=5, deny=10)


def _apply_media_and_history(acc: _Accumulator, prediction_input: PredictionInput) -> None:
    if prediction_input.has_video:
        acc.adjust(full=10, deny=-5)

    photos = prediction_input.photo_count
    if photos:
        if photos >= LARGE_PHOTO_SET:
            acc.adjust(full=5)
        elif photos < SMALL_PHOTO_SET:
            acc.adjust(full=-5, deny=10)

    # A prior denial outweighs every other signal
    if prediction_input.has_denial_letter:
        acc.adjust(full=-20, partial=-10, deny=30)

    days = prediction_input.days_since_creation
    if days and days > AGED_CLAIM_DAYS:
        acc.adjust(full=-5, deny=10)


def normalize(full: float, partial: float, deny: float) -> Probabilities:
    """
    Rescale raw point totals to whole percentages summing to 100.

    Denial absorbs the rounding remainder. Full is clamped to [0, 100] and
    partial to [0, 100 - full], so the remainder is never negative even when
    a raw total went below zero.

    Raises:
        PredictionInvariantError: If the result is not a valid distribution
    """
    total = full + partial + deny
    if total <= 0:
        raise PredictionInvariantError.distribution_invalid(
            int(full), int(partial), int(deny)
        )

    full_pct = max(0, min(100, _round_half_up(full / total * 100)))
    partial_pct = max(0, min(100 - full_pct, _round_half_up(partial / total * 100)))
    deny_pct = 100 - full_pct - partial_pct

    probabilities = Probabilities(full=full_pct, partial=partial_pct, deny=deny_pct)
    if not probabilities.is_valid():
        raise PredictionInvariantError.distribution_invalid(full_pct, partial_pct, deny_pct)
    return probabilities


def calculate_probabilities(prediction_input: PredictionInput) -> Probabilities:
    """
    Compute the full/partial/deny distribution for a claim.

    Args:
        prediction_input: Claim signals; absent fields are skipped

    Returns:
        Probabilities summing to exactly 100
    """
    acc = _Accumulator()

    if prediction_input.storm_impact is not None:
        _apply_storm(acc, prediction_input.storm_impact)

    if prediction_input.dominus_analysis is not None:
        _apply_damage_analysis(acc, prediction_input)

    _apply_media_and_history(acc, prediction_input)

    logger.debug(
        f"Raw outcome points: full={acc.full}, partial={acc.partial}, deny={acc.deny}"
    )

    return normalize(acc.full, acc.partial, acc.deny)
