"""Claim lifecycle prediction: outcome probabilities, risk flags and carrier behavior."""

from .models.claim import DamageFlag, DominusAnalysis, PredictionInput, StormImpact
from .models.prediction import (
    CarrierBehavior,
    PredictionOutput,
    Priority,
    Probabilities,
    RecommendedStep,
    SuccessPathStep,
)
from .predictor import ClaimLifecyclePredictor, predict_claim_lifecycle

__all__ = [
    "DamageFlag",
    "DominusAnalysis",
    "PredictionInput",
    "StormImpact",
    "CarrierBehavior",
    "PredictionOutput",
    "Priority",
    "Probabilities",
    "RecommendedStep",
    "SuccessPathStep",
    "ClaimLifecyclePredictor",
    "predict_claim_lifecycle",
]
