"""LLM-backed prediction agents."""

from .base import BasePredictionAgent, TextGenerationClient
from .carrier_behavior import CarrierBehaviorAgent, FALLBACK_BEHAVIOR
from .summary import ClaimSummaryAgent, templated_summary

__all__ = [
    'BasePredictionAgent',
    'TextGenerationClient',
    'CarrierBehaviorAgent',
    'FALLBACK_BEHAVIOR',
    'ClaimSummaryAgent',
    'templated_summary'
]
