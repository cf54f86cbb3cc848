"""Deterministic scoring components for claim lifecycle prediction."""

from .probability import calculate_probabilities, normalize
from .risk_flags import generate_risk_flags
from .recommendations import generate_recommended_steps
from .confidence import calculate_confidence_score
from .success_path import SUCCESS_PATH, success_path
from .next_move import predict_next_move

__all__ = [
    'calculate_probabilities',
    'normalize',
    'generate_risk_flags',
    'generate_recommended_steps',
    'calculate_confidence_score',
    'SUCCESS_PATH',
    'success_path',
    'predict_next_move'
]
