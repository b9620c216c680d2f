"""Match scoring for eligible grant schemes."""

from .engine import score_match
from .weights import DEFAULT_WEIGHTS, load_weights, ScoringWeights

__all__ = [
    "score_match",
    "DEFAULT_WEIGHTS",
    "load_weights",
    "ScoringWeights",
]
