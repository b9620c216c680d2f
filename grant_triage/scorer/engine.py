"""Match score for eligible grant schemes."""

import math

from .weights import DEFAULT_WEIGHTS, ScoringWeights


def score_match(
    matched_category_count: int,
    aid_intensity: float,
    is_eligible: bool,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> int:
    """Score a scheme 0-100 on cost-category breadth and funding generosity.

    With default weights this is
    ``min(100, round(matched/10 * 50 + aid_intensity * 50))``.
    Halves round up. Ineligible schemes always score 0.

    Args:
        matched_category_count: Number of matched cost-line labels
        aid_intensity: Resolved aid-intensity fraction
        is_eligible: Final eligibility verdict
        weights: Scoring weights configuration

    Returns:
        Integer score in [0, 100]
    """
    if not is_eligible:
        return 0

    raw = (
        (matched_category_count / weights.category_norm) * (weights.cost_coverage * 100)
        + aid_intensity * (weights.aid_intensity * 100)
    )
    return max(0, min(100, math.floor(raw + 0.5)))
