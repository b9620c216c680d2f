"""Triage engine: evaluates grant schemes against an applicant and ranks them.

Per scheme the data flows Filter -> Apportion -> Rate/Cap -> Minimum grant
gate -> Score. Schemes are evaluated independently; nothing here performs I/O
or mutates its inputs.
"""

import logging
from typing import Iterable, Optional

from ..apportionment import apportion
from ..eligibility import evaluate_filters
from ..models.applicant_profile import ApplicantProfile
from ..models.grant_scheme import GrantScheme
from ..models.triage_result import TriageResult
from ..rates import apply_cap, check_minimum_grant, resolve_rate
from ..scorer import DEFAULT_WEIGHTS, ScoringWeights, score_match

logger = logging.getLogger(__name__)

NO_COST_MATCH_NOTE = "No specific cost categories matched - verify eligible costs with scheme guidelines"
BONUS_REGION_NOTE = "Gozo location bonus applied to aid intensity"


def evaluate_scheme(
    scheme: GrantScheme,
    profile: ApplicantProfile,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> TriageResult:
    """Evaluate one scheme for one applicant.

    Args:
        scheme: Catalog entry
        profile: Applicant profile
        weights: Match-score weights

    Returns:
        TriageResult with verdict, funding estimate, notes and check trail
    """
    stage = evaluate_filters(scheme, profile)
    notes = list(stage.notes)
    checks = list(stage.checks)

    costs = apportion(profile.costs, scheme.eligible_costs)
    aid_intensity = resolve_rate(scheme, profile)

    grant, cap_note = apply_cap(costs.total * aid_intensity, scheme)
    if cap_note:
        notes.append(cap_note)

    gate = check_minimum_grant(scheme, grant)
    checks.append(gate)
    if not gate.passed and gate.note:
        notes.append(gate.note)

    is_eligible = stage.eligible and gate.passed
    match_score = score_match(len(costs.matched_labels), aid_intensity, is_eligible, weights)

    if is_eligible and not costs.matched_labels:
        notes.append(NO_COST_MATCH_NOTE)
    if is_eligible and profile.in_bonus_region:
        notes.append(BONUS_REGION_NOTE)

    logger.debug(
        "Evaluated %s: eligible=%s grant=%.2f rate=%.2f score=%d",
        scheme.id,
        is_eligible,
        grant,
        aid_intensity,
        match_score,
    )

    return TriageResult(
        grant_id=scheme.id,
        scheme_name=scheme.scheme_name,
        scheme_code=scheme.scheme_code,
        is_eligible=is_eligible,
        match_score=match_score,
        total_eligible_costs=costs.total,
        applicable_aid_intensity=aid_intensity,
        estimated_max_grant=grant,
        matched_cost_categories=costs.matched_labels,
        notes=notes,
        checks=checks,
    )


def active_schemes(schemes: Iterable[GrantScheme]) -> list[GrantScheme]:
    """Drop schemes explicitly marked inactive."""
    return [s for s in schemes if s.is_active is not False]


def evaluate_all(
    schemes: Iterable[GrantScheme],
    profile: ApplicantProfile,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[TriageResult]:
    """Evaluate every active scheme, in catalog order."""
    return [evaluate_scheme(s, profile, weights) for s in active_schemes(schemes)]


def select_best(results: Iterable[TriageResult]) -> Optional[TriageResult]:
    """Pick the highest-value eligible result, or None when nothing qualifies.

    Ordering: estimated grant descending, then match score descending, then
    scheme id ascending.
    """
    eligible = [r for r in results if r.is_eligible]
    if not eligible:
        logger.info("No eligible grant scheme found")
        return None

    eligible.sort(key=lambda r: (-r.estimated_max_grant, -r.match_score, r.grant_id))
    best = eligible[0]
    logger.info(
        "Best grant: %s (%.2f) out of %d eligible",
        best.grant_id,
        best.estimated_max_grant,
        len(eligible),
    )
    return best


def find_best_grant(
    profile: ApplicantProfile,
    schemes: Iterable[GrantScheme],
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> Optional[TriageResult]:
    """Return the highest-value eligible scheme, or None when nothing qualifies."""
    return select_best(evaluate_all(schemes, profile, weights))


def find_all_matching_grants(
    profile: ApplicantProfile,
    schemes: Iterable[GrantScheme],
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[TriageResult]:
    """Evaluate all active schemes, eligible first, then by estimated grant descending.

    Ineligible results keep their exclusion reason for display. Ties fall back
    to scheme id so the order is reproducible.
    """
    results = evaluate_all(schemes, profile, weights)
    results.sort(key=lambda r: (not r.is_eligible, -r.estimated_max_grant, r.grant_id))
    logger.info(
        "Triage complete: %d schemes evaluated, %d eligible",
        len(results),
        sum(1 for r in results if r.is_eligible),
    )
    return results
