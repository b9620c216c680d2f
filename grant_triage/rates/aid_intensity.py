"""Aid-intensity lookup, grant ceiling and minimum grant gate."""

import logging
from typing import Optional

from ..formatting import format_eur
from ..models.applicant_profile import ApplicantProfile
from ..models.enums import HOSPITALITY_ACTIVITY
from ..models.grant_scheme import GrantScheme
from ..models.triage_result import FilterCheck

logger = logging.getLogger(__name__)


def resolve_rate(scheme: GrantScheme, profile: ApplicantProfile) -> float:
    """Resolve the aid-intensity fraction that applies to this applicant.

    First match wins:
    1. Hospitality activity with a hospitality rate configured
    2. Startup with a startup rate configured
    3. SME: Gozo SME rate (in Gozo), else SME rate, else standard rate
    4. Large: Gozo large-entity rate (in Gozo), else large-entity rate, else standard rate

    Activity- and age-specific rates, and the Gozo rates, count as configured
    only when non-zero. Missing rates fall through to 0.
    """
    if profile.primary_activity == HOSPITALITY_ACTIVITY and scheme.hospitality_aid_intensity:
        return scheme.hospitality_aid_intensity

    if profile.is_startup and scheme.startup_aid_intensity:
        return scheme.startup_aid_intensity

    if profile.is_sme:
        if profile.in_bonus_region and scheme.sme_gozo_aid_intensity:
            return scheme.sme_gozo_aid_intensity
        return _first_configured(scheme.sme_aid_intensity, scheme.standard_aid_intensity)

    if profile.in_bonus_region and scheme.large_entity_gozo_aid_intensity:
        return scheme.large_entity_gozo_aid_intensity
    return _first_configured(scheme.large_entity_aid_intensity, scheme.standard_aid_intensity)


def _first_configured(*rates: Optional[float]) -> float:
    for rate in rates:
        if rate is not None:
            return rate
    return 0.0


def apply_cap(potential_grant: float, scheme: GrantScheme) -> tuple[float, Optional[str]]:
    """Clamp ``potential_grant`` to the scheme ceiling.

    Returns:
        (grant, note) where note is set only when clamping happened
    """
    ceiling = scheme.max_grant_amount
    if ceiling and potential_grant > ceiling:
        logger.debug("Scheme %s: grant %.2f capped at %.2f", scheme.id, potential_grant, ceiling)
        return ceiling, f"Grant capped at maximum of {format_eur(ceiling)}"
    return potential_grant, None


def check_minimum_grant(scheme: GrantScheme, grant: float) -> FilterCheck:
    """Gate a computed grant against the named and scheme-level minimums.

    Runs after the cap, so a scheme that passed every filter can still be
    excluded here.
    """
    threshold = scheme.named_threshold
    if threshold is not None and threshold.min_grant_amount and grant < threshold.min_grant_amount:
        return FilterCheck(
            name="minimum_grant",
            passed=False,
            note=f"{threshold.label} requires a minimum grant amount of {format_eur(threshold.min_grant_amount)}",
        )

    minimum = scheme.min_grant_amount or 0
    if minimum > 0 and grant < minimum:
        return FilterCheck(
            name="minimum_grant",
            passed=False,
            note=f"Calculated grant ({format_eur(grant)}) is below the minimum of {format_eur(minimum)}",
        )

    return FilterCheck(name="minimum_grant", passed=True)
