"""Hard eligibility filters for grant schemes.

Nine independent checks run in a fixed order. Every check runs even after an
earlier one has failed so the notes stay complete for display; the exclusion
reason is the note of the last failing check.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..formatting import format_eur
from ..models.applicant_profile import ApplicantProfile
from ..models.enums import (
    DE_MINIMIS_FRAMEWORK,
    LEGAL_STRUCTURE_LABELS,
    LEGAL_STRUCTURE_SHORT_LABELS,
    BusinessSize,
    RegistrationStatus,
)
from ..models.grant_scheme import GrantScheme
from ..models.triage_result import FilterCheck, last_failure_note

logger = logging.getLogger(__name__)


@dataclass
class FilterStageResult:
    """Outcome of the filter stage for one scheme."""

    eligible: bool
    notes: list[str] = field(default_factory=list)
    checks: list[FilterCheck] = field(default_factory=list)

    @property
    def exclusion_reason(self) -> Optional[str]:
        return last_failure_note(self.checks)


def evaluate_filters(scheme: GrantScheme, profile: ApplicantProfile) -> FilterStageResult:
    """Run every hard filter for ``scheme`` against ``profile``.

    Order:
    1. Registration status
    2. Sub-activity
    3. Legal structure
    4. De minimis ceiling
    5. Minimum investment
    6. Named scheme thresholds
    7. NACE code
    8. Business size
    9. Startup requirement

    Args:
        scheme: Catalog entry to evaluate
        profile: Applicant profile

    Returns:
        FilterStageResult with eligibility, failure notes and the check trail
    """
    checks = [check(scheme, profile) for check in FILTER_PIPELINE]
    notes = [c.note for c in checks if not c.passed and c.note]
    eligible = all(c.passed for c in checks)

    if not eligible:
        logger.debug(
            "Scheme %s failed filters: %s",
            scheme.id,
            ", ".join(c.name for c in checks if not c.passed),
        )

    return FilterStageResult(eligible=eligible, notes=notes, checks=checks)


def check_registration_status(scheme: GrantScheme, profile: ApplicantProfile) -> FilterCheck:
    """Unregistered applicants need an explicit opt-in; in-progress ones need no hard 'registered only'."""
    allowed = scheme.allowed_registration_statuses or []
    status = profile.registration_status

    if status == RegistrationStatus.NOT_REGISTERED:
        if RegistrationStatus.NOT_REGISTERED.value not in allowed:
            return FilterCheck(
                name="registration_status",
                passed=False,
                note="This scheme requires a registered or in-formation business",
            )
    elif status == RegistrationStatus.IN_PROGRESS:
        if allowed and not (
            RegistrationStatus.IN_PROGRESS.value in allowed
            or RegistrationStatus.REGISTERED.value in allowed
        ):
            return FilterCheck(
                name="registration_status",
                passed=False,
                note="This scheme requires a fully registered business",
            )

    return FilterCheck(name="registration_status", passed=True)


def check_sub_activity(scheme: GrantScheme, profile: ApplicantProfile) -> FilterCheck:
    supported = scheme.supported_sub_activities
    if supported and profile.sub_activity and profile.sub_activity not in supported:
        return FilterCheck(
            name="sub_activity",
            passed=False,
            note="Your specific sub-activity is not supported by this scheme",
        )
    return FilterCheck(name="sub_activity", passed=True)


def check_legal_structure(scheme: GrantScheme, profile: ApplicantProfile) -> FilterCheck:
    """Check the applicant's legal form against the scheme's allowed structures."""
    allowed = scheme.allowed_legal_structures
    if not allowed:
        return FilterCheck(name="legal_structure", passed=True)

    structure = profile.legal_structure.value
    if structure in allowed:
        return FilterCheck(name="legal_structure", passed=True)

    required = ", ".join(LEGAL_STRUCTURE_SHORT_LABELS.get(s, "Ltd") for s in allowed)
    return FilterCheck(
        name="legal_structure",
        passed=False,
        note=f"This scheme is not available for {LEGAL_STRUCTURE_LABELS[structure]} — requires: {required}",
    )


def check_de_minimis(scheme: GrantScheme, profile: ApplicantProfile) -> FilterCheck:
    if profile.has_exceeded_de_minimis and scheme.aid_framework == DE_MINIMIS_FRAMEWORK:
        return FilterCheck(
            name="de_minimis",
            passed=False,
            note="Excluded: You have received > €300,000 in state aid (De Minimis limit exceeded)",
        )
    return FilterCheck(name="de_minimis", passed=True)


def check_minimum_investment(scheme: GrantScheme, profile: ApplicantProfile) -> FilterCheck:
    min_investment = scheme.min_investment_required or 0
    if profile.total_project_cost < min_investment:
        return FilterCheck(
            name="minimum_investment",
            passed=False,
            note=f"Minimum investment required: {format_eur(min_investment)}",
        )
    return FilterCheck(name="minimum_investment", passed=True)


def check_named_threshold(scheme: GrantScheme, profile: ApplicantProfile) -> FilterCheck:
    """Apply a scheme's named project-cost threshold, which may differ for SMEs and large enterprises."""
    threshold = scheme.named_threshold
    if threshold is None:
        return FilterCheck(name="named_threshold", passed=True)

    if profile.is_sme:
        minimum = threshold.min_project_cost_sme
        audience = "SMEs"
    else:
        minimum = threshold.min_project_cost_large
        audience = "large enterprises"

    if minimum is None:
        return FilterCheck(name="named_threshold", passed=True)

    cost = profile.total_project_cost
    below = cost <= minimum if threshold.strictly_above else cost < minimum
    if not below:
        return FilterCheck(name="named_threshold", passed=True)

    if threshold.min_project_cost_sme == threshold.min_project_cost_large:
        note = f"{threshold.label} requires a minimum project value of {format_eur(minimum)}"
    else:
        note = f"{threshold.label} requires a minimum project cost of {format_eur(minimum)} for {audience}"
    return FilterCheck(name="named_threshold", passed=False, note=note)


def check_nace_code(scheme: GrantScheme, profile: ApplicantProfile) -> FilterCheck:
    """Empty allow-list passes everyone; an applicant without a code fails any restricted scheme."""
    allowed = scheme.eligible_nace_codes
    if not allowed or (profile.nace_code and profile.nace_code in allowed):
        return FilterCheck(name="nace_code", passed=True)
    return FilterCheck(
        name="nace_code",
        passed=False,
        note="Industry sector (NACE code) not eligible for this scheme",
    )


def check_business_size(scheme: GrantScheme, profile: ApplicantProfile) -> FilterCheck:
    """micro_only admits micro only; sme_only excludes large. Both flags apply together."""
    if scheme.micro_only and profile.business_size != BusinessSize.MICRO:
        return FilterCheck(
            name="business_size",
            passed=False,
            note="This scheme is only available for micro enterprises (≤ 10 employees)",
        )
    if scheme.sme_only and not profile.is_sme:
        return FilterCheck(
            name="business_size",
            passed=False,
            note="This scheme is only available for SMEs (Micro, Small, Medium enterprises)",
        )
    return FilterCheck(name="business_size", passed=True)


def check_startup_requirement(scheme: GrantScheme, profile: ApplicantProfile) -> FilterCheck:
    """Only schemes flagged startup_required exclude established businesses."""
    if scheme.startup_required and not profile.is_startup:
        return FilterCheck(
            name="startup_requirement",
            passed=False,
            note="This scheme is only available for startups (businesses less than 5 years old)",
        )
    return FilterCheck(name="startup_requirement", passed=True)


FILTER_PIPELINE: tuple[Callable[[GrantScheme, ApplicantProfile], FilterCheck], ...] = (
    check_registration_status,
    check_sub_activity,
    check_legal_structure,
    check_de_minimis,
    check_minimum_investment,
    check_named_threshold,
    check_nace_code,
    check_business_size,
    check_startup_requirement,
)
