"""Eligibility report assembled from triage results for e-mail delivery."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from ..formatting import format_eur
from ..models.applicant_profile import ApplicantProfile
from ..models.enums import PRIMARY_ACTIVITY_LABELS
from ..models.project_costs import CATEGORY_LABELS
from ..models.triage_result import TriageResult

logger = logging.getLogger(__name__)

SUBJECT_PREFIX = "Your Grant Eligibility Report"

NO_MATCH_TEXT = (
    "No matching grants found based on your project details. "
    "Consider adjusting your project costs or activities."
)

DISCLAIMER = (
    "Results shown are indicative only and do not guarantee eligibility or funding "
    "approval. Full eligibility depends on additional criteria assessed by the "
    "relevant managing authority."
)


class ReportOption(BaseModel):
    """One anonymised funding option in the report."""

    label: str = Field(..., description="'Option 1', 'Option 2', ...")
    grant_id: str
    estimated_coverage: float = Field(..., description="min(project cost * aid intensity, estimated grant)")
    aid_intensity: float
    match_score: int
    covered_costs: list[str] = Field(default_factory=list)


class EligibilityReport(BaseModel):
    """Report content handed to the mailer."""

    subject: str
    business_name: Optional[str] = None
    total_project_cost: float
    options: list[ReportOption] = Field(default_factory=list)
    body: str

    @property
    def best_coverage(self) -> float:
        return self.options[0].estimated_coverage if self.options else 0.0


def estimated_coverage(result: TriageResult, total_project_cost: float) -> float:
    return min(total_project_cost * result.applicable_aid_intensity, result.estimated_max_grant)


def _covered_costs(result: TriageResult, profile: ApplicantProfile) -> list[str]:
    """Matched cost lines, else every category the applicant entered costs for."""
    if result.matched_cost_categories:
        return list(result.matched_cost_categories)
    return [CATEGORY_LABELS[c] for c in profile.costs.categories_with_costs()]


def build_subject(best_coverage: float) -> str:
    if best_coverage > 0:
        return f"{SUBJECT_PREFIX} - {format_eur(best_coverage)} Potential Funding"
    return f"{SUBJECT_PREFIX} - Results"


def build_report(
    profile: ApplicantProfile,
    results: list[TriageResult],
    top_n: int = 3,
    generated_on: Optional[date] = None,
) -> EligibilityReport:
    """Build the applicant's report from the top ``top_n`` eligible results.

    Options are ranked by estimated coverage, highest first, and anonymised
    as "Option 1..N".
    """
    total = profile.total_project_cost
    eligible = [r for r in results if r.is_eligible]
    ranked = sorted(
        eligible,
        key=lambda r: (-estimated_coverage(r, total), r.grant_id),
    )[:top_n]

    options = [
        ReportOption(
            label=f"Option {i}",
            grant_id=r.grant_id,
            estimated_coverage=estimated_coverage(r, total),
            aid_intensity=r.applicable_aid_intensity,
            match_score=r.match_score,
            covered_costs=_covered_costs(r, profile),
        )
        for i, r in enumerate(ranked, start=1)
    ]

    best = options[0].estimated_coverage if options else 0.0
    body = render_text(profile, options, generated_on or date.today())
    logger.info("Built report with %d of %d eligible options", len(options), len(eligible))

    return EligibilityReport(
        subject=build_subject(best),
        business_name=profile.business_name,
        total_project_cost=total,
        options=options,
        body=body,
    )


def render_text(profile: ApplicantProfile, options: list[ReportOption], generated_on: date) -> str:
    """Plain-text report body."""
    lines: list[str] = [SUBJECT_PREFIX, ""]

    lines.append("Business details")
    if profile.business_name:
        lines.append(f"  Business: {profile.business_name}")
    lines.append(f"  Size: {profile.business_size.value.capitalize()}")
    lines.append(f"  Age: {profile.business_age.value.capitalize()}")
    lines.append(f"  Legal structure: {profile.legal_structure.value}")
    lines.append(f"  Location: {profile.project_location.value.capitalize()}")
    if profile.nace_code:
        lines.append(f"  NACE: {profile.nace_code}")
    if profile.primary_activity:
        activity = PRIMARY_ACTIVITY_LABELS.get(profile.primary_activity, profile.primary_activity)
        lines.append(f"  Activity: {activity}")
    if profile.sub_activity:
        lines.append(f"  Sub-activity: {profile.sub_activity}")
    lines.append("")

    lines.append("Project costs")
    current_category = None
    for line, item in profile.costs.iter_lines():
        if item.counted_amount <= 0:
            continue
        if line.category != current_category:
            current_category = line.category
            lines.append(f"  {CATEGORY_LABELS[line.category]}")
        lines.append(f"    {line.label}: {format_eur(item.amount)}")
    lines.append(f"  CAPEX: {format_eur(profile.total_capex)}")
    lines.append(f"  OPEX: {format_eur(profile.total_opex)}")
    lines.append(f"  Total project value: {format_eur(profile.total_project_cost)}")
    lines.append("")

    lines.append("Funding options")
    if not options:
        lines.append(f"  {NO_MATCH_TEXT}")
    for option in options:
        covered = ", ".join(option.covered_costs) or "General project costs"
        lines.append(
            f"  {option.label}: up to {format_eur(option.estimated_coverage)} "
            f"({option.aid_intensity * 100:.0f}% aid intensity)"
        )
        lines.append(f"    Covers: {covered}")
    lines.append("")

    lines.append(DISCLAIMER)
    lines.append(f"Generated on {generated_on.isoformat()}.")
    return "\n".join(lines)
