"""TriageResult - per-scheme verdict produced by the triage engine."""

from typing import Optional

from pydantic import BaseModel, Field, computed_field


class FilterCheck(BaseModel):
    """Outcome of one named eligibility check."""

    name: str = Field(..., description="Check identifier, e.g. 'legal_structure'")
    passed: bool = Field(..., description="Whether the check passed")
    note: Optional[str] = Field(None, description="Human-readable explanation when the check failed")

    model_config = {"frozen": True}


def last_failure_note(checks: list[FilterCheck]) -> Optional[str]:
    """Note of the last failing check, or None when every check passed."""
    for check in reversed(checks):
        if not check.passed:
            return check.note
    return None


class TriageResult(BaseModel):
    """Eligibility verdict and funding estimate for one (scheme, applicant) pair.

    ``checks`` is the ordered audit trail of every hard filter plus the
    minimum-grant gate; ``exclusion_reason`` is derived from it.
    """

    grant_id: str = Field(..., description="GrantScheme.id")
    scheme_name: str = Field(..., description="GrantScheme.scheme_name")
    scheme_code: Optional[str] = Field(None, description="GrantScheme.scheme_code")
    is_eligible: bool = Field(..., description="Final eligibility verdict")
    match_score: int = Field(..., ge=0, le=100, description="0-100 heuristic, 0 when ineligible")
    total_eligible_costs: float = Field(..., description="Apportioned eligible cost total")
    applicable_aid_intensity: float = Field(..., description="Resolved aid-intensity fraction")
    estimated_max_grant: float = Field(..., description="Capped grant estimate")
    matched_cost_categories: list[str] = Field(default_factory=list, description="Matched cost-line labels")
    notes: list[str] = Field(default_factory=list, description="Ordered human-readable notes")
    checks: list[FilterCheck] = Field(default_factory=list, description="Ordered check outcomes")

    model_config = {"frozen": True}

    @computed_field
    @property
    def exclusion_reason(self) -> Optional[str]:
        return last_failure_note(self.checks)
