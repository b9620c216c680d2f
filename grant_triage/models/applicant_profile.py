"""ApplicantProfile - normalized business/project facts the engine triages against."""

from typing import Optional

from pydantic import BaseModel, Field

from .enums import (
    BONUS_REGION,
    BusinessAge,
    BusinessSize,
    LegalStructure,
    ProjectLocation,
    RegistrationStatus,
)
from .project_costs import ProjectCosts


# (max employees exclusive, max turnover inclusive, size), checked in order
EU_SIZE_THRESHOLDS: tuple[tuple[int, float, BusinessSize], ...] = (
    (10, 2_000_000, BusinessSize.MICRO),
    (50, 10_000_000, BusinessSize.SMALL),
    (250, 50_000_000, BusinessSize.MEDIUM),
)

# Used when turnover is unknown: (max employees inclusive, size)
HEADCOUNT_ONLY_THRESHOLDS: tuple[tuple[int, BusinessSize], ...] = (
    (10, BusinessSize.MICRO),
    (50, BusinessSize.SMALL),
    (250, BusinessSize.MEDIUM),
)


def calculate_business_size(employee_count: int, annual_turnover: float) -> BusinessSize:
    """Classify an enterprise using the EU SME definition.

    Micro: < 10 employees and turnover <= EUR 2M; small: < 50 and <= EUR 10M;
    medium: < 250 and <= EUR 50M; anything else is large. A turnover of 0 is
    treated as unknown, in which case headcount alone decides (0-10 micro,
    11-50 small, 51-250 medium).
    """
    if not annual_turnover:
        for max_employees, size in HEADCOUNT_ONLY_THRESHOLDS:
            if employee_count <= max_employees:
                return size
        return BusinessSize.LARGE

    for max_employees, max_turnover, size in EU_SIZE_THRESHOLDS:
        if employee_count < max_employees and annual_turnover <= max_turnover:
            return size
    return BusinessSize.LARGE


def is_sme(size: BusinessSize) -> bool:
    return size in (BusinessSize.MICRO, BusinessSize.SMALL, BusinessSize.MEDIUM)


def is_startup(age: BusinessAge) -> bool:
    return age == BusinessAge.STARTUP


class ApplicantProfile(BaseModel):
    """Applicant business profile plus the project's cost breakdown.

    Built once per triage request and never mutated.
    """

    business_size: BusinessSize = Field(..., description="micro, small, medium or large")
    business_age: BusinessAge = Field(..., description="startup or established")
    legal_structure: LegalStructure = Field(..., description="self_employed, partnership or limited_company")
    registration_status: RegistrationStatus = Field(..., description="registered, in_progress or not_registered")
    project_location: ProjectLocation = Field(default=ProjectLocation.MALTA, description="malta or gozo")
    nace_code: Optional[str] = Field(None, description="Primary NACE section code")
    primary_activity: Optional[str] = Field(None, description="Primary project activity key")
    sub_activity: Optional[str] = Field(None, description="Optional sub-activity")
    has_exceeded_de_minimis: bool = Field(
        default=False,
        description="Cumulative state aid over the de minimis ceiling in the rolling period",
    )
    costs: ProjectCosts = Field(default_factory=ProjectCosts)

    # Informational, carried through for reports
    business_name: Optional[str] = None
    employee_count: Optional[int] = None
    annual_turnover: Optional[float] = None

    model_config = {"frozen": True}

    @property
    def is_sme(self) -> bool:
        return is_sme(self.business_size)

    @property
    def is_startup(self) -> bool:
        return is_startup(self.business_age)

    @property
    def in_bonus_region(self) -> bool:
        return self.project_location == BONUS_REGION

    @property
    def total_capex(self) -> float:
        return self.costs.total_capex

    @property
    def total_opex(self) -> float:
        return self.costs.total_opex

    @property
    def total_project_cost(self) -> float:
        return self.costs.total_project_cost
