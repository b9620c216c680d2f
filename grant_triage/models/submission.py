"""ProjectSubmission - raw payload from the multi-step eligibility form.

The form posts camelCase JSON and still uses the legacy registration values
(``yes`` / ``in_process`` / ``no``). ``to_applicant_profile`` normalizes it
into the ApplicantProfile the engine consumes.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from .applicant_profile import ApplicantProfile, calculate_business_size
from .enums import (
    BusinessAge,
    BusinessSize,
    LegalStructure,
    ProjectLocation,
    RegistrationStatus,
)
from .project_costs import ProjectCosts


_FORM_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


class BusinessBasics(BaseModel):
    name: str = ""
    registration_status: RegistrationStatus = RegistrationStatus.REGISTERED
    legal_structure: LegalStructure = LegalStructure.LIMITED_COMPANY
    size: Optional[BusinessSize] = Field(None, description="Derived from headcount/turnover when absent")
    age: BusinessAge = BusinessAge.ESTABLISHED
    employee_count: int = 0
    annual_turnover: float = 0.0
    has_exceeded_de_minimis: bool = False

    model_config = _FORM_CONFIG

    @field_validator("registration_status", mode="before")
    @classmethod
    def legacy_registration_status(cls, v):
        """Map the form's yes/in_process/no onto the catalog vocabulary."""
        if isinstance(v, str):
            return RegistrationStatus(v.lower())
        return v


class ProjectActivities(BaseModel):
    primary_nace: Optional[str] = None
    primary_activity: Optional[str] = None
    sub_activity: Optional[str] = None

    model_config = _FORM_CONFIG


class ProjectSubmission(BaseModel):
    """Complete form submission."""

    business_basics: BusinessBasics = Field(default_factory=BusinessBasics)
    project_activities: ProjectActivities = Field(default_factory=ProjectActivities)
    project_location: ProjectLocation = ProjectLocation.MALTA
    costs: ProjectCosts = Field(default_factory=ProjectCosts)

    model_config = _FORM_CONFIG

    def resolved_size(self) -> BusinessSize:
        basics = self.business_basics
        if basics.size is not None:
            return basics.size
        return calculate_business_size(basics.employee_count, basics.annual_turnover)

    def to_applicant_profile(self) -> ApplicantProfile:
        basics = self.business_basics
        activities = self.project_activities
        return ApplicantProfile(
            business_size=self.resolved_size(),
            business_age=basics.age,
            legal_structure=basics.legal_structure,
            registration_status=basics.registration_status,
            project_location=self.project_location,
            nace_code=activities.primary_nace,
            primary_activity=activities.primary_activity,
            sub_activity=activities.sub_activity,
            has_exceeded_de_minimis=basics.has_exceeded_de_minimis,
            costs=self.costs,
            business_name=basics.name or None,
            employee_count=basics.employee_count,
            annual_turnover=basics.annual_turnover,
        )
