"""Shared Pydantic models for the grant triage engine and its collaborators."""

from .applicant_profile import ApplicantProfile, calculate_business_size, is_sme, is_startup
from .enums import (
    BusinessAge,
    BusinessSize,
    LegalStructure,
    ProjectLocation,
    RegistrationStatus,
)
from .grant_scheme import GrantScheme, NamedThreshold
from .project_costs import COST_LINES, CostItem, CostLine, ProjectCosts
from .submission import ProjectSubmission
from .triage_result import FilterCheck, TriageResult

__all__ = [
    "ApplicantProfile",
    "BusinessAge",
    "BusinessSize",
    "COST_LINES",
    "CostItem",
    "CostLine",
    "FilterCheck",
    "GrantScheme",
    "LegalStructure",
    "NamedThreshold",
    "ProjectCosts",
    "ProjectLocation",
    "ProjectSubmission",
    "RegistrationStatus",
    "TriageResult",
    "calculate_business_size",
    "is_sme",
    "is_startup",
]
