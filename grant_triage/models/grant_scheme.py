"""GrantScheme - catalog entry describing one funding scheme's rules."""

from typing import Optional

from pydantic import BaseModel, Field


class NamedThreshold(BaseModel):
    """Scheme-specific thresholds that sit outside the generic catalog columns.

    Populated when the catalog record is authored (see
    ``catalog.named_thresholds``); the engine only ever reads this record.
    """

    label: str = Field(..., description="Scheme label used in notes, e.g. 'Invest 2024'")
    min_project_cost_sme: Optional[float] = Field(None, description="Minimum total project cost for SMEs")
    min_project_cost_large: Optional[float] = Field(None, description="Minimum total project cost for large enterprises")
    strictly_above: bool = Field(
        default=False,
        description="Project cost must exceed the threshold rather than merely reach it",
    )
    min_grant_amount: Optional[float] = Field(None, description="Hard minimum for the computed grant")

    model_config = {"frozen": True}


class GrantScheme(BaseModel):
    """Immutable grant-scheme record as supplied by the Catalog Store.

    Null restriction lists mean "no restriction"; null booleans read as false;
    null amounts mean "unbounded".
    """

    # Identity
    id: str = Field(..., description="Catalog identifier")
    scheme_name: str = Field(..., description="Display name")
    scheme_code: Optional[str] = Field(None, description="Short scheme code")
    description: Optional[str] = Field(None, description="Scheme summary")

    # Funding bounds
    min_investment_required: Optional[float] = Field(None, description="Minimum total project cost")
    max_grant_amount: Optional[float] = Field(None, description="Grant ceiling")
    min_grant_amount: Optional[float] = Field(None, description="Smallest grant the scheme will award")
    max_investment_allowed: Optional[float] = Field(None, description="Informational investment ceiling")

    # Aid-intensity table (fractions 0.0-1.0)
    standard_aid_intensity: Optional[float] = None
    sme_aid_intensity: Optional[float] = None
    sme_gozo_aid_intensity: Optional[float] = None
    large_entity_aid_intensity: Optional[float] = None
    large_entity_gozo_aid_intensity: Optional[float] = None
    startup_aid_intensity: Optional[float] = None
    hospitality_aid_intensity: Optional[float] = None

    # Eligibility predicates
    eligible_nace_codes: Optional[list[str]] = Field(None, description="Allowed NACE codes")
    eligible_activities: Optional[list[str]] = Field(None, description="Allowed primary activities")
    supported_sub_activities: Optional[list[str]] = Field(None, description="Allowed sub-activities")
    allowed_legal_structures: Optional[list[str]] = Field(None, description="Allowed legal structures")
    allowed_registration_statuses: Optional[list[str]] = Field(None, description="Allowed registration statuses")
    micro_only: Optional[bool] = None
    sme_only: Optional[bool] = None
    startup_required: Optional[bool] = None
    aid_framework: Optional[str] = Field(None, description="State-aid framework tag, e.g. de_minimis")

    # Cost-category eligibility; None means the catalog gave no map at all
    eligible_costs: Optional[dict[str, bool]] = Field(None, description="Cost-line key -> eligible flag")

    named_threshold: Optional[NamedThreshold] = Field(None, description="Scheme-specific extra thresholds")

    # Grant form (informational)
    is_cash_grant: Optional[bool] = None
    is_refundable_grant: Optional[bool] = None
    is_tax_credit: Optional[bool] = None

    is_active: Optional[bool] = Field(..., description="Only an explicit False deactivates a scheme")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "id": "invest-2024",
                "scheme_name": "Invest 2024",
                "scheme_code": "ME-INVEST",
                "min_investment_required": 50000,
                "max_grant_amount": 800000,
                "sme_aid_intensity": 0.5,
                "sme_gozo_aid_intensity": 0.65,
                "large_entity_aid_intensity": 0.3,
                "eligible_costs": {
                    "equipment_machinery": True,
                    "premises_construction": True,
                },
                "aid_framework": "gber",
                "is_active": True,
            }
        },
    }
