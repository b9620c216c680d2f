"""Supabase client for the grant catalog, assessments and leads."""

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from supabase import Client, create_client

from ..catalog import parse_schemes
from ..models.applicant_profile import ApplicantProfile
from ..models.grant_scheme import GrantScheme
from ..models.triage_result import TriageResult

logger = logging.getLogger(__name__)


class SupabaseClient:
    """Client for the grant_schemes, eligibility_* and leads tables."""

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
    ) -> None:
        """Initialize Supabase client from explicit args or env vars.

        Args:
            url: Supabase project URL (falls back to SUPABASE_URL env var).
            key: Supabase anon/service key (falls back to SUPABASE_KEY env var).
        """
        self._url = url or os.environ["SUPABASE_URL"]
        self._key = key or os.environ["SUPABASE_KEY"]
        self._client: Client = create_client(self._url, self._key)

    # ------------------------------------------------------------------
    # Catalog Store
    # ------------------------------------------------------------------

    def get_grant_schemes(self) -> List[GrantScheme]:
        """Return every grant scheme, active or not.

        Inactive schemes are filtered by the engine, so is_active is always
        selected along with the rest of the row.

        Returns:
            List of GrantScheme ordered by scheme_name.
        """
        response = (
            self._client.table("grant_schemes")
            .select("*")
            .order("scheme_name")
            .execute()
        )
        schemes = parse_schemes(response.data)
        logger.info("Loaded %d grant schemes from Supabase", len(schemes))
        return schemes

    # ------------------------------------------------------------------
    # Lead Store
    # ------------------------------------------------------------------

    def save_assessment(
        self,
        profile: ApplicantProfile,
        results: List[TriageResult],
        contact: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Persist an assessment and one eligibility_results row per result.

        Args:
            profile: Applicant profile that was triaged.
            results: Engine output for that profile.
            contact: Optional contact_name / contact_email / contact_phone / gdpr_consent.

        Returns:
            The new assessment id.
        """
        record = {
            "business_name": profile.business_name,
            "business_size": profile.business_size.value,
            "business_age": profile.business_age.value,
            "employee_count": profile.employee_count,
            "registration_status": profile.registration_status.value,
            "primary_nace_code": profile.nace_code,
            "primary_activity": profile.primary_activity,
            "sub_activity": profile.sub_activity,
            "project_location": profile.project_location.value,
            "project_costs": profile.costs.model_dump(mode="json", by_alias=True),
            "total_capex": profile.total_capex,
            "total_opex": profile.total_opex,
            "total_project_value": profile.total_project_cost,
            **(contact or {}),
        }
        response = (
            self._client.table("eligibility_assessments")
            .insert(record)
            .execute()
        )
        assessment_id = response.data[0]["id"]

        if results:
            rows = [
                {
                    "assessment_id": assessment_id,
                    "grant_scheme_id": r.grant_id,
                    "is_eligible": r.is_eligible,
                    "match_score": r.match_score,
                    "applicable_aid_intensity": r.applicable_aid_intensity,
                    "estimated_max_grant": r.estimated_max_grant,
                    "matched_costs": r.matched_cost_categories,
                    "notes": r.notes,
                }
                for r in results
            ]
            self._client.table("eligibility_results").insert(rows).execute()

        logger.info("Saved assessment %s with %d results", assessment_id, len(results))
        return assessment_id

    def save_lead(
        self,
        full_name: str,
        email: str,
        business_name: Optional[str] = None,
        phone: Optional[str] = None,
        assessment_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Insert a lead captured alongside an assessment.

        Returns:
            The inserted row as a dict.
        """
        record = {
            "full_name": full_name,
            "email": email,
            "business_name": business_name,
            "phone": phone,
            "assessment_id": assessment_id,
            "email_sent": False,
        }
        response = (
            self._client.table("leads")
            .insert(record)
            .execute()
        )
        logger.info("Saved lead for assessment %s", assessment_id)
        return response.data[0] if response.data else {}

    def mark_lead_emailed(self, email: str) -> Dict[str, Any]:
        """Flag the most recent lead for ``email`` as having received its report.

        Returns:
            The updated row as a dict, or empty dict if not found.
        """
        latest = (
            self._client.table("leads")
            .select("id")
            .eq("email", email)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not latest.data:
            logger.warning("No lead found to mark as emailed")
            return {}

        lead_id = latest.data[0]["id"]
        response = (
            self._client.table("leads")
            .update({"email_sent": True, "email_sent_at": datetime.now(timezone.utc).isoformat()})
            .eq("id", lead_id)
            .execute()
        )
        logger.info("Marked lead %s report as sent", lead_id)
        return response.data[0] if response.data else {}
