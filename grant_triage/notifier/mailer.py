"""Deliver eligibility reports by e-mail through the Resend API."""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .rate_limit import RateLimiter
from .report import EligibilityReport

logger = logging.getLogger(__name__)

RESEND_URL = "https://api.resend.com/emails"
DEFAULT_FROM = "Grants Advisor <onboarding@resend.dev>"

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class InvalidReportRequest(ValueError):
    """Recipient details failed validation."""


class RateLimitExceeded(Exception):
    """Too many reports requested for the same address."""


class MailerRetryableError(Exception):
    """Raised on 429 / 5xx so tenacity retries."""


class MailerError(Exception):
    """Non-retryable mail API failure."""


def is_valid_email(email: str) -> bool:
    return bool(email) and bool(_EMAIL_RE.match(email))


def validate_recipient(full_name: str, email: str) -> None:
    """Raise InvalidReportRequest unless name and e-mail look usable."""
    if not email or not full_name:
        raise InvalidReportRequest("Missing required fields: email and fullName")
    if not is_valid_email(email):
        raise InvalidReportRequest("Invalid email address")
    if len(full_name.strip()) < 2 or len(full_name) > 200:
        raise InvalidReportRequest("Invalid full name")


class ReportMailer:
    """Sends EligibilityReports with validation, rate limiting and retry."""

    def __init__(
        self,
        api_key: str | None = None,
        from_address: str = DEFAULT_FROM,
        rate_limiter: RateLimiter | None = None,
        lead_store: Any | None = None,
    ) -> None:
        self.api_key = api_key or os.environ.get("RESEND_API_KEY", "")
        self.from_address = from_address
        self.rate_limiter = rate_limiter if rate_limiter is not None else RateLimiter()
        self._leads = lead_store  # SupabaseClient or None

    # ------------------------------------------------------------------
    # Retry-wrapped HTTP post
    # ------------------------------------------------------------------
    @retry(
        retry=retry_if_exception_type(MailerRetryableError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    def _post_email(self, payload: dict) -> dict:
        """Post one e-mail. Raises MailerRetryableError on 429/5xx."""
        resp = httpx.post(
            RESEND_URL,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json=payload,
            timeout=30,
        )

        if resp.status_code == 429 or resp.status_code >= 500:
            raise MailerRetryableError(
                f"Mail API returned {resp.status_code}: {resp.text[:200]}"
            )
        if resp.status_code >= 400:
            raise MailerError(f"Mail API error {resp.status_code}: {resp.text[:200]}")

        return resp.json()

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------
    def send_report(self, full_name: str, email: str, report: EligibilityReport) -> dict:
        """Validate, rate-limit and send ``report`` to ``email``.

        Returns:
            The mail API response body.

        Raises:
            InvalidReportRequest: Bad name or address.
            RateLimitExceeded: Address over its hourly allowance.
            MailerRetryableError: Still failing after retries.
            MailerError: Non-retryable API error.
        """
        validate_recipient(full_name, email)

        if self.rate_limiter.is_limited(f"email:{email.lower()}"):
            logger.warning("Report rate limit hit")
            raise RateLimitExceeded("Too many requests. Please try again later.")

        data = self._post_email({
            "from": self.from_address,
            "to": [email],
            "subject": report.subject,
            "text": report.body,
        })
        logger.info("Sent eligibility report: id=%s options=%d", data.get("id"), len(report.options))

        self._mark_lead_emailed(email)
        return data

    # ------------------------------------------------------------------
    # Lead Store helpers
    # ------------------------------------------------------------------
    def _mark_lead_emailed(self, email: str) -> Optional[dict]:
        if self._leads is None:
            return None
        try:
            return self._leads.mark_lead_emailed(email)
        except Exception as exc:
            logger.warning("Could not update lead email status: %s", exc)
            return None
