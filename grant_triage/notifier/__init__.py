"""Eligibility report assembly and delivery."""

from .mailer import (
    InvalidReportRequest,
    MailerError,
    MailerRetryableError,
    RateLimitExceeded,
    ReportMailer,
    validate_recipient,
)
from .rate_limit import RateLimiter
from .report import EligibilityReport, ReportOption, build_report

__all__ = [
    "EligibilityReport",
    "InvalidReportRequest",
    "MailerError",
    "MailerRetryableError",
    "RateLimitExceeded",
    "RateLimiter",
    "ReportMailer",
    "ReportOption",
    "build_report",
    "validate_recipient",
]
