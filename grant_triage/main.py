"""Command-line grant triage.

Reads an eligibility-form submission, loads the scheme catalog from a file
(or from Supabase when no file is given), runs the triage engine and prints
the results as JSON on stdout; logs go to stderr. With ``--email`` the
applicant's report is also sent.

The report rate limiter lives in memory, so a single CLI run cannot limit
across runs. A long-lived host should create one RateLimiter and pass it to
``send_report`` on every call.
"""

import argparse
import json
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from .catalog import load_schemes
from .config import Config, load_config
from .database import SupabaseClient
from .models import ApplicantProfile, GrantScheme, ProjectSubmission, TriageResult
from .notifier import RateLimiter, ReportMailer, build_report, validate_recipient
from .scorer import load_weights
from .triage import find_all_matching_grants, select_best

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)]
)
logger = logging.getLogger(__name__)


def load_submission(path: str) -> ProjectSubmission:
    with open(path, "r", encoding="utf-8") as f:
        return ProjectSubmission.model_validate(json.load(f))


def load_catalog(catalog_path: Optional[str], config: Optional[Config]) -> list[GrantScheme]:
    """Load schemes from ``catalog_path``, or from Supabase when it is None."""
    if catalog_path:
        return load_schemes(catalog_path)
    if config is None:
        config = load_config()
    return SupabaseClient(config.supabase_url, config.supabase_key).get_grant_schemes()


def send_report(
    config: Config,
    profile: ApplicantProfile,
    results: list[TriageResult],
    full_name: str,
    email: str,
    rate_limiter: Optional[RateLimiter] = None,
) -> None:
    """Record the assessment and lead, then build and send the applicant's report."""
    validate_recipient(full_name, email)

    store = SupabaseClient(config.supabase_url, config.supabase_key)
    assessment_id = store.save_assessment(
        profile,
        results,
        contact={"contact_name": full_name, "contact_email": email},
    )
    store.save_lead(
        full_name=full_name,
        email=email,
        business_name=profile.business_name,
        assessment_id=assessment_id,
    )

    if rate_limiter is None:
        rate_limiter = RateLimiter(
            max_requests=config.report_rate_limit_max,
            window_seconds=config.report_rate_limit_window_seconds,
        )
    mailer = ReportMailer(
        api_key=config.resend_api_key,
        from_address=config.report_from_address,
        rate_limiter=rate_limiter,
        lead_store=store,
    )
    report = build_report(profile, results, top_n=config.report_top_n)
    mailer.send_report(full_name, email, report)


def run(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Find the grant schemes that best fund a project."
    )
    parser.add_argument("submission", help="Path to the eligibility form submission (JSON)")
    parser.add_argument("--catalog", help="Scheme catalog file (JSON/YAML); defaults to Supabase")
    parser.add_argument("--weights", help="Scoring weights file (JSON/YAML)")
    parser.add_argument("--best", action="store_true", help="Print only the best eligible scheme")
    parser.add_argument("--email", help="Send the eligibility report to this address")
    parser.add_argument("--name", default="", help="Recipient full name (with --email)")
    args = parser.parse_args(argv)

    config: Optional[Config] = None
    try:
        if args.email or not args.catalog:
            config = load_config()
            logging.getLogger().setLevel(config.log_level)
        profile = load_submission(args.submission).to_applicant_profile()
        schemes = load_catalog(args.catalog, config)
        weights = load_weights(args.weights)
    except (OSError, ValueError, ValidationError) as e:
        logger.error(f"Could not load triage inputs: {e}")
        return 1

    logger.info(f"Triaging {len(schemes)} schemes for a {profile.business_size.value} applicant")
    results = find_all_matching_grants(profile, schemes, weights)

    if args.best:
        best = select_best(results)
        output = best.model_dump(mode="json") if best else None
    else:
        output = [r.model_dump(mode="json") for r in results]

    print(json.dumps(output, indent=2, ensure_ascii=False))

    if args.email and config is not None:
        try:
            send_report(config, profile, results, args.name, args.email)
        except Exception as e:
            logger.error(f"Report delivery failed: {e}", exc_info=True)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(run())
