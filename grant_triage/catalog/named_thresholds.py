"""Known scheme-specific thresholds for catalog records.

Older catalog rows identify these schemes only by their code or display name.
The matching happens here, once, while a record is loaded; the engine reads
the resulting ``named_threshold`` field and never inspects names.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..models.grant_scheme import NamedThreshold

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KnownThreshold:
    """A catalog exception keyed by code/name substrings (lowercase)."""

    code_fragment: str
    name_fragment: str
    threshold: NamedThreshold


KNOWN_THRESHOLDS: tuple[KnownThreshold, ...] = (
    KnownThreshold(
        code_fragment="sme-enhance",
        name_fragment="sme enhance",
        threshold=NamedThreshold(
            label="SME Enhance",
            min_project_cost_sme=10_000,
            min_project_cost_large=10_000,
            strictly_above=False,
            min_grant_amount=10_000,
        ),
    ),
    KnownThreshold(
        code_fragment="invest",
        name_fragment="invest 2024",
        threshold=NamedThreshold(
            label="Invest 2024",
            min_project_cost_sme=50_000,
            min_project_cost_large=500_000,
            strictly_above=True,
        ),
    ),
)


def match_known_threshold(scheme_code: Optional[str], scheme_name: str) -> Optional[NamedThreshold]:
    """Return the threshold for the first known scheme whose code or name matches."""
    code = (scheme_code or "").lower()
    name = (scheme_name or "").lower()
    for known in KNOWN_THRESHOLDS:
        if known.code_fragment in code or known.name_fragment in name:
            return known.threshold
    return None


def attach_named_threshold(record: dict[str, Any]) -> dict[str, Any]:
    """Return ``record`` with ``named_threshold`` filled in for known schemes.

    Records that already carry the field (including an explicit null) are
    returned unchanged.
    """
    if "named_threshold" in record:
        return record

    threshold = match_known_threshold(record.get("scheme_code"), record.get("scheme_name", ""))
    if threshold is None:
        return record

    logger.debug("Attached named threshold '%s' to scheme %s", threshold.label, record.get("id"))
    return {**record, "named_threshold": threshold.model_dump()}
