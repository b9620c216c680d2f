"""Grant triage: evaluate and rank schemes for an applicant."""

from .engine import evaluate_scheme, find_all_matching_grants, find_best_grant, select_best

__all__ = ["evaluate_scheme", "find_all_matching_grants", "find_best_grant", "select_best"]
