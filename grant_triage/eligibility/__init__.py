"""Eligibility filter stage for grant schemes."""

from .filter import FILTER_PIPELINE, FilterStageResult, evaluate_filters

__all__ = ["FILTER_PIPELINE", "FilterStageResult", "evaluate_filters"]
