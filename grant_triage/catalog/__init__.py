"""Grant-scheme catalog loading."""

from .loader import load_schemes, parse_schemes
from .named_thresholds import attach_named_threshold, match_known_threshold

__all__ = ["attach_named_threshold", "load_schemes", "match_known_threshold", "parse_schemes"]
