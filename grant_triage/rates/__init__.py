from .aid_intensity import apply_cap, check_minimum_grant, resolve_rate

__all__ = ["apply_cap", "check_minimum_grant", "resolve_rate"]
