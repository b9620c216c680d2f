"""Grant triage: match a business project to the grant schemes that best fund it."""

__version__ = "1.0.0"
