"""Supabase-backed Catalog Store and Lead Store."""

from .client import SupabaseClient

__all__ = ["SupabaseClient"]
