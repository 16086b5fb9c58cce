"""Supabase client initialization."""

from functools import lru_cache

from supabase import Client, create_client

from risk_audit.core.config import get_settings
from risk_audit.core.errors import PersistenceUnavailable


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """
    Get Supabase client instance (cached singleton).

    Returns:
        Supabase client configured with service role key

    Raises:
        PersistenceUnavailable: If Supabase is not configured
        RuntimeError: If client initialization fails
    """
    settings = get_settings()
    if not settings.persistence_configured:
        raise PersistenceUnavailable("SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY not configured")
    try:
        return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    except Exception as e:
        raise RuntimeError(f"Failed to initialize Supabase client: {e}") from e
