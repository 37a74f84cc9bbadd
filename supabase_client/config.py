# supabase_client/config.py
import os

from supabase import AsyncClient, Client, acreate_client, create_client


def _credentials() -> tuple[str, str]:
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_ANON_KEY")
    if not url or not key:
        raise RuntimeError("Supabase credentials not set in environment variables.")
    return url, key


def get_supabase_client() -> Client:
    """Return a fresh Supabase client; each browser session needs its own for auth state."""
    url, key = _credentials()
    return create_client(url, key)


async def get_async_supabase_client() -> AsyncClient:
    """Return an async Supabase client (required for realtime channels)."""
    url, key = _credentials()
    return await acreate_client(url, key)
