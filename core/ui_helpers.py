"""
core/ui_helpers.py
------------------
Backend GET helpers for the Streamlit pages.

Failures come back as StoreError, rebuilt from the backend's
`{"detail", "kind", "code"}` error body when there is one, so pages handle
backend and direct-store errors the same way.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests
import streamlit as st

from core.ui_config import BACKEND_URL
from supabase_client.errors import ErrorKind, StoreError, error_from_response

Rows = List[Dict[str, Any]]


def fetch_backend_live(endpoint: str, params: Optional[Dict[str, Any]] = None) -> Rows:
    """GET `BACKEND_URL/endpoint` without caching; raises StoreError."""
    url = f"{BACKEND_URL.rstrip('/')}/{endpoint.lstrip('/')}"
    try:
        resp = requests.get(url, params=params, timeout=10)
    except requests.exceptions.RequestException as e:
        raise StoreError(ErrorKind.TRANSPORT, f"Backend unreachable at {BACKEND_URL} ({e.__class__.__name__})") from e
    if resp.status_code >= 400:
        raise error_from_response(resp)
    return resp.json()


@st.cache_data(ttl=30)
def fetch_backend(endpoint: str, params: Optional[Dict[str, Any]] = None) -> Rows:
    """Cached variant of `fetch_backend_live` for slow-moving views."""
    return fetch_backend_live(endpoint, params=params)


def invalidate_backend_cache() -> None:
    """Drop cached backend reads, e.g. after an upload changed a listing."""
    fetch_backend.clear()
