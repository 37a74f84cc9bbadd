"""
Per-browser-session Supabase client and SessionProvider.

Streamlit reruns page scripts from the top, so the client and the provider
live in `st.session_state`; every page asks for them here and passes them on
explicitly.
"""

from __future__ import annotations

import streamlit as st

from core.session import SessionNotices, SessionProvider
from supabase_client.config import get_supabase_client

_CLIENT_KEY = "supabase_client"
_PROVIDER_KEY = "session_provider"
_NOTICES_KEY = "session_notices"


def get_client():
    if _CLIENT_KEY not in st.session_state:
        st.session_state[_CLIENT_KEY] = get_supabase_client()
    return st.session_state[_CLIENT_KEY]


def get_session_provider() -> SessionProvider:
    if _PROVIDER_KEY not in st.session_state:
        provider = SessionProvider(get_client().auth).start()
        notices = SessionNotices(provider.session)
        provider.subscribe(notices)
        st.session_state[_NOTICES_KEY] = notices
        st.session_state[_PROVIDER_KEY] = provider
    return st.session_state[_PROVIDER_KEY]


def drain_session_notices() -> list:
    """Sign-in/sign-out notices queued since the last page run."""
    get_session_provider()
    return st.session_state[_NOTICES_KEY].drain()


def render_auth_required(message: str) -> None:
    """Sign-in prompt shown instead of a page that needs a session."""
    st.subheader("🔒 Authentication Required")
    st.write(message)
    if st.button("Go to Login", type="primary"):
        st.switch_page("pages/auth.py")
