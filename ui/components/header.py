"""Sidebar navigation + account box shared by every page."""

from __future__ import annotations

import streamlit as st

from core.formatting import user_initials
from core.metadata import __project__, __version__
from core.session import SessionProvider
from supabase_client.errors import StoreError
from ui.components.backend_status import render_status_bar
from ui.components.session import drain_session_notices


def render_header(provider: SessionProvider) -> None:
    for notice in drain_session_notices():
        st.toast(notice)
    with st.sidebar:
        st.markdown(f"## 📈 {__project__}")
        st.page_link("overview.py", label="Home", icon="🏠")
        st.page_link("pages/strategies.py", label="Strategies", icon="🧠")
        st.page_link("pages/datasets.py", label="Datasets", icon="🗂️")
        st.page_link("pages/community.py", label="Community", icon="👥")
        st.page_link("pages/docs.py", label="Docs", icon="📚")
        st.markdown("---")

        session = provider.session
        if provider.loading:
            st.caption("Checking session…")
        elif session is None:
            st.page_link("pages/auth.py", label="Get Started", icon="🔑")
        else:
            st.markdown(f"**{user_initials(session.email)}** · {session.email}")
            st.page_link("pages/profile.py", label="Profile", icon="👤")
            if st.button("Logout", key="header_logout"):
                try:
                    provider.sign_out()
                except StoreError as e:
                    st.error(f"Sign-out failed: {e.message}")
                else:
                    st.switch_page("pages/landing.py")

        st.caption(f"v{__version__}")
    render_status_bar()
