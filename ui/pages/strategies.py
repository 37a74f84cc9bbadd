"""
Strategies — catalogue of uploaded strategies (newest first).
Backed by GET /strategies on the QuantHub backend.
"""

import os
import sys
from typing import Any, Dict, List

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

import streamlit as st

from core.ui_helpers import fetch_backend
from supabase_client.errors import StoreError
from ui.components.catalog import render_strategy_card
from ui.components.header import render_header
from ui.components.session import get_session_provider
from uploads.validation import STRATEGY_CATEGORIES

st.set_page_config(page_title="Strategies — QuantHub", page_icon="🧠", layout="wide")
provider = get_session_provider()
render_header(provider)

top_left, top_right = st.columns([4, 1])
with top_left:
    st.title("🧠 Strategies")
    st.caption("Quantitative trading strategies shared by the community")
with top_right:
    if st.button("⬆️ Upload Strategy", type="primary"):
        if provider.signed_in:
            st.switch_page("pages/strategy_upload.py")
        else:
            st.session_state["show_auth_notice"] = True

if st.session_state.pop("show_auth_notice", False):
    st.warning("Authentication Required — please sign in to upload and share your strategies.")
    st.page_link("pages/auth.py", label="Sign in", icon="🔑")

search_col, cat_col = st.columns([3, 1])
with search_col:
    term = st.text_input("Search", placeholder="Search strategies by name, description or tag…")
with cat_col:
    category = st.selectbox("Category", ["(any)", *STRATEGY_CATEGORIES])

try:
    rows: List[Dict[str, Any]] = fetch_backend("strategies")
except StoreError as e:
    st.error(f"Failed to load strategies: {e.message}")
    st.stop()

if term:
    needle = term.lower()
    rows = [
        r for r in rows
        if needle in (r.get("name") or "").lower()
        or needle in (r.get("description") or "").lower()
        or any(needle in str(t).lower() for t in (r.get("tags") or []))
    ]
if category != "(any)":
    rows = [r for r in rows if r.get("category") == category]

st.caption(f"Showing {len(rows)} strategies")
if not rows:
    st.info("No strategies found.")
else:
    cols = st.columns(2)
    for i, row in enumerate(rows):
        with cols[i % 2]:
            render_strategy_card(row)
