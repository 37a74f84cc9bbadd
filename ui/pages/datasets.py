"""
Datasets — live catalogue.

Every load reads the table through the backend, and the page re-polls every
15 seconds so new uploads show up without a manual reload. The backend's
realtime subscription is shown as a status line.
"""

import os
import sys
from typing import Any, Dict, List

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

import streamlit as st
from streamlit_autorefresh import st_autorefresh

from core.ui_helpers import fetch_backend_live
from supabase_client.errors import StoreError
from ui.components.catalog import render_dataset_card
from ui.components.header import render_header
from ui.components.session import get_session_provider
from uploads.validation import DATASET_CATEGORIES

st.set_page_config(page_title="Datasets — QuantHub", page_icon="🗂️", layout="wide")
provider = get_session_provider()
render_header(provider)

st_autorefresh(interval=15 * 1000, limit=None, key="datasets_refresh")

top_left, top_right = st.columns([4, 1])
with top_left:
    st.title("🗂️ Datasets")
    st.caption("Market, economic and alternative data shared by the community")
with top_right:
    if st.button("⬆️ Upload Dataset", type="primary"):
        if provider.signed_in:
            st.switch_page("pages/dataset_upload.py")
        else:
            st.session_state["show_auth_notice"] = True

if st.session_state.pop("show_auth_notice", False):
    st.warning("Authentication Required — please sign in to upload datasets.")
    st.page_link("pages/auth.py", label="Sign in", icon="🔑")

search_col, cat_col = st.columns([3, 1])
with search_col:
    term = st.text_input("Search", placeholder="Search datasets…")
with cat_col:
    category = st.selectbox("Category", ["(any)", *DATASET_CATEGORIES])

try:
    rows: List[Dict[str, Any]] = fetch_backend_live("datasets")
except StoreError as e:
    st.error(f"Failed to load datasets: {e.message}")
    st.stop()

# realtime status is informational; the listing above is always a fresh read
try:
    live = fetch_backend_live("status/summary").get("live_datasets")
except StoreError:
    live = None
if live and live.get("live"):
    st.caption(f"🟢 Live: {live.get('refresh_count', 0)} change(s) picked up since the backend started")

if term:
    needle = term.lower()
    rows = [
        r for r in rows
        if needle in (r.get("name") or "").lower()
        or needle in (r.get("description") or "").lower()
        or needle in (r.get("assets") or "").lower()
    ]
if category != "(any)":
    rows = [r for r in rows if r.get("category") == category]

st.caption(f"Showing {len(rows)} datasets")
if not rows:
    st.info("No datasets found.")
else:
    cols = st.columns(2)
    for i, row in enumerate(rows):
        with cols[i % 2]:
            render_dataset_card(row)
