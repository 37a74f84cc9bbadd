"""The signed-in user's own strategies and datasets."""

import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

import streamlit as st

from analytics.providers import ClientSideSummaryProvider
from core.formatting import avatar_url, format_date
from core.ui_config import detail_link
from supabase_client.errors import StoreError
from ui.components.header import render_header
from ui.components.session import get_client, get_session_provider, render_auth_required

st.set_page_config(page_title="My Profile — QuantHub", page_icon="👤", layout="wide")
provider = get_session_provider()
render_header(provider)

session = provider.session
if session is None or not session.email:
    render_auth_required("Sign in to see your profile.")
    st.stop()

try:
    with st.spinner("Loading your uploads…"):
        profile = ClientSideSummaryProvider(get_client()).profile(session.email)
except StoreError as e:
    st.error(f"Failed to load your uploads: {e.message}")
    st.stop()

head_left, head_right = st.columns([1, 5])
head_left.image(avatar_url(session.email), width=96)
with head_right:
    st.title(session.email)
    st.markdown(f"**{len(profile.strategies)}** Strategies · **{len(profile.datasets)}** Datasets")

st.subheader("My Strategies")
if not profile.strategies:
    st.info("No strategies uploaded yet.")
for row in profile.strategies:
    st.markdown(
        f"- [{row.get('name') or 'Untitled'}]({detail_link('strategy', row.get('id'))}) "
        f"· {row.get('category') or '—'} · {format_date(row.get('created_at'))}"
    )

st.subheader("My Datasets")
if not profile.datasets:
    st.info("No datasets uploaded yet.")
for row in profile.datasets:
    st.markdown(
        f"- [{row.get('name') or 'Untitled'}]({detail_link('dataset', row.get('id'))}) "
        f"· {row.get('category') or '—'} · {format_date(row.get('created_at'))}"
    )
