"""Community member profile: their strategies, datasets and activity timeline."""

import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

import streamlit as st

from analytics.providers import BackendSummaryProvider
from core.formatting import avatar_url, format_date, time_ago
from supabase_client.errors import ErrorKind, StoreError
from ui.components.catalog import render_dataset_card, render_strategy_card
from ui.components.header import render_header
from ui.components.session import get_session_provider

st.set_page_config(page_title="Profile — QuantHub", page_icon="👤", layout="wide")
render_header(get_session_provider())

email = st.query_params.get("id")


def not_found(message: str) -> None:
    st.title("Profile Not Found")
    st.write(message)
    st.page_link("pages/community.py", label="Back to Community", icon="⬅️")
    st.stop()


if not email:
    not_found("No user ID provided")

try:
    with st.spinner("Loading profile…"):
        profile = BackendSummaryProvider().profile(email)
except StoreError as e:
    if e.kind == ErrorKind.NOT_FOUND:
        not_found("This user profile could not be loaded.")
    st.error(f"Failed to load user profile. ({e.message})")
    st.stop()

member = profile.member
head_left, head_right = st.columns([1, 5])
head_left.image(avatar_url(member.display_name, size=256), width=110)
with head_right:
    st.title(member.display_name or member.email)
    st.caption(member.email)
    st.caption(f"Joined {format_date(member.joined_date)} · last active {time_ago(member.last_active)}")

m1, m2, m3 = st.columns(3)
m1.metric("Strategies", member.strategies)
m2.metric("Datasets", member.datasets)
m3.metric("Total contributions", member.total_contributions)

tab_strategies, tab_datasets, tab_activity = st.tabs(["Strategies", "Datasets", "Activity"])

with tab_strategies:
    if not profile.strategies:
        st.info("No strategies shared yet.")
    for row in profile.strategies:
        render_strategy_card(row)

with tab_datasets:
    if not profile.datasets:
        st.info("No datasets shared yet.")
    for row in profile.datasets:
        render_dataset_card(row)

with tab_activity:
    events = [("🧠 Uploaded strategy", r) for r in profile.strategies] + [
        ("🗂️ Uploaded dataset", r) for r in profile.datasets
    ]
    events.sort(key=lambda e: e[1].get("created_at") or "", reverse=True)
    if not events:
        st.info("No activity yet.")
    for label, row in events:
        st.markdown(f"{label} **{row.get('name') or 'Untitled'}** · {time_ago(row.get('created_at'))}")
