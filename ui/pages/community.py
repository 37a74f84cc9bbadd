"""
Community Profiles

One card per contributor, derived from their strategies and datasets.
Summaries come from a ContributionSummaryProvider (backend-computed here).
"""

import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

import pandas as pd
import plotly.express as px
import streamlit as st

from analytics.community import filter_members, sort_members
from analytics.providers import BackendSummaryProvider
from core.formatting import avatar_url, time_ago
from core.ui_config import detail_link
from supabase_client.errors import StoreError
from ui.components.header import render_header
from ui.components.session import get_session_provider

st.set_page_config(page_title="Community — QuantHub", page_icon="👥", layout="wide")
render_header(get_session_provider())

st.title("👥 Community Profiles")

SORT_LABELS = {
    "Most Active": "contributions",
    "Most Strategies": "strategies",
    "Most Datasets": "datasets",
    "Recently Active": "recent",
    "Name A-Z": "name",
}
FILTER_LABELS = {
    "All Users": "all",
    "Strategy Creators": "strategies",
    "Dataset Contributors": "datasets",
}

c1, c2, c3 = st.columns([3, 1, 1])
with c1:
    search = st.text_input("Search", placeholder="Search by name or email...")
with c2:
    sort_label = st.selectbox("Sort", list(SORT_LABELS))
with c3:
    filter_label = st.selectbox("Show", list(FILTER_LABELS))

try:
    with st.spinner("Loading community…"):
        members = BackendSummaryProvider().summaries()
except StoreError as e:
    st.error(f"Failed to load community profiles. ({e.message})")
    st.stop()

shown = sort_members(filter_members(members, search=search, only=FILTER_LABELS[filter_label]), by=SORT_LABELS[sort_label])
st.caption(f"Showing {len(shown)} of {len(members)} community members")

if not shown:
    st.info("No users match your search." if search else "No community members yet.")
    st.stop()

top = pd.DataFrame([m.as_dict() for m in shown[:10]])
fig = px.bar(
    top,
    x="display_name",
    y=["strategies", "datasets"],
    title="Top contributors",
    labels={"value": "Contributions", "display_name": "", "variable": ""},
)
st.plotly_chart(fig, use_container_width=True)

cols = st.columns(3)
for i, member in enumerate(shown):
    with cols[i % 3]:
        with st.container(border=True):
            left, right = st.columns([1, 3])
            left.image(avatar_url(member.display_name), width=56)
            right.markdown(f"**[{member.display_name or member.email}]({detail_link('community', member.email)})**")
            right.caption(member.email)
            m1, m2, m3 = st.columns(3)
            m1.metric("Strategies", member.strategies)
            m2.metric("Datasets", member.datasets)
            m3.metric("Total", member.total_contributions)
            st.caption(f"Active {time_ago(member.last_active)} · joined {time_ago(member.joined_date)}")
