"""
QuantHub — Streamlit Launcher
-----------------------------
Main entrypoint (`streamlit run ui/overview.py`) and the home page.
Every other route lives under ui/pages/.
"""

import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

import streamlit as st

from ui.components.header import render_header
from ui.components.session import get_session_provider

st.set_page_config(page_title="QuantHub", page_icon="📈", layout="wide")
render_header(get_session_provider())

st.title("📈 Welcome to Quant Hub")
st.caption("Your quant trading platform. Explore strategies, share datasets, and connect with the community.")

c1, c2, c3 = st.columns(3)
with c1:
    with st.container(border=True):
        st.subheader("🧠 Strategies")
        st.write("Browse and upload trading strategies.")
        st.page_link("pages/strategies.py", label="Open strategies")
with c2:
    with st.container(border=True):
        st.subheader("🗂️ Datasets")
        st.write("Share and download market, economic and alternative data.")
        st.page_link("pages/datasets.py", label="Open datasets")
with c3:
    with st.container(border=True):
        st.subheader("👥 Community")
        st.write("Connect with other traders.")
        st.page_link("pages/community.py", label="Open community")

st.markdown("---")
st.caption("© 2025 QuantHub")
