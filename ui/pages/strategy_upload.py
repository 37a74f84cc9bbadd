"""
Strategy upload form.

Validation, storage upload and the metadata insert are handled by
uploads.flow.UploadFlow; this page only collects inputs.
"""

import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

import streamlit as st

from ui.components.header import render_header
from ui.components.session import get_session_provider, render_auth_required
from ui.components.upload_runner import run_upload
from uploads.flow import UploadKind
from uploads.validation import (
    RISK_LEVELS,
    STRATEGY_CATEGORIES,
    STRATEGY_RULES,
    STRATEGY_TYPES,
    TIME_HORIZONS,
)

st.set_page_config(page_title="Upload Strategy — QuantHub", page_icon="⬆️", layout="wide")
provider = get_session_provider()
render_header(provider)

if not provider.signed_in:
    render_auth_required("Please log in to upload and share your strategies with the community.")
    st.stop()

st.title("⬆️ Upload Strategy")
st.caption("Share your quantitative trading strategy with the community")

P = "strategy_form_"

with st.form("strategy_upload"):
    widget_file = st.file_uploader(
        "Strategy file (.py or .ipynb, max 10MB)",
        type=[ext.lstrip(".") for ext in STRATEGY_RULES.extensions],
        key=P + "file",
    )
    c1, c2 = st.columns(2)
    with c1:
        name = st.text_input("Strategy Name *", key=P + "name")
        category = st.selectbox("Category *", ["", *STRATEGY_CATEGORIES], key=P + "category")
        strategy_type = st.selectbox("Strategy Type", ["", *STRATEGY_TYPES], key=P + "strategy_type")
        risk_level = st.selectbox("Risk Level", ["", *RISK_LEVELS], key=P + "risk_level")
        time_horizon = st.selectbox("Time Horizon", ["", *TIME_HORIZONS], key=P + "time_horizon")
    with c2:
        description = st.text_area("Description *", height=140, key=P + "description")
        tags = st.text_input("Tags (comma-separated, max 10)", key=P + "tags")
        expected_return = st.text_input("Expected Annual Return (%)", key=P + "expected_return")
        max_drawdown = st.text_input("Max Drawdown (%)", key=P + "max_drawdown")
        minimum_capital = st.text_input("Minimum Capital ($)", key=P + "minimum_capital")

    submitted = st.form_submit_button("🚀 Upload Strategy", type="primary")

if submitted:
    form = {
        "name": name,
        "description": description,
        "category": category,
        "tags": tags,
        "risk_level": risk_level,
        "expected_return": expected_return,
        "max_drawdown": max_drawdown,
        "strategy_type": strategy_type,
        "time_horizon": time_horizon,
        "minimum_capital": minimum_capital,
    }
    run_upload(UploadKind.STRATEGY, form, widget_file, key_prefix=P)
