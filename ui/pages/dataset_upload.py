"""Dataset upload form (CSV, JSON, Excel or text up to 50MB)."""

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
from uploads.validation import DATA_TYPES, DATASET_CATEGORIES, DATASET_RULES, TIME_FRAMES

st.set_page_config(page_title="Upload Dataset — QuantHub", page_icon="⬆️", layout="wide")
provider = get_session_provider()
render_header(provider)

if not provider.signed_in:
    render_auth_required("You need to be signed in to upload datasets.")
    st.stop()

st.title("⬆️ Upload Dataset")
st.caption("Share your quantitative datasets with the community")

P = "dataset_form_"

with st.form("dataset_upload"):
    st.subheader("Basic Information")
    c1, c2 = st.columns(2)
    with c1:
        name = st.text_input("Dataset Name *", placeholder="e.g., S&P 500 Historical Data", key=P + "name")
    with c2:
        category = st.selectbox("Category *", DATASET_CATEGORIES, key=P + "category")
    description = st.text_area("Description *", key=P + "description")

    st.subheader("Data Details")
    c3, c4 = st.columns(2)
    with c3:
        data_type = st.selectbox("Data Type *", DATA_TYPES, key=P + "data_type")
        assets = st.text_input("Assets Covered", placeholder="e.g., AAPL, MSFT, SPY", key=P + "assets")
    with c4:
        time_frame = st.selectbox("Time Frame *", TIME_FRAMES, index=TIME_FRAMES.index("daily"), key=P + "time_frame")
        tags = st.text_input("Tags (comma-separated)", key=P + "tags")

    widget_file = st.file_uploader(
        "Dataset file (max 50MB)",
        type=[ext.lstrip(".") for ext in DATASET_RULES.extensions],
        key=P + "file",
    )
    submitted = st.form_submit_button("🚀 Upload Dataset", type="primary")

if submitted:
    form = {
        "name": name,
        "description": description,
        "category": category,
        "data_type": data_type,
        "time_frame": time_frame,
        "assets": assets,
        "tags": tags,
    }
    run_upload(UploadKind.DATASET, form, widget_file, key_prefix=P)
