"""Dataset detail: metadata, file download and preview."""

import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

import streamlit as st

from core.formatting import format_date, format_file_size
from core.ui_config import detail_link
from supabase_client.errors import ErrorKind, StoreError
from ui.components.code_preview import render_preview
from ui.components.header import render_header
from ui.components.session import get_client, get_session_provider
from viewer.preview import load_detail

st.set_page_config(page_title="Dataset — QuantHub", page_icon="🗂️", layout="wide")
render_header(get_session_provider())

dataset_id = st.query_params.get("id")


def not_found(message: str) -> None:
    st.title("Dataset Not Found")
    st.write(message)
    st.page_link("pages/datasets.py", label="Back to Datasets", icon="⬅️")
    st.stop()


if not dataset_id:
    not_found("No dataset id provided.")

try:
    with st.spinner("Loading dataset…"):
        view = load_detail("dataset", dataset_id, client=get_client())
except StoreError as e:
    if e.kind == ErrorKind.NOT_FOUND:
        not_found("This dataset does not exist or was removed.")
    st.error(f"Failed to download dataset file: {e.message}")
    st.stop()

row = view.row
st.title(row.get("name") or "Untitled dataset")
st.write(row.get("description") or "")

meta = st.columns(4)
meta[0].metric("Category", row.get("category") or "—")
meta[1].metric("Data type", row.get("data_type") or "—")
meta[2].metric("Time frame", row.get("time_frame") or "—")
meta[3].metric("File size", format_file_size(row.get("file_size")))

if row.get("assets"):
    st.caption(f"Assets: {row['assets']}")

tags = row.get("tags") or []
if isinstance(tags, str):
    tags = [t.strip() for t in tags.split(",") if t.strip()]
if tags:
    st.markdown(" ".join(f"`{t}`" for t in tags))

if row.get("author_email"):
    st.caption(
        f"by [{row['author_email']}]({detail_link('community', row['author_email'])}) · "
        f"uploaded {format_date(row.get('created_at'))}"
    )

render_preview(view, download_key=f"download_dataset_{row.get('id')}")
