"""Strategy detail: metadata plus a highlighted preview of the uploaded file."""

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

st.set_page_config(page_title="Strategy — QuantHub", page_icon="🧠", layout="wide")
render_header(get_session_provider())

strategy_id = st.query_params.get("id")


def not_found(message: str) -> None:
    st.title("Strategy Not Found")
    st.write(message)
    st.page_link("pages/strategies.py", label="Back to Strategies", icon="⬅️")
    st.stop()


if not strategy_id:
    not_found("No strategy id provided.")

try:
    with st.spinner("Loading strategy…"):
        view = load_detail("strategy", strategy_id, client=get_client())
except StoreError as e:
    if e.kind == ErrorKind.NOT_FOUND:
        not_found("This strategy does not exist or was removed.")
    st.error(f"Failed to load strategy: {e.message}")
    st.stop()

row = view.row
st.title(row.get("name") or "Untitled strategy")
st.write(row.get("description") or "")

meta = st.columns(4)
meta[0].metric("Category", row.get("category") or "—")
meta[1].metric("Risk", row.get("risk_level") or "—")
meta[2].metric("Horizon", row.get("time_horizon") or "—")
meta[3].metric("File size", format_file_size(row.get("file_size")))

if row.get("author_email"):
    st.caption(
        f"by [{row['author_email']}]({detail_link('community', row['author_email'])}) · "
        f"uploaded {format_date(row.get('created_at'))}"
    )

render_preview(view, download_key=f"download_strategy_{row.get('id')}")
