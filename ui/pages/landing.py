import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

import streamlit as st

from ui.components.header import render_header
from ui.components.session import get_session_provider

st.set_page_config(page_title="QuantHub", page_icon="📈", layout="wide")
provider = get_session_provider()
render_header(provider)

st.title("Quant Hub")
st.subheader("Share strategies. Trade ideas. Learn from the community.")
st.markdown(
    """
- **Upload** Python strategies and Jupyter notebooks.
- **Publish** datasets in CSV, JSON, Excel or plain text.
- **Follow** the most active contributors on the community board.
"""
)

if provider.signed_in:
    st.page_link("overview.py", label="Go to your hub", icon="➡️")
else:
    if st.button("Get Started", type="primary"):
        st.switch_page("pages/auth.py")
