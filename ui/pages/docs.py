"""Static documentation: getting started, upload rules and the backend API."""

import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

import streamlit as st

from core.ui_config import BACKEND_URL
from ui.components.header import render_header
from ui.components.session import get_session_provider
from uploads.validation import DATASET_RULES, MB, STRATEGY_RULES

st.set_page_config(page_title="Docs — QuantHub", page_icon="📚", layout="wide")
render_header(get_session_provider())

st.title("📚 Documentation")

tab_start, tab_upload, tab_api = st.tabs(["Getting Started", "Uploading", "Backend API"])

with tab_start:
    st.markdown(
        """
### Getting Started

1. **Create an account** on the *Sign In* page. Depending on the project
   settings you may need to confirm your email first.
2. **Browse** strategies and datasets; every card opens a detail page with a
   preview of the uploaded file.
3. **Share** your own work from the upload pages. Uploads are public.
4. **Community** lists everyone who has shared something, with their
   contribution counts and activity.
"""
    )

with tab_upload:
    st.markdown(
        f"""
### Strategy uploads
- Files: `{', '.join(STRATEGY_RULES.extensions)}`, at most **{STRATEGY_RULES.max_bytes // MB} MB**.
- Name: 3–100 characters; {STRATEGY_RULES.name_hint}.
- Up to 10 comma-separated tags, 20 characters each.
- Expected return between -100% and 1000%, max drawdown between 0% and 100%,
  minimum capital between $0 and $1 billion (all optional).

### Dataset uploads
- Files: `{', '.join(DATASET_RULES.extensions)}`, at most **{DATASET_RULES.max_bytes // MB} MB**.
- Name: 3–100 characters; {DATASET_RULES.name_hint}.
- Category, data type and time frame are required.

Notebooks (`.ipynb`) are previewed as their code cells only.
"""
    )

with tab_api:
    st.markdown(
        f"""
### Backend API

Base URL: `{BACKEND_URL}`

| Method | Path | Description |
|---|---|---|
| GET | `/` | Liveness probe |
| GET | `/health` | Supabase connectivity and system metrics |
| GET | `/status/summary` | Version and live dataset listing state |
| GET | `/strategies?author=&limit=` | Strategies, newest first |
| GET | `/strategies/{{id}}` | One strategy row |
| GET | `/strategies/{{id}}/preview` | File content prepared for display |
| GET | `/datasets?author=&limit=` | Datasets, newest first |
| GET | `/datasets/{{id}}` | One dataset row |
| GET | `/datasets/{{id}}/preview` | File content prepared for display |
| GET | `/community?sort=&filter=&q=` | Contributor summaries |
| GET | `/community/{{email}}` | One contributor with their uploads |

Errors come back as `{{"detail", "kind", "code"}}` with status 404 (not found),
409 (conflict), 422 (validation) or 502 (store unreachable).
"""
    )
