"""
core/ui_config.py
-----------------
Central configuration hub for the QuantHub backend and Streamlit pages.

- Reads backend & Supabase settings from environment variables.
- Provides global constants for buckets, tables and redirects.
"""

from __future__ import annotations
import os
from urllib.parse import quote

# ---------------------------------------------------------------------------
# Backend configuration
# ---------------------------------------------------------------------------

BACKEND_URL: str = os.getenv("BACKEND_URL", "http://127.0.0.1:8000").rstrip("/")

SUPABASE_URL: str | None = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY: str | None = os.getenv("SUPABASE_ANON_KEY")


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


DEBUG: bool = _flag("QUANTHUB_DEBUG")
LIVE_DATASETS: bool = _flag("QUANTHUB_LIVE_DATASETS", "1")

# ---------------------------------------------------------------------------
# Storage layout
# ---------------------------------------------------------------------------

STRATEGY_TABLE = "strategies"
DATASET_TABLE = "datasets"
STRATEGY_BUCKET = "strategies"
DATASET_BUCKET = "datasets"
DATASET_CHANNEL = "datasets_changes"

# Seconds to wait on the success notice before leaving an upload page
STRATEGY_REDIRECT_DELAY = 2.0
DATASET_REDIRECT_DELAY = 1.0

# ---------------------------------------------------------------------------
# Browser routes -> Streamlit page files
# ---------------------------------------------------------------------------

PAGES = {
    "/": "overview.py",
    "/landing": "pages/landing.py",
    "/auth": "pages/auth.py",
    "/strategies": "pages/strategies.py",
    "/strategies/upload": "pages/strategy_upload.py",
    "/strategies/:id": "pages/strategy_detail.py",
    "/datasets": "pages/datasets.py",
    "/datasets/upload": "pages/dataset_upload.py",
    "/datasets/:id": "pages/dataset_detail.py",
    "/community": "pages/community.py",
    "/community/:id": "pages/community_detail.py",
    "/profile": "pages/profile.py",
    "/docs": "pages/docs.py",
}


def detail_link(kind: str, ident) -> str:
    """Relative URL of a detail page (`strategy`, `dataset` or `community`)."""
    return f"/{kind}_detail?id={quote(str(ident), safe='')}"
